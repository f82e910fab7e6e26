"""Admin sign-in for the Command Nexus console.

A single shared ADMIN_PASSWORD guards the back-office. Failed attempts are
throttled per client address by Flask-Limiter; successful sign-ins never count
against the limit.
"""

import hmac
import logging
import time

import bcrypt
from flask import Blueprint, current_app, flash, redirect, render_template, request, session, url_for

from extensions import limiter

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__)

BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")
LOGIN_FAILED = 401


def _login_rate_limit():
    return current_app.config.get("LOGIN_RATE_LIMIT", "5 per 5 minutes")


def _get_admin_password():
    return current_app.config.get("ADMIN_PASSWORD") or ""


def check_admin_password(plain, stored) -> bool:
    """Accepts a bcrypt hash or, for local setups, a plain-text password."""
    if not plain or not stored:
        return False
    if stored.startswith(BCRYPT_PREFIXES):
        try:
            return bcrypt.checkpw(plain.encode("utf-8"), stored.encode("utf-8"))
        except ValueError:
            logger.error("ADMIN_PASSWORD looks like a bcrypt hash but is malformed")
            return False
    return hmac.compare_digest(plain.encode("utf-8"), stored.encode("utf-8"))


def _safe_next(target):
    if target and target.startswith("/") and not target.startswith("//"):
        return target
    return url_for("dashboard.admin_dashboard")


def _login_page(next_url, status=200):
    return render_template("login.html", next_url=next_url or ""), status


@auth_bp.errorhandler(429)
def login_throttled(e):
    logger.warning("Login throttled for %s (%s)", request.remote_addr, e.description)
    flash("Too many login attempts. Try again in 5 minutes.", "error")
    return _login_page(request.form.get("next"), 429)


@auth_bp.route("/login", methods=["GET"])
def login():
    if session.get("is_admin"):
        return redirect(_safe_next(request.args.get("next")))
    return _login_page(request.args.get("next"))


@auth_bp.route("/login", methods=["POST"])
@limiter.limit(_login_rate_limit, deduct_when=lambda response: response.status_code == LOGIN_FAILED)
def login_submit():
    stored = _get_admin_password()
    next_url = request.form.get("next")

    if not stored:
        logger.error("ADMIN_PASSWORD is not configured")
        flash("Server misconfigured: admin password is not set.", "error")
        return _login_page(next_url, 503)

    if not check_admin_password(request.form.get("password", ""), stored):
        logger.warning("Admin login failed from %s", request.remote_addr)
        time.sleep(1)
        flash("Incorrect password.", "error")
        return _login_page(next_url, LOGIN_FAILED)

    session.clear()
    session["is_admin"] = True
    session.permanent = True
    logger.info("Admin login from %s", request.remote_addr)
    return redirect(_safe_next(next_url))


@auth_bp.route("/logout")
def logout():
    session.clear()
    return redirect(url_for("public.index"))
