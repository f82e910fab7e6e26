"""Public site blueprint: home, portfolio, product pages and the RFQ form."""

import logging

from flask import Blueprint, abort, current_app, flash, redirect, render_template, request, url_for
from sqlalchemy.exc import SQLAlchemyError

from extensions import limiter
from models import Inquiry, Product, db
from services.catalog_service import filter_products, ordered_divisions, published_products
from services.inquiry_service import annotate_inquiry, compose_rfq_message, tag_value
from services.notification_service import NotificationService

logger = logging.getLogger(__name__)

public_bp = Blueprint("public", __name__)


def _rfq_rate_limit():
    return current_app.config.get("RFQ_RATE_LIMIT", "5 per minute")


@public_bp.route("/")
def index():
    limit = current_app.config.get("PORTFOLIO_HOME_LIMIT", 6)
    return render_template(
        "index.html",
        divisions=ordered_divisions(),
        products=published_products()[:limit],
    )


@public_bp.route("/portfolio")
def portfolio():
    division_slug = request.args.get("division", "all")
    search = request.args.get("q", "")

    divisions = ordered_divisions()
    products = filter_products(published_products(), divisions, division_slug, search)
    return render_template(
        "portfolio.html",
        products=products,
        divisions=divisions,
        division_slug=division_slug,
        search=search,
    )


@public_bp.route("/products/<slug>")
def product_detail(slug):
    product = Product.query.filter_by(slug=slug, is_published=True).first()
    if not product:
        abort(404)
    return render_template("product_detail.html", product=product)


# ── RFQ ──


@public_bp.route("/acquisition")
def acquisition():
    return render_template(
        "acquisition.html",
        product_name=request.args.get("product", "").strip(),
        interests=current_app.config["RFQ_INTEREST_CHOICES"],
        default_interest=current_app.config["RFQ_DEFAULT_INTEREST"],
    )


@public_bp.route("/acquisition", methods=["POST"])
@limiter.limit(_rfq_rate_limit)
def acquisition_submit():
    name = request.form.get("name", "").strip()
    email = request.form.get("email", "").strip()
    organization = request.form.get("organization", "").strip()
    product_name = tag_value(request.form.get("product", ""))
    interest = request.form.get("interest", "").strip() or current_app.config["RFQ_DEFAULT_INTEREST"]
    message = request.form.get("message", "").strip()

    back = url_for("public.acquisition", product=product_name) if product_name else url_for("public.acquisition")

    if not name or not email or not organization:
        flash("Please fill in your name, email and organization.", "error")
        return redirect(back)
    if "@" not in email:
        flash("Please enter a valid email address.", "error")
        return redirect(back)
    if interest not in current_app.config["RFQ_INTEREST_CHOICES"]:
        flash("Please choose an area of interest from the list.", "error")
        return redirect(back)

    inquiry = Inquiry(
        name=name,
        email=email,
        company=organization,
        message=compose_rfq_message(message, interest, product_name or None),
        status="pending",
    )
    try:
        db.session.add(inquiry)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"RFQ submit error: {str(e)}", exc_info=True)
        flash("We could not submit your request. Please try again.", "error")
        return redirect(back)

    record = annotate_inquiry(inquiry)
    logger.info("RFQ %s received from %s (product: %s)", inquiry.id, organization, record["target_product"])
    NotificationService.send_rfq_notification(record)

    flash("Your request has been received. Our team will contact you shortly.", "success")
    return redirect(url_for("public.acquisition"))
