"""Admin dashboard blueprint (Command Nexus overview)."""

import logging
from datetime import date, datetime

from flask import Blueprint, jsonify, render_template
from sqlalchemy import func

from models import Inquiry, db
from routes.utils import require_admin
from services.catalog_service import catalog_counts
from services.inquiry_service import INQUIRY_STATUSES, annotate_inquiry

logger = logging.getLogger(__name__)

dashboard_bp = Blueprint("dashboard", __name__)

TREND_MONTHS = 6


def month_starts(today, months=TREND_MONTHS):
    """First day of the last *months* months, oldest first, current month included."""
    starts = []
    year, month = today.year, today.month
    for _ in range(months):
        starts.append(date(year, month, 1))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(starts))


def monthly_counts(timestamps, today, months=TREND_MONTHS):
    """{"YYYY-MM": count} for the trend window; timestamps outside it are ignored."""
    buckets = {start.strftime("%Y-%m"): 0 for start in month_starts(today, months)}
    for ts in timestamps:
        if ts is None:
            continue
        key = ts.strftime("%Y-%m")
        if key in buckets:
            buckets[key] += 1
    return buckets


def _inquiry_stats(today):
    status_counts = {status: 0 for status in INQUIRY_STATUSES}
    status_counts.update(dict(
        db.session.query(Inquiry.status, func.count(Inquiry.id))
        .group_by(Inquiry.status).all()
    ))

    window_start = datetime.combine(month_starts(today)[0], datetime.min.time())
    timestamps = [
        row[0] for row in
        db.session.query(Inquiry.created_at).filter(Inquiry.created_at >= window_start).all()
    ]
    return {
        "total": sum(status_counts.values()),
        "status": status_counts,
        "monthly": monthly_counts(timestamps, today),
    }


def collect_stats(today=None):
    today = today or date.today()
    return {
        "catalog": catalog_counts(),
        "inquiries": _inquiry_stats(today),
    }


@dashboard_bp.route("/admin/dashboard")
@require_admin
def admin_dashboard():
    stats = collect_stats()

    recent = Inquiry.query.order_by(Inquiry.created_at.desc(), Inquiry.id.desc()).limit(5).all()
    return render_template(
        "admin_dashboard.html",
        stats=stats,
        recent_inquiries=[annotate_inquiry(i) for i in recent],
    )


@dashboard_bp.route("/admin/stats")
@require_admin
def stats_api():
    """Dashboard chart data"""
    return jsonify(collect_stats())
