"""Partner directory: public listing plus the admin alliance API."""

import logging

from flask import Blueprint, jsonify, render_template, request
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from models import Alliance, db
from routes.utils import require_admin
from services.catalog_service import (
    alliance_categories,
    directory_alliances,
    filter_alliances,
    parse_certifications,
    slugify,
)

logger = logging.getLogger(__name__)

alliances_bp = Blueprint("alliances", __name__)

ALLIANCE_TEXT_FIELDS = ("country", "specialization", "description", "logo_url", "website_url")


def _apply_alliance_fields(alliance, data):
    """Copy editable fields from *data*; returns an error message or None."""
    for field in ("name", "category"):
        if field in data:
            value = str(data[field] or "").strip()
            if not value:
                return f"Alliance {field} is required."
            setattr(alliance, field, value)

    for field in ALLIANCE_TEXT_FIELDS:
        if field in data:
            value = data[field]
            setattr(alliance, field, str(value).strip() if value is not None else None)

    if "certifications" in data:
        try:
            alliance.certifications = parse_certifications(data["certifications"])
        except ValueError as exc:
            return str(exc)

    if "is_featured" in data:
        alliance.is_featured = bool(data["is_featured"])
    return None


@alliances_bp.route("/alliances")
def directory():
    category = request.args.get("category", "all")
    search = request.args.get("q", "")

    alliances = directory_alliances()
    return render_template(
        "alliances.html",
        alliances=filter_alliances(alliances, category, search),
        categories=alliance_categories(alliances),
        category=category,
        search=search,
    )


@alliances_bp.route("/admin/alliances")
@require_admin
def admin_alliances():
    search = request.args.get("q", "")
    alliances = filter_alliances(directory_alliances(), search=search)
    return render_template("admin_alliances.html", alliances=alliances, search=search)


@alliances_bp.route("/api/alliances", methods=["POST"])
@require_admin
def create_alliance():
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data:
        return jsonify({"error": "JSON body required"}), 400
    if not str(data.get("name") or "").strip() or not str(data.get("category") or "").strip():
        return jsonify({"error": "Alliance name and category are required."}), 400

    alliance = Alliance(certifications=[])
    error = _apply_alliance_fields(alliance, data)
    if error:
        return jsonify({"error": error}), 400
    alliance.slug = slugify(data.get("slug") or alliance.name)
    if not alliance.slug:
        return jsonify({"error": "Alliance slug cannot be empty."}), 400

    try:
        db.session.add(alliance)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return jsonify({"error": f"Alliance '{alliance.slug}' already exists."}), 409

    logger.info("Alliance %s created (%s)", alliance.id, alliance.slug)
    return jsonify({"success": True, "alliance": alliance.to_dict()}), 201


@alliances_bp.route("/api/alliances/<int:alliance_id>", methods=["PUT"])
@require_admin
def update_alliance(alliance_id):
    alliance = db.session.get(Alliance, alliance_id)
    if not alliance:
        return jsonify({"error": "Alliance not found."}), 404

    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data:
        return jsonify({"error": "JSON body required"}), 400

    error = _apply_alliance_fields(alliance, data)
    if error:
        db.session.rollback()
        return jsonify({"error": error}), 400
    if "slug" in data:
        slug = slugify(data["slug"] or "")
        if not slug:
            db.session.rollback()
            return jsonify({"error": "Alliance slug cannot be empty."}), 400
        alliance.slug = slug

    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return jsonify({"error": "Alliance slug already in use."}), 409
    return jsonify({"success": True, "alliance": alliance.to_dict()})


@alliances_bp.route("/api/alliances/<int:alliance_id>", methods=["DELETE"])
@require_admin
def delete_alliance(alliance_id):
    alliance = db.session.get(Alliance, alliance_id)
    if not alliance:
        return jsonify({"error": "Alliance not found."}), 404

    try:
        db.session.delete(alliance)
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error("Alliance delete error: %s", exc)
        return jsonify({"error": "Server error."}), 500

    logger.info("Alliance %s deleted", alliance_id)
    return jsonify({"success": True})
