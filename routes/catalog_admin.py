"""Catalog management blueprint: products and divisions (admin JSON API)."""

import logging
import os
from datetime import datetime

from flask import Blueprint, current_app, jsonify, render_template, request, send_from_directory
from PIL import Image, UnidentifiedImageError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from models import Division, Product, db
from routes.utils import UPLOAD_DIR, parse_int, require_admin
from services.catalog_service import generate_product_slug, ordered_divisions, slugify, unique_product_slug

logger = logging.getLogger(__name__)

catalog_admin_bp = Blueprint("catalog_admin", __name__)

PRODUCT_TEXT_FIELDS = (
    "model_number", "short_description", "long_description", "category_tag",
    "brochure_url", "video_url", "warranty_info",
)
ALLOWED_IMAGE_FORMATS = {"JPEG", "PNG", "WEBP"}


def _allowed_image(filename):
    extensions = current_app.config.get("PRODUCT_IMAGE_EXTENSIONS", {"jpg", "jpeg", "png", "webp"})
    return "." in filename and filename.rsplit(".", 1)[1].lower() in extensions


def _apply_product_fields(product, data):
    """Copy editable fields from *data*; returns an error message or None."""
    if "name" in data:
        name = str(data["name"]).strip()
        if not name:
            return "Product name is required."
        product.name = name

    for field in PRODUCT_TEXT_FIELDS:
        if field in data:
            value = data[field]
            setattr(product, field, str(value).strip() if value is not None else None)

    if "division_id" in data:
        division_id = parse_int(data["division_id"])
        if division_id is not None and not db.session.get(Division, division_id):
            return "Division not found."
        product.division_id = division_id

    if "technical_specs" in data:
        specs = data["technical_specs"] or {}
        if not isinstance(specs, dict):
            return "technical_specs must be an object."
        product.technical_specs = {str(k): str(v) for k, v in specs.items()}

    if "is_published" in data:
        product.is_published = bool(data["is_published"])
    return None


# ── Products ──


@catalog_admin_bp.route("/admin/products")
@require_admin
def admin_products():
    products = Product.query.order_by(Product.created_at.desc()).all()
    return render_template("admin_products.html", products=products, divisions=ordered_divisions())


@catalog_admin_bp.route("/api/products", methods=["POST"])
@require_admin
def create_product():
    data = request.get_json(silent=True)
    if not data:
        return jsonify({"error": "JSON body required"}), 400
    if not str(data.get("name", "")).strip():
        return jsonify({"error": "Product name is required."}), 400

    product = Product(technical_specs={})
    error = _apply_product_fields(product, data)
    if error:
        return jsonify({"error": error}), 400

    keyword = str(data.get("slug_keyword", "")).strip()
    base_slug = slugify(data["slug"]) if data.get("slug") else generate_product_slug(
        product.name, product.model_number or "", keyword
    )
    product.slug = unique_product_slug(base_slug)

    try:
        db.session.add(product)
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error("Product create error: %s", exc)
        return jsonify({"error": "Server error."}), 500

    logger.info("Product %s created (%s)", product.id, product.slug)
    return jsonify({"success": True, "product": product.to_dict()}), 201


@catalog_admin_bp.route("/api/products/<int:product_id>", methods=["PUT"])
@require_admin
def update_product(product_id):
    product = db.session.get(Product, product_id)
    if not product:
        return jsonify({"error": "Product not found."}), 404

    data = request.get_json(silent=True)
    if not data:
        return jsonify({"error": "JSON body required"}), 400

    error = _apply_product_fields(product, data)
    if error:
        db.session.rollback()
        return jsonify({"error": error}), 400
    if data.get("slug"):
        product.slug = unique_product_slug(slugify(data["slug"]), exclude_id=product.id)

    try:
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error("Product update error: %s", exc)
        return jsonify({"error": "Server error."}), 500
    return jsonify({"success": True, "product": product.to_dict()})


@catalog_admin_bp.route("/api/products/<int:product_id>", methods=["DELETE"])
@require_admin
def delete_product(product_id):
    product = db.session.get(Product, product_id)
    if not product:
        return jsonify({"error": "Product not found."}), 404

    image = product.main_image
    try:
        db.session.delete(product)
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error("Product delete error: %s", exc)
        return jsonify({"error": "Server error."}), 500

    # file removal only after the row is gone
    if image and not image.startswith(("http://", "https://")):
        try:
            path = os.path.join(UPLOAD_DIR, os.path.basename(image))
            if os.path.exists(path):
                os.remove(path)
        except OSError as e:
            logger.error(f"Error deleting image {image}: {e}")

    logger.info("Product %s deleted", product_id)
    return jsonify({"success": True})


@catalog_admin_bp.route("/api/products/<int:product_id>/image", methods=["POST"])
@require_admin
def upload_product_image(product_id):
    product = db.session.get(Product, product_id)
    if not product:
        return jsonify({"error": "Product not found."}), 404

    image = request.files.get("image")
    if not image or image.filename == "":
        return jsonify({"error": "Image file required."}), 400
    if not _allowed_image(image.filename):
        return jsonify({"error": "Only jpg, png and webp images are allowed."}), 400

    image.seek(0, 2)
    size = image.tell()
    image.seek(0)
    if size > current_app.config.get("PRODUCT_IMAGE_MAX_SIZE", 5 * 1024 * 1024):
        return jsonify({"error": "Image exceeds the size limit."}), 400

    # magic-byte check
    try:
        img = Image.open(image)
        img.verify()
        image.seek(0)
        img_format = (Image.open(image).format or "").upper()
        image.seek(0)
    except (UnidentifiedImageError, OSError, SyntaxError):
        return jsonify({"error": "Invalid image file."}), 400
    if img_format not in ALLOWED_IMAGE_FORMATS:
        return jsonify({"error": "Invalid image file."}), 400

    ext = os.path.splitext(image.filename)[1].lower()
    filename = f"{datetime.now().strftime('%Y%m%d_%H%M%S')}_{product.slug}{ext}"
    image.save(os.path.join(UPLOAD_DIR, filename))

    product.main_image = filename
    try:
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error("Product image save error: %s", exc)
        return jsonify({"error": "Server error."}), 500
    return jsonify({"success": True, "product": product.to_dict()})


@catalog_admin_bp.route("/media/<path:filename>")
def media(filename):
    return send_from_directory(UPLOAD_DIR, filename)


# ── Divisions ──


@catalog_admin_bp.route("/api/divisions", methods=["POST"])
@require_admin
def create_division():
    data = request.get_json(silent=True)
    if not data:
        return jsonify({"error": "JSON body required"}), 400

    name = str(data.get("name", "")).strip()
    if not name:
        return jsonify({"error": "Division name is required."}), 400

    division = Division(
        name=name,
        slug=slugify(data.get("slug") or name),
        description=str(data.get("description", "")).strip(),
        icon_name=str(data.get("icon_name", "Package")).strip() or "Package",
        order_index=parse_int(data.get("order_index"), 0),
    )
    if not division.slug:
        return jsonify({"error": "Division slug cannot be empty."}), 400
    try:
        db.session.add(division)
        db.session.commit()
        return jsonify({"success": True, "division": division.to_dict()}), 201
    except IntegrityError:
        db.session.rollback()
        return jsonify({"error": f"Division '{division.slug}' already exists."}), 409


@catalog_admin_bp.route("/api/divisions/<int:division_id>", methods=["PUT"])
@require_admin
def update_division(division_id):
    division = db.session.get(Division, division_id)
    if not division:
        return jsonify({"error": "Division not found."}), 404

    data = request.get_json(silent=True)
    if not data:
        return jsonify({"error": "JSON body required"}), 400

    if "name" in data:
        name = str(data["name"]).strip()
        if not name:
            return jsonify({"error": "Division name cannot be empty."}), 400
        division.name = name
    if "slug" in data:
        slug = slugify(data["slug"])
        if not slug:
            return jsonify({"error": "Division slug cannot be empty."}), 400
        division.slug = slug
    if "description" in data:
        division.description = str(data["description"]).strip()
    if "icon_name" in data:
        division.icon_name = str(data["icon_name"]).strip()
    if "order_index" in data:
        division.order_index = parse_int(data["order_index"], division.order_index)

    try:
        db.session.commit()
        return jsonify({"success": True, "division": division.to_dict()})
    except IntegrityError:
        db.session.rollback()
        return jsonify({"error": "Division slug already in use."}), 409


@catalog_admin_bp.route("/api/divisions/<int:division_id>", methods=["DELETE"])
@require_admin
def delete_division(division_id):
    division = db.session.get(Division, division_id)
    if not division:
        return jsonify({"error": "Division not found."}), 404

    try:
        # products stay, unassigned
        Product.query.filter_by(division_id=division_id).update({"division_id": None})
        db.session.delete(division)
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error("Division delete error: %s", exc)
        return jsonify({"error": "Server error."}), 500
    return jsonify({"success": True})
