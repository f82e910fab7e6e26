"""Catalog helpers: URL slugs, portfolio filtering and the partner directory."""

import logging
import re

from sqlalchemy import func

from models import Alliance, Division, Product, db

logger = logging.getLogger(__name__)

_NON_WORD = re.compile(r"[^\w\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")
_NON_SLUG = re.compile(r"[^\w-]+")


def slugify(text) -> str:
    text = _WHITESPACE.sub("-", str(text).lower())
    text = _NON_SLUG.sub("", text)
    text = _HYPHENS.sub("-", text)
    return text.strip("-")


def generate_product_slug(name, model, keyword="") -> str:
    """SEO slug for a product page, e.g. ``digital-x-ray-drx-900-imaging``."""
    base = f"{name} {model} {keyword}".lower()
    base = _NON_WORD.sub("", base)
    base = _WHITESPACE.sub("-", base)
    base = _HYPHENS.sub("-", base)
    return base.strip("-")


def unique_product_slug(base_slug, exclude_id=None) -> str:
    slug = base_slug or "product"
    candidate = slug
    suffix = 2
    while True:
        query = Product.query.filter(Product.slug == candidate)
        if exclude_id is not None:
            query = query.filter(Product.id != exclude_id)
        if not query.first():
            return candidate
        candidate = f"{slug}-{suffix}"
        suffix += 1


def filter_products(products, divisions, division_slug="all", search=""):
    """Portfolio filter: division slug AND name/model substring match."""
    slug_by_id = {d.id: d.slug for d in divisions}
    needle = (search or "").lower()

    visible = []
    for product in products:
        if division_slug not in (None, "", "all"):
            if slug_by_id.get(product.division_id) != division_slug:
                continue
        if needle:
            name = (product.name or "").lower()
            model = (product.model_number or "").lower()
            if needle not in name and needle not in model:
                continue
        visible.append(product)
    return visible


def published_products():
    return Product.query.filter_by(is_published=True).order_by(Product.created_at.desc()).all()


def ordered_divisions():
    return Division.query.order_by(Division.order_index, Division.name).all()


def catalog_counts():
    published = db.session.query(func.count(Product.id)).filter(Product.is_published.is_(True)).scalar()
    return {
        "products": Product.query.count(),
        "published_products": published or 0,
        "divisions": Division.query.count(),
        "alliances": Alliance.query.count(),
    }


# ── Partner directory ──


def directory_alliances():
    """Featured partners first, then alphabetical."""
    return Alliance.query.order_by(Alliance.is_featured.desc(), Alliance.name).all()


def alliance_categories(alliances):
    return list(dict.fromkeys(a.category for a in alliances if a.category))


def filter_alliances(alliances, category="all", search=""):
    """Category exact match AND name/country substring match, order kept."""
    needle = (search or "").lower()
    visible = []
    for alliance in alliances:
        if category not in (None, "", "all") and alliance.category != category:
            continue
        if needle and needle not in (alliance.name or "").lower() \
                and needle not in (alliance.country or "").lower():
            continue
        visible.append(alliance)
    return visible


def parse_certifications(value):
    """List of certification labels from a JSON list or a comma separated string."""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, (list, tuple)):
        raise ValueError("certifications must be a list or a comma separated string")
    return [str(item).strip() for item in value if str(item).strip()]
