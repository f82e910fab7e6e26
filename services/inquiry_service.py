"""RFQ inquiry pipeline: tag annotation, console filtering and status workflow.

Inbound RFQ messages carry inline tags written by the public quote form::

    [Product: DRX-900] [Interest: Imaging] - Need urgent quote

Annotation is computed on read and never stored back. Status changes follow a
persist-then-reflect order: the database update has to succeed before the
in-memory board used by the admin console changes.
"""

import logging
import re
from collections import namedtuple

from sqlalchemy.exc import SQLAlchemyError

from models import Inquiry, db

logger = logging.getLogger(__name__)

INQUIRY_STATUSES = ("pending", "reviewed", "archived")
STATUS_FILTERS = ("all",) + INQUIRY_STATUSES
FILTER_ALL = "all"
DEFAULT_INTEREST = "General"

PRODUCT_LABEL = "Product"
INTEREST_LABEL = "Interest"

# [...] span, any label; unterminated brackets never match
TAG_SPAN_PATTERN = re.compile(r"\[[^\]]*\]")
CLEAN_PREFIX = " - "
TAG_BRACKETS = re.compile(r"[\[\]]")


# ── Errors ──


class InquiryError(Exception):
    """Base class for inquiry workflow failures surfaced to the operator."""


class InvalidStatusError(InquiryError):
    pass


class InquiryNotFoundError(InquiryError):
    pass


class StatusUpdateError(InquiryError):
    """The status could not be persisted; nothing was reflected locally."""


# ── Annotation ──


TagMatch = namedtuple("TagMatch", ["matched", "value", "nested"])
UNMATCHED = TagMatch(False, None, False)

_tag_patterns = {}


def _tag_pattern(label):
    pattern = _tag_patterns.get(label)
    if pattern is None:
        pattern = re.compile(r"\[" + re.escape(label) + r":\s*([^\]]*)\]")
        _tag_patterns[label] = pattern
    return pattern


def extract_tag(message, label):
    """First ``[label: value]`` tag in *message*, or ``UNMATCHED``.

    An empty value is still a match (value ``""``). A value containing ``[`` is
    returned as-is but flagged ``nested``; the tag format has no escape for brackets.
    """
    match = _tag_pattern(label).search(message or "")
    if not match:
        return UNMATCHED
    value = match.group(1).strip()
    return TagMatch(True, value, "[" in value)


def clean_message(message):
    text = TAG_SPAN_PATTERN.sub("", message or "")
    if text.startswith(CLEAN_PREFIX):
        text = text[len(CLEAN_PREFIX):]
    return text.strip()


def annotate_message(message):
    """Derive target product, interest and readable text from a raw message."""
    product = extract_tag(message, PRODUCT_LABEL)
    interest = extract_tag(message, INTEREST_LABEL)

    warnings = [
        label
        for label, tag in ((PRODUCT_LABEL, product), (INTEREST_LABEL, interest))
        if tag.nested
    ]
    return {
        "target_product": product.value if product.matched else None,
        "interest": interest.value if interest.matched else DEFAULT_INTEREST,
        "clean_message": clean_message(message),
        "tag_warnings": warnings,
    }


def annotate_inquiry(inquiry):
    record = inquiry.to_dict()
    record.update(annotate_message(record["message"]))
    return record


def tag_value(text):
    """*text* with square brackets removed, safe to embed in a ``[label: value]`` tag."""
    return TAG_BRACKETS.sub("", text or "").strip()


def compose_rfq_message(message, interest, product=None):
    """Tagged message stored by the public quote form."""
    body = (message or "").strip()
    interest = tag_value(interest)
    product = tag_value(product)
    if product:
        return f"[{PRODUCT_LABEL}: {product}] [{INTEREST_LABEL}: {interest}] - {body}"
    return f"[{INTEREST_LABEL}: {interest}] - {body}"


# ── Filtering ──


def _is_all(value):
    return value is None or value == "" or value == FILTER_ALL


def _matches_search(record, term):
    if term == "":
        return True
    needle = term.lower()
    for field in ("name", "company", "message"):
        if needle in (record.get(field) or "").lower():
            return True
    return False


def filter_inquiries(records, status=FILTER_ALL, product=FILTER_ALL, search=""):
    """Visible subset of annotated records; input order is preserved."""
    search = search or ""
    visible = []
    for record in records:
        if not _is_all(status) and record["status"] != status:
            continue
        if not _is_all(product) and record["target_product"] != product:
            continue
        if not _matches_search(record, search):
            continue
        visible.append(record)
    return visible


def product_options(records):
    """Distinct non-null target products, first-seen order."""
    values = (record.get("target_product") for record in records)
    return list(dict.fromkeys(value for value in values if value is not None))


# ── Status workflow ──


def validate_status(status):
    if status not in INQUIRY_STATUSES:
        raise InvalidStatusError(f"Unknown status: {status!r}")
    return status


def persist_status(inquiry_id, status):
    """Update the status column of exactly one inquiry.

    Concurrent updates to the same row are last-write-wins.
    """
    validate_status(status)
    inquiry = db.session.get(Inquiry, inquiry_id)
    if inquiry is None:
        raise InquiryNotFoundError(f"Inquiry {inquiry_id} not found")

    old_status = inquiry.status
    inquiry.status = status
    try:
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error("Status update failed for inquiry %s: %s", inquiry_id, exc)
        raise StatusUpdateError("Status could not be saved. Please try again.") from exc

    logger.info("Inquiry %s status: %s -> %s", inquiry_id, old_status, status)
    return inquiry


class InquiryBoard:
    """In-memory list of annotated inquiries backing the admin console."""

    def __init__(self, records):
        self.records = list(records)

    @classmethod
    def from_models(cls, inquiries):
        return cls(annotate_inquiry(inquiry) for inquiry in inquiries)

    @classmethod
    def load(cls):
        inquiries = Inquiry.query.order_by(Inquiry.created_at.desc(), Inquiry.id.desc()).all()
        return cls.from_models(inquiries)

    def find(self, inquiry_id):
        for record in self.records:
            if record["id"] == inquiry_id:
                return record
        return None

    def set_status(self, inquiry_id, status, persist=persist_status):
        """Persist *status* first, then patch the matching record in place.

        Any exception from *persist* propagates and leaves the board untouched.
        """
        validate_status(status)
        persist(inquiry_id, status)

        for index, record in enumerate(self.records):
            if record["id"] == inquiry_id:
                updated = dict(record)
                updated["status"] = status
                self.records[index] = updated
                return updated
        return None

    def filter(self, status=FILTER_ALL, product=FILTER_ALL, search=""):
        return filter_inquiries(self.records, status=status, product=product, search=search)

    def product_options(self):
        return product_options(self.records)

    def status_counts(self):
        counts = {status: 0 for status in INQUIRY_STATUSES}
        for record in self.records:
            counts[record["status"]] = counts.get(record["status"], 0) + 1
        return counts
