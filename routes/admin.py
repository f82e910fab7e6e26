"""Inquiry console: lead triage for the admin back-office."""

import logging

from flask import Blueprint, flash, jsonify, render_template, request, send_file

from routes.utils import require_admin
from services.excel_service import build_inquiry_workbook, parse_excel_columns
from services.inquiry_service import (
    FILTER_ALL,
    STATUS_FILTERS,
    InquiryBoard,
    InquiryNotFoundError,
    InvalidStatusError,
    StatusUpdateError,
    annotate_inquiry,
    persist_status,
)

logger = logging.getLogger(__name__)

admin_bp = Blueprint('admin', __name__)

ERROR_STATUS_CODES = {
    InvalidStatusError: 400,
    InquiryNotFoundError: 404,
    StatusUpdateError: 503,
}


def _filter_args(source):
    """status / product / q from query string or form; q is not trimmed."""
    status = source.get('status') or FILTER_ALL
    if status not in STATUS_FILTERS:
        status = FILTER_ALL
    return {
        'status': status,
        'product': source.get('product') or FILTER_ALL,
        'search': source.get('q', ''),
    }


def _error_code(exc):
    for exc_type, code in ERROR_STATUS_CODES.items():
        if isinstance(exc, exc_type):
            return code
    return 500


def _render_console(board, filters, status_code=200):
    visible = board.filter(**filters)
    return render_template(
        'admin_inquiries.html',
        inquiries=visible,
        product_options=board.product_options(),
        status_counts=board.status_counts(),
        status_filters=STATUS_FILTERS,
        filters=filters,
        total_count=len(board.records),
    ), status_code


@admin_bp.route('/admin/inquiries')
@require_admin
def inquiries():
    board = InquiryBoard.load()
    return _render_console(board, _filter_args(request.args))


@admin_bp.route('/admin/inquiries/<int:inquiry_id>/status', methods=['POST'])
@require_admin
def inquiry_status_form(inquiry_id):
    """Console buttons: persist the status, then re-render from the same board."""
    filters = _filter_args(request.form)
    new_status = request.form.get('new_status', '')

    board = InquiryBoard.load()
    try:
        board.set_status(inquiry_id, new_status)
    except (InvalidStatusError, InquiryNotFoundError, StatusUpdateError) as exc:
        logger.warning("Inquiry %s status change to %r rejected: %s", inquiry_id, new_status, exc)
        flash(str(exc), 'danger')
        return _render_console(board, filters, _error_code(exc))

    flash(f"Inquiry marked as {new_status}.", 'success')
    return _render_console(board, filters)


@admin_bp.route('/api/inquiries')
@require_admin
def inquiries_api():
    board = InquiryBoard.load()
    filters = _filter_args(request.args)
    return jsonify({
        "success": True,
        "inquiries": board.filter(**filters),
        "product_options": board.product_options(),
        "status_counts": board.status_counts(),
    })


@admin_bp.route('/api/inquiries/<int:inquiry_id>/status', methods=['POST'])
@require_admin
def update_status(inquiry_id):
    data = request.get_json(silent=True) or request.form
    if not isinstance(data, dict):
        return jsonify({"success": False, "error": "JSON object body required"}), 400
    new_status = data.get('status', '')

    try:
        inquiry = persist_status(inquiry_id, new_status)
    except (InvalidStatusError, InquiryNotFoundError, StatusUpdateError) as exc:
        return jsonify({"success": False, "error": str(exc)}), _error_code(exc)

    return jsonify({"success": True, "inquiry": annotate_inquiry(inquiry)})


@admin_bp.route('/admin/inquiries/excel')
@require_admin
def download_inquiries_excel():
    filters = _filter_args(request.args)
    board = InquiryBoard.load()
    records = board.filter(**filters)
    columns = parse_excel_columns(request.args.get('columns'))

    logger.info("Inquiry excel export: %d rows, filters=%s", len(records), filters)
    output = build_inquiry_workbook(records, columns)
    return send_file(
        output,
        as_attachment=True,
        download_name="inquiries_export.xlsx",
        mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
