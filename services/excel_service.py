"""Excel export helpers for the inquiry console."""
from io import BytesIO

import openpyxl
from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, Side
from openpyxl.utils import get_column_letter

EXCEL_COLUMNS = [
    ("created_at", "Received"),
    ("name", "Name"),
    ("company", "Organization"),
    ("email", "Email"),
    ("status", "Status"),
    ("target_product", "Product"),
    ("interest", "Interest"),
    ("clean_message", "Requirement"),
    ("message", "Raw Message"),
]
EXCEL_COLUMN_LABELS = dict(EXCEL_COLUMNS)
EXCEL_COLUMN_KEYS = {key for key, _ in EXCEL_COLUMNS}
DEFAULT_EXCEL_COLUMNS = [
    "created_at", "name", "company", "email", "status",
    "target_product", "interest", "clean_message",
]

EXCEL_HEADER_FONT = Font(bold=True, size=12, color="FFFFFF")
EXCEL_HEADER_FILL = openpyxl.styles.PatternFill(start_color="0B1F3A", end_color="0B1F3A", fill_type="solid")
EXCEL_WRAP_ALIGN = Alignment(wrap_text=True, vertical="top")
EXCEL_BORDER = Border(
    left=Side(style="thin"), right=Side(style="thin"),
    top=Side(style="thin"), bottom=Side(style="thin")
)
EXCEL_WIDE_COLUMNS = {"clean_message": 60, "message": 60, "email": 30}


def _status_text(status):
    return {
        "pending": "Pending",
        "reviewed": "Reviewed",
        "archived": "Archived",
    }.get(status or "", status or "")


def _excel_row_values(record):
    return {
        "created_at": record.get("created_at", ""),
        "name": record.get("name") or "",
        "company": record.get("company") or "",
        "email": record.get("email") or "",
        "status": _status_text(record.get("status")),
        "target_product": record.get("target_product") or "",
        "interest": record.get("interest") or "",
        "clean_message": record.get("clean_message") or "",
        "message": record.get("message") or "",
    }


def parse_excel_columns(raw_columns):
    if raw_columns is None:
        return list(DEFAULT_EXCEL_COLUMNS)

    keys = []
    for token in str(raw_columns).split(","):
        key = token.strip()
        if key and key in EXCEL_COLUMN_KEYS and key not in keys:
            keys.append(key)

    return keys or list(DEFAULT_EXCEL_COLUMNS)


def build_inquiry_workbook(records, columns=None):
    """Annotated inquiry records → xlsx bytes (BytesIO positioned at 0)."""
    columns = columns or list(DEFAULT_EXCEL_COLUMNS)

    wb = Workbook()
    ws = wb.active
    ws.title = "Inquiries"

    for col_idx, key in enumerate(columns, start=1):
        cell = ws.cell(row=1, column=col_idx, value=EXCEL_COLUMN_LABELS[key])
        cell.font = EXCEL_HEADER_FONT
        cell.fill = EXCEL_HEADER_FILL
        cell.border = EXCEL_BORDER

    for row_idx, record in enumerate(records, start=2):
        values = _excel_row_values(record)
        for col_idx, key in enumerate(columns, start=1):
            cell = ws.cell(row=row_idx, column=col_idx, value=values[key])
            cell.border = EXCEL_BORDER
            cell.alignment = EXCEL_WRAP_ALIGN

    for col_idx, key in enumerate(columns, start=1):
        letter = get_column_letter(col_idx)
        ws.column_dimensions[letter].width = EXCEL_WIDE_COLUMNS.get(key, 18)

    output = BytesIO()
    wb.save(output)
    output.seek(0)
    return output
