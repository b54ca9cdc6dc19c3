"""Excel export of a decorated schedule table."""

from datetime import date
from io import BytesIO

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from amortization.engine.table import TableRow, column_header
from amortization.models.schedule import TermType

SHEET_TITLE = "Schedule"
NUMBER_FORMAT = "0.00"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

HEADERS = [
    "Beginning Balance",
    "Payment",
    "Interest",
    "Total Interest Paid",
    "Principal",
    "Ending Balance",
]
COLUMN_WIDTHS = [22, 18, 12, 12, 20, 12, 16]


def export_filename(term_type: TermType, today: date | None = None) -> str:
    stamp = (today or date.today()).isoformat()
    return f"amortization-{term_type.value.lower()}-{stamp}.xlsx"


def schedule_to_xlsx(
    rows: list[TableRow],
    term_type: TermType,
    loan_start_date: date | None = None,
) -> bytes:
    """Render rows (already filtered/sorted) to an .xlsx workbook."""
    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE

    ws.append([column_header(term_type, loan_start_date), *HEADERS])
    for cell in ws[1]:
        cell.font = Font(bold=True)

    for row in rows:
        ws.append([
            row.label,
            float(row.beginning_balance),
            float(row.payment),
            float(row.interest),
            float(row.total_interest_paid),
            float(row.principal),
            float(row.ending_balance),
        ])

    for idx, width in enumerate(COLUMN_WIDTHS, start=1):
        ws.column_dimensions[get_column_letter(idx)].width = width

    for row_cells in ws.iter_rows(min_row=2, min_col=2, max_col=len(COLUMN_WIDTHS)):
        for cell in row_cells:
            cell.number_format = NUMBER_FORMAT

    output = BytesIO()
    wb.save(output)
    return output.getvalue()
