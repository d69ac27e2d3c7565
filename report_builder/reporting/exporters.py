# report_builder/reporting/exporters.py
"""Export payloads for report previews: CSV text, config documents and XLSX."""

import io
from typing import Any, List

import pandas as pd

from report_builder.query.schemas import ReportConfiguration, ResultTable
from report_builder.query.values import to_text

CSV_MEDIA_TYPE = "text/csv"
JSON_MEDIA_TYPE = "application/json"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


# ===== DELIMITED TEXT =====


def escape_csv_value(value: Any) -> str:
    """Quote a cell when it holds a comma or a quote, doubling inner quotes."""
    text = to_text(value)
    if "," in text or '"' in text:
        return '"' + text.replace('"', '""') + '"'
    return text


def to_csv(table: ResultTable) -> str:
    """
    Serialize a result table as comma-separated text.

    The header is the column names joined by commas; each row follows in column
    order. Lines are joined with ``\\n`` and there is no trailing newline.
    """
    lines: List[str] = [",".join(table.columns)]
    for row in table.rows:
        lines.append(",".join(escape_csv_value(row.get(column)) for column in table.columns))
    return "\n".join(lines)


# ===== CONFIG DOCUMENT =====


def config_to_json(config: ReportConfiguration) -> str:
    return config.model_dump_json(indent=2)


def config_from_json(document: str) -> ReportConfiguration:
    return ReportConfiguration.model_validate_json(document)


# ===== XLSX =====


def to_xlsx(table: ResultTable, sheet_name: str = "Report") -> bytes:
    """Write the result table to an in-memory Excel workbook."""
    df = pd.DataFrame(table.rows, columns=table.columns)

    excel_buffer = io.BytesIO()
    with pd.ExcelWriter(excel_buffer, engine="openpyxl") as writer:
        sheet = sheet_name[:31]  # Excel sheet name limit is 31 chars
        df.to_excel(writer, sheet_name=sheet, index=False)

        worksheet = writer.sheets[sheet]
        _format_header(worksheet, len(table.columns))
        _auto_adjust_columns(worksheet)

    excel_buffer.seek(0)
    return excel_buffer.getvalue()


def _format_header(worksheet, column_count: int) -> None:
    from openpyxl.styles import Alignment, Font, PatternFill

    header_font = Font(bold=True, color="FFFFFF")
    header_fill = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
    header_alignment = Alignment(horizontal="center", vertical="center")

    for col_num in range(1, column_count + 1):
        cell = worksheet.cell(row=1, column=col_num)
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = header_alignment


def _auto_adjust_columns(worksheet) -> None:
    """Size each column to its longest value, capped at 50 characters."""
    for column in worksheet.columns:
        max_length = max((len(to_text(cell.value)) for cell in column), default=0)
        worksheet.column_dimensions[column[0].column_letter].width = min(max_length + 2, 50)
