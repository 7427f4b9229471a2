"""Report export helpers."""

from .export import (
    CSV_MEDIA_TYPE,
    SECTIONS,
    XLSX_MEDIA_TYPE,
    report_to_csv,
    report_to_xlsx,
    section_table,
)

__all__ = [
    "CSV_MEDIA_TYPE",
    "SECTIONS",
    "XLSX_MEDIA_TYPE",
    "report_to_csv",
    "report_to_xlsx",
    "section_table",
]
