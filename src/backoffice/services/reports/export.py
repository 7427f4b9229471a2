"""CSV and Excel renditions of the reports screen."""

from __future__ import annotations

import csv
import io
from typing import Any, Callable, Dict, List, Sequence, Tuple

from openpyxl import Workbook
from openpyxl.styles import Font

from ..formatting import format_currency

CSV_MEDIA_TYPE = "text/csv; charset=utf-8"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

Column = Tuple[str, str, Callable[[Any], Any]]


def _plain(value: Any) -> Any:
    return "" if value is None else value


def _percent(value: Any) -> str:
    return f"{value}%"


def _yes_no(value: Any) -> str:
    return "Yes" if value else "No"


SECTIONS: Dict[str, Tuple[str, Sequence[Column]]] = {
    "agent-performance": (
        "agentPerformance",
        (
            ("Agent Code", "agent_id", _plain),
            ("Agent", "name", _plain),
            ("Sales", "sales", format_currency),
            ("Target", "target", format_currency),
            ("Performance", "performancePercentage", _percent),
            ("Met Target", "metTarget", _yes_no),
        ),
    ),
    "customer-rebates": (
        "customerRebates",
        (
            ("Customer", "name", _plain),
            ("Purchases", "purchases", format_currency),
            ("Rebate", "rebate", format_currency),
        ),
    ),
    "product-sales": (
        "productSales",
        (
            ("Product", "name", _plain),
            ("Sales", "sales", format_currency),
        ),
    ),
}


def section_table(report: Dict[str, Any], section: str) -> Tuple[List[str], List[List[Any]]]:
    """Headers and formatted rows for one report section."""

    if section not in SECTIONS:
        raise ValueError(f"Unknown report section '{section}'. Expected one of: {', '.join(SECTIONS)}")
    key, columns = SECTIONS[section]
    headers = [title for title, _, _ in columns]
    rows = [
        [render(entry.get(field)) for _, field, render in columns]
        for entry in report.get(key) or []
    ]
    return headers, rows


def report_to_csv(report: Dict[str, Any], section: str) -> str:
    headers, rows = section_table(report, section)
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(headers)
    writer.writerows(rows)
    return output.getvalue()


def report_to_xlsx(report: Dict[str, Any]) -> bytes:
    """Workbook with one sheet per report section."""

    workbook = Workbook()
    workbook.remove(workbook.active)
    for section in SECTIONS:
        headers, rows = section_table(report, section)
        sheet = workbook.create_sheet(title=section.replace("-", " ").title())
        sheet.append(headers)
        for cell in sheet[1]:
            cell.font = Font(bold=True)
        for row in rows:
            sheet.append(row)

    stream = io.BytesIO()
    workbook.save(stream)
    return stream.getvalue()
