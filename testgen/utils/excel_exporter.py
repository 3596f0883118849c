from __future__ import annotations

import re
import tempfile
import uuid
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font
from openpyxl.utils import get_column_letter

from testgen.schemas.testcase import TestCase

# Keeps multi-line step cells readable in spreadsheet tools.
MAX_COLUMN_WIDTH: int = 80
MAX_SLUG_LENGTH: int = 30


def export_filename(source_name: Optional[str] = None) -> str:
    """
    Download name for an export of the cases generated from ``source_name``
    (collection or page name): ``<slug>_test_cases_<timestamp>_<suffix>.xlsx``.

    The slug keeps lowercase letters and digits only, so user supplied names
    never reach the filesystem or the Content-Disposition header verbatim.
    """
    slug = re.sub(r"[^a-z0-9]+", "_", (source_name or "").lower()).strip("_")[:MAX_SLUG_LENGTH].rstrip("_")
    parts = [slug] if slug else []
    parts += ["test_cases", datetime.now().strftime("%Y%m%d_%H%M%S"), uuid.uuid4().hex[:6]]
    return "_".join(parts) + ".xlsx"


def _numbered(lines: List[str]) -> str:
    return "\n".join(f"{idx}. {line}" for idx, line in enumerate(lines, start=1))


def test_cases_to_excel(
    cases: Iterable[TestCase],
    *,
    prefix: str = "generated_test_cases_",
) -> str:
    """Write one row per test case to a temporary .xlsx file and return its path."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Test Cases"

    headers: List[str] = [
        "Name",
        "Description",
        "Type",
        "Steps",
        "Expected Results",
    ]

    bold_font = Font(bold=True)
    ws.append(headers)
    for col_idx, _ in enumerate(headers, start=1):
        ws.cell(row=1, column=col_idx).font = bold_font

    for case in cases:
        ws.append(
            [
                case.name,
                case.description,
                case.type.value,
                _numbered([step.action for step in case.steps]),
                _numbered([step.expected_result for step in case.steps]),
            ]
        )

    wrap = Alignment(wrap_text=True, vertical="top")
    for column_cells in ws.columns:
        max_length = 0
        column_index = column_cells[0].column
        for cell in column_cells:
            cell.alignment = wrap
            cell_value = str(cell.value) if cell.value is not None else ""
            longest_line = max((len(line) for line in cell_value.splitlines()), default=0)
            max_length = max(max_length, longest_line)
        adjusted_width = min(max_length + 2, MAX_COLUMN_WIDTH) if max_length > 0 else 10
        ws.column_dimensions[get_column_letter(column_index)].width = adjusted_width

    tmp = tempfile.NamedTemporaryFile(
        prefix=prefix,
        suffix=".xlsx",
        delete=False,
    )
    tmp_path = Path(tmp.name)
    tmp.close()
    wb.save(str(tmp_path))
    return str(tmp_path)
