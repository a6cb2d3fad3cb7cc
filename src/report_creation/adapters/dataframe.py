"""Build table blocks from polars DataFrames.

polars is an optional dependency (``pip install report-creation[polars]``);
this module only touches the frame's public ``columns``/``iter_rows`` API and
never imports polars itself.
"""

from __future__ import annotations

from typing import Any

from report_creation.document.blocks import TableBlock


def table_from_dataframe(frame: Any, *, null: str = "") -> TableBlock:
    """Convert column names into headers and stringify every value row by row.

    Missing values are replaced by ``null``, an empty cell by default.
    """
    headers = tuple(str(name) for name in frame.columns)
    rows = tuple(
        tuple(null if value is None else str(value) for value in row)
        for row in frame.iter_rows()
    )
    return TableBlock(headers=headers, rows=rows)
