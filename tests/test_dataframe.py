import pytest

from report_creation import Report, Section
from report_creation.adapters import table_from_dataframe

polars = pytest.importorskip("polars")


def test_dataframe_becomes_table_block() -> None:
    frame = polars.DataFrame({"name": ["alpha", "beta"], "count": [1, None]})

    block = table_from_dataframe(frame)

    assert block.headers == ("name", "count")
    assert block.rows == (("alpha", "1"), ("beta", ""))


def test_dataframe_null_placeholder_and_rendering() -> None:
    frame = polars.DataFrame({"metric": ["Users"], "value": [None]}, schema={"metric": polars.Utf8, "value": polars.Int64})

    block = table_from_dataframe(frame, null="n/a")
    markup, _ = Report("Frame").add_section(Section("Data").add_block(block)).render()

    assert "table.header([metric], [value])" in markup
    assert "[Users], [n\\/a]," in markup
