from pathlib import Path

import pytest

from report_creation import Report, Section, paragraph, write_report


def _report() -> Report:
    return Report("Build & Ship!").add_section(Section("Summary").add_block(paragraph("Ready to go.")))


def test_write_report_uses_title_slug(tmp_path: Path) -> None:
    artifacts = write_report(_report(), tmp_path)

    assert artifacts.typ_path == tmp_path / "build_ship.typ"
    assert artifacts.typ_path.read_text(encoding="utf-8") == artifacts.markup
    assert artifacts.pdf_path is None


def test_save_creates_missing_directories(tmp_path: Path) -> None:
    target = tmp_path / "out" / "reports"

    artifacts = _report().save(target)

    assert artifacts.typ_path.exists()
    assert artifacts.markup == _report().render()[0]


def test_write_report_compiles_pdf_when_requested(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    seen: dict = {}

    def fake_compile(markup, source_path, *, config=None):
        seen["markup"] = markup
        seen["source_path"] = source_path
        return b"%PDF-1.7 fake"

    monkeypatch.setattr("report_creation.output.compile_pdf", fake_compile)

    artifacts = write_report(_report(), tmp_path, pdf=True)

    assert artifacts.pdf_path == tmp_path / "build_ship.pdf"
    assert artifacts.pdf_path.read_bytes() == b"%PDF-1.7 fake"
    assert seen["markup"] == artifacts.markup
    assert seen["source_path"] == tmp_path / "build_ship.typ"
