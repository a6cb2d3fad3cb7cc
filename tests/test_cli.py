from pathlib import Path

import pytest
from click.testing import CliRunner

from report_creation.cli import main
from report_creation.errors import CompilationError


def _write_fixture(directory: Path) -> Path:
    typst_path = directory / "sample.typ"
    typst_path.write_text('#set document(title: "CLI Test")\nThis is a test report.', encoding="utf-8")
    return typst_path


@pytest.fixture
def fake_compile(monkeypatch: pytest.MonkeyPatch) -> list:
    calls: list = []

    def compile_stub(source, source_path, *, config=None):
        calls.append((source, source_path, config))
        return b"%PDF-1.7 fake"

    monkeypatch.setattr("report_creation.cli.compile_pdf", compile_stub)
    return calls


def test_writes_pdf_next_to_input_by_default(tmp_path: Path, fake_compile: list) -> None:
    input_path = _write_fixture(tmp_path)

    result = CliRunner().invoke(main, [str(input_path)])

    expected = input_path.with_suffix(".pdf")
    assert result.exit_code == 0, result.output
    assert f"PDF written to {expected}" in result.output
    assert expected.read_bytes() == b"%PDF-1.7 fake"
    assert fake_compile[0][0].startswith("#set document")
    assert fake_compile[0][1] == input_path


def test_honors_custom_output_path(tmp_path: Path, fake_compile: list) -> None:
    input_path = _write_fixture(tmp_path)
    custom_output = tmp_path / "output" / "custom.pdf"

    result = CliRunner().invoke(main, [str(input_path), "--output", str(custom_output)])

    assert result.exit_code == 0, result.output
    assert str(custom_output) in result.output
    assert custom_output.exists()


def test_passes_font_paths_to_compiler(tmp_path: Path, fake_compile: list) -> None:
    input_path = _write_fixture(tmp_path)
    fonts = tmp_path / "fonts"
    fonts.mkdir()

    result = CliRunner().invoke(main, [str(input_path), "--font-path", str(fonts)])

    assert result.exit_code == 0, result.output
    config = fake_compile[0][2]
    assert config.font_paths[-1] == fonts


def test_check_rejects_unbalanced_markup(tmp_path: Path, fake_compile: list) -> None:
    input_path = tmp_path / "broken.typ"
    input_path.write_text("[#unclosed(", encoding="utf-8")

    result = CliRunner().invoke(main, [str(input_path), "--check"])

    assert result.exit_code != 0
    assert "unclosed delimiter" in result.output
    assert fake_compile == []


def test_compilation_errors_are_reported(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    input_path = _write_fixture(tmp_path)

    def failing(*args, **kwargs):
        raise CompilationError("Typst compilation failed with exit code 1", stderr="error: unknown font")

    monkeypatch.setattr("report_creation.cli.compile_pdf", failing)

    result = CliRunner().invoke(main, [str(input_path)])

    assert result.exit_code == 1
    assert "unknown font" in result.output
    assert not input_path.with_suffix(".pdf").exists()


def test_invalid_timeout_setting_is_reported(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, fake_compile: list
) -> None:
    input_path = _write_fixture(tmp_path)
    monkeypatch.setenv("REPORT_CREATION_TIMEOUT", "soon")

    result = CliRunner().invoke(main, [str(input_path)])

    assert result.exit_code == 1
    assert "REPORT_CREATION_TIMEOUT must be a positive number" in result.output
    assert "Traceback" not in result.output
    assert fake_compile == []


def test_rejects_missing_input(tmp_path: Path) -> None:
    result = CliRunner().invoke(main, [str(tmp_path / "missing.typ")])

    assert result.exit_code == 2
