import shutil
import subprocess
from pathlib import Path

import pytest

from report_creation import (
    CompilationError,
    CompilerConfig,
    ConfigurationError,
    Report,
    Section,
    bullets,
    compile_pdf,
    paragraph,
    table,
)
from report_creation.compiler import build_command


class _FakeRun:
    def __init__(self, returncode: int = 0, stdout: bytes = b"%PDF-1.7 fake", stderr: bytes = b"") -> None:
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.calls: list[dict] = []

    def __call__(self, command, **kwargs):
        self.calls.append({"command": command, **kwargs})
        return subprocess.CompletedProcess(command, self.returncode, stdout=self.stdout, stderr=self.stderr)


def test_build_command_reads_from_stdin(tmp_path: Path) -> None:
    config = CompilerConfig(typst_binary="/opt/typst", font_paths=(Path("fonts"),))

    command = build_command(tmp_path, config)

    assert command == [
        "/opt/typst",
        "compile",
        "--root",
        str(tmp_path),
        "--font-path",
        "fonts",
        "--format",
        "pdf",
        "-",
        "-",
    ]


def test_compile_pdf_passes_markup_and_returns_stdout(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    fake = _FakeRun()
    monkeypatch.setattr(subprocess, "run", fake)
    source = tmp_path / "report.typ"

    pdf = compile_pdf("= Hello", source, config=CompilerConfig(timeout=5))

    assert pdf == b"%PDF-1.7 fake"
    call = fake.calls[0]
    assert call["input"] == "= Hello".encode("utf-8")
    assert call["timeout"] == 5
    assert call["cwd"] == tmp_path.resolve()
    assert str(tmp_path.resolve()) in call["command"]


def test_compile_pdf_raises_on_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(subprocess, "run", _FakeRun(returncode=1, stdout=b"", stderr=b"error: unclosed delimiter"))

    with pytest.raises(CompilationError) as excinfo:
        compile_pdf("[#unclosed(", config=CompilerConfig())

    assert "unclosed delimiter" in excinfo.value.stderr
    assert "exit code 1" in str(excinfo.value)


def test_compile_pdf_raises_on_empty_output(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(subprocess, "run", _FakeRun(stdout=b""))

    with pytest.raises(CompilationError):
        compile_pdf("= Hello", config=CompilerConfig())


def test_compile_pdf_reports_missing_binary(monkeypatch: pytest.MonkeyPatch) -> None:
    def missing(*args, **kwargs):
        raise FileNotFoundError("typst")

    monkeypatch.setattr(subprocess, "run", missing)

    with pytest.raises(CompilationError, match="not found"):
        compile_pdf("= Hello", config=CompilerConfig(typst_binary="missing-typst"))


def test_compile_pdf_reports_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    def slow(command, **kwargs):
        raise subprocess.TimeoutExpired(command, kwargs["timeout"])

    monkeypatch.setattr(subprocess, "run", slow)

    with pytest.raises(CompilationError, match="timed out"):
        compile_pdf("= Hello", config=CompilerConfig(timeout=0.1))


def test_compiler_config_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("REPORT_CREATION_TYPST", "/usr/local/bin/typst")
    monkeypatch.setenv("REPORT_CREATION_FONT_PATHS", str(tmp_path))
    monkeypatch.setenv("REPORT_CREATION_TIMEOUT", "30")

    config = CompilerConfig.from_env()

    assert config == CompilerConfig(typst_binary="/usr/local/bin/typst", font_paths=(tmp_path,), timeout=30.0)


@pytest.mark.parametrize("raw_timeout", ["soon", "0", "-5"])
def test_compiler_config_rejects_bad_timeout(monkeypatch: pytest.MonkeyPatch, raw_timeout: str) -> None:
    monkeypatch.setenv("REPORT_CREATION_TIMEOUT", raw_timeout)

    with pytest.raises(ConfigurationError, match="REPORT_CREATION_TIMEOUT"):
        CompilerConfig.from_env()


def test_compiler_config_from_empty_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("REPORT_CREATION_TYPST", "REPORT_CREATION_FONT_PATHS", "REPORT_CREATION_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)

    assert CompilerConfig.from_env() == CompilerConfig()


@pytest.mark.skipif(shutil.which("typst") is None, reason="typst executable not installed")
def test_compiles_rendered_report_with_real_typst(tmp_path: Path) -> None:
    markup, _ = (
        Report("Real Compile")
        .author("Tester")
        .footer("Page {page} of {pages}")
        .with_contents_table()
        .add_section(
            Section("Summary")
            .add_block(paragraph("Ready to go."))
            .add_block(bullets(["One", "Two"]))
            .add_block(table(["Key", "Value"], [["A", "1"]]))
        )
        .render()
    )

    pdf = compile_pdf(markup, tmp_path / "real_compile.typ", config=CompilerConfig())

    assert pdf.startswith(b"%PDF")
