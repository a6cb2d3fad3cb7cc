"""Boundary to the external ``typst`` compiler."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from report_creation.config import CompilerConfig
from report_creation.errors import CompilationError

logger = logging.getLogger(__name__)


def build_command(root: Path, config: CompilerConfig) -> list[str]:
    """Command line compiling Typst from stdin to PDF on stdout."""
    command = [config.typst_binary, "compile", "--root", str(root)]
    for font_path in config.font_paths:
        command.extend(["--font-path", str(font_path)])
    command.extend(["--format", "pdf", "-", "-"])
    return command


def compile_pdf(
    markup: str,
    source_path: str | Path | None = None,
    *,
    config: CompilerConfig | None = None,
) -> bytes:
    """Compile Typst ``markup`` and return the PDF bytes.

    Relative paths in the markup (images, includes) resolve against the
    directory of ``source_path``, or the working directory when it is None.
    Raises CompilationError if the compiler is missing, times out or rejects
    the document.
    """
    config = config or CompilerConfig.from_env()
    root = Path(source_path).resolve().parent if source_path is not None else Path.cwd()
    command = build_command(root, config)
    logger.debug("Running %s", " ".join(command))

    try:
        process = subprocess.run(
            command,
            input=markup.encode("utf-8"),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            cwd=root,
            timeout=config.timeout,
            check=False,
        )
    except FileNotFoundError as exc:
        raise CompilationError(f"Typst executable not found: {config.typst_binary}") from exc
    except subprocess.TimeoutExpired as exc:
        raise CompilationError(f"Typst compilation timed out after {config.timeout}s") from exc

    stderr = process.stderr.decode("utf-8", errors="ignore")
    if process.returncode != 0:
        raise CompilationError(f"Typst compilation failed with exit code {process.returncode}", stderr=stderr)
    if stderr.strip():
        logger.warning("Typst reported: %s", stderr.strip())
    if not process.stdout:
        raise CompilationError("Typst produced no output", stderr=stderr)

    logger.info("Compiled %d bytes of PDF", len(process.stdout))
    return process.stdout
