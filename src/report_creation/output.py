"""Write rendered reports to disk."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from report_creation.compiler import compile_pdf
from report_creation.config import CompilerConfig, RenderConfig

if TYPE_CHECKING:
    from report_creation.document.report import Report

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ReportArtifacts:
    markup: str
    typ_path: Path
    pdf_path: Path | None = None


def write_report(
    report: Report,
    directory: str | Path = ".",
    *,
    pdf: bool = False,
    render_config: RenderConfig | None = None,
    compiler_config: CompilerConfig | None = None,
) -> ReportArtifacts:
    """Render ``report`` to ``<directory>/<slug>.typ``, optionally compiling a PDF next to it."""
    directory = Path(directory)
    markup, slug = report.render(render_config)

    directory.mkdir(parents=True, exist_ok=True)
    typ_path = directory / f"{slug}.typ"
    typ_path.write_text(markup, encoding="utf-8")
    logger.info("Wrote %s", typ_path)

    artifacts = ReportArtifacts(markup=markup, typ_path=typ_path)
    if pdf:
        pdf_path = typ_path.with_suffix(".pdf")
        pdf_path.write_bytes(compile_pdf(markup, typ_path, config=compiler_config))
        logger.info("Wrote %s", pdf_path)
        artifacts.pdf_path = pdf_path
    return artifacts
