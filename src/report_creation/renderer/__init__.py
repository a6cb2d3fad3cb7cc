"""Renderers turning the document model into markup."""

from .typst_renderer import RenderedFigure, RenderedHeading, RenderedReport, TypstRenderer, normalize_filename

__all__ = [
    "RenderedFigure",
    "RenderedHeading",
    "RenderedReport",
    "TypstRenderer",
    "normalize_filename",
]
