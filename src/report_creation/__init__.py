"""Assemble reports programmatically and render them to Typst markup."""

from .compiler import compile_pdf
from .config import CompilerConfig, RenderConfig
from .document import (
    Block,
    BulletList,
    CodeBlock,
    FigureBlock,
    ImageBlock,
    LinkBlock,
    Location,
    NumberedList,
    Outline,
    PageSection,
    Paragraph,
    RawBlock,
    Report,
    Section,
    TableBlock,
    Text,
    TextOptions,
    Url,
    bold,
    bullets,
    code,
    figure,
    image,
    italic,
    link,
    link_to_location,
    link_to_url,
    numbered,
    paragraph,
    plain,
    raw,
    styled,
    table,
    text,
)
from .errors import (
    CompilationError,
    ConfigurationError,
    MarkupIssue,
    MarkupSyntaxError,
    ReportError,
    ShapeError,
)
from .output import ReportArtifacts, write_report
from .renderer import RenderedReport, TypstRenderer, normalize_filename
from .validation import find_syntax_issues

__all__ = [
    "Block",
    "BulletList",
    "CodeBlock",
    "CompilationError",
    "CompilerConfig",
    "ConfigurationError",
    "FigureBlock",
    "ImageBlock",
    "LinkBlock",
    "Location",
    "MarkupIssue",
    "MarkupSyntaxError",
    "NumberedList",
    "Outline",
    "PageSection",
    "Paragraph",
    "RawBlock",
    "RenderConfig",
    "RenderedReport",
    "Report",
    "ReportArtifacts",
    "ReportError",
    "Section",
    "ShapeError",
    "TableBlock",
    "Text",
    "TextOptions",
    "TypstRenderer",
    "Url",
    "bold",
    "bullets",
    "code",
    "compile_pdf",
    "figure",
    "find_syntax_issues",
    "image",
    "italic",
    "link",
    "link_to_location",
    "link_to_url",
    "normalize_filename",
    "numbered",
    "paragraph",
    "plain",
    "raw",
    "styled",
    "table",
    "text",
    "write_report",
]
