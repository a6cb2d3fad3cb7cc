"""Document model: inline text, blocks, sections and the report root."""

from .blocks import (
    Block,
    BulletList,
    CodeBlock,
    FigureBlock,
    ImageBlock,
    LinkBlock,
    NumberedList,
    Paragraph,
    RawBlock,
    TableBlock,
    bullets,
    code,
    figure,
    image,
    link,
    numbered,
    paragraph,
    raw,
    table,
)
from .report import Outline, PageSection, Report
from .section import Section
from .text import (
    Bold,
    InlineLink,
    Italic,
    Location,
    Plain,
    Styled,
    Text,
    TextOptions,
    Url,
    bold,
    italic,
    link_to_location,
    link_to_url,
    plain,
    styled,
    text,
)

__all__ = [
    "Block",
    "Bold",
    "BulletList",
    "CodeBlock",
    "FigureBlock",
    "ImageBlock",
    "InlineLink",
    "Italic",
    "LinkBlock",
    "Location",
    "NumberedList",
    "Outline",
    "PageSection",
    "Paragraph",
    "Plain",
    "RawBlock",
    "Report",
    "Section",
    "Styled",
    "TableBlock",
    "Text",
    "TextOptions",
    "Url",
    "bold",
    "bullets",
    "code",
    "figure",
    "image",
    "italic",
    "link",
    "link_to_location",
    "link_to_url",
    "numbered",
    "paragraph",
    "plain",
    "raw",
    "styled",
    "table",
    "text",
]
