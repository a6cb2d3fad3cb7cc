"""Content blocks a section body, front matter or page chrome is built from."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

from report_creation.config import DEFAULT_CODE_LANGUAGE
from report_creation.errors import ShapeError

from .text import LinkDestination, Location, Text, TextLike, Url, as_text


@dataclass(frozen=True, slots=True)
class Paragraph:
    text: Text


@dataclass(frozen=True, slots=True)
class BulletList:
    items: tuple[Text, ...] = ()


@dataclass(frozen=True, slots=True)
class NumberedList:
    items: tuple[Text, ...] = ()


@dataclass(frozen=True, slots=True)
class TableBlock:
    headers: tuple[str, ...] = ()
    rows: tuple[tuple[str, ...], ...] = ()

    def __post_init__(self) -> None:
        expected = len(self.headers)
        for idx, row in enumerate(self.rows):
            if len(row) != expected:
                raise ShapeError(idx, expected, len(row))


@dataclass(frozen=True, slots=True)
class CodeBlock:
    source: str
    language: str | None = None


@dataclass(frozen=True, slots=True)
class ImageBlock:
    """Image reference; the path is resolved by the compiler, not here.

    ``width``/``height`` are Typst lengths or ratios such as ``60%`` or ``4cm``.
    ``dpi``, ``gamma`` and ``frame`` are emitted as Typst expressions,
    ``alt``, ``fit`` and ``format`` as strings.
    """

    path: str
    width: str | None = None
    height: str | None = None
    alt: str | None = None
    fit: str | None = None
    format: str | None = None
    dpi: str | int | None = None
    gamma: str | float | None = None
    frame: str | None = None
    invert: bool | None = None


FigureBody = Union[ImageBlock, TableBlock]


@dataclass(frozen=True, slots=True)
class FigureBlock:
    body: FigureBody
    caption: Text | None = None
    kind: str | None = None


@dataclass(frozen=True, slots=True)
class LinkBlock:
    destination: LinkDestination
    label: Text

    @classmethod
    def to_url(cls, url: str, label: TextLike) -> LinkBlock:
        return cls(Url(url), as_text(label))

    @classmethod
    def to_location(cls, reference: str, label: TextLike) -> LinkBlock:
        return cls(Location(reference), as_text(label))


@dataclass(frozen=True, slots=True)
class RawBlock:
    """Typst markup inserted verbatim."""

    markup: str


Block = Union[Paragraph, BulletList, NumberedList, TableBlock, CodeBlock, ImageBlock, FigureBlock, LinkBlock, RawBlock]

BLOCK_TYPES: tuple[type, ...] = (
    Paragraph,
    BulletList,
    NumberedList,
    TableBlock,
    CodeBlock,
    ImageBlock,
    FigureBlock,
    LinkBlock,
    RawBlock,
)


def as_block(value: Block | TextLike) -> Block:
    """Return ``value`` unchanged if it is a block, else wrap it in a Paragraph."""
    if isinstance(value, BLOCK_TYPES):
        return value
    return Paragraph(as_text(value))


def paragraph(content: TextLike) -> Paragraph:
    return Paragraph(as_text(content))


def bullets(items: Iterable[TextLike]) -> BulletList:
    return BulletList(tuple(as_text(item) for item in items))


def numbered(items: Iterable[TextLike]) -> NumberedList:
    return NumberedList(tuple(as_text(item) for item in items))


def table(headers: Iterable[object], rows: Iterable[Iterable[object]]) -> TableBlock:
    """Build a table, stringifying every header and cell.

    Raises ShapeError if any row's length differs from the header count, and
    TypeError if the headers or a row are a single string.
    """
    if isinstance(headers, str):
        raise TypeError("Table headers must be a sequence of cells, not a string")
    cells = []
    for idx, row in enumerate(rows):
        if isinstance(row, str):
            raise TypeError(f"Row {idx} must be a sequence of cells, not a string")
        cells.append(tuple(str(cell) for cell in row))
    return TableBlock(headers=tuple(str(header) for header in headers), rows=tuple(cells))


def code(source: str, language: str | None = None) -> CodeBlock:
    return CodeBlock(source=source, language=language or DEFAULT_CODE_LANGUAGE)


def image(
    path: str,
    *,
    width: str | None = None,
    height: str | None = None,
    alt: str | None = None,
    fit: str | None = None,
    format: str | None = None,
    dpi: str | int | None = None,
    gamma: str | float | None = None,
    frame: str | None = None,
    invert: bool | None = None,
) -> ImageBlock:
    return ImageBlock(
        path=str(path),
        width=width,
        height=height,
        alt=alt,
        fit=fit,
        format=format,
        dpi=dpi,
        gamma=gamma,
        frame=frame,
        invert=invert,
    )


def figure(body: FigureBody | str, caption: TextLike | None = None, *, kind: str | None = None) -> FigureBlock:
    """Wrap an image (or a path to one) or a table in a numbered figure."""
    if isinstance(body, str):
        body = ImageBlock(path=body)
    if not isinstance(body, (ImageBlock, TableBlock)):
        raise TypeError(f"Figure body must be an image or a table, got {type(body).__name__}")
    return FigureBlock(body=body, caption=None if caption is None else as_text(caption), kind=kind)


def link(destination: LinkDestination | str, label: TextLike) -> LinkBlock:
    """Standalone link block; a plain string destination is treated as a URL."""
    if isinstance(destination, str):
        destination = Url(destination)
    return LinkBlock(destination=destination, label=as_text(label))


def raw(markup: str) -> RawBlock:
    return RawBlock(markup)
