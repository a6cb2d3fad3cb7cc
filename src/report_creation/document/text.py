"""Inline text model: plain runs, strong/emphasis, links and styled runs."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Iterator, Union


@dataclass(frozen=True, slots=True)
class Url:
    url: str


@dataclass(frozen=True, slots=True)
class Location:
    """Reference to a place inside the document, e.g. ``<intro>``."""

    reference: str


LinkDestination = Union[Url, Location]


@dataclass(frozen=True, slots=True)
class TextOptions:
    """Typst ``text`` arguments applied to a styled run.

    ``fill``, ``size``, ``justification`` and ``leading`` are Typst
    expressions (``red``, ``16pt``, ``left``, ``1.4em``) and are emitted
    as-is; the remaining options are emitted as strings.
    """

    fill: str | None = None
    size: str | None = None
    font: str | None = None
    weight: str | int | None = None
    style: str | None = None
    lang: str | None = None
    justification: str | None = None
    leading: str | None = None

    def items(self) -> Iterator[tuple[str, str | int]]:
        for option in fields(self):
            value = getattr(self, option.name)
            if value is not None:
                yield option.name, value

    def is_empty(self) -> bool:
        return next(self.items(), None) is None


@dataclass(frozen=True, slots=True)
class Plain:
    text: str


@dataclass(frozen=True, slots=True)
class Bold:
    body: Text


@dataclass(frozen=True, slots=True)
class Italic:
    body: Text


@dataclass(frozen=True, slots=True)
class InlineLink:
    destination: LinkDestination
    body: Text


@dataclass(frozen=True, slots=True)
class Styled:
    body: Text
    options: TextOptions


Span = Union[Plain, Bold, Italic, InlineLink, Styled]


@dataclass(frozen=True, slots=True)
class Text:
    spans: tuple[Span, ...] = ()

    def __add__(self, other: Text | str) -> Text:
        if isinstance(other, (Text, str)):
            return Text(self.spans + as_text(other).spans)
        return NotImplemented

    def __radd__(self, other: str) -> Text:
        if isinstance(other, str):
            return Text(as_text(other).spans + self.spans)
        return NotImplemented

    def plain_text(self) -> str:
        """Flatten to the visible characters, dropping all styling."""
        parts: list[str] = []
        for span in self.spans:
            if isinstance(span, Plain):
                parts.append(span.text)
            else:
                parts.append(span.body.plain_text())
        return "".join(parts)


TextLike = Union[Text, str]


def as_text(value: TextLike) -> Text:
    if isinstance(value, Text):
        return value
    if isinstance(value, str):
        return Text((Plain(value),))
    raise TypeError(f"Expected str or Text, got {type(value).__name__}")


def text(*parts: TextLike) -> Text:
    """Concatenate strings and Text values into one Text."""
    spans: list[Span] = []
    for part in parts:
        spans.extend(as_text(part).spans)
    return Text(tuple(spans))


def plain(value: str) -> Text:
    return Text((Plain(value),))


def bold(body: TextLike) -> Text:
    return Text((Bold(as_text(body)),))


def italic(body: TextLike) -> Text:
    return Text((Italic(as_text(body)),))


def styled(body: TextLike, options: TextOptions | None = None, **kwargs: str | int) -> Text:
    """Apply Typst text options, e.g. ``styled("Alert", fill="red", weight="bold")``."""
    if options is None:
        options = TextOptions(**kwargs)
    elif kwargs:
        raise TypeError("Pass either a TextOptions instance or keyword options, not both")
    return Text((Styled(as_text(body), options),))


def link_to_url(url: str, label: TextLike) -> Text:
    return Text((InlineLink(Url(url), as_text(label)),))


def link_to_location(reference: str, label: TextLike) -> Text:
    return Text((InlineLink(Location(reference), as_text(label)),))
