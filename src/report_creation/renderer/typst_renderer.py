"""Render a Report tree into a Typst document."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from report_creation.config import RenderConfig
from report_creation.document.blocks import (
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
)
from report_creation.document.report import Outline, PageSection, Report
from report_creation.document.section import Section
from report_creation.document.text import (
    Bold,
    InlineLink,
    Italic,
    LinkDestination,
    Location,
    Plain,
    Styled,
    Text,
    TextOptions,
    Url,
)

from .escape import escape_markup, quote

_SLUG_RE = re.compile(r"[\W_]+")
_BACKTICK_RUN_RE = re.compile(r"`{3,}")
_LINE_BREAK_RE = re.compile(r"\s*[\r\n]+\s*")

# Text options whose values are Typst expressions, not strings.
_RAW_TEXT_OPTIONS = {"fill", "size", "justification", "leading"}

# Figure kinds Typst accepts as element functions rather than strings.
_BUILTIN_FIGURE_KINDS = {"auto", "image", "table", "raw"}

_NO_TOKENS: Mapping[str, str] = MappingProxyType({})

CONTENTS_TABLE = Outline(title="[Table of Contents]", target="heading")
FIGURE_TABLE = Outline(title="[Table of Figures]", target="figure")


@dataclass(slots=True)
class RenderedHeading:
    level: int
    number: str
    title: str


@dataclass(slots=True)
class RenderedFigure:
    number: int
    caption: str
    kind: str


@dataclass(slots=True)
class RenderedReport:
    markup: str
    slug: str
    headings: list[RenderedHeading] = field(default_factory=list)
    figures: list[RenderedFigure] = field(default_factory=list)


@dataclass(slots=True)
class _RenderState:
    heading_counters: list[int] = field(default_factory=list)
    headings: list[RenderedHeading] = field(default_factory=list)
    figures: list[RenderedFigure] = field(default_factory=list)


def normalize_filename(title: str) -> str:
    """Lower-case ``title`` and collapse non-alphanumeric runs into ``_``."""
    slug = _SLUG_RE.sub("_", title.lower()).strip("_")
    return slug or "report"


class TypstRenderer:
    """Serialize a Report into Typst markup.

    The renderer holds no per-document state, so one instance can render any
    number of reports, including concurrently.
    """

    def __init__(self, config: RenderConfig | None = None, template_path: Path | None = None) -> None:
        if template_path is None:
            template_path = Path(__file__).resolve().parent.parent / "template" / "report.typ.j2"

        self.config = config or RenderConfig()
        loader = FileSystemLoader(str(template_path.parent))
        self._env = Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        self._template_name = template_path.name

    def render(self, report: Report) -> str:
        return self.render_report(report).markup

    def render_report(self, report: Report) -> RenderedReport:
        state = _RenderState()

        front_matter = [self.render_block(block, state=state) for block in report.front_matter]
        body = self._render_sections(report.sections, state)

        template = self._env.get_template(self._template_name)
        markup = template.render(
            metadata=self._render_metadata(report),
            page_setup=self._render_page_setup(report.header_section, report.footer_section),
            heading_setup=(
                f"#set heading(numbering: {quote(report.heading_numbering)})" if report.heading_numbering else None
            ),
            title_block=self._render_title(report.title) if report.show_title else None,
            outline=f"#{report.outline.render_call()}" if report.show_outline else None,
            contents_table=_render_index("contents_table", CONTENTS_TABLE) if report.show_contents_table else None,
            figure_table=_render_index("figure_table", FIGURE_TABLE) if report.show_figure_table else None,
            front_matter=front_matter,
            body=body,
        )

        return RenderedReport(
            markup=markup,
            slug=normalize_filename(report.title),
            headings=state.headings,
            figures=state.figures if report.show_figure_table else [],
        )

    def _render_metadata(self, report: Report) -> str:
        args = [f"title: {quote(report.title)}"]
        if report.author_name is not None:
            args.append(f"author: {quote(report.author_name)}")
        return f"#set document({', '.join(args)})"

    def _render_page_setup(self, header: PageSection | None, footer: PageSection | None) -> str | None:
        args: list[str] = []
        for name, chrome in (("header", header), ("footer", footer)):
            if chrome is None:
                continue
            tokens = self.config.page_tokens
            content = "\n\n".join(self.render_block(block, tokens=tokens) for block in chrome.blocks)
            args.append(f"{name}: [{content}]")
        if not args:
            return None
        return f"#set page({', '.join(args)})"

    def _render_title(self, title: str) -> str:
        size = self.config.title_size
        return f'#align(center, text(size: {size}, weight: "bold")[{escape_markup(title)}])'

    def _render_sections(self, sections: Iterable[Section], state: _RenderState) -> list[str]:
        segments: list[str] = []
        for section in sections:
            for depth, node in section.walk():
                level = depth + 1
                segments.append(self._render_heading(node.heading, level, node.label, state))
                segments.extend(self.render_block(block, state=state) for block in node.blocks)
        return segments

    def _render_heading(self, title: str, level: int, label: str | None, state: _RenderState) -> str:
        # A heading ends at the line break, so it has to fit on one line.
        title = _LINE_BREAK_RE.sub(" ", title).strip()
        counters = state.heading_counters
        while len(counters) < level:
            counters.append(0)
        counters[level - 1] += 1
        del counters[level:]
        number = ".".join(str(n) for n in counters)
        state.headings.append(RenderedHeading(level=level, number=number, title=title))

        line = f"{'=' * level} {escape_markup(title)}"
        if label:
            line += f" <{label}>"
        return line

    def render_block(
        self,
        block: Block,
        *,
        state: _RenderState | None = None,
        tokens: Mapping[str, str] = _NO_TOKENS,
    ) -> str:
        if isinstance(block, Paragraph):
            return self.render_text(block.text, tokens=tokens)

        if isinstance(block, BulletList):
            return self._render_list(block.items, "-", "list", tokens)

        if isinstance(block, NumberedList):
            return self._render_list(block.items, "+", "enum", tokens)

        if isinstance(block, TableBlock):
            return "#" + _render_table_call(block)

        if isinstance(block, CodeBlock):
            return self._render_code(block)

        if isinstance(block, ImageBlock):
            return "#" + _render_image_call(block)

        if isinstance(block, FigureBlock):
            return self._render_figure(block, state, tokens)

        if isinstance(block, LinkBlock):
            return f"#link({_render_destination(block.destination)})[{self.render_text(block.label, tokens=tokens)}]"

        if isinstance(block, RawBlock):
            return block.markup

        raise TypeError(f"Cannot render block of type {type(block).__name__}")

    def render_text(self, value: Text, *, tokens: Mapping[str, str] = _NO_TOKENS) -> str:
        parts: list[str] = []
        after_expression = False
        for span in value.spans:
            if isinstance(span, Plain):
                rendered, after_expression = _render_plain(span.text, tokens, after_expression)
                parts.append(rendered)
                continue

            body = self.render_text(span.body, tokens=tokens)
            if isinstance(span, Bold):
                parts.append(f"#strong[{body}]")
            elif isinstance(span, Italic):
                parts.append(f"#emph[{body}]")
            elif isinstance(span, InlineLink):
                parts.append(f"#link({_render_destination(span.destination)})[{body}]")
            elif isinstance(span, Styled):
                if span.options.is_empty():
                    parts.append(body)
                    after_expression = False
                    continue
                parts.append(f"#text({_render_text_options(span.options)})[{body}]")
            else:
                raise TypeError(f"Cannot render span of type {type(span).__name__}")
            after_expression = True
        return "".join(parts)

    def _render_list(self, items: tuple[Text, ...], marker: str, function: str, tokens: Mapping[str, str]) -> str:
        if not items:
            return f"#{function}()"
        lines = []
        for item in items:
            # Continuation lines stay inside the item when indented.
            body = self.render_text(item, tokens=tokens).strip().replace("\n", "\n  ")
            lines.append(f"{marker} {body}")
        return "\n".join(lines)

    def _render_code(self, block: CodeBlock) -> str:
        language = block.language or self.config.default_code_language
        longest = max((len(run) for run in _BACKTICK_RUN_RE.findall(block.source)), default=2)
        fence = "`" * max(3, longest + 1)
        return f"{fence}{language}\n{block.source.rstrip()}\n{fence}"

    def _render_figure(self, block: FigureBlock, state: _RenderState | None, tokens: Mapping[str, str]) -> str:
        if isinstance(block.body, ImageBlock):
            body = _render_image_call(block.body)
            default_kind = "image"
        elif isinstance(block.body, TableBlock):
            body = _render_table_call(block.body)
            default_kind = "table"
        else:
            raise TypeError(f"Cannot render figure body of type {type(block.body).__name__}")

        args = [body]
        if block.caption is not None:
            args.append(f"caption: [{self.render_text(block.caption, tokens=tokens)}]")
        if block.kind is not None:
            args.append(f"kind: {_render_figure_kind(block.kind)}")

        if state is not None and block.caption is not None:
            state.figures.append(
                RenderedFigure(
                    number=len(state.figures) + 1,
                    caption=block.caption.plain_text(),
                    kind=block.kind or default_kind,
                )
            )
        return f"#figure({', '.join(args)})"


def _render_plain(value: str, tokens: Mapping[str, str], after_expression: bool) -> tuple[str, bool]:
    """Escape ``value`` and substitute page tokens.

    Also returns whether the markup ends with an embedded expression, so the
    next span knows it must not extend it.
    """
    parts: list[str] = []
    position = 0
    if tokens:
        pattern = re.compile("|".join(re.escape(token) for token in sorted(tokens, key=len, reverse=True)))
        for match in pattern.finditer(value):
            literal = value[position : match.start()]
            if literal:
                parts.append(_detach(escape_markup(literal), after_expression))
            parts.append(tokens[match.group(0)])
            after_expression = True
            position = match.end()
    literal = value[position:]
    if literal:
        parts.append(_detach(escape_markup(literal), after_expression))
        after_expression = False
    return "".join(parts), after_expression


def _detach(markup: str, after_expression: bool) -> str:
    # A "(" or "." right after "#func[...]" or "#expr" would continue the expression.
    if after_expression and markup[:1] in ("(", "."):
        return "\\" + markup
    return markup


def _render_destination(destination: LinkDestination) -> str:
    if isinstance(destination, Url):
        return quote(destination.url)
    if isinstance(destination, Location):
        return destination.reference
    raise TypeError(f"Unknown link destination {destination!r}")


def _render_text_options(options: TextOptions) -> str:
    args = []
    for name, value in options.items():
        if name in _RAW_TEXT_OPTIONS or isinstance(value, int):
            args.append(f"{name}: {value}")
        else:
            args.append(f"{name}: {quote(str(value))}")
    return ", ".join(args)


def _render_image_call(block: ImageBlock) -> str:
    args = [quote(block.path.strip())]
    if block.alt is not None:
        args.append(f"alt: {quote(block.alt)}")
    if block.width is not None:
        args.append(f"width: {block.width}")
    if block.height is not None:
        args.append(f"height: {block.height}")
    if block.fit is not None:
        args.append(f"fit: {quote(block.fit)}")
    if block.format is not None:
        args.append(f"format: {quote(block.format)}")
    for name in ("dpi", "gamma", "frame"):
        value = getattr(block, name)
        if value is not None:
            args.append(f"{name}: {value}")
    if block.invert is not None:
        args.append(f"invert: {'true' if block.invert else 'false'}")
    return f"image({', '.join(args)})"


def _render_table_call(block: TableBlock) -> str:
    if not block.headers:
        return "table()"
    lines = [f"  columns: {len(block.headers)},"]
    header_cells = ", ".join(_cell(header) for header in block.headers)
    lines.append(f"  table.header({header_cells}),")
    for row in block.rows:
        lines.append("  " + ", ".join(_cell(cell) for cell in row) + ",")
    body = "\n".join(lines)
    return f"table(\n{body}\n)"


def _cell(value: str) -> str:
    return f"[{escape_markup(value.strip())}]"


def _render_figure_kind(kind: str) -> str:
    return kind if kind in _BUILTIN_FIGURE_KINDS else quote(kind)


def _render_index(name: str, outline: Outline) -> str:
    return f"{outline.render_function(name)}\n#{name}()"
