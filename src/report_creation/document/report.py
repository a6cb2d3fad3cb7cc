"""Report aggregate and its fluent builder."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Union

from .blocks import Block, as_block
from .section import Section
from .text import TextLike

if TYPE_CHECKING:
    from report_creation.config import CompilerConfig, RenderConfig
    from report_creation.output import ReportArtifacts


@dataclass(slots=True)
class PageSection:
    """Blocks repeated in the header or footer of every page."""

    blocks: list[Block] = field(default_factory=list)

    def add_block(self, block: Block | TextLike) -> PageSection:
        self.blocks.append(as_block(block))
        return self

    @classmethod
    def of(cls, value: PageSection | Block | TextLike | Iterable[Block | TextLike]) -> PageSection:
        if isinstance(value, PageSection):
            return value
        if isinstance(value, (list, tuple)):
            return cls([as_block(item) for item in value])
        return cls([as_block(value)])


@dataclass(frozen=True, slots=True)
class Outline:
    """Arguments of a Typst ``outline`` call, emitted verbatim as expressions.

    ``title`` is content or ``none`` (e.g. ``[Contents]``), ``target`` a
    selector such as ``heading.where(level: 1)``, ``indent`` a length or
    ``auto`` and ``depth`` the deepest heading level to list.
    """

    title: str | None = None
    target: str | None = None
    indent: str | None = None
    depth: int | None = None

    def arguments(self) -> list[str]:
        args: list[tuple[str, object]] = [
            ("title", self.title),
            ("target", self.target),
            ("indent", self.indent),
            ("depth", self.depth),
        ]
        return [f"{name}: {value}" for name, value in args if value is not None]

    def render_call(self) -> str:
        args = self.arguments()
        if not args:
            return "outline()"
        body = "".join(f"  {arg},\n" for arg in args)
        return f"outline(\n{body})"

    def render_function(self, name: str) -> str:
        """Bind the outline to a zero-argument Typst function called ``name``."""
        return f"#let {name}() = {self.render_call()}"


PageContent = Union[PageSection, Block, TextLike]


class Report:
    """Root of the document tree; every setter returns the report for chaining.

    Example::

        Report("Weekly Status").author("Ada Lovelace").add_section(
            Section("Highlights").add_block(bullets(["A", "B"]))
        ).render()
    """

    def __init__(self, title: str) -> None:
        self.title = title
        self.author_name: str | None = None
        self.header_section: PageSection | None = None
        self.footer_section: PageSection | None = None
        self.outline: Outline = Outline()
        self.show_outline = True
        self.show_contents_table = False
        self.show_figure_table = False
        self.show_title = True
        self.heading_numbering: str | None = None
        self.front_matter: list[Block] = []
        self.sections: list[Section] = []

    def __repr__(self) -> str:
        return f"Report(title={self.title!r}, sections={len(self.sections)})"

    def author(self, name: str) -> Report:
        self.author_name = name
        return self

    def header(self, content: PageContent) -> Report:
        self.header_section = PageSection.of(content)
        return self

    def footer(self, content: PageContent) -> Report:
        self.footer_section = PageSection.of(content)
        return self

    def with_outline(self, enabled: bool | Outline = True) -> Report:
        """Toggle the outline; passing an Outline enables it with those arguments."""
        if isinstance(enabled, Outline):
            self.outline = enabled
            self.show_outline = True
        else:
            self.show_outline = bool(enabled)
        return self

    def with_contents_table(self, enabled: bool = True) -> Report:
        self.show_contents_table = enabled
        return self

    def with_figure_table(self, enabled: bool = True) -> Report:
        self.show_figure_table = enabled
        return self

    def with_title(self, enabled: bool = True) -> Report:
        self.show_title = enabled
        return self

    def with_heading_numbering(self, pattern: str | None = "1.1") -> Report:
        self.heading_numbering = pattern
        return self

    def add_front_matter(self, block: Block | TextLike) -> Report:
        self.front_matter.append(as_block(block))
        return self

    def add_section(self, section: Section) -> Report:
        if not isinstance(section, Section):
            raise TypeError(f"Expected Section, got {type(section).__name__}")
        self.sections.append(section)
        return self

    @property
    def slug(self) -> str:
        from report_creation.renderer.typst_renderer import normalize_filename

        return normalize_filename(self.title)

    def render(self, config: RenderConfig | None = None) -> tuple[str, str]:
        """Return the Typst markup and the filename slug derived from the title."""
        from report_creation.renderer.typst_renderer import TypstRenderer

        rendered = TypstRenderer(config).render_report(self)
        return rendered.markup, rendered.slug

    def render_validated(self, config: RenderConfig | None = None) -> tuple[str, str]:
        """Like render(), but raise MarkupSyntaxError on unbalanced delimiters."""
        from report_creation.errors import MarkupSyntaxError
        from report_creation.validation import find_syntax_issues

        markup, slug = self.render(config)
        issues = find_syntax_issues(markup)
        if issues:
            raise MarkupSyntaxError(issues)
        return markup, slug

    def save(
        self,
        directory: str | Path = ".",
        *,
        pdf: bool = False,
        compiler_config: CompilerConfig | None = None,
    ) -> ReportArtifacts:
        """Write ``<slug>.typ`` (and ``<slug>.pdf`` when ``pdf``) into ``directory``."""
        from report_creation.output import write_report

        return write_report(self, directory, pdf=pdf, compiler_config=compiler_config)
