"""Recursive section tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from .blocks import Block, as_block
from .text import TextLike


@dataclass(slots=True)
class Section:
    """A heading followed by its blocks and then its subsections.

    The heading level is not stored; it is the nesting depth at render time.
    ``label`` attaches a Typst label (``<label>``) to the heading.
    """

    heading: str
    blocks: list[Block] = field(default_factory=list)
    children: list[Section] = field(default_factory=list)
    label: str | None = None

    def add_block(self, block: Block | TextLike) -> Section:
        self.blocks.append(as_block(block))
        return self

    def add_subsection(self, section: Section) -> Section:
        if not isinstance(section, Section):
            raise TypeError(f"Expected Section, got {type(section).__name__}")
        self.children.append(section)
        return self

    def walk(self, depth: int = 0) -> Iterator[tuple[int, Section]]:
        """Yield ``(depth, section)`` pairs in depth-first pre-order."""
        stack: list[tuple[int, Section]] = [(depth, self)]
        while stack:
            current_depth, section = stack.pop()
            yield current_depth, section
            for child in reversed(section.children):
                stack.append((current_depth + 1, child))

    def count(self) -> int:
        return sum(1 for _ in self.walk())
