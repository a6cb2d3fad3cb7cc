"""Lightweight delimiter check for rendered Typst markup.

This is not a Typst parser. It tracks markup, code, string, raw and math
regions closely enough to catch unbalanced brackets, parentheses, braces,
strings and raw fences, which is what malformed raw blocks usually produce.
"""

from __future__ import annotations

from dataclasses import dataclass

from report_creation.errors import MarkupIssue

_CLOSERS = {"(": ")", "[": "]", "{": "}"}
_OPENERS = {closer: opener for opener, closer in _CLOSERS.items()}
_KEYWORDS = {"set", "show", "let", "context", "import", "include", "return"}


@dataclass(slots=True)
class _Frame:
    delimiter: str
    offset: int


def find_syntax_issues(markup: str) -> list[MarkupIssue]:
    """Return every unbalanced delimiter in ``markup``, in source order."""
    scanner = _Scanner(markup)
    scanner.run()
    return sorted(scanner.issues, key=lambda issue: (issue.line, issue.column))


class _Scanner:
    def __init__(self, source: str) -> None:
        self.source = source
        self.pos = 0
        self.stack: list[_Frame] = []
        self.issues: list[MarkupIssue] = []

    def run(self) -> None:
        while self.pos < len(self.source):
            if self._in_code():
                self._step_code()
            else:
                self._step_markup()
        for frame in self.stack:
            self._report(frame.offset, f"unclosed delimiter {frame.delimiter!r}")

    def _in_code(self) -> bool:
        return bool(self.stack) and self.stack[-1].delimiter in "({"

    def _step_markup(self) -> None:
        source = self.source
        char = source[self.pos]

        if char == "\\":
            self.pos += 2
        elif source.startswith("//", self.pos) and not self._follows_scheme():
            self._skip_line()
        elif source.startswith("/*", self.pos):
            self._skip_block_comment()
        elif char == "`":
            self._skip_raw()
        elif char == "$":
            self._skip_math()
        elif char == "#":
            self._enter_embedded()
        elif char == "[":
            self.stack.append(_Frame("[", self.pos))
            self.pos += 1
        elif char == "]":
            self._close("]")
        else:
            self.pos += 1

    def _step_code(self) -> None:
        source = self.source
        char = source[self.pos]

        if char == '"':
            self._skip_string()
        elif source.startswith("//", self.pos):
            self._skip_line()
        elif source.startswith("/*", self.pos):
            self._skip_block_comment()
        elif char == "`":
            self._skip_raw()
        elif char in _CLOSERS:
            self.stack.append(_Frame(char, self.pos))
            self.pos += 1
        elif char in _OPENERS:
            self._close(char)
        else:
            self.pos += 1

    def _enter_embedded(self) -> None:
        # "#name(" or "#name.method(" switches to code until the matching ")".
        source = self.source
        end = self._scan_identifier(self.pos + 1)
        # "#set page(...)", "#let name() = ..." and friends put code after the keyword.
        if source[self.pos + 1 : end] in _KEYWORDS:
            while end < len(source) and source[end] == " ":
                end += 1
            end = self._scan_identifier(end)
        if end < len(source) and source[end] in "({":
            self.stack.append(_Frame(source[end], end))
            self.pos = end + 1
        else:
            self.pos = end

    def _scan_identifier(self, start: int) -> int:
        end = start
        while end < len(self.source) and (self.source[end].isalnum() or self.source[end] in "_-."):
            end += 1
        return end

    def _close(self, closer: str) -> None:
        opener = _OPENERS[closer]
        if self.stack and self.stack[-1].delimiter == opener:
            self.stack.pop()
        else:
            self._report(self.pos, f"unexpected closing delimiter {closer!r}")
        self.pos += 1

    def _skip_string(self) -> None:
        start = self.pos
        self.pos += 1
        while self.pos < len(self.source):
            char = self.source[self.pos]
            if char == "\\":
                self.pos += 2
                continue
            self.pos += 1
            if char == '"':
                return
        self._report(start, "unclosed string")

    def _skip_raw(self) -> None:
        start = self.pos
        ticks = 0
        while self.pos < len(self.source) and self.source[self.pos] == "`":
            ticks += 1
            self.pos += 1
        if ticks == 2:
            return
        fence = "`" * ticks
        end = self.source.find(fence, self.pos)
        if end == -1:
            self._report(start, "unclosed raw text")
            self.pos = len(self.source)
            return
        self.pos = end + ticks

    def _skip_math(self) -> None:
        start = self.pos
        self.pos += 1
        while self.pos < len(self.source):
            char = self.source[self.pos]
            if char == "\\":
                self.pos += 2
                continue
            self.pos += 1
            if char == "$":
                return
        self._report(start, "unclosed equation")

    def _skip_line(self) -> None:
        end = self.source.find("\n", self.pos)
        self.pos = len(self.source) if end == -1 else end

    def _skip_block_comment(self) -> None:
        end = self.source.find("*/", self.pos + 2)
        if end == -1:
            self._report(self.pos, "unclosed comment")
            self.pos = len(self.source)
            return
        self.pos = end + 2

    def _follows_scheme(self) -> bool:
        # "https://" in plain text is not a comment.
        return self.pos > 0 and self.source[self.pos - 1] == ":"

    def _report(self, offset: int, message: str) -> None:
        line = self.source.count("\n", 0, offset) + 1
        column = offset - (self.source.rfind("\n", 0, offset) + 1) + 1
        self.issues.append(MarkupIssue(line=line, column=column, message=message))
