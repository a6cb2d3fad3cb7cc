"""Renderer and compiler settings."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from report_creation.errors import ConfigurationError

DEFAULT_CODE_LANGUAGE = "typst"

# Placeholders usable in header/footer text, mapped to the Typst expressions
# the compiler evaluates on every page.
DEFAULT_PAGE_TOKENS: Mapping[str, str] = MappingProxyType(
    {
        "{page}": "#context counter(page).display()",
        "{pages}": "#context counter(page).final().first()",
    }
)


@dataclass(frozen=True, slots=True)
class RenderConfig:
    default_code_language: str = DEFAULT_CODE_LANGUAGE
    page_tokens: Mapping[str, str] = field(default_factory=lambda: DEFAULT_PAGE_TOKENS)
    title_size: str = "1.6em"


@dataclass(frozen=True, slots=True)
class CompilerConfig:
    typst_binary: str = "typst"
    font_paths: tuple[Path, ...] = ()
    timeout: float | None = None

    @classmethod
    def from_env(cls) -> CompilerConfig:
        """Build a config from ``REPORT_CREATION_*`` environment variables."""
        binary = os.environ.get("REPORT_CREATION_TYPST", "").strip() or "typst"
        font_paths = tuple(
            Path(part)
            for part in os.environ.get("REPORT_CREATION_FONT_PATHS", "").split(os.pathsep)
            if part.strip()
        )
        return cls(typst_binary=binary, font_paths=font_paths, timeout=_parse_timeout())


def _parse_timeout() -> float | None:
    raw_timeout = os.environ.get("REPORT_CREATION_TIMEOUT", "").strip()
    if not raw_timeout:
        return None
    try:
        timeout = float(raw_timeout)
    except ValueError:
        timeout = None
    if timeout is None or not timeout > 0:
        raise ConfigurationError(f"REPORT_CREATION_TIMEOUT must be a positive number of seconds, got {raw_timeout!r}")
    return timeout
