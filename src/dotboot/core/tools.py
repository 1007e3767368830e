"""Selection of external tools by availability.

Steps that can be carried out by several interchangeable tools (curl or
wget, sha256sum or shasum) describe each tool as a strategy object. The
first candidate that reports itself available is used.
"""

from __future__ import annotations

import shutil
from abc import ABC, abstractmethod
from typing import Optional, Sequence, TypeVar

from dotboot.core.errors import MissingDependencyError
from dotboot.core.logging import get_logger

LOGGER = get_logger(__name__)


class Tool(ABC):
    """A strategy backed by some tool that may be absent."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Tool identifier used in log messages."""

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the tool can be used on this host."""


class CommandTool(Tool):
    """A tool backed by an executable looked up on PATH."""

    executable: str = ""

    @property
    def name(self) -> str:
        return self.executable

    def resolve(self) -> Optional[str]:
        """Full path to the executable, or None."""
        return shutil.which(self.executable)

    def is_available(self) -> bool:
        return self.resolve() is not None


T = TypeVar("T", bound=Tool)


def select_tool(candidates: Sequence[T], purpose: str) -> T:
    """Pick the first available tool.

    Args:
        candidates: Tools in order of preference.
        purpose: Human-readable description for the error message,
            e.g. ``"download"``.

    Returns:
        The first available candidate.

    Raises:
        MissingDependencyError: If none of the candidates is available.
    """
    for tool in candidates:
        if tool.is_available():
            LOGGER.debug(f"Using {tool.name} for {purpose}")
            return tool
    names = " or ".join(tool.name for tool in candidates) or "none configured"
    raise MissingDependencyError(f"No {purpose} tool available (need {names})")
