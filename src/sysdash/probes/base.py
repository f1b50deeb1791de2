"""Base probe interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from ..errors import ProbeError


class BaseProbe(ABC):
    """Abstract base class for all OS probes.

    ``collect`` either returns a typed value or raises ProbeError; it never
    lets any other exception escape for expected I/O and parse problems.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Source label used when reporting a failure."""
        ...

    @abstractmethod
    def collect(self) -> Any:
        """Read the source once and return its parsed value."""
        ...

    def fail(self, cause: str) -> ProbeError:
        return ProbeError(self.name, cause)

    def read_text(self, path: Path) -> str:
        try:
            return path.read_text().strip()
        except OSError as e:
            raise self.fail(e.strerror or str(e)) from e
        except UnicodeDecodeError as e:
            raise self.fail(f"undecodable content: {e.reason}") from e
