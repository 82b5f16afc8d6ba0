"""Source location metadata attached to every log call."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """File, function and line of the code that emitted a message."""

    file: str
    func: str
    line: int

    @classmethod
    def from_caller(cls, stacklevel: int = 1) -> "SourceLocation":
        """Capture the location ``stacklevel`` frames above the caller.

        ``stacklevel=1`` describes the function that called ``from_caller``.

        Examples
        --------
        >>> def whereami():
        ...     return SourceLocation.from_caller()
        >>> whereami().func
        'whereami'
        """

        try:
            frame = sys._getframe(stacklevel)
        except ValueError:
            return cls.unknown()
        code = frame.f_code
        return cls(file=Path(code.co_filename).name, func=code.co_name, line=frame.f_lineno)

    @classmethod
    def unknown(cls) -> "SourceLocation":
        """Return a placeholder used when no frame is available."""

        return cls(file="<unknown>", func="<unknown>", line=0)


__all__ = ["SourceLocation"]
