from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

FENCE_MARKERS = ("```", "~~~")


class ScanMode(str, enum.Enum):
    NORMAL = "normal"
    IN_FENCE = "in_fence"
    IN_INLINE = "in_inline"


@dataclass(frozen=True)
class ScanState:
    """Where the scanner currently is.

    ``marker`` holds the fence marker that opened an ``IN_FENCE`` block, or
    the exact backtick run that opened an ``IN_INLINE`` span. It is ``None``
    in ``NORMAL``.
    """

    mode: ScanMode = ScanMode.NORMAL
    marker: Optional[str] = None

    @classmethod
    def normal(cls) -> "ScanState":
        return cls()

    @classmethod
    def in_fence(cls, marker: str) -> "ScanState":
        if marker not in FENCE_MARKERS:
            raise ValueError(f"Unsupported fence marker: {marker!r}")
        return cls(mode=ScanMode.IN_FENCE, marker=marker)

    @classmethod
    def in_inline(cls, delimiter: str) -> "ScanState":
        if not delimiter or delimiter.strip("`"):
            raise ValueError(f"Inline delimiter must be a backtick run: {delimiter!r}")
        return cls(mode=ScanMode.IN_INLINE, marker=delimiter)

    @property
    def is_normal(self) -> bool:
        return self.mode is ScanMode.NORMAL

    def closes_inline(self, run: str) -> bool:
        # Only a run of exactly the opening length closes the span.
        return self.mode is ScanMode.IN_INLINE and run == self.marker
