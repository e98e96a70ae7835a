from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from latex_math_convert.rewriter.state import FENCE_MARKERS, ScanMode, ScanState

# opener -> (closer, dollar wrapper)
MATH_DELIMITERS: Dict[str, tuple[str, str]] = {
    "\\(": ("\\)", "$"),
    "\\[": ("\\]", "$$"),
}

# Characters that can change what the scanner does next while in prose.
_PROSE_STOP = re.compile(r"[`\\\n]")

# ECMAScript whitespace and line terminators, as trimmed by String.prototype.trim.
MATH_WHITESPACE = (
    "\t\n\x0b\x0c\r \xa0\u1680\u2000\u2001\u2002\u2003\u2004\u2005"
    "\u2006\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)


@dataclass(frozen=True)
class ConversionResult:
    content: str
    inline_count: int = 0
    display_count: int = 0
    unclosed_math: int = 0
    final_state: ScanState = field(default_factory=ScanState.normal)

    @property
    def changed(self) -> bool:
        return bool(self.inline_count or self.display_count)

    @property
    def is_balanced(self) -> bool:
        """True when the document ended in prose with every math span closed."""
        return self.final_state.is_normal and not self.unclosed_math


def _fence_marker_at(text: str, pos: int) -> Optional[str]:
    for marker in FENCE_MARKERS:
        if text.startswith(marker, pos):
            return marker
    return None


def _line_end(text: str, pos: int) -> int:
    """Index just past the newline that ends the line containing ``pos``."""
    eol = text.find("\n", pos)
    return len(text) if eol == -1 else eol + 1


def rewrite_delimiters(text: str) -> ConversionResult:
    """Rewrite ``\\(..\\)`` and ``\\[..\\]`` outside of code into dollar math.

    The document is scanned once. At every line start (outside inline code)
    leading spaces and tabs are skipped and a ```` ``` ```` or ``~~~`` marker
    opens a fenced block; the same marker closes it. Fence lines are copied
    verbatim. Backtick runs open an inline code span which only a run of the
    same length closes. In prose, a math opener captures everything up to
    its closer (or the end of the document), strips surrounding whitespace
    (the ECMAScript set: a byte order mark is stripped, the ASCII separator
    controls and NEL are not)
    and wraps the rest in ``$``/``$$``.

    Malformed input never raises: unterminated fences and inline spans keep
    their state until the end, and an unterminated math span wraps whatever
    follows it.
    """

    if not isinstance(text, str):
        raise TypeError(f"Expected str, got {type(text).__name__}")

    n = len(text)
    out: List[str] = []
    state = ScanState.normal()
    rewrites = {opener: 0 for opener in MATH_DELIMITERS}
    unclosed = 0
    i = 0

    while i < n:
        # --- Fence open/close, only at line starts and never inside inline code
        if state.mode is not ScanMode.IN_INLINE and (i == 0 or text[i - 1] == "\n"):
            j = i
            while j < n and text[j] in " \t":
                j += 1
            if state.is_normal:
                marker = _fence_marker_at(text, j)
                if marker is not None:
                    end = _line_end(text, j)
                    out.append(text[i:end])
                    i = end
                    state = ScanState.in_fence(marker)
                    continue
            elif text.startswith(state.marker, j):
                end = _line_end(text, j)
                out.append(text[i:end])
                i = end
                state = ScanState.normal()
                continue

        if state.mode is ScanMode.IN_FENCE:
            # Nothing inside a fence matters until the next line start.
            end = _line_end(text, i)
            out.append(text[i:end])
            i = end
            continue

        ch = text[i]

        # --- Backtick runs open or close inline code
        if ch == "`":
            j = i
            while j < n and text[j] == "`":
                j += 1
            run = text[i:j]
            out.append(run)
            i = j
            if state.is_normal:
                state = ScanState.in_inline(run)
            elif state.closes_inline(run):
                state = ScanState.normal()
            continue

        if state.mode is ScanMode.IN_INLINE:
            nxt = text.find("`", i)
            end = n if nxt == -1 else nxt
            out.append(text[i:end])
            i = end
            continue

        # --- Math delimiters in prose
        opener = text[i : i + 2]
        if opener in MATH_DELIMITERS:
            closer, wrapper = MATH_DELIMITERS[opener]
            start = i + 2
            close_at = text.find(closer, start)
            if close_at == -1:
                body = text[start:]
                i = n
                unclosed += 1
            else:
                body = text[start:close_at]
                i = close_at + len(closer)
            out.append(wrapper + body.strip(MATH_WHITESPACE) + wrapper)
            rewrites[opener] += 1
            continue

        if ch == "\\" or ch == "\n":
            out.append(ch)
            i += 1
            continue

        m = _PROSE_STOP.search(text, i)
        end = n if m is None else m.start()
        out.append(text[i:end])
        i = end

    return ConversionResult(
        content="".join(out),
        inline_count=rewrites["\\("],
        display_count=rewrites["\\["],
        unclosed_math=unclosed,
        final_state=state,
    )


def convert_markdown(text: str) -> str:
    """Return ``text`` with bracket-style math rewritten to dollar-style."""
    return rewrite_delimiters(text).content
