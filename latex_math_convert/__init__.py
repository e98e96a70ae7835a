"""Convert LaTeX bracket-style math delimiters in Markdown to dollar-style.

``\\( ... \\)`` becomes ``$ ... $`` and ``\\[ ... \\]`` becomes ``$$ ... $$``;
fenced code blocks and inline code spans are left untouched.
"""

__version__ = "0.1.0"

from latex_math_convert.rewriter.convert import (  # noqa: E402
    ConversionResult,
    convert_markdown,
    rewrite_delimiters,
)

__all__ = [
    "ConversionResult",
    "__version__",
    "convert_markdown",
    "rewrite_delimiters",
]
