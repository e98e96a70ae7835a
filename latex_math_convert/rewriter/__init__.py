"""Single-pass delimiter rewriting for Markdown documents.

The scanner walks the document once, tracking whether it sits inside a fenced
code block, an inline code span, or plain prose, and only rewrites math
delimiters in prose.
"""
