"""Formatting clean-up for downloaded license texts.

License collections usually prefix the license body with a metadata block
closed by a ``---`` line (YAML front matter). The body itself is often
indented for display purposes. Both are removed before the text becomes a
template.
"""

import re
import textwrap

# A lone \r never splits a \r\n pair
_LINE_BREAK = r"(?:\r\n|\n|\r(?!\n))"

# Greedy prefix: everything up to the last dash-only line (indentation
# allowed), plus the blank lines that follow it
_PREAMBLE_PATTERN = re.compile(
    r"\A(?:.*" + _LINE_BREAK + r")?[ \t]*-{3,}[ \t]*(?:" + _LINE_BREAK + r"|\Z)(?:[ \t]*" + _LINE_BREAK + r")*",
    re.DOTALL,
)
_INDENT_PATTERN = re.compile(r"^[ \t]+", re.MULTILINE)
_PARAGRAPH_BREAK = re.compile(r"(" + _LINE_BREAK + r"(?:[ \t]*" + _LINE_BREAK + r")+)")


def strip_preamble(text: str) -> str:
    """Remove the metadata block ending in a dash-only line, if there is one."""
    return _PREAMBLE_PATTERN.sub("", text, count=1)


def unindent(text: str) -> str:
    """Remove leading spaces and tabs from every line."""
    return _INDENT_PATTERN.sub("", text)


def normalize(text: str) -> str:
    """Strip the preamble, then unindent.

    Args:
        text (str): Raw license text as downloaded.

    Returns:
        str: The license body without preamble or indentation.
    """
    return unindent(strip_preamble(text))


def reflow(text: str, width: int) -> str:
    """Re-fill paragraphs that have lines longer than ``width``.

    Paragraphs whose lines all fit are returned untouched. Words and
    placeholder tokens are never split.

    Args:
        text (str): Normalized license text.
        width (int): Target line length.

    Returns:
        str: Text with overlong paragraphs wrapped.

    Raises:
        ValueError: If width is not positive.
    """
    if width <= 0:
        raise ValueError(f"Line length must be positive, got {width}")

    newline = "\r\n" if "\r\n" in text else "\n"
    chunks = _PARAGRAPH_BREAK.split(text)
    # Odd indices hold the captured paragraph separators
    for index in range(0, len(chunks), 2):
        chunks[index] = _reflow_paragraph(chunks[index], width, newline)
    return "".join(chunks)


def _reflow_paragraph(paragraph: str, width: int, newline: str) -> str:
    body = paragraph.rstrip("\r\n")
    trailing = paragraph[len(body):]
    lines = body.splitlines()
    if all(len(line) <= width for line in lines):
        return paragraph

    words = " ".join(line.strip() for line in lines if line.strip())
    filled = textwrap.fill(words, width=width, break_long_words=False, break_on_hyphens=False)
    return filled.replace("\n", newline) + trailing
