"""Textual JSON pretty-printer."""

from __future__ import annotations

_OPENERS = "{["
_CLOSERS = "}]"
_DROPPED_WHITESPACE = " \t\n"


def format_json(source: str, indent: str = "\t\t") -> str:
    """Re-indent raw JSON text.

    Works on the characters of ``source`` rather than on a parsed value, so the
    original number literals and key order are kept. String literals are
    tracked with a simple heuristic: a quote toggles the in-string state unless
    the character before it is a backslash. An escaped backslash right before a
    closing quote (``"a\\\\"``) is therefore misread as an escaped quote.

    Args:
        source: JSON text, minified or not.
        indent: Whitespace emitted once per nesting level.

    Returns:
        The re-indented text, without a trailing newline.
    """
    out: list[str] = []
    depth = 0
    in_string = False

    for i, char in enumerate(source):
        if char == '"':
            if i == 0 or source[i - 1] != "\\":
                in_string = not in_string
            out.append(char)
        elif in_string:
            out.append(char)
        elif char in _OPENERS:
            out.append(char + "\n" + indent * (depth + 1))
            depth += 1
        elif char in _CLOSERS:
            depth -= 1
            out.append("\n" + indent * depth + char)
        elif char == ",":
            out.append(",\n" + indent * depth)
        elif char == ":":
            out.append(": ")
        elif char in _DROPPED_WHITESPACE:
            continue
        else:
            out.append(char)

    return "".join(out)
