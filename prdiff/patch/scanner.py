"""Line scanning for patch and file text."""

from collections.abc import Iterator


def iter_lines(text: str) -> Iterator[str]:
    """Yield the lines of text with "\\n" or "\\r\\n" terminators stripped.

    A terminator at the very end of the text does not produce a trailing
    empty line, and empty text yields nothing. A lone "\\r" not followed by
    "\\n" stays part of the line.
    """
    index = 0
    length = len(text)

    while index < length:
        end = text.find("\n", index)
        if end == -1:
            yield text[index:]
            return

        stop = end - 1 if end > index and text[end - 1] == "\r" else end
        yield text[index:stop]
        index = end + 1


def count_carriage_returns(text: str) -> int:
    """Count literal carriage-return characters in text."""
    return text.count("\r")
