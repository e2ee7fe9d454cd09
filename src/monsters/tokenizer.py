"""Split monster file lines into (property name, raw value) pairs."""

from typing import Iterable, Iterator, Tuple

COMMENT_SYMBOL = "#"
PROPERTY_VALUE_SEPARATOR = "="


def tokenize_lines(lines: Iterable[str]) -> Iterator[Tuple[str, str]]:
    """
    Lazily turn monster file lines into (property name, raw value) pairs.

    Rules, per line after left-trimming:
        - blank lines and lines starting with '#' are skipped
        - a line is split at the first '=' only; later '=' belong to the value
        - a line without '=' continues the previous value, appended trimmed
          and without any separator
        - property names are trimmed and lower-cased

    A pair is emitted only when both its name and its value are non-empty.

    Args:
        lines: Source lines, e.g. an open file handle

    Yields:
        (name, value) tuples in file order
    """
    name = ""
    value = ""

    for raw_line in lines:
        line = raw_line.lstrip()
        if not line or line.startswith(COMMENT_SYMBOL):
            continue

        parts = line.split(PROPERTY_VALUE_SEPARATOR, 1)
        if len(parts) == 1:
            value += parts[0].strip()
            continue

        if name and value:
            yield name, value
        name = parts[0].strip().lower()
        value = parts[1].strip()

    if name and value:
        yield name, value
