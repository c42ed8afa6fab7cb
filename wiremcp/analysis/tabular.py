"""
WireMCP Tabular Text Parser

Splits tshark ``-T fields`` style output into rows of fields.
"""

from typing import Iterator


def iter_rows(
    text: str,
    separator: str = "\t",
    width: int | None = None,
) -> Iterator[list[str]]:
    """
    Lazily split delimited text into rows.

    Args:
        text: Raw tshark output
        separator: Field separator (tab for ``-T fields``)
        width: Expected field count; shorter rows are padded with ""

    Yields:
        One list of fields per non-blank line. Malformed rows are passed
        through as-is; callers decide which fields are usable.
    """
    for line in text.splitlines():
        if not line.strip():
            continue
        fields = line.rstrip("\r").split(separator)
        if width is not None and len(fields) < width:
            fields.extend([""] * (width - len(fields)))
        yield fields
