"""
WireMCP Conversation Normalizer

Turns ``tshark -qz conv,tcp`` / ``conv,udp`` tables into ConversationRow
records.
"""

import re

from wiremcp.analysis.models import ConversationRow

SEPARATOR = "<->"

_INTEGER_RE = re.compile(r"^\d[\d,]*$")

# Newer tshark releases print human-readable byte counts ("12 kB")
_UNIT_SCALE = {
    "bytes": 1,
    "kb": 1_000,
    "mb": 1_000_000,
    "gb": 1_000_000_000,
}


def _numeric_columns(tokens: list[str]) -> list[int]:
    """Collect integer columns left to right, applying trailing unit words."""
    numbers: list[int] = []
    for token in tokens:
        if _INTEGER_RE.match(token):
            numbers.append(int(token.replace(",", "")))
            continue
        scale = _UNIT_SCALE.get(token.lower())
        if scale is not None and numbers:
            numbers[-1] *= scale
    return numbers


def parse_conversations(text: str) -> list[ConversationRow]:
    """
    Parse a tshark conversation table.

    Header, filter and column-label lines have no ``<->`` and are skipped.
    Numeric columns are positional: ``<-`` frames/bytes, ``->`` frames/bytes,
    then total frames/bytes.
    """
    rows: list[ConversationRow] = []

    for line in text.splitlines():
        if SEPARATOR not in line:
            continue

        left, right = line.split(SEPARATOR, 1)
        endpoint_a = left.strip()
        right_tokens = right.split()
        if not endpoint_a or not right_tokens:
            continue

        endpoint_b = right_tokens[0]
        numbers = _numeric_columns(right_tokens[1:])

        row = ConversationRow(endpoint_a=endpoint_a, endpoint_b=endpoint_b)
        if len(numbers) >= 6:
            (
                row.frames_b_to_a,
                row.bytes_b_to_a,
                row.frames_a_to_b,
                row.bytes_a_to_b,
                row.frames,
                row.bytes,
            ) = numbers[:6]
        elif len(numbers) >= 2:
            row.frames, row.bytes = numbers[-2], numbers[-1]

        rows.append(row)

    return rows
