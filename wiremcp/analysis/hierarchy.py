"""
WireMCP Protocol Hierarchy Normalizer

Turns ``tshark -qz io,phs`` text into ordered ProtocolStatRow records.
"""

import re

import structlog

from wiremcp.analysis.models import ProtocolStatRow

logger = structlog.get_logger(__name__)

HEADER = "Protocol Hierarchy Statistics"

_FRAMES_RE = re.compile(r"frames:\s*(\d+)")
_BYTES_RE = re.compile(r"bytes:\s*(\d+)")


def _indent_width(line: str, indent_unit: int) -> int:
    """Leading whitespace width, counting a tab as one full indent unit."""
    width = 0
    for char in line:
        if char == " ":
            width += 1
        elif char == "\t":
            width += indent_unit
        else:
            break
    return width


def parse_protocol_hierarchy(text: str, indent_unit: int = 2) -> list[ProtocolStatRow]:
    """
    Parse protocol hierarchy statistics.

    Args:
        text: tshark io,phs output
        indent_unit: Spaces per nesting level

    Returns:
        Rows in source order (most general protocol first). Empty input or
        input without any frames/bytes rows yields an empty list.
    """
    if not text or not text.strip():
        return []

    lines = text.splitlines()
    for index, line in enumerate(lines):
        if line.strip() == HEADER:
            lines = lines[index + 1:]
            break

    rows: list[ProtocolStatRow] = []
    previous_depth = -1

    for line in lines:
        if not line.strip():
            continue

        frames_match = _FRAMES_RE.search(line)
        bytes_match = _BYTES_RE.search(line)
        if not frames_match or not bytes_match:
            continue

        depth = _indent_width(line, indent_unit) // indent_unit
        if depth > previous_depth + 1:
            logger.warning(
                "protocol_hierarchy_depth_skip",
                previous_depth=previous_depth,
                depth=depth,
            )
        previous_depth = depth

        rows.append(
            ProtocolStatRow(
                name=line.split()[0],
                frames=int(frames_match.group(1)),
                bytes=int(bytes_match.group(1)),
                depth=depth,
            )
        )

    return rows
