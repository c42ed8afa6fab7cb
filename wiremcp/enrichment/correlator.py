"""
WireMCP Threat Correlator

Intersects observed addresses with a blacklist using exact string
matching. No CIDR or substring matching is done.
"""

from typing import Iterable

import structlog

logger = structlog.get_logger(__name__)


# A blacklisted address seen in the traffic
ThreatMatch = str


def parse_blacklist(text: str) -> set[str]:
    """One indicator per line; blank and ``#`` comment lines are ignored."""
    indicators: set[str] = set()
    for line in text.splitlines():
        entry = line.strip()
        if not entry or entry.startswith("#"):
            continue
        indicators.add(entry)
    return indicators


def unique_addresses(text: str) -> list[str]:
    """
    Ordered, deduplicated addresses from ``ip.src / ip.dst`` fields output.

    tshark separates columns with tabs and repeated values with commas.
    """
    seen: dict[str, None] = {}
    for line in text.splitlines():
        for column in line.split("\t"):
            for address in column.split(","):
                address = address.strip()
                if address:
                    seen.setdefault(address, None)
    return list(seen)


def correlate(observed: Iterable[str], blacklist: set[str]) -> list[ThreatMatch]:
    """
    Observed addresses that are blacklisted.

    Returns:
        Matches in first-observation order, without duplicates
    """
    matches: dict[str, None] = {}
    for address in observed:
        if address in blacklist:
            matches.setdefault(address, None)

    if matches:
        logger.info("threats_matched", count=len(matches))
    return list(matches)
