"""
WireMCP Threat Intelligence Enrichment

URLhaus blacklist lookups and address correlation.
"""

from wiremcp.enrichment.blacklist import BlacklistClient, BlacklistFetch, get_blacklist_client
from wiremcp.enrichment.correlator import correlate, parse_blacklist, unique_addresses

__all__ = [
    "BlacklistClient",
    "BlacklistFetch",
    "get_blacklist_client",
    "correlate",
    "parse_blacklist",
    "unique_addresses",
]
