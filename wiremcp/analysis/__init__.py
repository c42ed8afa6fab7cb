"""
WireMCP Analysis Module

Normalizers and extractors for tshark output.
"""

from wiremcp.analysis.conversations import parse_conversations
from wiremcp.analysis.credentials import (
    CredentialReport,
    extract_credentials,
    extract_kerberos,
    extract_plaintext,
)
from wiremcp.analysis.hierarchy import parse_protocol_hierarchy
from wiremcp.analysis.models import (
    ConversationRow,
    CredentialKind,
    KerberosCredential,
    PacketSummary,
    PlaintextCredential,
    ProtocolStatRow,
)
from wiremcp.analysis.packets import normalize_packets, parse_packet_json
from wiremcp.analysis.tabular import iter_rows

__all__ = [
    "ConversationRow",
    "CredentialKind",
    "CredentialReport",
    "KerberosCredential",
    "PacketSummary",
    "PlaintextCredential",
    "ProtocolStatRow",
    "extract_credentials",
    "extract_kerberos",
    "extract_plaintext",
    "iter_rows",
    "normalize_packets",
    "parse_conversations",
    "parse_packet_json",
    "parse_protocol_hierarchy",
]
