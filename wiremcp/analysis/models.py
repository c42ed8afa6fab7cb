"""
WireMCP Data Models

Value types produced by the output normalizers and extractors.
Everything here lives for a single tool invocation only.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# A decoded tshark JSON record: dotted field name -> values
RawCaptureRecord = dict[str, list[str]]


# =============================================================================
# Enums
# =============================================================================


class CredentialKind(str, Enum):
    """Credential variants recognized by the extractor."""

    HTTP_BASIC = "HTTP Basic Auth"
    FTP = "FTP"
    TELNET = "Telnet"
    KERBEROS = "Kerberos"


# =============================================================================
# Packet Summary
# =============================================================================


@dataclass(slots=True)
class PacketSummary:
    """
    Flat, field-selected view of one tshark JSON record.

    Fields missing from the record stay None and are omitted on
    serialization.
    """

    frame_number: str | None = None
    """Frame number as reported by tshark."""

    src_ip: str | None = None
    """Source IP address."""

    dst_ip: str | None = None
    """Destination IP address."""

    src_port: str | None = None
    """TCP source port."""

    dst_port: str | None = None
    """TCP destination port."""

    tcp_flags: str | None = None
    """Raw TCP flags value (e.g. 0x0018)."""

    timestamp: str | None = None
    """Capture timestamp (frame.time)."""

    protocols: list[str] = field(default_factory=list)
    """Protocol stack, outermost first."""

    http_method: str | None = None
    """HTTP request method, if any."""

    http_status: str | None = None
    """HTTP response code, if any."""

    url: str | None = None
    """http://<host><uri> when both are present."""

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary, dropping absent fields."""
        data: dict[str, Any] = {
            "frame_number": self.frame_number,
            "src_ip": self.src_ip,
            "dst_ip": self.dst_ip,
            "src_port": self.src_port,
            "dst_port": self.dst_port,
            "tcp_flags": self.tcp_flags,
            "timestamp": self.timestamp,
            "protocols": self.protocols or None,
            "http_method": self.http_method,
            "http_status": self.http_status,
            "url": self.url,
        }
        return {key: value for key, value in data.items() if value is not None}


# =============================================================================
# Statistics Rows
# =============================================================================


@dataclass(slots=True)
class ProtocolStatRow:
    """One line of a protocol hierarchy breakdown."""

    name: str
    frames: int
    bytes: int
    depth: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "protocol": self.name,
            "frames": self.frames,
            "bytes": self.bytes,
            "depth": self.depth,
        }


@dataclass(slots=True)
class ConversationRow:
    """
    Aggregated pair of endpoints from a tshark conversation table.

    Endpoints keep the ``address:port`` text exactly as tshark printed it.
    """

    endpoint_a: str
    endpoint_b: str
    frames: int = 0
    bytes: int = 0
    frames_b_to_a: int = 0
    bytes_b_to_a: int = 0
    frames_a_to_b: int = 0
    bytes_a_to_b: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "endpoint_a": self.endpoint_a,
            "endpoint_b": self.endpoint_b,
            "frames": self.frames,
            "bytes": self.bytes,
            "frames_b_to_a": self.frames_b_to_a,
            "bytes_b_to_a": self.bytes_b_to_a,
            "frames_a_to_b": self.frames_a_to_b,
            "bytes_a_to_b": self.bytes_a_to_b,
        }


# =============================================================================
# Credentials
# =============================================================================


@dataclass(slots=True)
class PlaintextCredential:
    """Username/password pair recovered from a cleartext protocol."""

    kind: CredentialKind
    username: str
    password: str
    frame: str = ""

    def render(self) -> str:
        """Single report line, e.g. ``FTP: user:pass (Frame 12)``."""
        line = f"{self.kind.value}: {self.username}:{self.password}"
        if self.frame:
            line += f" (Frame {self.frame})"
        return line


# (etype, msg_type) -> hashcat mode. msg_type None is the etype default.
KERBEROS_HASHCAT_MODES: dict[tuple[str, str | None], int] = {
    ("23", "10"): 7500,   # AS-REQ pre-auth
    ("23", "11"): 18200,  # AS-REP
    ("23", "13"): 13100,  # TGS-REP
    ("23", None): 18200,
}


@dataclass(slots=True)
class KerberosCredential:
    """Kerberos ticket material suitable for offline cracking."""

    user: str
    realm: str
    hash: str
    etype: str = ""
    msg_type: str = ""
    frame: str = ""

    kind: CredentialKind = CredentialKind.KERBEROS

    @property
    def hashcat_mode(self) -> int | None:
        """Hashcat mode for this etype/message, None when unmapped."""
        mode = KERBEROS_HASHCAT_MODES.get((self.etype, self.msg_type))
        if mode is None:
            mode = KERBEROS_HASHCAT_MODES.get((self.etype, None))
        return mode

    @property
    def hashcat_hash(self) -> str:
        """Hash line in the format hashcat expects for the mode."""
        mode = self.hashcat_mode
        if mode == 7500:
            return f"$krb5pa${self.etype}${self.user}${self.realm}${self.hash}"
        if mode == 13100:
            return f"$krb5tgs${self.etype}$*{self.user}${self.realm}*${self.hash}"
        if mode == 18200:
            return f"$krb5asrep${self.etype}${self.user}@{self.realm}:{self.hash}"
        return self.hash

    @property
    def cracking_command(self) -> str | None:
        """Ready-to-run hashcat invocation, None for unmapped etypes."""
        mode = self.hashcat_mode
        if mode is None:
            return None
        return f"hashcat -m {mode} hash.txt wordlist.txt"

    def render(self) -> str:
        """Multi-line report entry."""
        header = f"{self.kind.value}: User={self.user} Realm={self.realm}"
        if self.frame:
            header += f" (Frame {self.frame})"
        lines = [header, f"Hash={self.hashcat_hash}"]
        if self.etype:
            lines.append(f"Etype={self.etype}")
        command = self.cracking_command
        if command:
            lines.append(f"Cracking Command: {command}")
        return "\n".join(lines)


Credential = PlaintextCredential | KerberosCredential
