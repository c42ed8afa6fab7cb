"""
WireMCP Credential Extractor

Recovers credentials from tshark ``-T fields`` output in two independent
passes:

1. Plaintext pass over ``http.authbasic / ftp.request.command /
   ftp.request.arg / telnet.data / frame.number`` rows. Each row is offered
   to the recognizers below in priority order and the first match wins:

   - HTTP Basic: field 0 is strict Base64 that decodes to ``user:pass``
     with exactly one colon (an optional ``Basic `` prefix is accepted).
   - HTTP Basic, pre-decoded: field 0 is already ``user:pass`` text, as
     tshark prints for ``http.authbasic``.
   - USER/PASS login: a USER row is held until the next PASS row, which
     completes one credential labelled with the caller's plaintext family.
     FTP logins come from the ``ftp.request.command / ftp.request.arg``
     columns; Telnet logins from the ``telnet.data`` line (``USER name``).

2. Kerberos pass over ``CNameString / realm / cipher / etype / msg_type /
   frame.number`` rows; rows need a user, realm and cipher.

Known limitation: USER/PASS pairing is by adjacency in the row sequence.
Interleaved sessions in one capture can be mis-paired because the rows carry
no session key.
"""

import base64
import binascii
from dataclasses import dataclass, field
from functools import partial
from typing import Sequence

import structlog

from wiremcp.analysis.models import (
    Credential,
    CredentialKind,
    KerberosCredential,
    PlaintextCredential,
)
from wiremcp.analysis.tabular import iter_rows
from wiremcp.output.bounder import bound_items

logger = structlog.get_logger(__name__)


# tshark -e arguments for each pass, in column order
PLAINTEXT_FIELDS = (
    "http.authbasic",
    "ftp.request.command",
    "ftp.request.arg",
    "telnet.data",
    "frame.number",
)

KERBEROS_FIELDS = (
    "kerberos.CNameString",
    "kerberos.realm",
    "kerberos.cipher",
    "kerberos.etype",
    "kerberos.msg_type",
    "frame.number",
)

PLAINTEXT_FAMILIES = (CredentialKind.FTP, CredentialKind.TELNET)

KERBEROS_NOTE = (
    "Note: Encrypted credentials can be cracked using tools like John the Ripper or hashcat.\n"
    "For Kerberos hashes:\n"
    "- AS-REQ/TGS-REQ: hashcat -m 7500\n"
    "- AS-REP: hashcat -m 18200"
)


# =============================================================================
# Plaintext Recognizers
# =============================================================================


def _split_basic(decoded: str) -> tuple[str, str] | None:
    if decoded.count(":") != 1:
        return None
    username, password = decoded.split(":")
    return username, password


def recognize_base64_basic(value: str) -> tuple[str, str] | None:
    """Decode a Base64 ``user:pass`` token, None if it is not one."""
    token = value.strip()
    if token.lower().startswith("basic "):
        token = token[6:].strip()
    if not token:
        return None
    try:
        decoded = base64.b64decode(token, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None
    return _split_basic(decoded)


def recognize_decoded_basic(value: str) -> tuple[str, str] | None:
    """Accept an already-decoded ``user:pass`` value."""
    token = value.strip()
    if not token:
        return None
    return _split_basic(token)


def split_telnet_login(data: str) -> tuple[str, str]:
    """Split a ``telnet.data`` line such as ``USER admin`` into command and argument."""
    # tshark prints line endings as literal \r\n
    line = data.replace("\\r", "").replace("\\n", "").strip()
    command, _, argument = line.partition(" ")
    return command.upper(), argument.strip()


@dataclass
class _LoginPairing:
    """Pending USER row waiting for its PASS."""

    family: CredentialKind | None
    pending_user: str | None = None
    orphaned: int = 0

    def feed(self, command: str, argument: str, frame: str) -> PlaintextCredential | None:
        if self.family is None:
            return None
        if command == "USER":
            if self.pending_user is not None:
                self.orphaned += 1
            self.pending_user = argument
            return None
        if command == "PASS":
            if self.pending_user is None:
                self.orphaned += 1
                return None
            credential = PlaintextCredential(
                kind=self.family,
                username=self.pending_user,
                password=argument,
                frame=frame,
            )
            self.pending_user = None
            return credential
        return None


def extract_plaintext(
    text: str,
    family: CredentialKind | None = CredentialKind.FTP,
) -> list[PlaintextCredential]:
    """
    Run the plaintext pass.

    Args:
        text: tshark output for PLAINTEXT_FIELDS
        family: Label for USER/PASS pairs (FTP or TELNET); None disables
            USER/PASS pairing

    Returns:
        Credentials in row order
    """
    if family is not None and family not in PLAINTEXT_FAMILIES:
        raise ValueError(f"Unsupported plaintext family: {family}")

    credentials: list[PlaintextCredential] = []
    pairing = _LoginPairing(family=family)

    width = len(PLAINTEXT_FIELDS)
    for row in iter_rows(text, width=width):
        auth, command, argument, telnet, frame = row[:width]
        basic = recognize_base64_basic(auth) or recognize_decoded_basic(auth)
        if basic is not None:
            username, password = basic
            credentials.append(
                PlaintextCredential(
                    kind=CredentialKind.HTTP_BASIC,
                    username=username,
                    password=password,
                    frame=frame.strip(),
                )
            )
            continue

        if family is CredentialKind.TELNET:
            command, argument = split_telnet_login(telnet)
        credential = pairing.feed(command.strip(), argument.strip(), frame.strip())
        if credential is not None:
            credentials.append(credential)

    if pairing.pending_user is not None:
        pairing.orphaned += 1
    if pairing.orphaned:
        logger.debug("login_rows_unpaired", count=pairing.orphaned)

    return credentials


# =============================================================================
# Kerberos
# =============================================================================


def _last(value: str) -> str:
    # tshark joins repeated fields with commas; the reply's enc-part comes last
    return value.split(",")[-1].strip()


def _first(value: str) -> str:
    return value.split(",")[0].strip()


def extract_kerberos(text: str) -> list[KerberosCredential]:
    """Run the Kerberos pass over tshark output for KERBEROS_FIELDS."""
    credentials: list[KerberosCredential] = []

    width = len(KERBEROS_FIELDS)
    for row in iter_rows(text, width=width):
        user, realm, cipher, etype, msg_type, frame = row[:width]
        user, realm, cipher = _first(user), _first(realm), _last(cipher)
        if not (user and realm and cipher):
            continue
        credential = KerberosCredential(
            user=user,
            realm=realm,
            hash=cipher,
            etype=_last(etype),
            msg_type=_first(msg_type),
            frame=frame.strip(),
        )
        if credential.hashcat_mode is None:
            logger.info("kerberos_etype_unmapped", etype=credential.etype)
        credentials.append(credential)

    return credentials


# =============================================================================
# Report
# =============================================================================


TRIMMED = " (trimmed)"


def _render_entries(credentials: Sequence[Credential], separator: str) -> str:
    return separator.join(c.render() for c in credentials) or "None"


def _render_section(
    title: str,
    credentials: Sequence[Credential],
    separator: str,
    max_chars: int | None = None,
) -> str:
    """``<title>:`` then one entry per credential; ``None`` when empty."""
    serialize = partial(_render_entries, separator=separator)
    if max_chars is None:
        return f"{title}:\n{serialize(credentials)}"

    payload = bound_items(
        credentials,
        max_chars - len(f"{title}{TRIMMED}:\n"),
        serialize=serialize,
    )
    trimmed = TRIMMED if payload.truncated else ""
    return f"{title}{trimmed}:\n{payload.text}"


@dataclass
class CredentialReport:
    """Results of both passes over one capture."""

    plaintext: list[PlaintextCredential] = field(default_factory=list)
    encrypted: list[KerberosCredential] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.plaintext) + len(self.encrypted)

    def render_plaintext(self, max_chars: int | None = None) -> str:
        """``Plaintext Credentials:`` section, at most ``max_chars`` long when given."""
        return _render_section("Plaintext Credentials", self.plaintext, "\n", max_chars)

    def render_encrypted(self, max_chars: int | None = None) -> str:
        """``Encrypted/Hashed Credentials:`` section, at most ``max_chars`` long when given."""
        return _render_section("Encrypted/Hashed Credentials", self.encrypted, "\n\n", max_chars)

    def render(self, source: str | None = None, max_chars: int | None = None) -> str:
        """
        Render the full report.

        Args:
            source: Capture file shown in the first line
            max_chars: Limit for the whole text; entries are dropped from
                the tail of each section and the section is marked trimmed

        Raises:
            ValueError: If the fixed text alone does not fit ``max_chars``
        """
        intro = f"Analyzed PCAP: {source}\n\n" if source is not None else ""
        note = f"\n\n{KERBEROS_NOTE}"

        if max_chars is None:
            plaintext = self.render_plaintext()
            encrypted = self.render_encrypted()
        else:
            available = max_chars - len(intro) - len("\n\n") - len(note)
            plaintext = self.render_plaintext(available // 2)
            encrypted = self.render_encrypted(available - len(plaintext))

        return f"{intro}{plaintext}\n\n{encrypted}{note}"


def extract_credentials(
    plaintext_text: str,
    kerberos_text: str,
    family: CredentialKind | None = CredentialKind.FTP,
) -> CredentialReport:
    """Run both extraction passes; neither short-circuits the other."""
    report = CredentialReport(
        plaintext=extract_plaintext(plaintext_text, family=family),
        encrypted=extract_kerberos(kerberos_text),
    )
    # Counts only: credential values never reach the logs
    logger.info(
        "credentials_extracted",
        plaintext=len(report.plaintext),
        encrypted=len(report.encrypted),
    )
    return report
