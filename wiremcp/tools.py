"""
WireMCP Tool Implementations

Transport-independent implementations of every tool. Each call runs
tshark, pushes its output through the normalizers and extractors, bounds
list-shaped payloads and returns a ToolResult. Failures come back as
``Error: <diagnostic>`` results and never propagate to the server.
"""

import functools
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Sequence

import structlog

from wiremcp.analysis.conversations import parse_conversations
from wiremcp.analysis.credentials import (
    KERBEROS_FIELDS,
    PLAINTEXT_FIELDS,
    extract_credentials as run_credential_extraction,
)
from wiremcp.analysis.hierarchy import parse_protocol_hierarchy
from wiremcp.analysis.models import CredentialKind, PacketSummary
from wiremcp.analysis.packets import PACKET_FIELDS, parse_packet_json
from wiremcp.capture.tshark import (
    TsharkRunner,
    ensure_exists,
    fields_args,
    get_tshark_runner,
)
from wiremcp.config import settings
from wiremcp.enrichment.blacklist import BlacklistClient, get_blacklist_client
from wiremcp.enrichment.correlator import correlate, parse_blacklist, unique_addresses
from wiremcp.errors import WireMCPError
from wiremcp.output.bounder import BoundedPayload, bound_items

logger = structlog.get_logger(__name__)

CONVERSATION_PROTOCOLS = ("tcp", "udp")

TRIMMED = " (trimmed)"


# =============================================================================
# Result Type
# =============================================================================


@dataclass
class ToolResult:
    """Text returned to the tool caller."""

    text: str
    is_error: bool = False

    @classmethod
    def success(cls, text: str) -> "ToolResult":
        return cls(text=text)

    @classmethod
    def failure(cls, message: str) -> "ToolResult":
        return cls(text=f"Error: {message}", is_error=True)


def tool_boundary(name: str) -> Callable[..., Callable[..., Awaitable[ToolResult]]]:
    """Bind log context for a tool call and turn known failures into results."""

    def decorator(func: Callable[..., Awaitable[ToolResult]]) -> Callable[..., Awaitable[ToolResult]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> ToolResult:
            with structlog.contextvars.bound_contextvars(tool=name):
                try:
                    return await func(*args, **kwargs)
                except (WireMCPError, OSError, ValueError) as e:
                    logger.error("tool_failed", error=str(e), error_type=type(e).__name__)
                    return ToolResult.failure(str(e))

        return wrapper

    return decorator


# =============================================================================
# Helpers
# =============================================================================


def _budget_after(header: str) -> int:
    """
    Characters left for a payload that follows ``header``.

    May be negative, in which case bounding the payload raises ValueError.
    """
    return settings.max_response_chars - len(header)


def _bound_packets(packets: list[PacketSummary], header: str) -> BoundedPayload:
    return bound_items([p.to_dict() for p in packets], _budget_after(header))


def _packet_label(payload: BoundedPayload, label: str = "Captured packet data") -> str:
    trimmed = TRIMMED if payload.truncated else ""
    return f"{label} (JSON for LLM analysis){trimmed}:\n"


def _join_lines(items: Sequence[Any]) -> str:
    return "\n".join(str(item) for item in items)


def _lines_or_none(items: Sequence[Any]) -> str:
    return _join_lines(items) or "None"


def _line_section(title: str, items: Sequence[Any], max_chars: int) -> str:
    """``<title>:`` then one item per line and a blank line, at most ``max_chars`` long."""
    overhead = len(f"{title}{TRIMMED}:\n\n\n")
    payload = bound_items(items, max_chars - overhead, serialize=_lines_or_none)
    trimmed = TRIMMED if payload.truncated else ""
    return f"{title}{trimmed}:\n{payload.text}\n\n"


async def _load_blacklist(client: BlacklistClient) -> set[str]:
    fetched = await client.fetch()
    return parse_blacklist(fetched.text)


def _resolve(
    interface: str | None,
    duration: int | None,
) -> tuple[str, int]:
    return (
        interface or settings.default_interface,
        duration if duration is not None else settings.default_duration,
    )


# =============================================================================
# Live Capture Tools
# =============================================================================


@tool_boundary("capture_packets")
async def capture_packets(
    interface: str | None = None,
    duration: int | None = None,
    runner: TsharkRunner | None = None,
) -> ToolResult:
    """Capture live traffic and return packet summaries as JSON."""
    runner = runner or get_tshark_runner()
    interface, duration = _resolve(interface, duration)

    async with runner.live_capture(interface, duration) as path:
        output = await runner.read_capture(path, fields_args(PACKET_FIELDS, output="json"))

    packets = parse_packet_json(output)
    # Label length depends on truncation; reserve room for the longer one
    payload = _bound_packets(packets, "Captured packet data (JSON for LLM analysis) (trimmed):\n")
    return ToolResult.success(_packet_label(payload) + payload.text)


@tool_boundary("get_summary_stats")
async def get_summary_stats(
    interface: str | None = None,
    duration: int | None = None,
    runner: TsharkRunner | None = None,
) -> ToolResult:
    """Capture live traffic and return protocol hierarchy statistics."""
    runner = runner or get_tshark_runner()
    interface, duration = _resolve(interface, duration)

    async with runner.live_capture(interface, duration) as path:
        output = await runner.read_capture(path, ["-q", "-z", "io,phs"])

    rows = parse_protocol_hierarchy(output, indent_unit=settings.phs_indent_unit)
    header = "Protocol hierarchy statistics:\n"
    payload = bound_items([row.to_dict() for row in rows], _budget_after(header))
    return ToolResult.success(header + payload.text)


@tool_boundary("get_conversations")
async def get_conversations(
    interface: str | None = None,
    duration: int | None = None,
    protocol: str = "tcp",
    runner: TsharkRunner | None = None,
) -> ToolResult:
    """Capture live traffic and return TCP or UDP conversation statistics."""
    protocol = protocol.lower()
    if protocol not in CONVERSATION_PROTOCOLS:
        return ToolResult.failure(f"Unsupported conversation protocol: {protocol}")

    runner = runner or get_tshark_runner()
    interface, duration = _resolve(interface, duration)

    async with runner.live_capture(interface, duration) as path:
        output = await runner.read_capture(path, ["-q", "-z", f"conv,{protocol}"])

    rows = parse_conversations(output)
    header = "TCP/UDP conversation statistics:\n"
    payload = bound_items([row.to_dict() for row in rows], _budget_after(header))
    return ToolResult.success(header + payload.text)


@tool_boundary("check_threats")
async def check_threats(
    interface: str | None = None,
    duration: int | None = None,
    runner: TsharkRunner | None = None,
    blacklist_client: BlacklistClient | None = None,
) -> ToolResult:
    """Capture live traffic and check every seen IP against URLhaus."""
    runner = runner or get_tshark_runner()
    blacklist_client = blacklist_client or get_blacklist_client()
    interface, duration = _resolve(interface, duration)

    async with runner.live_capture(interface, duration) as path:
        output = await runner.read_capture(path, fields_args(("ip.src", "ip.dst")))

    observed = unique_addresses(output)
    threats = correlate(observed, await _load_blacklist(blacklist_client))

    header = "Captured IPs:\n"
    footer_label = "\n\nThreat check against URLhaus blacklist:\n"
    if threats:
        # Matches share the budget with the captured IPs
        share = _budget_after(header + footer_label) // 2
        verdict_label = "Potential threats"
        matched = bound_items(
            threats,
            share - len(f"{verdict_label}{TRIMMED}: "),
            serialize=", ".join,
        )
        trimmed = TRIMMED if matched.truncated else ""
        verdict = f"{verdict_label}{trimmed}: {matched.text}"
    else:
        verdict = "No threats detected in URLhaus blacklist."
    footer = footer_label + verdict

    ips = bound_items(observed, _budget_after(header + footer), serialize=_join_lines)
    return ToolResult.success(header + ips.text + footer)


# =============================================================================
# Lookup Tools
# =============================================================================


@tool_boundary("check_ip_threats")
async def check_ip_threats(
    ip: str,
    blacklist_client: BlacklistClient | None = None,
) -> ToolResult:
    """Check a single IP against the URLhaus blacklist."""
    blacklist_client = blacklist_client or get_blacklist_client()
    ip = ip.strip()

    is_threat = bool(correlate([ip], await _load_blacklist(blacklist_client)))
    if is_threat:
        verdict = "Potential threat detected in URLhaus blacklist."
    else:
        verdict = "No threat detected in URLhaus blacklist."

    return ToolResult.success(
        f"IP checked: {ip}\n\nThreat check against URLhaus blacklist:\n{verdict}"
    )


# =============================================================================
# Capture File Tools
# =============================================================================


@tool_boundary("analyze_pcap")
async def analyze_pcap(
    pcap_path: str,
    runner: TsharkRunner | None = None,
) -> ToolResult:
    """Summarize an existing capture file: IPs, URLs, protocols and packets."""
    runner = runner or get_tshark_runner()
    ensure_exists(pcap_path)

    output = await runner.read_capture(pcap_path, fields_args(PACKET_FIELDS, output="json"))
    packets = parse_packet_json(output)

    addresses: dict[str, None] = {}
    urls: dict[str, None] = {}
    protocols: dict[str, None] = {}
    for packet in packets:
        for address in (packet.src_ip, packet.dst_ip):
            if address:
                addresses.setdefault(address, None)
        if packet.url:
            urls.setdefault(packet.url, None)
        for name in packet.protocols:
            protocols.setdefault(name, None)

    intro = f"Analyzed PCAP: {pcap_path}\n\n"
    # Label length depends on truncation; reserve room for the longer one
    packet_label = f"Packet data (JSON for LLM analysis){TRIMMED}:\n"
    # Each listing may take up to a quarter; packets get whatever is left
    share = _budget_after(intro + packet_label) // 4
    sections = "".join(
        _line_section(title, list(values), share)
        for title, values in (
            ("Unique IPs", addresses),
            ("URLs", urls),
            ("Protocols", protocols),
        )
    )
    header = intro + sections
    payload = _bound_packets(packets, header + packet_label)
    return ToolResult.success(header + _packet_label(payload, "Packet data") + payload.text)


@tool_boundary("extract_credentials")
async def extract_credentials(
    pcap_path: str,
    plaintext_protocol: str = "ftp",
    runner: TsharkRunner | None = None,
) -> ToolResult:
    """Extract cleartext and Kerberos credentials from a capture file."""
    families = {kind.name.lower(): kind for kind in (CredentialKind.FTP, CredentialKind.TELNET)}
    family = families.get(plaintext_protocol.lower())
    if family is None:
        return ToolResult.failure(f"Unsupported plaintext protocol: {plaintext_protocol}")

    runner = runner or get_tshark_runner()
    ensure_exists(pcap_path)

    plaintext_output = await runner.read_capture(pcap_path, fields_args(PLAINTEXT_FIELDS))
    kerberos_output = await runner.read_capture(pcap_path, fields_args(KERBEROS_FIELDS))

    report = run_credential_extraction(plaintext_output, kerberos_output, family=family)
    return ToolResult.success(
        report.render(source=pcap_path, max_chars=settings.max_response_chars)
    )
