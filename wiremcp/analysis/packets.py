"""
WireMCP Packet JSON Normalizer

Projects ``tshark -T json`` records onto flat PacketSummary objects.
"""

import json
from typing import Any, Iterable

import structlog

from wiremcp.analysis.models import PacketSummary, RawCaptureRecord
from wiremcp.errors import MalformedOutputError

logger = structlog.get_logger(__name__)


# Fields requested from tshark for packet summaries (-e arguments)
PACKET_FIELDS = (
    "frame.number",
    "frame.time",
    "frame.protocols",
    "ip.src",
    "ip.dst",
    "tcp.srcport",
    "tcp.dstport",
    "tcp.flags",
    "http.host",
    "http.request.uri",
    "http.request.method",
    "http.response.code",
)


def _first(layers: RawCaptureRecord, name: str) -> str | None:
    """First value of a possibly multi-valued field."""
    value = layers.get(name)
    if isinstance(value, list):
        value = value[0] if value else None
    if value is None:
        return None
    return str(value)


def _layers(record: Any) -> RawCaptureRecord | None:
    if not isinstance(record, dict):
        return None
    source = record.get("_source")
    if not isinstance(source, dict):
        return None
    layers = source.get("layers")
    return layers if isinstance(layers, dict) else None


def summarize_packet(layers: RawCaptureRecord) -> PacketSummary:
    """Build a PacketSummary from one record's ``_source.layers`` mapping."""
    protocols = _first(layers, "frame.protocols")
    host = _first(layers, "http.host")
    uri = _first(layers, "http.request.uri")

    return PacketSummary(
        frame_number=_first(layers, "frame.number"),
        src_ip=_first(layers, "ip.src"),
        dst_ip=_first(layers, "ip.dst"),
        src_port=_first(layers, "tcp.srcport"),
        dst_port=_first(layers, "tcp.dstport"),
        tcp_flags=_first(layers, "tcp.flags"),
        timestamp=_first(layers, "frame.time"),
        protocols=protocols.split(":") if protocols else [],
        http_method=_first(layers, "http.request.method"),
        http_status=_first(layers, "http.response.code"),
        url=f"http://{host}{uri}" if host and uri else None,
    )


def normalize_packets(records: Iterable[Any]) -> list[PacketSummary]:
    """
    Normalize decoded tshark JSON records.

    Records without a ``_source.layers`` mapping are skipped. Output order
    follows input order.
    """
    packets: list[PacketSummary] = []
    skipped = 0

    for record in records:
        layers = _layers(record)
        if layers is None:
            skipped += 1
            continue
        packets.append(summarize_packet(layers))

    if skipped:
        logger.debug("packet_records_skipped", skipped=skipped, kept=len(packets))

    return packets


def parse_packet_json(text: str) -> list[PacketSummary]:
    """
    Decode and normalize ``tshark -T json`` output.

    Raises:
        MalformedOutputError: If the text is not a JSON array
    """
    # tshark prints nothing at all for an empty capture
    if not text.strip():
        return []

    try:
        records = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedOutputError(f"Failed to parse tshark JSON output: {e}") from e

    if not isinstance(records, list):
        raise MalformedOutputError(
            f"Expected a JSON array from tshark, got {type(records).__name__}"
        )

    return normalize_packets(records)
