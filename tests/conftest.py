"""
WireMCP Test Configuration

Pytest fixtures shared by all tests. tshark and the URLhaus feed are
replaced with in-process fakes.
"""

from pathlib import Path
from typing import Sequence

import httpx
import pytest

from wiremcp.capture.tshark import TsharkRunner
from wiremcp.enrichment.blacklist import BlacklistClient


SAMPLE_PROTOCOL_STATS = """
===================================================================
Protocol Hierarchy Statistics
Filter:

eth                                      frames:142 bytes:18704 (100.00%)
  ip                                     frames:142 bytes:18704 (100.00%)
    tcp                                  frames:136 bytes:18104 (96.79%)
      tls                                frames:98  bytes:14280 (76.32%)
      http                               frames:38  bytes:3824 (20.44%)
    udp                                  frames:6   bytes:600 (3.21%)
      dns                                frames:6   bytes:600 (3.21%)
===================================================================
"""

SAMPLE_CONVERSATIONS = """
TCP Conversations
Filter:<No Filter>
                                               |       <-      | |       ->      | |     Total     |
                                               | Frames  Bytes | | Frames  Bytes | | Frames  Bytes |
192.168.1.100:50234 <-> 8.8.8.8:443            45    8500      53    9750      98   18250
192.168.1.100:50235 <-> 10.0.0.1:80            18    1900      20    1924      38   3824
"""

SAMPLE_BLACKLIST = """
# abuse.ch URLhaus Host Blacklist
# Generated on 2024-01-01 12:00:00 UTC
#
192.168.1.200
10.0.0.100
malicious-domain.com
badactor.net/path
"""


def make_record(**layers: str) -> dict:
    """tshark JSON record with single-valued fields (dots spelled as __)."""
    return {
        "_source": {
            "layers": {name.replace("__", "."): [value] for name, value in layers.items()}
        }
    }


class FakeTsharkRunner(TsharkRunner):
    """
    TsharkRunner whose subprocess is replaced by queued outputs.

    Each call to ``run`` consumes the next queued item; an exception item
    is raised instead of returned. Capture calls create the output file so
    cleanup can be observed.
    """

    def __init__(self, outputs: Sequence[str | Exception], temp_dir: Path):
        super().__init__(tshark_path="/usr/bin/tshark", timeout=5, temp_dir=temp_dir)
        self.outputs = list(outputs)
        self.calls: list[list[str]] = []
        self.captures: list[Path] = []

    async def run(self, args: Sequence[str]) -> str:
        args = list(args)
        self.calls.append(args)
        if "-w" in args:
            path = Path(args[args.index("-w") + 1])
            path.write_bytes(b"")
            self.captures.append(path)
        item = self.outputs.pop(0) if self.outputs else ""
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def fake_runner(tmp_path: Path):
    """Factory for FakeTsharkRunner instances writing under tmp_path."""

    def factory(*outputs: str | Exception) -> FakeTsharkRunner:
        return FakeTsharkRunner(outputs, temp_dir=tmp_path / "captures")

    return factory


@pytest.fixture
def blacklist_client():
    """Factory for BlacklistClient instances backed by httpx.MockTransport."""

    def factory(body: str = SAMPLE_BLACKLIST, status: int = 200, error: Exception | None = None) -> BlacklistClient:
        def handler(request: httpx.Request) -> httpx.Response:
            if error is not None:
                raise error
            return httpx.Response(status, text=body)

        return BlacklistClient(
            url="https://urlhaus.example/downloads/text/",
            timeout=1.0,
            transport=httpx.MockTransport(handler),
        )

    return factory


@pytest.fixture
def pcap_file(tmp_path: Path) -> Path:
    """An existing (empty) capture file path."""
    path = tmp_path / "test.pcap"
    path.write_bytes(b"")
    return path
