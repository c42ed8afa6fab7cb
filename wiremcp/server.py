"""
WireMCP - MCP Server Entry Point

Registers the analysis tools and their companion prompts on a FastMCP
server. Tool logic lives in wiremcp.tools; this module only adapts
ToolResult to the MCP wire format.
"""

import structlog
from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult, TextContent

from wiremcp import __version__, tools
from wiremcp.config import settings

logger = structlog.get_logger(__name__)


mcp = FastMCP(
    name="wiremcp",
    instructions=(
        "Network traffic analysis backed by tshark. Capture live traffic, "
        "summarize protocols and conversations, check addresses against the "
        "URLhaus blacklist and extract credentials from capture files."
    ),
)


def to_call_result(result: tools.ToolResult) -> CallToolResult:
    """Convert a ToolResult into an MCP tool response."""
    return CallToolResult(
        content=[TextContent(type="text", text=result.text)],
        isError=result.is_error,
    )


# =============================================================================
# Tools
# =============================================================================


@mcp.tool()
async def capture_packets(interface: str = "en0", duration: int = 5) -> CallToolResult:
    """Capture live traffic and provide packet data as JSON for LLM analysis."""
    return to_call_result(await tools.capture_packets(interface, duration))


@mcp.tool()
async def get_summary_stats(interface: str = "en0", duration: int = 5) -> CallToolResult:
    """Capture live traffic and provide protocol hierarchy statistics."""
    return to_call_result(await tools.get_summary_stats(interface, duration))


@mcp.tool()
async def get_conversations(
    interface: str = "en0",
    duration: int = 5,
    protocol: str = "tcp",
) -> CallToolResult:
    """Capture live traffic and provide TCP or UDP conversation statistics."""
    return to_call_result(await tools.get_conversations(interface, duration, protocol))


@mcp.tool()
async def check_threats(interface: str = "en0", duration: int = 5) -> CallToolResult:
    """Capture live traffic and check the seen IPs against the URLhaus blacklist."""
    return to_call_result(await tools.check_threats(interface, duration))


@mcp.tool()
async def check_ip_threats(ip: str) -> CallToolResult:
    """Check a single IP address against the URLhaus blacklist."""
    return to_call_result(await tools.check_ip_threats(ip))


@mcp.tool()
async def analyze_pcap(pcap_path: str) -> CallToolResult:
    """Analyze a PCAP file and provide packet data as JSON for LLM analysis."""
    return to_call_result(await tools.analyze_pcap(pcap_path))


@mcp.tool()
async def extract_credentials(pcap_path: str, plaintext_protocol: str = "ftp") -> CallToolResult:
    """Extract potential credentials (HTTP Basic, FTP/Telnet, Kerberos) from a PCAP file."""
    return to_call_result(await tools.extract_credentials(pcap_path, plaintext_protocol))


# =============================================================================
# Prompts
# =============================================================================


@mcp.prompt()
def capture_packets_prompt(interface: str = "en0", duration: str = "5") -> str:
    """Guide live traffic capture and analysis."""
    return (
        f"Please analyze the network traffic on interface {interface} for {duration} seconds "
        "and provide insights about:\n"
        "1. The types of traffic observed\n"
        "2. Any notable patterns or anomalies\n"
        "3. Key IP addresses and ports involved\n"
        "4. Potential security concerns"
    )


@mcp.prompt()
def summary_stats_prompt(interface: str = "en0", duration: str = "5") -> str:
    """Guide protocol hierarchy analysis."""
    return (
        f"Please provide a summary of network traffic statistics from interface {interface} "
        f"over {duration} seconds, focusing on:\n"
        "1. Protocol distribution\n"
        "2. Traffic volume by protocol\n"
        "3. Any unusual protocol activity\n"
        "4. Network health indicators"
    )


@mcp.prompt()
def conversations_prompt(interface: str = "en0", duration: str = "5") -> str:
    """Guide conversation analysis."""
    return (
        f"Please analyze network conversations on interface {interface} for {duration} seconds "
        "and identify:\n"
        "1. Most active IP pairs\n"
        "2. Conversation durations and data volumes\n"
        "3. Unusual communication patterns\n"
        "4. Potential indicators of compromise"
    )


@mcp.prompt()
def check_threats_prompt(interface: str = "en0", duration: str = "5") -> str:
    """Guide threat analysis of live traffic."""
    return (
        f"Please analyze traffic on interface {interface} for {duration} seconds "
        "and check for security threats:\n"
        "1. Compare captured IPs against the URLhaus blacklist\n"
        "2. Identify potential malicious activity\n"
        "3. Highlight any concerning connections\n"
        "4. Recommend next investigation steps"
    )


@mcp.prompt()
def check_ip_threats_prompt(ip: str) -> str:
    """Guide a single-address reputation check."""
    return (
        f"Please analyze the following IP address for potential security threats: {ip}\n"
        "1. Check it against the URLhaus blacklist\n"
        "2. Evaluate its reputation\n"
        "3. Identify any known malicious activity\n"
        "4. Recommend appropriate actions"
    )


@mcp.prompt()
def analyze_pcap_prompt(pcap_path: str) -> str:
    """Guide capture file analysis."""
    return (
        f"Please analyze the PCAP file at {pcap_path} and provide insights about:\n"
        "1. Overall traffic patterns\n"
        "2. Unique IPs and their interactions\n"
        "3. Protocols and services used\n"
        "4. Notable events or anomalies\n"
        "5. Potential security concerns"
    )


@mcp.prompt()
def extract_credentials_prompt(pcap_path: str) -> str:
    """Guide credential extraction."""
    return (
        f"Please analyze the PCAP file at {pcap_path} for potential credential exposure:\n"
        "1. Look for plaintext credentials (HTTP Basic Auth, FTP, Telnet)\n"
        "2. Identify Kerberos authentication attempts\n"
        "3. Extract any hashed credentials\n"
        "4. Provide security recommendations for credential handling"
    )


# =============================================================================
# Main Entry Point
# =============================================================================


def run(transport: str | None = None) -> None:
    """Start the MCP server on the configured transport."""
    transport = transport or settings.transport
    logger.info("wiremcp_starting", version=__version__, transport=transport)
    settings.ensure_temp_dir()
    mcp.run(transport=transport)
    logger.info("wiremcp_shutdown")


if __name__ == "__main__":
    from wiremcp.logging_config import configure_logging

    configure_logging()
    run()
