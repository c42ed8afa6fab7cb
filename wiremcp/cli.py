#!/usr/bin/env python3
"""
WireMCP CLI - Command Line Interface

Runs the MCP server, or runs the capture-file analyses directly against a
PCAP without an MCP client.

Usage:
    wiremcp serve [--transport stdio|sse|streamable-http]
    wiremcp analyze capture.pcap
    wiremcp credentials capture.pcap [--protocol ftp|telnet]
    wiremcp check-ip 203.0.113.7
"""

import argparse
import asyncio
import sys

from wiremcp import __version__, tools
from wiremcp.logging_config import configure_logging
from wiremcp.output.console import WireMCPConsole, get_console


# =============================================================================
# Offline Commands
# =============================================================================


async def run_offline(args: argparse.Namespace) -> tools.ToolResult:
    """Dispatch an offline subcommand to its tool implementation."""
    if args.command == "analyze":
        return await tools.analyze_pcap(args.pcap)
    if args.command == "credentials":
        return await tools.extract_credentials(args.pcap, args.protocol)
    if args.command == "check-ip":
        return await tools.check_ip_threats(args.ip)
    raise ValueError(f"Unknown command: {args.command}")


def run_command(args: argparse.Namespace, console: WireMCPConsole) -> int:
    """Run an offline subcommand and print its result."""
    target = getattr(args, "pcap", None) or getattr(args, "ip", "")
    console.print_header(args.command, target)

    try:
        result = asyncio.run(run_offline(args))
    except KeyboardInterrupt:
        console.console.print("\n[yellow]Interrupted by user[/yellow]")
        return 130

    console.print_result(args.command, result.text, is_error=result.is_error)
    if result.is_error:
        console.print_error(f"{args.command} failed")
        return 1

    console.print_success(f"{args.command} complete")
    return 0


# =============================================================================
# Argument Parsing
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="wiremcp",
        description="WireMCP - tshark-backed network analysis for MCP clients",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override the configured log level",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the MCP server")
    serve.add_argument(
        "--transport",
        choices=["stdio", "sse", "streamable-http"],
        default=None,
        help="MCP transport (default: from settings)",
    )

    analyze = subparsers.add_parser("analyze", help="Summarize a capture file")
    analyze.add_argument("pcap", help="Path to a .pcap/.pcapng file")

    credentials = subparsers.add_parser("credentials", help="Extract credentials from a capture file")
    credentials.add_argument("pcap", help="Path to a .pcap/.pcapng file")
    credentials.add_argument(
        "--protocol",
        choices=["ftp", "telnet"],
        default="ftp",
        help="Label for USER/PASS login pairs",
    )

    check_ip = subparsers.add_parser("check-ip", help="Check an IP against the URLhaus blacklist")
    check_ip.add_argument("ip", help="IP address to check")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level)

    if args.command == "serve":
        from wiremcp.server import run

        run(transport=args.transport)
        return 0

    return run_command(args, get_console())


if __name__ == "__main__":
    sys.exit(main())
