"""
WireMCP - Network Traffic Analysis over the Model Context Protocol

Exposes tshark-backed capture, statistics, threat and credential
analysis as MCP tools.
"""

__version__ = "0.1.0"
