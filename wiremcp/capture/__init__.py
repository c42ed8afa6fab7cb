"""
WireMCP Capture Module

tshark discovery and subprocess execution.
"""

from wiremcp.capture.tshark import TsharkRunner, get_tshark_runner

__all__ = [
    "TsharkRunner",
    "get_tshark_runner",
]
