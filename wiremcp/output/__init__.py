"""
WireMCP Output Module

Response size bounding and console rendering.
"""

from wiremcp.output.bounder import BoundedPayload, bound_items

__all__ = [
    "BoundedPayload",
    "bound_items",
]
