"""
Types layer - shared wire types used by every client.
"""

from openai_lite.types.base import ApiModel, Usage

__all__ = [
    "ApiModel",
    "Usage",
]
