"""
Transport layer - the HTTP session every client delegates to.

Provides httpx-based transport with:
- JSON requests, multipart uploads and streamed downloads
- Proxy configuration
- Timeout management
- API key resolution
"""

from openai_lite.transport.auth import get_auth_headers, resolve_api_key
from openai_lite.transport.session import BinarySink, Session

__all__ = [
    "BinarySink",
    "Session",
    "get_auth_headers",
    "resolve_api_key",
]
