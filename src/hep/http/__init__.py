"""
HTTP execution for assembled requests.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from hep.http.client import (
    HTTPClient,
    HTTPResponse,
    HTTPResult,
)

__all__ = [
    "HTTPClient",
    "HTTPResponse",
    "HTTPResult",
]
