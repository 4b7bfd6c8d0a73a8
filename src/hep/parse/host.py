"""
Host specifier normalization.

Accepts terse shortcuts as well as full URLs:

    :              http://localhost/
    localhost      http://localhost/
    :8080/hello    http://localhost:8080/hello
    /status        http://localhost/status
    httpbin.org    http://httpbin.org
    https://x.io   https://x.io

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import httpx

from hep.parse.errors import HostParseError


def normalize_host(spec: str) -> httpx.URL:
    """Turn a host specifier into an absolute URL."""
    url = spec
    if url in (":", "localhost"):
        url = "http://localhost/"
    if url.startswith((":", "/")):
        url = f"http://localhost{url}"
    if not url.startswith(("http://", "https://")):
        url = f"http://{url}"

    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as e:
        raise HostParseError(spec, str(e)) from e

    if not parsed.host:
        raise HostParseError(spec, "no host name")

    return parsed
