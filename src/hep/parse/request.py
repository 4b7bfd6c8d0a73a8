"""
Request assembly.

Compiles the full token sequence into a RequestDescriptor:

    hep [METHOD] HOST [ITEM ...]

The first token is the method when it is a standard HTTP method name,
otherwise the method defaults to GET and the first token is the host.
Every remaining token is classified and routed to the headers, the
query string or the JSON body.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import logging
import string
from dataclasses import dataclass, field
from typing import Iterator, Sequence

import httpx

from hep.parse.classifier import TokenKind, classify
from hep.parse.errors import AssemblyError, FieldConflictError, HostParseError
from hep.parse.fields import FieldTree
from hep.parse.host import normalize_host

logger = logging.getLogger(__name__)

HTTP_METHODS = frozenset({
    "GET", "HEAD", "POST", "PUT", "PATCH",
    "DELETE", "CONNECT", "OPTIONS", "TRACE",
})

HEADER_TOKEN_CHARS = frozenset(string.ascii_letters + string.digits + "!#$%&'*+-.^_`|~")


def is_method(value: str) -> bool:
    """Check for a standard HTTP method name (case-sensitive)."""
    return value in HTTP_METHODS


def canonical_header_name(name: str) -> str:
    """Canonical MIME form: first letter and letters after '-' upper-cased.

    Names with characters outside the header token set are returned as-is.
    """
    if not name or any(c not in HEADER_TOKEN_CHARS for c in name):
        return name
    return "-".join(part[:1].upper() + part[1:].lower() for part in name.split("-"))


class ValueAccumulator:
    """Multi-valued mapping that keeps values in append order."""

    def __init__(self):
        self._values: dict[str, list[str]] = {}

    def normalize(self, name: str) -> str:
        return name

    def add(self, name: str, value: str) -> None:
        self._values.setdefault(self.normalize(name), []).append(value)

    def get_list(self, name: str) -> list[str]:
        return list(self._values.get(self.normalize(name), []))

    def get(self, name: str, default: str | None = None) -> str | None:
        values = self._values.get(self.normalize(name))
        return values[0] if values else default

    def multi_items(self) -> list[tuple[str, str]]:
        """Flatten to (name, value) pairs, names in first-seen order."""
        return [(name, value) for name, values in self._values.items() for value in values]

    def to_dict(self) -> dict[str, list[str]]:
        return {name: list(values) for name, values in self._values.items()}

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.normalize(name) in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)


class HeaderAccumulator(ValueAccumulator):
    """Request headers keyed by canonical header name."""

    def normalize(self, name: str) -> str:
        return canonical_header_name(name)


class QueryAccumulator(ValueAccumulator):
    """Query string parameters, names kept as given."""
    pass


@dataclass
class RequestDescriptor:
    """Everything needed to send the request."""
    method: str
    url: httpx.URL
    headers: HeaderAccumulator = field(default_factory=HeaderAccumulator)
    query: QueryAccumulator = field(default_factory=QueryAccumulator)
    body: bytes = b""


@dataclass
class ParseResult:
    """Assembled request plus tokens that matched no separator."""
    request: RequestDescriptor
    unrecognized: list[str] = field(default_factory=list)


def _resolve_target(tokens: Sequence[str]) -> tuple[str, httpx.URL, Sequence[str]]:
    if not tokens:
        raise HostParseError("", "no host given")

    first = tokens[0]
    if is_method(first):
        if len(tokens) < 2:
            raise HostParseError("", f"no host given after method {first}")
        return first, normalize_host(tokens[1]), tokens[2:]

    return "GET", normalize_host(first), tokens[1:]


def _apply_query(url: httpx.URL, query: QueryAccumulator) -> httpx.URL:
    if not query:
        return url
    params = url.params.multi_items() + query.multi_items()
    return url.copy_with(params=httpx.QueryParams(params))


def assemble(tokens: Sequence[str]) -> ParseResult:
    """Compile command-line tokens into a request.

    Args:
        tokens: Arguments after global flags have been stripped

    Returns:
        ParseResult with the request and any unrecognized tokens

    Raises:
        HostParseError: Missing or malformed host specifier
        AssemblyError: A field token conflicts with an earlier one
    """
    method, url, items = _resolve_target(tokens)

    headers = HeaderAccumulator()
    query = QueryAccumulator()
    fields = FieldTree()
    unrecognized: list[str] = []

    for token in items:
        if token == "":
            continue

        entry, ok = classify(token)
        if not ok:
            unrecognized.append(token)
            continue

        if entry.kind in (TokenKind.FIELD, TokenKind.JSON_FIELD):
            try:
                fields.set(entry.key, entry.value)
            except FieldConflictError as e:
                raise AssemblyError(token, str(e)) from e
        elif entry.kind is TokenKind.HEADER:
            headers.add(entry.key, entry.value)
        elif entry.kind is TokenKind.QUERY:
            query.add(entry.key, entry.value)

    body = fields.to_json() if fields else b""

    request = RequestDescriptor(
        method=method,
        url=_apply_query(url, query),
        headers=headers,
        query=query,
        body=body,
    )
    logger.debug(
        f"assembled {method} {request.url} with {len(headers)} header(s), "
        f"{len(query)} query parameter(s), {len(body)} body bytes"
    )
    return ParseResult(request=request, unrecognized=unrecognized)
