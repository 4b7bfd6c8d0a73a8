"""
Token classification.

Each command-line token is split into key, separator and value. The
separator decides where the token ends up in the request:

    ==   query parameter     q==search
    :=   JSON-typed field    person.age:=100
    =    string field        person.name=brett
    :    header              Accept:application/json

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import json
import logging
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

# Two-character separators must come before their one-character prefixes.
# Used with .match(): a key may not start after a stray "@", so "@a=b" and
# "user@host=x" are unrecognized rather than read as fields "a" and "host".
TOKEN_PATTERN = re.compile(r"([^:=@]+)(==|:=|=|:)(.+)", re.DOTALL)


class TokenKind(str, Enum):
    """Request part a token is routed to."""

    HEADER = "header"
    QUERY = "query"
    FIELD = "field"
    JSON_FIELD = "json_field"


SEPARATORS = {
    "==": TokenKind.QUERY,
    ":=": TokenKind.JSON_FIELD,
    "=": TokenKind.FIELD,
    ":": TokenKind.HEADER,
}


@dataclass(frozen=True)
class ClassifiedEntry:
    """A token split into its key, value and target."""
    key: str
    value: Any
    kind: TokenKind


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def _finite_float(raw: str) -> float:
    value = float(raw)
    if not math.isfinite(value):
        raise ValueError(f"number {raw} is out of range")
    return value


def parse_literal(raw: str) -> Any:
    """Parse a JSON literal, falling back to the raw string.

    Objects, arrays, numbers, booleans, strings and null are accepted.
    Anything else, including numbers outside the float range and
    literals nested too deeply to decode, is returned unchanged.
    """
    try:
        return json.loads(raw, parse_float=_finite_float, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        logger.debug(f"could not parse {raw!r} as JSON, using it as a string: {e}")
        return raw


def classify(token: str) -> tuple[ClassifiedEntry | None, bool]:
    """Classify a single token.

    Returns:
        (entry, True) when the token matches the grammar, (None, False)
        otherwise. A non-matching token is not an error.
    """
    match = TOKEN_PATTERN.match(token)
    if match is None:
        return None, False

    key, separator, raw_value = match.groups()
    kind = SEPARATORS[separator]

    value: Any = raw_value
    if kind is TokenKind.JSON_FIELD:
        value = parse_literal(raw_value)

    return ClassifiedEntry(key=key, value=value, kind=kind), True
