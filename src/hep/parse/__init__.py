"""
Token-to-request compiler.

Turns command-line tokens into a request descriptor:
- Token classification by separator (``:``, ``==``, ``=``, ``:=``)
- Nested JSON body fields via dotted paths
- Host shortcuts such as ``:8080/path``

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from hep.parse.classifier import (
    ClassifiedEntry,
    TokenKind,
    classify,
    parse_literal,
)
from hep.parse.errors import (
    AssemblyError,
    FieldConflictError,
    HepError,
    HostParseError,
)
from hep.parse.fields import FieldTree
from hep.parse.host import normalize_host
from hep.parse.request import (
    HeaderAccumulator,
    ParseResult,
    QueryAccumulator,
    RequestDescriptor,
    assemble,
    is_method,
)

__all__ = [
    "AssemblyError",
    "ClassifiedEntry",
    "FieldConflictError",
    "FieldTree",
    "HeaderAccumulator",
    "HepError",
    "HostParseError",
    "ParseResult",
    "QueryAccumulator",
    "RequestDescriptor",
    "TokenKind",
    "assemble",
    "classify",
    "is_method",
    "normalize_host",
    "parse_literal",
]
