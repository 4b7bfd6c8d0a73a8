"""
Exceptions raised while compiling tokens into a request.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""


class HepError(Exception):
    """Base exception for request build errors."""
    pass


class HostParseError(HepError):
    """Host specifier could not be turned into a URL."""

    def __init__(self, spec: str, message: str):
        self.spec = spec
        super().__init__(f"invalid host {spec!r}: {message}")


class FieldConflictError(HepError):
    """Field path collides with a value already in the field tree."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"field {path!r}: {message}")


class AssemblyError(HepError):
    """A token could not be applied to the request being built."""

    def __init__(self, token: str, message: str):
        self.token = token
        super().__init__(f"argument {token!r}: {message}")
