"""
hep - command-line HTTP request builder

Turns terse command-line tokens such as ``Accept:application/json``,
``q==search`` or ``person.age:=100`` into a complete HTTP request,
sends it, and prints the response.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

__version__ = "0.1.0"
__author__ = "DNS Science.io"
__copyright__ = "Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company"
