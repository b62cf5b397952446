#!/usr/bin/env python3

from typing import NamedTuple


class ClientInfo(NamedTuple):
    """Metadata about the client that sent a query."""

    source_ip: str
    listener: str = ""
