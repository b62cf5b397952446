#!/usr/bin/env python3

"""Source network parsing utilities.

Parses CIDR literals (address/prefix) into IPv4 or IPv6 networks, and
client addresses into values that can be tested against them.
"""

import ipaddress
import logging

from typing import Optional, Union

from indisoluble.a_routing_dns.errors import BadCidrError


IpAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]
IpNetwork = Union[ipaddress.IPv4Network, ipaddress.IPv6Network]


def network_from_cidr(cidr: str) -> Optional[IpNetwork]:
    """Parse a CIDR literal, None if empty (any source)."""
    if cidr == "":
        return None

    if "/" not in cidr:
        raise BadCidrError(cidr, "Prefix length is missing")

    try:
        return ipaddress.ip_network(cidr, strict=False)
    except ValueError as ex:
        raise BadCidrError(cidr, str(ex)) from ex


def ip_from_text(ip: str) -> Optional[IpAddress]:
    """Parse a client address, unwrapping IPv4-mapped IPv6 addresses."""
    try:
        address = ipaddress.ip_address(ip)
    except ValueError as ex:
        logging.debug("Invalid client address '%s': %s", ip, ex)
        return None

    if isinstance(address, ipaddress.IPv6Address) and address.ipv4_mapped:
        return address.ipv4_mapped

    return address
