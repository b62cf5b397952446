#!/usr/bin/env python3

import ipaddress

import pytest

from indisoluble.a_routing_dns.errors import BadCidrError
from indisoluble.a_routing_dns.tools.network_from_cidr import (
    ip_from_text,
    network_from_cidr,
)


def test_network_from_empty_cidr_is_none():
    assert network_from_cidr("") is None


@pytest.mark.parametrize(
    "cidr,expected",
    [
        ("10.0.0.0/8", "10.0.0.0/8"),
        ("10.1.2.3/8", "10.0.0.0/8"),
        ("192.168.1.1/32", "192.168.1.1/32"),
        ("0.0.0.0/0", "0.0.0.0/0"),
        ("2001:db8::/32", "2001:db8::/32"),
    ],
)
def test_network_from_cidr(cidr, expected):
    assert network_from_cidr(cidr) == ipaddress.ip_network(expected)


@pytest.mark.parametrize(
    "cidr", ["10.0.0.1", "10.0.0.0/33", "10.0.0/8", "bad/8", "/8", "2001:db8::/129"]
)
def test_network_from_cidr_invalid(cidr):
    with pytest.raises(BadCidrError) as exc_info:
        network_from_cidr(cidr)

    assert exc_info.value.text == cidr


@pytest.mark.parametrize(
    "ip,expected",
    [
        ("10.1.2.3", ipaddress.ip_address("10.1.2.3")),
        ("2001:db8::1", ipaddress.ip_address("2001:db8::1")),
        ("::ffff:10.1.2.3", ipaddress.ip_address("10.1.2.3")),
    ],
)
def test_ip_from_text(ip, expected):
    assert ip_from_text(ip) == expected


@pytest.mark.parametrize("ip", ["", "bad", "10.0.0.256"])
def test_ip_from_text_invalid(ip):
    assert ip_from_text(ip) is None
