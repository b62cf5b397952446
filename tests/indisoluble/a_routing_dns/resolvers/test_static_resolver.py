#!/usr/bin/env python3

import dns.exception
import dns.flags
import dns.message
import dns.rcode
import dns.rdatatype

import pytest

from indisoluble.a_routing_dns.client_info import ClientInfo
from indisoluble.a_routing_dns.resolvers.static_resolver import StaticResolver


@pytest.mark.parametrize(
    "rcode,expected",
    [
        ("REFUSED", dns.rcode.REFUSED),
        ("NXDOMAIN", dns.rcode.NXDOMAIN),
        (dns.rcode.SERVFAIL, dns.rcode.SERVFAIL),
        (0, dns.rcode.NOERROR),
    ],
)
def test_resolve_answers_with_rcode(rcode, expected):
    resolver = StaticResolver("sink", rcode)
    query = dns.message.make_query("ads.example.com.", dns.rdatatype.A)

    response = resolver.resolve(query, ClientInfo(source_ip="10.1.2.3"))

    assert resolver.rcode == expected
    assert response.rcode() == expected
    assert response.id == query.id
    assert response.flags & dns.flags.QR
    assert response.question == query.question
    assert len(response.answer) == 0


@pytest.mark.parametrize("rcode", ["BOGUS", -1])
def test_init_invalid_rcode(rcode):
    with pytest.raises((dns.exception.DNSException, ValueError)):
        StaticResolver("sink", rcode)


def test_str_and_repr():
    resolver = StaticResolver("sink", "REFUSED")

    assert str(resolver) == "sink"
    assert repr(resolver) == "StaticResolver(resolver_id='sink', rcode=REFUSED)"
