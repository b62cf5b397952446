#!/usr/bin/env python3

import json

import dns.rcode

import pytest

from typing import Any, Dict

from indisoluble.a_routing_dns import router_factory as rf
from indisoluble.a_routing_dns.resolvers.static_resolver import StaticResolver
from indisoluble.a_routing_dns.resolvers.udp_upstream_resolver import (
    UdpUpstreamResolver,
)


@pytest.fixture
def args() -> Dict[str, Any]:
    return {
        rf.ARG_ROUTER_ID: "main",
        rf.ARG_RESOLVERS: json.dumps(
            {
                "lan": {"address": "10.0.0.1", "port": 5353, "timeout": 1},
                "google": {"address": "8.8.8.8"},
                "refuse": {"rcode": "REFUSED"},
            }
        ),
        rf.ARG_ROUTES: json.dumps(
            [
                {
                    "name": r"\.internal\.$",
                    "type": "A",
                    "source": "10.0.0.0/8",
                    "resolver": "lan",
                },
                {"type": "ANY", "class": "IN", "resolver": "refuse"},
                {"resolver": "google"},
            ]
        ),
    }


def test_make_router(args):
    router = rf.make_router(args)

    assert router is not None
    assert str(router) == "main"
    assert router.metrics.available == 3

    rules = router.rules
    assert [str(rule) for rule in rules] == [
        r"\.internal\.$:A->lan",
        ":ANY->refuse",
        "default->google",
    ]
    assert str(rules[0].source) == "10.0.0.0/8"
    assert rules[1].rdclass == 1

    lan = rules[0].resolver
    assert isinstance(lan, UdpUpstreamResolver)
    assert (lan.address, lan.port, lan.timeout) == ("10.0.0.1", 5353, 1.0)

    google = rules[2].resolver
    assert isinstance(google, UdpUpstreamResolver)
    assert (google.port, google.timeout) == (53, 2.0)

    refuse = rules[1].resolver
    assert isinstance(refuse, StaticResolver)
    assert refuse.rcode == dns.rcode.REFUSED


def test_make_router_shares_resolvers_between_routes(args):
    args[rf.ARG_ROUTES] = json.dumps(
        [{"type": "A", "resolver": "google"}, {"resolver": "google"}]
    )

    router = rf.make_router(args)

    assert router.rules[0].resolver is router.rules[1].resolver


@pytest.mark.parametrize(
    "resolvers",
    [
        "not json",
        "[]",
        "{}",
        '{"google": "8.8.8.8"}',
        '{"google": {}}',
        '{"google": {"address": "bad"}}',
        '{"google": {"address": "8.8.8.8", "port": "53"}}',
        '{"google": {"address": "8.8.8.8", "port": 0}}',
        '{"google": {"address": "8.8.8.8", "timeout": "1"}}',
        '{"refuse": {"rcode": "BOGUS"}}',
    ],
)
def test_make_router_invalid_resolvers(resolvers, args):
    args[rf.ARG_RESOLVERS] = resolvers

    assert rf.make_router(args) is None


@pytest.mark.parametrize(
    "routes",
    [
        "not json",
        "{}",
        "[]",
        '["google"]',
        '[{"name": "example"}]',
        '[{"resolver": "unknown"}]',
        '[{"resolver": ["google"]}]',
        '[{"name": 1, "resolver": "google"}]',
        '[{"type": "BOGUS", "resolver": "google"}]',
        '[{"class": "INET", "resolver": "google"}]',
        '[{"name": "(", "resolver": "google"}]',
        '[{"source": "10.0.0.1", "resolver": "google"}]',
        '[{"resolver": "google"}, {"type": "BOGUS", "resolver": "google"}]',
    ],
)
def test_make_router_invalid_routes(routes, args):
    args[rf.ARG_ROUTES] = routes

    assert rf.make_router(args) is None
