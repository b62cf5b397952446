#!/usr/bin/env python3

"""Router factory for creating routers from command line configuration.

Parses resolver and route definitions given as JSON strings, builds the
resolvers and adds one rule per route, in the order they are listed.
Problems are logged and reported by returning None.
"""

import json
import logging

import dns.exception

from typing import Any, Dict, List, Optional

from indisoluble.a_routing_dns.errors import RuleConfigError
from indisoluble.a_routing_dns.resolver import Resolver
from indisoluble.a_routing_dns.resolvers.static_resolver import StaticResolver
from indisoluble.a_routing_dns.resolvers.udp_upstream_resolver import (
    UdpUpstreamResolver,
)
from indisoluble.a_routing_dns.router import Router, RouterBuilder


ARG_RESOLVERS = "resolvers"
ARG_ROUTER_ID = "router_id"
ARG_ROUTES = "routes"
ARG_RESOLVER_ADDRESS = "address"
ARG_RESOLVER_PORT = "port"
ARG_RESOLVER_RCODE = "rcode"
ARG_RESOLVER_TIMEOUT = "timeout"
ARG_ROUTE_CLASS = "class"
ARG_ROUTE_NAME = "name"
ARG_ROUTE_RESOLVER = "resolver"
ARG_ROUTE_SOURCE = "source"
ARG_ROUTE_TYPE = "type"

_VAL_RESOLVER_PORT = 53
_VAL_RESOLVER_TIMEOUT = 2.0


def _make_upstream_resolver(
    resolver_id: str, res_config: Dict[str, Any]
) -> Optional[Resolver]:
    port = res_config.get(ARG_RESOLVER_PORT, _VAL_RESOLVER_PORT)
    if not isinstance(port, int):
        logging.error(
            "Port for resolver '%s' must be an integer, got %s",
            resolver_id,
            type(port).__name__,
        )
        return None

    timeout = res_config.get(ARG_RESOLVER_TIMEOUT, _VAL_RESOLVER_TIMEOUT)
    if not isinstance(timeout, (int, float)):
        logging.error(
            "Timeout for resolver '%s' must be a number, got %s",
            resolver_id,
            type(timeout).__name__,
        )
        return None

    try:
        return UdpUpstreamResolver(
            resolver_id, res_config[ARG_RESOLVER_ADDRESS], port, timeout
        )
    except ValueError as ex:
        logging.error("Invalid upstream resolver '%s': %s", resolver_id, ex)
        return None


def _make_static_resolver(
    resolver_id: str, res_config: Dict[str, Any]
) -> Optional[Resolver]:
    try:
        return StaticResolver(resolver_id, res_config[ARG_RESOLVER_RCODE])
    except (dns.exception.DNSException, ValueError) as ex:
        logging.error("Invalid rcode for resolver '%s': %s", resolver_id, ex)
        return None


def _make_resolver(resolver_id: str, res_config: Any) -> Optional[Resolver]:
    if not isinstance(res_config, dict):
        logging.error(
            "Resolver '%s' must be a dictionary, got %s",
            resolver_id,
            type(res_config).__name__,
        )
        return None

    if ARG_RESOLVER_ADDRESS in res_config:
        return _make_upstream_resolver(resolver_id, res_config)

    if ARG_RESOLVER_RCODE in res_config:
        return _make_static_resolver(resolver_id, res_config)

    logging.error(
        "Resolver '%s' must define either '%s' or '%s'",
        resolver_id,
        ARG_RESOLVER_ADDRESS,
        ARG_RESOLVER_RCODE,
    )
    return None


def _make_resolvers(args: Dict[str, Any]) -> Optional[Dict[str, Resolver]]:
    try:
        raw_resolvers = json.loads(args[ARG_RESOLVERS])
    except json.JSONDecodeError as ex:
        logging.error("Failed to parse resolvers: %s", ex)
        return None

    if not isinstance(raw_resolvers, dict):
        logging.error(
            "Resolvers must be a dictionary, got %s", type(raw_resolvers).__name__
        )
        return None

    if not raw_resolvers:
        logging.error("Resolvers cannot be empty")
        return None

    resolvers = {}
    for resolver_id, res_config in raw_resolvers.items():
        resolver = _make_resolver(resolver_id, res_config)
        if not resolver:
            logging.error("Failed to create resolver '%s'", resolver_id)
            return None

        resolvers[resolver_id] = resolver

    return resolvers


def _add_route(
    builder: RouterBuilder,
    index: int,
    route: Any,
    resolvers: Dict[str, Resolver],
) -> bool:
    if not isinstance(route, dict):
        logging.error(
            "Route %d must be a dictionary, got %s", index, type(route).__name__
        )
        return False

    resolver_id = route.get(ARG_ROUTE_RESOLVER)
    if not isinstance(resolver_id, str) or resolver_id not in resolvers:
        logging.error("Route %d refers to unknown resolver '%s'", index, resolver_id)
        return False

    fields = [ARG_ROUTE_NAME, ARG_ROUTE_CLASS, ARG_ROUTE_TYPE, ARG_ROUTE_SOURCE]
    values = [route.get(field, "") for field in fields]
    for field, value in zip(fields, values):
        if not isinstance(value, str):
            logging.error(
                "Field '%s' of route %d must be a string, got %s",
                field,
                index,
                type(value).__name__,
            )
            return False

    try:
        builder.add(*values, resolvers[resolver_id])
    except RuleConfigError as ex:
        logging.error("Invalid route %d: %s", index, ex)
        return False

    return True


def _load_routes(args: Dict[str, Any]) -> Optional[List[Any]]:
    try:
        routes = json.loads(args[ARG_ROUTES])
    except json.JSONDecodeError as ex:
        logging.error("Failed to parse routes: %s", ex)
        return None

    if not isinstance(routes, list):
        logging.error("Routes must be a list, got %s", type(routes).__name__)
        return None

    if not routes:
        logging.error("Route list cannot be empty")
        return None

    return routes


def make_router(args: Dict[str, Any]) -> Optional[Router]:
    resolvers = _make_resolvers(args)
    if not resolvers:
        return None

    routes = _load_routes(args)
    if not routes:
        return None

    builder = RouterBuilder(args[ARG_ROUTER_ID])
    for index, route in enumerate(routes):
        if not _add_route(builder, index, route, resolvers):
            return None

    return builder.build()
