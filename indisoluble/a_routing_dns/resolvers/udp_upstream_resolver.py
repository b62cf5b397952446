#!/usr/bin/env python3

"""Resolver forwarding queries to an upstream DNS server over UDP."""

import ipaddress
import logging

import dns.exception
import dns.message
import dns.query

from indisoluble.a_routing_dns.client_info import ClientInfo
from indisoluble.a_routing_dns.errors import ResolutionError
from indisoluble.a_routing_dns.resolver import Resolver


class UdpUpstreamResolver(Resolver):
    """Forward queries as they are to a single upstream server."""

    @property
    def address(self) -> str:
        return self._address

    @property
    def port(self) -> int:
        return self._port

    @property
    def timeout(self) -> float:
        return self._timeout

    def __init__(
        self, resolver_id: str, address: str, port: int = 53, timeout: float = 2.0
    ):
        """Initialize resolver validating upstream address, port and timeout."""
        try:
            self._address = str(ipaddress.ip_address(address))
        except ValueError as ex:
            raise ValueError(f"Invalid upstream address: {ex}") from ex

        if not (1 <= port <= 65535):
            raise ValueError("Port must be between 1 and 65535")

        if timeout <= 0:
            raise ValueError("Timeout must be positive")

        self._resolver_id = resolver_id
        self._port = port
        self._timeout = float(timeout)

    def resolve(
        self, query: dns.message.Message, client_info: ClientInfo
    ) -> dns.message.Message:
        try:
            response = dns.query.udp(
                query, self._address, timeout=self._timeout, port=self._port
            )
        except (dns.exception.DNSException, OSError) as ex:
            raise ResolutionError(
                f"Upstream {self._address}:{self._port} failed: {ex}"
            ) from ex

        logging.debug(
            "Upstream %s:%d answered query with rcode %s",
            self._address,
            self._port,
            response.rcode(),
        )
        return response

    def __str__(self):
        return self._resolver_id

    def __repr__(self):
        return (
            f"UdpUpstreamResolver(resolver_id='{self._resolver_id}', "
            f"address='{self._address}', "
            f"port={self._port}, "
            f"timeout={self._timeout})"
        )
