#!/usr/bin/env python3

"""Contract shared by every component able to answer DNS queries.

Routers implement it and also dispatch to it, so resolvers can be composed
to any depth (routers inside routers, upstream forwarders, static answers).
"""

import abc

import dns.message

from indisoluble.a_routing_dns.client_info import ClientInfo


class Resolver(abc.ABC):
    """Component that answers DNS queries."""

    @abc.abstractmethod
    def resolve(
        self, query: dns.message.Message, client_info: ClientInfo
    ) -> dns.message.Message:
        """Answer the query, raising an exception when not possible."""

    @abc.abstractmethod
    def __str__(self) -> str:
        """Stable name used in logs and metrics."""
