#!/usr/bin/env python3

import logging

import dns.message
import dns.rcode

from indisoluble.a_routing_dns.client_info import ClientInfo
from indisoluble.a_routing_dns.resolver import Resolver


class StaticResolver(Resolver):
    """Answer every query with an empty response and a fixed rcode."""

    @property
    def rcode(self) -> dns.rcode.Rcode:
        return self._rcode

    def __init__(self, resolver_id: str, rcode: dns.rcode.Rcode):
        self._resolver_id = resolver_id
        self._rcode = dns.rcode.Rcode.make(rcode)

    def resolve(
        self, query: dns.message.Message, client_info: ClientInfo
    ) -> dns.message.Message:
        response = dns.message.make_response(query)
        response.set_rcode(self._rcode)
        logging.debug(
            "Answered query from %s with %s",
            client_info.source_ip,
            dns.rcode.to_text(self._rcode),
        )

        return response

    def __str__(self):
        return self._resolver_id

    def __repr__(self):
        return (
            f"StaticResolver(resolver_id='{self._resolver_id}', "
            f"rcode={dns.rcode.to_text(self._rcode)})"
        )
