#!/usr/bin/env python3

import logging
import socketserver

import dns.exception
import dns.flags
import dns.message
import dns.rcode

from typing import Optional

from indisoluble.a_routing_dns.client_info import ClientInfo
from indisoluble.a_routing_dns.errors import InvalidQueryError


def _make_error_response(
    query: dns.message.Message, rcode: dns.rcode.Rcode
) -> Optional[dns.message.Message]:
    try:
        response = dns.message.make_response(query)
    except dns.exception.DNSException as ex:
        logging.warning("Failed to make error response: %s", ex)
        return None

    response.set_rcode(rcode)
    return response


class DnsServerUdpHandler(socketserver.BaseRequestHandler):
    def handle(self):
        data, sock = self.request

        try:
            query = dns.message.from_wire(data)
        except dns.exception.DNSException as ex:
            logging.warning("Failed to parse DNS query: %s", ex)
            return

        if query.flags & dns.flags.QR:
            logging.warning(
                "Dropping DNS response received from %s", self.client_address[0]
            )
            return

        client_info = ClientInfo(
            source_ip=self.client_address[0], listener=self.server.listener
        )
        try:
            response = self.server.router.resolve(query, client_info)
        except InvalidQueryError:
            logging.warning("Received query without question section")
            response = _make_error_response(query, dns.rcode.FORMERR)
        except Exception as ex:
            logging.warning(
                "Failed to resolve query from %s: %s", client_info.source_ip, ex
            )
            response = _make_error_response(query, dns.rcode.SERVFAIL)

        if response is None:
            return

        # Send the response back to the client
        sock.sendto(response.to_wire(), self.client_address)
