#!/usr/bin/env python3

import argparse
import logging
import socketserver

from typing import Any, Dict

from indisoluble.a_routing_dns import router_factory as rf
from indisoluble.a_routing_dns.dns_server_udp_handler import DnsServerUdpHandler


_ARG_LOG_LEVEL = "log_level"
_ARG_PORT = "port"
_GRP_GENERAL = "General"
_GRP_ROUTING = "Routing"
_NAME_LOG_LEVEL = "log-level"
_NAME_PORT = "port"
_NAME_RESOLVERS = "resolvers"
_NAME_ROUTER_ID = "router-id"
_NAME_ROUTES = "routes"
_VAL_LOG_LEVEL = logging.getLevelName(logging.INFO).lower()
_VAL_PORT = 53053
_VAL_ROUTER_ID = "router"


def _make_arg_parser() -> argparse.ArgumentParser:
    epilog = f"""
Parameter details
=================

{_GRP_GENERAL}
{len(_GRP_GENERAL) * '-'}
--{_NAME_PORT}: Port on which the DNS server will listen for incoming DNS requests.
--{_NAME_LOG_LEVEL}: Controls verbosity of log output (debug, info, warning, error, critical).

{_GRP_ROUTING}
{len(_GRP_ROUTING) * '-'}
--{_NAME_ROUTER_ID}: Name of the router, used in logs and metrics.
--{_NAME_RESOLVERS}: JSON object with the resolvers queries can be routed to. A resolver
    with '{rf.ARG_RESOLVER_ADDRESS}' forwards queries to that upstream server over UDP,
    a resolver with '{rf.ARG_RESOLVER_RCODE}' answers every query with that response code.
--{_NAME_ROUTES}: JSON array of routes evaluated in order, the first matching route wins.
    '{rf.ARG_ROUTE_NAME}' is a regular expression searched within the query name, '{rf.ARG_ROUTE_TYPE}'
    and '{rf.ARG_ROUTE_CLASS}' are DNS mnemonics and '{rf.ARG_ROUTE_SOURCE}' is a client network in
    CIDR format. Omitted fields match anything, so the default route goes last.

Examples:
    --{_NAME_RESOLVERS} '{{"google":{{"address":"8.8.8.8"}},"lan":{{"address":"10.0.0.1","port":5353,"timeout":1}},"refuse":{{"rcode":"REFUSED"}}}}'
    --{_NAME_ROUTES} '[{{"name":"\\\\.internal\\\\.$","source":"10.0.0.0/8","resolver":"lan"}},{{"type":"ANY","resolver":"refuse"}},{{"resolver":"google"}}]'

Example usage
=============
a-routing-dns \\
    --{_NAME_RESOLVERS} '{{"google":{{"address":"8.8.8.8"}}}}' \\
    --{_NAME_ROUTES} '[{{"resolver":"google"}}]' \\
    --{_NAME_PORT} 53053
"""
    parser = argparse.ArgumentParser(
        description="A rule based DNS router",
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    general_group = parser.add_argument_group(_GRP_GENERAL)
    general_group.add_argument(
        f"--{_NAME_PORT}",
        type=int,
        default=_VAL_PORT,
        dest=_ARG_PORT,
        help=f"DNS server port (default: {_VAL_PORT})",
    )
    general_group.add_argument(
        f"--{_NAME_LOG_LEVEL}",
        type=str,
        choices=["debug", "info", "warning", "error", "critical"],
        default=_VAL_LOG_LEVEL,
        dest=_ARG_LOG_LEVEL,
        help=f"Logging level (default: {_VAL_LOG_LEVEL})",
    )
    routing_group = parser.add_argument_group(_GRP_ROUTING)
    routing_group.add_argument(
        f"--{_NAME_ROUTER_ID}",
        type=str,
        default=_VAL_ROUTER_ID,
        dest=rf.ARG_ROUTER_ID,
        help=f"Router name (default: {_VAL_ROUTER_ID})",
    )
    routing_group.add_argument(
        f"--{_NAME_RESOLVERS}",
        type=str,
        required=True,
        dest=rf.ARG_RESOLVERS,
        help=(
            f"Resolvers as JSON string (ex. {{id1: {{'{rf.ARG_RESOLVER_ADDRESS}': ip, "
            f"'{rf.ARG_RESOLVER_PORT}': port}}, id2: {{'{rf.ARG_RESOLVER_RCODE}': rcode}}, ...}})"
        ),
    )
    routing_group.add_argument(
        f"--{_NAME_ROUTES}",
        type=str,
        required=True,
        dest=rf.ARG_ROUTES,
        help=(
            f"Routes as JSON string (ex. [{{'{rf.ARG_ROUTE_NAME}': regex, "
            f"'{rf.ARG_ROUTE_TYPE}': type, '{rf.ARG_ROUTE_RESOLVER}': id1}}, ...])"
        ),
    )

    return parser


def _main(args: Dict[str, Any]):
    # Set up logging
    numeric_level = getattr(logging, args[_ARG_LOG_LEVEL].upper())
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(levelname)s - %(module)s.%(funcName)s - %(message)s",
    )

    # Compose router
    router = rf.make_router(args)
    if not router:
        return

    # Launch DNS server, one thread per query
    server_address = ("", args[_ARG_PORT])
    with socketserver.ThreadingUDPServer(server_address, DnsServerUdpHandler) as server:
        server.daemon_threads = True
        server.router = router
        server.listener = f"udp:{args[_ARG_PORT]}"

        logging.info("DNS router listening on port %d...", args[_ARG_PORT])
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            logging.info("Shutting down DNS router...")

    logging.info("Router metrics: %s", router.metrics.snapshot())


def main():
    args = _make_arg_parser().parse_args()
    _main(vars(args))
