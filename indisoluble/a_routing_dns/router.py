#!/usr/bin/env python3

"""Rule based DNS query router.

A RouterBuilder collects rules during configuration and freezes them into a
Router. The Router sends each query to the resolver of the first rule, in
insertion order, that matches the first question of the query.
"""

import logging
import re

import dns.message

from typing import Iterable, List, Optional, Tuple

from indisoluble.a_routing_dns.client_info import ClientInfo
from indisoluble.a_routing_dns.errors import (
    BadPatternError,
    InvalidQueryError,
    NoRouteError,
)
from indisoluble.a_routing_dns.resolver import Resolver
from indisoluble.a_routing_dns.router_metrics import RouterMetrics
from indisoluble.a_routing_dns.rule import Rule
from indisoluble.a_routing_dns.tools.network_from_cidr import (
    ip_from_text,
    network_from_cidr,
)
from indisoluble.a_routing_dns.tools.rdclass_from_mnemonic import (
    rdclass_from_mnemonic,
)
from indisoluble.a_routing_dns.tools.rdtype_from_mnemonic import (
    rdtype_from_mnemonic,
)


def _compile_name_pattern(name: str) -> re.Pattern:
    try:
        return re.compile(name)
    except re.error as ex:
        raise BadPatternError(name, str(ex)) from ex


class Router(Resolver):
    """Resolver that routes queries to other resolvers through fixed rules."""

    @property
    def router_id(self) -> str:
        return self._router_id

    @property
    def rules(self) -> Tuple[Rule, ...]:
        return self._rules

    @property
    def metrics(self) -> RouterMetrics:
        return self._metrics

    def __init__(
        self,
        router_id: str,
        rules: Iterable[Rule],
        metrics: Optional[RouterMetrics] = None,
    ):
        self._router_id = router_id
        self._rules = tuple(rules)

        if metrics is None:
            metrics = RouterMetrics(router_id)
            metrics.add_available(len(self._rules))
        elif metrics.router_id != router_id:
            raise ValueError(
                f"Metrics of router '{metrics.router_id}' "
                f"cannot be used by router '{router_id}'"
            )
        elif metrics.available != len(self._rules):
            raise ValueError(
                f"Metrics count {metrics.available} available rules, "
                f"router has {len(self._rules)}"
            )
        self._metrics = metrics

    def resolve(
        self, query: dns.message.Message, client_info: ClientInfo
    ) -> dns.message.Message:
        if not query.question:
            raise InvalidQueryError()

        # Only the first question takes part in routing
        question = query.question[0]
        name = question.name.to_text()
        source_ip = ip_from_text(client_info.source_ip)

        for rule in self._rules:
            if not rule.matches(name, question.rdtype, question.rdclass, source_ip):
                continue

            resolver_name = str(rule.resolver)
            logging.debug(
                "Router %s routing query for %s from %s to %s",
                self._router_id,
                name,
                client_info.source_ip,
                resolver_name,
            )
            self._metrics.add_route(resolver_name)
            try:
                return rule.resolver.resolve(query, client_info)
            except Exception:
                self._metrics.add_failure(resolver_name)
                raise

        raise NoRouteError(name, question.rdtype, question.rdclass)

    def __str__(self):
        return self._router_id

    def __repr__(self):
        rules_str = ", ".join(f"{rule}" for rule in self._rules)

        return f"Router(router_id='{self._router_id}', rules=[{rules_str}])"


class RouterBuilder:
    """Collects routing rules and freezes them into a Router."""

    @property
    def router_id(self) -> str:
        return self._router_id

    @property
    def rules(self) -> Tuple[Rule, ...]:
        return tuple(self._rules)

    @property
    def metrics(self) -> RouterMetrics:
        return self._metrics

    def __init__(self, router_id: str):
        self._router_id = router_id
        self._rules: List[Rule] = []
        self._metrics = RouterMetrics(router_id)
        self._router: Optional[Router] = None

    def add(
        self, name: str, rdclass: str, rdtype: str, source: str, resolver: Resolver
    ):
        """Append a rule evaluated after all the rules added before.

        Name is a regular expression searched within the name of the first
        question, source is a network in CIDR format. Empty values match
        anything, so the default rule (no name, no type) must be added last.
        """
        if self._router is not None:
            raise RuntimeError(f"Router '{self._router_id}' is already built")

        # Validate everything before touching the rule list
        rdtype_code = rdtype_from_mnemonic(rdtype)
        rdclass_code = rdclass_from_mnemonic(rdclass)
        name_pattern = _compile_name_pattern(name)
        source_network = network_from_cidr(source)

        rule = Rule(rdtype_code, rdclass_code, name_pattern, source_network, resolver)

        default_rule = next((r for r in self._rules if r.is_default()), None)
        if default_rule:
            logging.warning(
                "Rule %s in router %s is unreachable, it follows %s",
                rule,
                self._router_id,
                default_rule,
            )

        self._rules.append(rule)
        self._metrics.add_available()
        logging.debug("Added rule %s to router %s", rule, self._router_id)

    def build(self) -> Router:
        """Freeze the rules added so far into a Router."""
        if self._router is None:
            self._router = Router(self._router_id, self._rules, self._metrics)
            logging.info(
                "Router %s built with %d rules", self._router_id, len(self._rules)
            )

        return self._router
