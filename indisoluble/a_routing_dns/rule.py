#!/usr/bin/env python3

"""Routing rule pairing query predicates with a target resolver.

A rule matches a question when its type, class, name pattern and source
network all accept it. Zero type or class, and a missing source network,
accept anything.
"""

import re

from typing import Optional

from indisoluble.a_routing_dns.resolver import Resolver
from indisoluble.a_routing_dns.tools.network_from_cidr import IpAddress, IpNetwork
from indisoluble.a_routing_dns.tools.rdclass_from_mnemonic import ANY_RDCLASS
from indisoluble.a_routing_dns.tools.rdtype_from_mnemonic import (
    ANY_RDTYPE,
    rdtype_to_mnemonic,
)


class Rule:
    """Immutable routing rule."""

    @property
    def rdtype(self) -> int:
        """Get the record type code, 0 matches any type."""
        return self._rdtype

    @property
    def rdclass(self) -> int:
        """Get the class code, 0 matches any class."""
        return self._rdclass

    @property
    def name_pattern(self) -> re.Pattern:
        """Get the regular expression searched within query names."""
        return self._name_pattern

    @property
    def source(self) -> Optional[IpNetwork]:
        """Get the client network, None matches any client."""
        return self._source

    @property
    def resolver(self) -> Resolver:
        """Get the resolver queries are routed to."""
        return self._resolver

    def __init__(
        self,
        rdtype: int,
        rdclass: int,
        name_pattern: re.Pattern,
        source: Optional[IpNetwork],
        resolver: Resolver,
    ):
        self._rdtype = rdtype
        self._rdclass = rdclass
        self._name_pattern = name_pattern
        self._source = source
        self._resolver = resolver

    def is_default(self) -> bool:
        """Check if rule has no type restriction and an empty name pattern."""
        return self._rdtype == ANY_RDTYPE and self._name_pattern.pattern == ""

    def matches(
        self, name: str, rdtype: int, rdclass: int, source_ip: Optional[IpAddress]
    ) -> bool:
        """Check if a question sent from source_ip satisfies this rule."""
        if self._rdtype != ANY_RDTYPE and self._rdtype != rdtype:
            return False

        if self._rdclass != ANY_RDCLASS and self._rdclass != rdclass:
            return False

        if not self._name_pattern.search(name):
            return False

        if self._source is not None and (
            source_ip is None or source_ip not in self._source
        ):
            return False

        return True

    def describe(self) -> str:
        """Get a human readable label of the rule.

        Rules with no type restriction show their type as '*'.
        """
        if self.is_default():
            return f"default->{self._resolver}"

        rdtype = rdtype_to_mnemonic(self._rdtype) if self._rdtype else "*"
        return f"{self._name_pattern.pattern}:{rdtype}->{self._resolver}"

    def __str__(self):
        return self.describe()

    def __repr__(self):
        return (
            f"Rule(rdtype={self._rdtype}, "
            f"rdclass={self._rdclass}, "
            f"name_pattern='{self._name_pattern.pattern}', "
            f"source={self._source}, "
            f"resolver={self._resolver})"
        )
