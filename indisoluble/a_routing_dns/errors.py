#!/usr/bin/env python3

"""Errors raised while configuring a router and while routing queries.

Configuration errors are raised only when rules are added, routing errors
only when queries are resolved.
"""

import dns.rdataclass
import dns.rdatatype


class RouterError(Exception):
    """Base class for all routing errors."""


class InvalidQueryError(RouterError):
    """Query does not contain any question to route."""

    def __init__(self):
        super().__init__("No question in query")


class NoRouteError(RouterError):
    """No configured rule matches the question of the query."""

    @property
    def name(self) -> str:
        return self._name

    @property
    def rdtype(self) -> int:
        return self._rdtype

    @property
    def rdclass(self) -> int:
        return self._rdclass

    def __init__(self, name: str, rdtype: int, rdclass: int):
        self._name = name
        self._rdtype = rdtype
        self._rdclass = rdclass

        super().__init__(
            f"No route for {name} "
            f"{dns.rdataclass.to_text(rdclass)} {dns.rdatatype.to_text(rdtype)}"
        )


class ResolutionError(RouterError):
    """A resolver was not able to answer a query."""


class RuleConfigError(RouterError, ValueError):
    """Base class for invalid rule definitions."""

    @property
    def text(self) -> str:
        return self._text

    def __init__(self, message: str, text: str):
        super().__init__(message)
        self._text = text


class UnknownTypeError(RuleConfigError):
    def __init__(self, text: str):
        super().__init__(f"Unknown type '{text}'", text)


class UnknownClassError(RuleConfigError):
    def __init__(self, text: str):
        super().__init__(f"Unknown class '{text}'", text)


class BadPatternError(RuleConfigError):
    def __init__(self, text: str, reason: str):
        super().__init__(f"Invalid name pattern '{text}': {reason}", text)


class BadCidrError(RuleConfigError):
    def __init__(self, text: str, reason: str):
        super().__init__(f"Invalid source network '{text}': {reason}", text)
