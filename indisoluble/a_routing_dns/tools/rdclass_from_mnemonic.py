#!/usr/bin/env python3

"""DNS class mnemonic translation limited to the classes rules can use."""

import dns.rdataclass

from indisoluble.a_routing_dns.errors import UnknownClassError


ANY_RDCLASS = 0

_CODE_BY_MNEMONIC = {
    "": ANY_RDCLASS,
    "IN": int(dns.rdataclass.IN),
    "CH": int(dns.rdataclass.CH),
    "HS": int(dns.rdataclass.HS),
    "NONE": int(dns.rdataclass.NONE),
    "ANY": int(dns.rdataclass.ANY),
}


def rdclass_from_mnemonic(mnemonic: str) -> int:
    """Translate a class mnemonic into its code, 0 if mnemonic is empty."""
    code = _CODE_BY_MNEMONIC.get(mnemonic)
    if code is None:
        raise UnknownClassError(mnemonic)

    return code
