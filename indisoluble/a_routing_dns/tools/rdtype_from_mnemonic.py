#!/usr/bin/env python3

"""DNS record type mnemonic translation.

Maps record type mnemonics (A, AAAA, MX, ...) to their wire codes and back,
using the type table shipped with dnspython. An empty mnemonic stands for
any type and maps to 0.
"""

import dns.rdatatype

from typing import Dict

from indisoluble.a_routing_dns.errors import UnknownTypeError


ANY_RDTYPE = 0

_CODE_BY_MNEMONIC: Dict[str, int] = {
    dns.rdatatype.to_text(rdtype): int(rdtype)
    for rdtype in dns.rdatatype.RdataType
    if rdtype != ANY_RDTYPE
}
_MNEMONIC_BY_CODE: Dict[int, str] = {
    code: mnemonic for mnemonic, code in _CODE_BY_MNEMONIC.items()
}


def rdtype_from_mnemonic(mnemonic: str) -> int:
    """Translate a type mnemonic into its code, 0 if mnemonic is empty."""
    if mnemonic == "":
        return ANY_RDTYPE

    code = _CODE_BY_MNEMONIC.get(mnemonic)
    if code is None:
        raise UnknownTypeError(mnemonic)

    return code


def rdtype_to_mnemonic(code: int) -> str:
    """Translate a type code into its mnemonic, TYPE<code> if unknown."""
    return _MNEMONIC_BY_CODE.get(code, f"TYPE{code}")
