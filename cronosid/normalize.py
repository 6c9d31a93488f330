"""
UTS #46 name normalization.

Names are mapped with the non-transitional table and STD3 ASCII rules, then
any ``xn--`` label is decoded back to Unicode. Empty labels are kept so the
namehash of ``"a..b"`` stays compatible with other namehash clients.
"""

import idna

from .errors import NormalizationError

ACE_PREFIX = "xn--"


def _to_unicode(label: str) -> str:
    # The decoded label is judged by the same UTS #46 table as plain input
    if not label.startswith(ACE_PREFIX):
        return label
    try:
        decoded = label[len(ACE_PREFIX):].encode("ascii").decode("punycode")
    except UnicodeError as e:
        raise idna.IDNAError(f"Invalid punycode label {label!r}") from e
    return idna.uts46_remap(decoded, std3_rules=True, transitional=False)


def normalize(name: str) -> str:
    """Canonicalize a raw domain name; the empty string passes through"""
    if not name:
        return name
    try:
        mapped = idna.uts46_remap(name, std3_rules=True, transitional=False)
        return ".".join(_to_unicode(label) for label in mapped.split("."))
    except idna.IDNAError as e:
        raise NormalizationError(name, str(e)) from e
