"""
ENS-compatible namehash.

    namehash("")      = 0x00 * 32
    namehash(l + "." + rest) = keccak256(namehash(rest) + keccak256(l))

Labels are folded right to left. An empty label (leading, trailing or doubled
dot) hashes as keccak256(b""), it is never skipped or rejected.
"""

from eth_utils import keccak, remove_0x_prefix

from .normalize import normalize

EMPTY_NODE = b"\x00" * 32
REVERSE_SUFFIX = "addr.reverse"


def label_hash(label: str) -> bytes:
    """keccak256 of the label's UTF-8 bytes"""
    return keccak(text=label)


def namehash_bytes(name: str) -> bytes:
    node = EMPTY_NODE
    if not name:
        return node
    for label in reversed(normalize(name).split(".")):
        node = keccak(node + label_hash(label))
    return node


def namehash(name: str) -> str:
    """Node of ``name`` as a 0x-prefixed, 64 digit hex string"""
    return "0x" + namehash_bytes(name).hex()


def reverse_domain(address: str, suffix: str = REVERSE_SUFFIX) -> str:
    """Reverse lookup name for an address, e.g. ``ab12...ef.addr.reverse``"""
    return f"{remove_0x_prefix(address.lower())}.{suffix}"
