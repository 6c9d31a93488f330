"""
List the Cronos ID domains minted within a block range.

The storefront contract emits one event per mint. The minted label sits in a
fixed 32-byte word of the event data (zero padded on the right), so labels
longer than 32 bytes come back truncated.
"""

import logging
from dataclasses import dataclass

from .errors import ChainQueryError

logger = logging.getLogger(__name__)

WORD_SIZE = 32


@dataclass(frozen=True)
class MintedDomain:
    block_number: int
    label: str
    name: str


def decode_minted_label(data: bytes, word_index: int) -> str:
    """UTF-8 label stored in data word ``word_index``"""
    start = word_index * WORD_SIZE
    word = data[start:start + WORD_SIZE]
    if len(word) < WORD_SIZE:
        raise ChainQueryError(
            "decode mint event",
            f"data is {len(data)} bytes, expected at least {start + WORD_SIZE}",
        )
    try:
        return word.rstrip(b"\x00").decode("utf-8")
    except UnicodeDecodeError as e:
        raise ChainQueryError("decode mint event", f"label is not UTF-8: {word.hex()}") from e


async def list_domains_minted(gateway, config, from_block=None, blocks=None):
    """Domains minted in [from_block, from_block + blocks], in log order"""
    scan = config["mint_scan"]
    minting = config["contracts"]["minting"]
    if from_block is None:
        from_block = scan["start_block"]
    if blocks is None:
        blocks = scan["window"]
    to_block = from_block + blocks

    logs = await gateway.get_logs(from_block, to_block, minting["address"], [minting["event_topic"]])
    logger.debug("%d mint events between blocks %d and %d", len(logs), from_block, to_block)

    minted = []
    for log in logs:
        label = decode_minted_label(log.data, scan["name_word"])
        minted.append(MintedDomain(log.block_number, label, f"{label}.{config['tld']}"))
    return minted
