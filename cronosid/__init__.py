"""
Cronos ID name resolution: namehash, forward/reverse lookups and address
classification against the Cronos ID registry.
"""

from .config import CRONOS_MAINNET, ZERO_ADDRESS, load_config
from .errors import (
    ChainQueryError,
    ConfigError,
    CronosIdError,
    NoReverseRecordError,
    NormalizationError,
    OwnershipMismatchError,
    UnresolvedNameError,
)
from .gateway import ChainQueryGateway, LogEntry, Web3Gateway
from .mints import MintedDomain, list_domains_minted
from .namehash import label_hash, namehash, namehash_bytes, reverse_domain
from .normalize import normalize
from .resolver import AddressKind, CronosIdResolver

__version__ = "0.1.0"
