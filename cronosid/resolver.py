"""
Forward and reverse resolution against the Cronos ID registry.

Forward: name -> namehash -> registry.owner(node)
Reverse: address -> "<hex>.addr.reverse" -> registry.resolver(node)
         -> resolver.name(node)

A reverse record is only a claim made by whoever controls the address. Use
verify_reverse_record() before displaying it as the address's name.
"""

from enum import Enum

from eth_utils import is_address

from .config import CRONOS_MAINNET
from .errors import NoReverseRecordError, OwnershipMismatchError, UnresolvedNameError
from .namehash import namehash, reverse_domain


class AddressKind(Enum):
    EOA = "eoa"
    CONTRACT = "contract"


def is_zero_address(address) -> bool:
    return not address or int(address, 16) == 0


def same_address(a: str, b: str) -> bool:
    return a.lower() == b.lower()


class CronosIdResolver:
    """Stateless resolution engine; every call is a fresh chain read"""

    def __init__(self, gateway, config=None):
        self.gateway = gateway
        self.config = config or CRONOS_MAINNET
        contracts = self.config["contracts"]
        self.registry = contracts["registry"]
        self.resolver_abi = contracts["resolver"]["abi"]
        self.tld = self.config["tld"]
        self.reverse_suffix = self.config["reverse_suffix"]

    def full_name(self, label: str) -> str:
        return f"{label}.{self.tld}"

    async def owner_of(self, name: str) -> str:
        """Owner of a fully qualified name; the zero address if unregistered"""
        return await self.gateway.call_contract_method(
            self.registry["address"], self.registry["abi"], "owner", [namehash(name)]
        )

    async def forward_resolve(self, label: str) -> str:
        """Owner of ``<label>.<tld>``, returned verbatim from the registry"""
        return await self.owner_of(self.full_name(label))

    async def reverse_resolve(self, address: str):
        """Name claimed by ``address``, or None when there is no reverse record.

        The result is NOT proof of ownership, see verify_reverse_record().
        """
        try:
            return await self._reverse_record(address)
        except NoReverseRecordError:
            return None

    async def _reverse_record(self, address):
        if not is_address(address):
            raise ValueError(f"Invalid address: {address!r}")
        node = namehash(reverse_domain(address, self.reverse_suffix))
        resolver_address = await self.gateway.call_contract_method(
            self.registry["address"], self.registry["abi"], "resolver", [node]
        )
        if is_zero_address(resolver_address):
            raise NoReverseRecordError(address, NoReverseRecordError.NO_RESOLVER)
        name = await self.gateway.call_contract_method(
            resolver_address, self.resolver_abi, "name", [node]
        )
        if not name:
            raise NoReverseRecordError(address, NoReverseRecordError.EMPTY_NAME)
        return name

    async def verify_reverse_record(self, address: str) -> str:
        """Reverse resolve ``address`` and confirm it through forward resolution.

        Returns the name only when its registry owner is ``address``
        (case-insensitive). Raises NoReverseRecordError,
        UnresolvedNameError or OwnershipMismatchError otherwise.
        """
        record = await self._reverse_record(address)
        owner = await self.owner_of(record)
        if is_zero_address(owner):
            raise UnresolvedNameError(record)
        if not same_address(owner, address):
            raise OwnershipMismatchError(address, record, owner)
        return record

    async def classify_address(self, address: str) -> AddressKind:
        """EOA when no bytecode is deployed at ``address``, otherwise CONTRACT.

        Only meaningful for the chain queried: a contract here may not exist
        at the same address on another EVM chain.
        """
        if not is_address(address):
            raise ValueError(f"Invalid address: {address!r}")
        code = await self.gateway.get_bytecode(address)
        return AddressKind.CONTRACT if len(code) > 0 else AddressKind.EOA
