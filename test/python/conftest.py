import copy

import pytest

from cronosid.config import CRONOS_MAINNET, ZERO_ADDRESS
from cronosid.errors import ChainQueryError
from cronosid.namehash import namehash, reverse_domain

# EIP-55 sample addresses
ALICE = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
BOB = "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359"
REVERSE_RESOLVER = "0xdbF03B407c01E7cD3CBea99509d93f8DDDC8C6FB"
MULTISIG = "0xD1220A0cf47c7B9Be7A2E6BA89F429762e7b9aDb"


class FakeGateway:
    """In-memory ChainQueryGateway recording every call"""

    def __init__(self, registry_address):
        self.registry_address = registry_address
        self.owners = {}       # node -> owner
        self.resolvers = {}    # node -> resolver address
        self.names = {}        # (resolver, node) -> name
        self.code = {}         # lowercased address -> bytecode
        self.logs = []
        self.calls = []
        self.fail_on = set()   # method names that raise ChainQueryError

    def register(self, name, owner):
        self.owners[namehash(name)] = owner

    def set_reverse(self, address, name, resolver=REVERSE_RESOLVER):
        node = namehash(reverse_domain(address))
        self.resolvers[node] = resolver
        self.names[(resolver, node)] = name

    async def call_contract_method(self, contract_address, abi, method_name, args):
        self.calls.append((contract_address, method_name, tuple(args)))
        if method_name in self.fail_on:
            raise ChainQueryError(method_name, "connection reset")
        node = args[0]
        if method_name == "owner":
            assert contract_address == self.registry_address
            return self.owners.get(node, ZERO_ADDRESS)
        if method_name == "resolver":
            assert contract_address == self.registry_address
            return self.resolvers.get(node, ZERO_ADDRESS)
        if method_name == "name":
            return self.names.get((contract_address, node), "")
        raise AssertionError(f"unexpected method {method_name}")

    async def get_bytecode(self, address):
        self.calls.append((address, "getCode", ()))
        if "getCode" in self.fail_on:
            raise ChainQueryError("getCode", "timeout")
        return self.code.get(address.lower(), b"")

    async def get_logs(self, from_block, to_block, contract_address, topics):
        self.calls.append((contract_address, "getLogs", (from_block, to_block, tuple(topics))))
        if "getLogs" in self.fail_on:
            raise ChainQueryError("getLogs", "timeout")
        return list(self.logs)


@pytest.fixture
def config():
    return copy.deepcopy(CRONOS_MAINNET)


@pytest.fixture
def gateway(config):
    return FakeGateway(config["contracts"]["registry"]["address"])
