"""
Deployment configuration for the Cronos ID naming system.

Contract addresses and ABI fragments are kept as data so the resolver can be
pointed at another registry deployment through a JSON file or environment
variables instead of code changes.
"""

import copy
import json
import os
from pathlib import Path

from dotenv import load_dotenv
from eth_utils import is_address, to_checksum_address

from .errors import ConfigError

# Registry contract: node -> owner, node -> resolver
REGISTRY_ABI = [
    {
        "constant": True,
        "inputs": [{"internalType": "bytes32", "name": "node", "type": "bytes32"}],
        "name": "resolver",
        "outputs": [{"internalType": "address", "name": "", "type": "address"}],
        "payable": False,
        "stateMutability": "view",
        "type": "function"
    },
    {
        "constant": True,
        "inputs": [{"internalType": "bytes32", "name": "node", "type": "bytes32"}],
        "name": "owner",
        "outputs": [{"internalType": "address", "name": "", "type": "address"}],
        "payable": False,
        "stateMutability": "view",
        "type": "function"
    }
]

# Resolver contract: node -> name (reverse records)
RESOLVER_ABI = [
    {
        "constant": True,
        "inputs": [{"internalType": "bytes32", "name": "", "type": "bytes32"}],
        "name": "name",
        "outputs": [{"internalType": "string", "name": "", "type": "string"}],
        "payable": False,
        "stateMutability": "view",
        "type": "function"
    }
]

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

CRONOS_MAINNET = {
    "rpc_url": "https://evm.cronos.org",
    "chain_id": 25,
    "rpc_timeout": 30,
    "tld": "cro",
    "reverse_suffix": "addr.reverse",
    "contracts": {
        "registry": {
            "address": "0x7F4C61116729d5b27E5f180062Fdfbf32E9283E5",
            "abi": REGISTRY_ABI
        },
        # Resolver addresses come from the registry at query time
        "resolver": {
            "address": None,
            "abi": RESOLVER_ABI
        },
        # Storefront contract that emits one event per minted domain
        "minting": {
            "address": "0xAfF2b5CF1950E8Fb22907CcD643728a5Dc75278B",
            "abi": [],
            "event_topic": "0x69e37f151eb98a09618ddaa80c8cfaf1ce5996867c489f45b555b412271ebf27"
        }
    },
    "mint_scan": {
        "start_block": 4932153,
        "window": 2000,
        "name_word": 5
    }
}

# Environment variable -> (section path, cast)
ENV_OVERRIDES = {
    "CRONOS_RPC_URL": (("rpc_url",), str),
    "CRONOS_RPC_TIMEOUT": (("rpc_timeout",), float),
    "CRONOSID_REGISTRY_ADDRESS": (("contracts", "registry", "address"), str),
    "CRONOSID_MINTING_ADDRESS": (("contracts", "minting", "address"), str),
}


def _merge(base, overrides):
    """Recursively merge ``overrides`` into ``base`` in place"""
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def _set_path(config, path, value):
    target = config
    for key in path[:-1]:
        target = target.setdefault(key, {})
    target[path[-1]] = value


def _checksum_contracts(config):
    for role, contract in config.get("contracts", {}).items():
        address = contract.get("address")
        if address is None:
            continue
        if not is_address(address):
            raise ConfigError(f"Invalid {role} contract address: {address!r}")
        contract["address"] = to_checksum_address(address)


def load_config(path=None, environ=None):
    """Load the deployment configuration.

    Starts from CRONOS_MAINNET, applies the JSON file at ``path`` (or
    $CRONOSID_CONFIG) and then the environment overrides. A ``.env`` file in
    the working directory is loaded first when ``environ`` is not given.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    config = copy.deepcopy(CRONOS_MAINNET)

    path = path or environ.get("CRONOSID_CONFIG")
    if path:
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")
        try:
            with open(config_path, 'r') as f:
                _merge(config, json.load(f))
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {config_path}: {e}") from e

    for name, (key_path, cast) in ENV_OVERRIDES.items():
        if environ.get(name):
            try:
                _set_path(config, key_path, cast(environ[name]))
            except ValueError as e:
                raise ConfigError(f"Invalid value for {name}: {environ[name]!r}") from e

    _checksum_contracts(config)
    return config
