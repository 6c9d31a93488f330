#!/usr/bin/env python3
"""
🔍 Cronos ID lookup tool

    cronosid owner web3developer
    cronosid name 0x1234...
    cronosid kind 0x1234...
    cronosid mints --from-block 4932153 --blocks 2000
    cronosid tour
"""

import argparse
import asyncio
import logging
import sys

from .config import load_config
from .errors import (
    ChainQueryError,
    ConfigError,
    NoReverseRecordError,
    OwnershipMismatchError,
    UnresolvedNameError,
)
from .gateway import Web3Gateway
from .mints import list_domains_minted
from .resolver import AddressKind, CronosIdResolver, is_zero_address

EXIT_OK = 0
EXIT_UNVERIFIED = 1
EXIT_CHAIN_ERROR = 2

DEFAULT_TOUR_LABEL = "web3developer"


class Colors:
    HEADER = '\033[95m'
    OKCYAN = '\033[96m'
    OKGREEN = '\033[92m'
    WARNING = '\033[93m'
    FAIL = '\033[91m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'


def print_header(text):
    print(f"\n{Colors.HEADER}{Colors.BOLD}{'='*60}{Colors.ENDC}")
    print(f"{Colors.HEADER}{Colors.BOLD}{text}{Colors.ENDC}")
    print(f"{Colors.HEADER}{Colors.BOLD}{'='*60}{Colors.ENDC}\n")


def print_success(text):
    print(f"{Colors.OKGREEN}✅ {text}{Colors.ENDC}")


def print_warning(text):
    print(f"{Colors.WARNING}⚠️  {text}{Colors.ENDC}")


def print_error(text):
    print(f"{Colors.FAIL}❌ {text}{Colors.ENDC}")


def print_info(text):
    print(f"{Colors.OKCYAN}🔍 {text}{Colors.ENDC}")


async def cmd_owner(resolver, args):
    name = resolver.full_name(args.label)
    owner = await resolver.forward_resolve(args.label)
    if is_zero_address(owner):
        print_warning(f"{name} is not registered")
    else:
        print_success(f"The owner of {name} is {owner}")
    return EXIT_OK


async def cmd_name(resolver, args):
    try:
        name = await resolver.verify_reverse_record(args.address)
    except NoReverseRecordError as e:
        print_warning(f"{args.address} has no reverse record ({e.reason})")
        return EXIT_UNVERIFIED
    except UnresolvedNameError as e:
        print_error(f"{args.address} claims {e.name}, which is not registered")
        return EXIT_UNVERIFIED
    except OwnershipMismatchError as e:
        print_error(f"{e.address} claims {e.name} but its owner is {e.owner}")
        return EXIT_UNVERIFIED
    print_success(f"{args.address} is verified as {name}")
    return EXIT_OK


def describe_kind(kind):
    if kind is AddressKind.CONTRACT:
        return "This is a smart contract address. Beware as it may not exist on every EVM chain."
    return "This is an EOA address, its owner controls the same address on every EVM chain."


async def cmd_kind(resolver, args):
    kind = await resolver.classify_address(args.address)
    if kind is AddressKind.CONTRACT:
        print_warning(describe_kind(kind))
    else:
        print_success(describe_kind(kind))
    return EXIT_OK


async def cmd_mints(resolver, args):
    minted = await list_domains_minted(resolver.gateway, resolver.config, args.from_block, args.blocks)
    if not minted:
        print_info("No domains minted in this block range")
    for domain in minted:
        print(f"At block {domain.block_number} this domain was minted: {domain.name}")
    return EXIT_OK


async def cmd_tour(resolver, args):
    print_header("Cronos ID tour")

    print_info("Domains minted in the default block range")
    await cmd_mints(resolver, argparse.Namespace(from_block=None, blocks=None))

    name = resolver.full_name(args.label)
    print_info(f"Finding the owner of {name}")
    owner = await resolver.forward_resolve(args.label)
    if is_zero_address(owner):
        print_warning(f"{name} is not registered, nothing more to show")
        return EXIT_OK
    print(f"The owner of {name} is {owner}")

    print_info("Is this an EOA or a smart contract?")
    await cmd_kind(resolver, argparse.Namespace(address=owner))

    print_info(f"Reverse resolving {owner}")
    claimed = await resolver.reverse_resolve(owner)
    if claimed is None:
        print_warning(f"{owner} has no reverse record")
        return EXIT_OK
    print(f"The reverse record claims {claimed}")

    print_info("Reverse resolution alone is not proof, checking the forward record")
    return await cmd_name(resolver, argparse.Namespace(address=owner))


def build_parser():
    parser = argparse.ArgumentParser(prog="cronosid", description="Resolve Cronos ID (.cro) domains")
    parser.add_argument("--rpc-url", help="JSON-RPC endpoint (default: Cronos mainnet)")
    parser.add_argument("--config", help="JSON file overriding the deployment configuration")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every RPC call")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("owner", help="Forward resolve <label>.cro to its owner")
    p.add_argument("label")
    p.set_defaults(handler=cmd_owner)

    p = sub.add_parser("name", help="Reverse resolve an address and verify the answer")
    p.add_argument("address")
    p.set_defaults(handler=cmd_name)

    p = sub.add_parser("kind", help="Tell an EOA from a smart contract")
    p.add_argument("address")
    p.set_defaults(handler=cmd_kind)

    p = sub.add_parser("mints", help="List domains minted in a block range")
    p.add_argument("--from-block", type=int, help="First block to scan")
    p.add_argument("--blocks", type=int, help="Number of blocks to scan")
    p.set_defaults(handler=cmd_mints)

    p = sub.add_parser("tour", help="Walk through every lookup for one domain")
    p.add_argument("label", nargs="?", default=DEFAULT_TOUR_LABEL)
    p.set_defaults(handler=cmd_tour)

    return parser


def main(argv=None, gateway=None):
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print_error(str(e))
        return EXIT_CHAIN_ERROR
    if args.rpc_url:
        config["rpc_url"] = args.rpc_url

    resolver = CronosIdResolver(gateway or Web3Gateway.from_config(config), config)
    try:
        return asyncio.run(args.handler(resolver, args))
    except ChainQueryError as e:
        print_error(str(e))
        return EXIT_CHAIN_ERROR
    except ValueError as e:
        # bad address or a name rejected by normalization
        print_error(str(e))
        return EXIT_UNVERIFIED


if __name__ == "__main__":
    sys.exit(main())
