import pytest

from conftest import ALICE, BOB, MULTISIG, REVERSE_RESOLVER
from cronosid.config import ZERO_ADDRESS
from cronosid.errors import (
    ChainQueryError,
    NoReverseRecordError,
    OwnershipMismatchError,
    UnresolvedNameError,
)
from cronosid.namehash import namehash, reverse_domain
from cronosid.resolver import AddressKind, CronosIdResolver, is_zero_address, same_address


@pytest.fixture
def resolver(gateway, config):
    return CronosIdResolver(gateway, config)


def test_zero_address_helpers():
    assert is_zero_address(ZERO_ADDRESS)
    assert is_zero_address("")
    assert not is_zero_address(ALICE)
    assert same_address(ALICE, ALICE.lower())
    assert not same_address(ALICE, BOB)


@pytest.mark.asyncio
async def test_forward_resolve_appends_tld(resolver, gateway, config):
    gateway.register("alice.cro", ALICE)

    assert await resolver.forward_resolve("alice") == ALICE
    assert gateway.calls == [
        (config["contracts"]["registry"]["address"], "owner", (namehash("alice.cro"),)),
    ]


@pytest.mark.asyncio
async def test_forward_resolve_unregistered_returns_zero_address(resolver):
    assert await resolver.forward_resolve("nobody") == ZERO_ADDRESS


@pytest.mark.asyncio
async def test_forward_resolve_normalizes_label(resolver, gateway):
    gateway.register("alice.cro", ALICE)
    assert await resolver.forward_resolve("ALICE") == ALICE


@pytest.mark.asyncio
async def test_forward_resolve_surfaces_chain_errors(resolver, gateway):
    gateway.fail_on.add("owner")
    with pytest.raises(ChainQueryError):
        await resolver.forward_resolve("alice")


@pytest.mark.asyncio
async def test_reverse_resolve_queries_registry_then_resolver(resolver, gateway, config):
    gateway.set_reverse(ALICE, "alice.cro")

    assert await resolver.reverse_resolve(ALICE) == "alice.cro"

    node = namehash(reverse_domain(ALICE))
    assert gateway.calls == [
        (config["contracts"]["registry"]["address"], "resolver", (node,)),
        (REVERSE_RESOLVER, "name", (node,)),
    ]


@pytest.mark.asyncio
async def test_reverse_resolve_does_not_verify(resolver, gateway):
    # The claim is returned as-is; verification is the caller's job
    gateway.set_reverse(ALICE, "bob.cro")
    gateway.register("bob.cro", BOB)

    assert await resolver.reverse_resolve(ALICE) == "bob.cro"
    assert all(method != "owner" for _, method, _ in gateway.calls)


@pytest.mark.asyncio
async def test_reverse_resolve_without_resolver(resolver, gateway):
    assert await resolver.reverse_resolve(ALICE) is None
    assert [method for _, method, _ in gateway.calls] == ["resolver"]


@pytest.mark.asyncio
async def test_reverse_resolve_with_empty_name(resolver, gateway):
    gateway.set_reverse(ALICE, "")
    assert await resolver.reverse_resolve(ALICE) is None


@pytest.mark.asyncio
async def test_reverse_resolve_rejects_bad_address(resolver, gateway):
    with pytest.raises(ValueError):
        await resolver.reverse_resolve("0x1234")
    assert gateway.calls == []


@pytest.mark.asyncio
async def test_reverse_resolve_surfaces_second_hop_errors(resolver, gateway):
    gateway.set_reverse(ALICE, "alice.cro")
    gateway.fail_on.add("name")
    with pytest.raises(ChainQueryError):
        await resolver.reverse_resolve(ALICE)


@pytest.mark.asyncio
async def test_verify_reverse_record_round_trip(resolver, gateway):
    gateway.register("alice.cro", ALICE)
    gateway.set_reverse(ALICE, "alice.cro")

    owner = await resolver.forward_resolve("alice")
    assert await resolver.verify_reverse_record(owner) == "alice.cro"
    assert await resolver.verify_reverse_record(owner.lower()) == "alice.cro"


@pytest.mark.asyncio
async def test_verify_reverse_record_mismatch(resolver, gateway):
    gateway.register("bob.cro", BOB)
    gateway.set_reverse(ALICE, "bob.cro")

    with pytest.raises(OwnershipMismatchError) as exc_info:
        await resolver.verify_reverse_record(ALICE)
    assert exc_info.value.address == ALICE
    assert exc_info.value.name == "bob.cro"
    assert exc_info.value.owner == BOB


@pytest.mark.asyncio
async def test_verify_reverse_record_unregistered_claim(resolver, gateway):
    gateway.set_reverse(ALICE, "ghost.cro")

    with pytest.raises(UnresolvedNameError) as exc_info:
        await resolver.verify_reverse_record(ALICE)
    assert exc_info.value.name == "ghost.cro"


@pytest.mark.asyncio
@pytest.mark.parametrize("name,reason", [
    (None, NoReverseRecordError.NO_RESOLVER),
    ("", NoReverseRecordError.EMPTY_NAME),
])
async def test_verify_reverse_record_missing(resolver, gateway, name, reason):
    if name is not None:
        gateway.set_reverse(ALICE, name)

    with pytest.raises(NoReverseRecordError) as exc_info:
        await resolver.verify_reverse_record(ALICE)
    assert exc_info.value.reason == reason


@pytest.mark.asyncio
async def test_classify_eoa(resolver):
    assert await resolver.classify_address(ALICE) is AddressKind.EOA


@pytest.mark.asyncio
@pytest.mark.parametrize("code", [b"\x00", b"\x60\x80\x60\x40\x52"])
async def test_classify_contract(resolver, gateway, code):
    gateway.code[MULTISIG.lower()] = code
    assert await resolver.classify_address(MULTISIG) is AddressKind.CONTRACT


@pytest.mark.asyncio
async def test_classify_surfaces_chain_errors(resolver, gateway):
    gateway.fail_on.add("getCode")
    with pytest.raises(ChainQueryError):
        await resolver.classify_address(ALICE)


@pytest.mark.asyncio
async def test_retargeted_registry(gateway, config):
    other_registry = "0xD1220A0cf47c7B9Be7A2E6BA89F429762e7b9aDb"
    config["contracts"]["registry"]["address"] = other_registry
    config["tld"] = "test"
    gateway.registry_address = other_registry
    gateway.register("alice.test", ALICE)

    resolver = CronosIdResolver(gateway, config)
    assert await resolver.forward_resolve("alice") == ALICE
    assert gateway.calls[0][0] == other_registry


@pytest.mark.asyncio
async def test_classify_rejects_bad_address(resolver, gateway):
    with pytest.raises(ValueError):
        await resolver.classify_address("0x1234")
    assert gateway.calls == []
