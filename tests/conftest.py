"""Shared test fixtures."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from eth_account import Account
from eth_account.signers.local import LocalAccount
from httpx import ASGITransport, AsyncClient

from src.main import app
from src.wm_account.domain.signer import LocalAccountSigner
from src.wm_common.constants import (
    DEFAULT_FEE_RECIPIENT,
    NULL_ADDRESS,
    WYVERN_EXCHANGE_ADDRESS_MAINNET,
)
from src.wm_common.enums import FeeMethod, HowToCall, OrderSide, SaleKind
from src.wm_order.application.factory import hash_order
from src.wm_order.domain.asset_schemas import encode_buy, encode_sell
from src.wm_order.domain.models import (
    Order,
    OrderMetadata,
    UnhashedOrder,
    WyvernAsset,
    with_signature,
)

FIXTURES_DIR = Path(__file__).parent / "fixtures"

# Well-known development keys; never used outside tests
SELLER_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
BUYER_KEY = "0x59c6995e998f97a5a0044966f0945389dc9e86dae88c7a8412f4603b6b78690d"

KITTIES = "0x06012c8cf97bead5deae237070f9587f8e7a266d"
LISTED_AT = 1_600_000_000


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client for testing FastAPI endpoints."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def wire_orders() -> list[dict[str, Any]]:
    """Mainnet-shaped OrderJSON payloads with their expected hashes."""
    with open(FIXTURES_DIR / "orders.json") as f:
        return json.load(f)


@pytest.fixture
def seller() -> LocalAccount:
    return Account.from_key(SELLER_KEY)


@pytest.fixture
def buyer() -> LocalAccount:
    return Account.from_key(BUYER_KEY)


@pytest.fixture
def signer() -> LocalAccountSigner:
    return LocalAccountSigner(SELLER_KEY, BUYER_KEY)


def _base_fields(maker: str, asset: WyvernAsset) -> dict[str, Any]:
    return {
        "exchange": WYVERN_EXCHANGE_ADDRESS_MAINNET,
        "maker": maker,
        "taker": NULL_ADDRESS,
        "fee_recipient": DEFAULT_FEE_RECIPIENT,
        "maker_relayer_fee": 250,
        "taker_relayer_fee": 0,
        "maker_protocol_fee": 0,
        "taker_protocol_fee": 0,
        "fee_method": FeeMethod.SPLIT_FEE,
        "payment_token": NULL_ADDRESS,
        "base_price": 10**18,
        "extra": 0,
        "sale_kind": SaleKind.FIXED_PRICE,
        "target": asset.address,
        "how_to_call": HowToCall.CALL,
        "static_target": NULL_ADDRESS,
        "static_extradata": b"",
        "listing_time": LISTED_AT,
        "expiration_time": 0,
        "salt": 12345,
        "metadata": OrderMetadata(asset=asset),
    }


@pytest.fixture
def make_sell_order(seller: LocalAccount) -> Callable[..., UnhashedOrder]:
    """Fixed-price ERC721 sell of token 1 by ``seller``; keyword overrides any field."""

    def _make(token_id: int = 1, **overrides: Any) -> UnhashedOrder:
        maker = overrides.pop("maker", seller.address.lower())
        asset = WyvernAsset(id=str(token_id), address=KITTIES)
        call = encode_sell(asset, maker)
        fields = _base_fields(maker, asset)
        fields.update(
            side=OrderSide.SELL,
            calldata=call.calldata,
            replacement_pattern=call.replacement_pattern,
        )
        fields.update(overrides)
        return UnhashedOrder(**fields)

    return _make


@pytest.fixture
def make_buy_order(buyer: LocalAccount) -> Callable[..., UnhashedOrder]:
    """Fixed-price ERC721 bid on token 1 by ``buyer``, no fee recipient."""

    def _make(token_id: int = 1, **overrides: Any) -> UnhashedOrder:
        maker = overrides.pop("maker", buyer.address.lower())
        asset = WyvernAsset(id=str(token_id), address=KITTIES)
        call = encode_buy(asset, maker)
        fields = _base_fields(maker, asset)
        fields.update(
            side=OrderSide.BUY,
            fee_recipient=NULL_ADDRESS,
            calldata=call.calldata,
            replacement_pattern=call.replacement_pattern,
        )
        fields.update(overrides)
        return UnhashedOrder(**fields)

    return _make


@pytest.fixture
def sign(signer: LocalAccountSigner) -> Callable[[UnhashedOrder], Order]:
    """Hash and sign an order with its maker's key."""

    def _sign(order: UnhashedOrder) -> Order:
        hashed = hash_order(order)
        return with_signature(hashed, signer.sign_hash(hashed.hash, hashed.maker))

    return _sign
