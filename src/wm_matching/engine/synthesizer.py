"""Counter-order synthesis: build the order that lets ``account_address`` fill ``order``.

The counter-order is never signed. The exchange authenticates it through the
calling account (``msg.sender == maker``), so it only needs a correct hash.
"""
import logging

from src.wm_common.constants import (
    DEFAULT_FEE_RECIPIENT,
    DEFAULT_MATCH_WINDOW_SECONDS,
    NULL_ADDRESS,
)
from src.wm_common.encoding import normalize_address
from src.wm_common.enums import OrderSide, SaleKind
from src.wm_common.errors import ExpiredOrderError, InvalidFieldError, UnsupportedSaleKindError
from src.wm_common.salt import generate_salt
from src.wm_matching.engine.calldata import apply_replacement_pattern, guarded_replace
from src.wm_order.domain.asset_schemas import (
    CallSpec,
    encode_buy,
    encode_sell,
    require_single_asset,
)
from src.wm_order.domain.hasher import get_order_hash
from src.wm_order.domain.models import UnhashedOrder, UnsignedOrder, with_hash
from src.wm_pricing.domain.price import final_price

logger = logging.getLogger(__name__)


def _counter_call(order: UnhashedOrder, account: str) -> CallSpec:
    asset = require_single_asset(order.metadata)
    if order.side is OrderSide.SELL:
        return encode_buy(asset, account)
    if order.side is OrderSide.BUY:
        return encode_sell(asset, account)
    raise InvalidFieldError("side", f"{order.side!r} is not an OrderSide")


def _counter_fee_recipient(order: UnhashedOrder, fee_recipient: str) -> str:
    # exactly one side of a match names the fee recipient
    if order.fee_recipient == NULL_ADDRESS:
        return normalize_address("fee_recipient", fee_recipient)
    return NULL_ADDRESS


def make_matching_order(
    order: UnhashedOrder,
    account_address: str,
    *,
    at_time: int,
    fee_recipient: str = DEFAULT_FEE_RECIPIENT,
    match_window: int = DEFAULT_MATCH_WINDOW_SECONDS,
    salt: int | None = None,
) -> UnsignedOrder:
    """Complementary order for ``account_address`` to fill ``order`` at ``at_time``.

    Trade terms (exchange, fee method and fees, sale kind, target, call type,
    payment token, auction extra) are carried over and the side is flipped.
    The account becomes maker and the original maker becomes taker.
    Auction orders are priced at their current settled price so the
    counter-order reflects the live price, not the listing price.

    The account's call is merged into the original calldata under the
    original replacement pattern, so every byte the original pins (selector,
    sender, token id) is enforced and the result is fully concrete.

    The returned order's ``hash`` is its own canonical hash, never the
    original's.
    """
    if not isinstance(order.sale_kind, SaleKind):
        raise UnsupportedSaleKindError(order.sale_kind)
    if order.is_expired(at_time):
        raise ExpiredOrderError(order.expiration_time, at_time)

    account = normalize_address("account_address", account_address)
    call = _counter_call(order, account)
    if call.target != order.target:
        raise InvalidFieldError(
            "target", f"order targets {order.target} but its asset lives at {call.target}"
        )

    # fill our open slot from the original, then let the original's pattern
    # decide which of our bytes it accepts
    proposed = apply_replacement_pattern(call.calldata, order.calldata, call.replacement_pattern)
    calldata = guarded_replace(order.calldata, proposed, order.replacement_pattern)

    if order.never_expires:
        expiration_time = at_time + match_window
    else:
        expiration_time = order.expiration_time

    matching = UnhashedOrder(
        exchange=order.exchange,
        maker=account,
        taker=order.maker,
        fee_recipient=_counter_fee_recipient(order, fee_recipient),
        maker_relayer_fee=order.maker_relayer_fee,
        taker_relayer_fee=order.taker_relayer_fee,
        maker_protocol_fee=order.maker_protocol_fee,
        taker_protocol_fee=order.taker_protocol_fee,
        fee_method=order.fee_method,
        payment_token=order.payment_token,
        base_price=final_price(order, at_time),
        extra=order.extra,
        side=order.side.opposite,
        sale_kind=order.sale_kind,
        target=order.target,
        how_to_call=order.how_to_call,
        calldata=calldata,
        replacement_pattern=call.replacement_pattern,
        static_target=NULL_ADDRESS,
        static_extradata=b"",
        listing_time=at_time,
        expiration_time=expiration_time,
        salt=generate_salt() if salt is None else salt,
        metadata=order.metadata,
    )
    matching_hash = get_order_hash(matching)
    logger.info(
        "Counter-order %s (%s) built for %s against maker %s",
        matching_hash,
        matching.side.name,
        account,
        order.maker,
    )
    return with_hash(matching, matching_hash)
