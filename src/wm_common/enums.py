"""Protocol enums: values must match the exchange contract's uint8 encoding exactly.

Every enum is a closed set. Consumers match exhaustively and treat any other
value as an error rather than falling through.
"""

from enum import Enum, IntEnum


class OrderSide(IntEnum):
    BUY = 0
    SELL = 1

    @property
    def opposite(self) -> "OrderSide":
        return OrderSide.SELL if self is OrderSide.BUY else OrderSide.BUY


class SaleKind(IntEnum):
    """Fixed price or Dutch auction.

    Wyvern's own client library numbers these differently (it has an
    EnglishAuction at 1); the exchange contract only knows these two.
    """
    FIXED_PRICE = 0
    DUTCH_AUCTION = 1


class FeeMethod(IntEnum):
    """PROTOCOL_FEE: maker fee charged to the seller, taker fee to the buyer.
    SPLIT_FEE: maker fees come out of the maker's proceeds, taker fees are
    paid on top by the taker.
    """
    PROTOCOL_FEE = 0
    SPLIT_FEE = 1


class HowToCall(IntEnum):
    CALL = 0
    DELEGATE_CALL = 1


class WyvernSchemaName(str, Enum):
    ERC721 = "ERC721"


class NetworkName(str, Enum):
    MAIN = "main"
    RINKEBY = "rinkeby"


class MatchFailureReason(str, Enum):
    """Why a (buy, sell) pair cannot be matched. Listed in check order."""
    SIDE_MISMATCH = "SIDE_MISMATCH"
    EXCHANGE_MISMATCH = "EXCHANGE_MISMATCH"
    PAYMENT_TOKEN_MISMATCH = "PAYMENT_TOKEN_MISMATCH"
    FEE_METHOD_MISMATCH = "FEE_METHOD_MISMATCH"
    TARGET_MISMATCH = "TARGET_MISMATCH"
    HOW_TO_CALL_MISMATCH = "HOW_TO_CALL_MISMATCH"
    TAKER_RESTRICTED = "TAKER_RESTRICTED"
    FEE_RECIPIENT_CONFLICT = "FEE_RECIPIENT_CONFLICT"
    CALLDATA_MISMATCH = "CALLDATA_MISMATCH"
    ORDER_EXPIRED = "ORDER_EXPIRED"
    NOT_YET_LISTED = "NOT_YET_LISTED"
    PRICE_NOT_CROSSED = "PRICE_NOT_CROSSED"
    HASH_MISMATCH = "HASH_MISMATCH"
    SIGNATURE_INVALID = "SIGNATURE_INVALID"
