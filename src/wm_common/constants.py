"""Protocol constants shared across the engine.

Addresses are stored lowercase; comparisons are always done on the
lowercase form.
"""

NULL_ADDRESS = "0x0000000000000000000000000000000000000000"
NULL_BLOCK_HASH = "0x" + "00" * 32

# Wyvern v2 exchange deployments
WYVERN_EXCHANGE_ADDRESS_MAINNET = "0x7be8076f4ea4a4ad08075c2508e481d6c946d12b"
WYVERN_EXCHANGE_ADDRESS_RINKEBY = "0x5206e78b21ce315ce284fb24cf05e0585a93b1d9"

EXCHANGE_ADDRESSES: dict[str, str] = {
    "main": WYVERN_EXCHANGE_ADDRESS_MAINNET,
    "rinkeby": WYVERN_EXCHANGE_ADDRESS_RINKEBY,
}

# Relayer fee recipient used when the counter-order must name one
DEFAULT_FEE_RECIPIENT = "0x5b3256965e7c3cf26e11fcaf296dfc8807c01073"

INVERSE_BASIS_POINT = 10_000

# Mask byte marking a calldata byte the counterparty may replace
REPLACEABLE_BYTE = 0xFF
FIXED_BYTE = 0x00

MAX_UINT256 = 2**256 - 1
MAX_UINT8 = 2**8 - 1

# Lifetime given to a counter-order when the order it fills never expires
DEFAULT_MATCH_WINDOW_SECONDS = 24 * 60 * 60
