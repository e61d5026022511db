"""Unified error codes and custom exceptions.

Error code ranges:
  41xx: Order fields / lifecycle
  42xx: Matching

Every error here is a recoverable, caller-facing condition. Hash, calldata
and signature failures are security signals and are always propagated.
"""

from src.wm_common.enums import MatchFailureReason


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 41xx: Order ---

class InvalidFieldError(AppError):
    def __init__(self, field: str, detail: str) -> None:
        self.field = field
        super().__init__(4101, f"Invalid order field {field}: {detail}", 422)


class CalldataMismatchError(AppError):
    def __init__(self, offset: int, expected: int, actual: int) -> None:
        self.offset = offset
        self.expected = expected
        self.actual = actual
        super().__init__(
            4102,
            f"Calldata mismatch at byte {offset}: fixed byte 0x{expected:02x}, got 0x{actual:02x}",
            422,
        )


class UnsupportedSaleKindError(AppError):
    def __init__(self, sale_kind: object) -> None:
        self.sale_kind = sale_kind
        super().__init__(4103, f"Unsupported sale kind: {sale_kind!r}", 422)


class ExpiredOrderError(AppError):
    def __init__(self, expiration_time: int, at_time: int) -> None:
        self.expiration_time = expiration_time
        self.at_time = at_time
        super().__init__(
            4104, f"Order expired at {expiration_time} (now {at_time})", 422
        )


class SignatureInvalidError(AppError):
    def __init__(self, expected_signer: str, detail: str) -> None:
        self.expected_signer = expected_signer
        super().__init__(
            4105, f"Signature does not verify against {expected_signer}: {detail}", 401
        )


# --- 42xx: Matching ---

class MatchError(AppError):
    def __init__(self, reason: MatchFailureReason, detail: str) -> None:
        self.reason = reason
        super().__init__(4201, f"{reason.value}: {detail}", 422)

