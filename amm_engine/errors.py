"""Engine error classes.

Every failure raised by the engine derives from AmmError and belongs to one of
six categories. The ``reason`` attribute carries the short, stable message an
on-chain deployment of this engine reverts with, so callers can match on it.
"""


class AmmError(Exception):
    """Base error for engine operations."""

    reason: str = "AMM error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail
        super().__init__(self.reason if detail is None else f"{self.reason}: {detail}")


# =============================================================================
# Categories
# =============================================================================


class ValidationError(AmmError):
    """Malformed call arguments (zero amounts, bad path, identical tokens)."""

    reason = "Invalid arguments"


class StateError(AmmError):
    """Operation needs a pool state that does not hold (e.g. empty pool)."""

    reason = "Invalid pool state"


class ConstraintError(AmmError):
    """A computed amount violates a caller-supplied bound."""

    reason = "Constraint violated"


class TemporalError(AmmError):
    """The caller's deadline has passed."""

    reason = "Deadline exceeded"


class ConcurrencyError(AmmError):
    """A guarded operation was entered while the guard was held."""

    reason = "Concurrent call rejected"


class TransferError(AmmError):
    """A token transfer, share mint or share burn was rejected."""

    reason = "Transfer rejected"


# =============================================================================
# ValidationError
# =============================================================================


class TokensMustDiffer(ValidationError):
    reason = "Tokens must differ"


class ZeroAmountIn(ValidationError):
    reason = "Zero amountIn"


class ZeroAmountOutMin(ValidationError):
    reason = "Zero amountOutMin"


class OnlyOnePairSwapsAllowed(ValidationError):
    reason = "Only 1-pair swaps allowed"


class ZeroLiquidity(ValidationError):
    reason = "Zero liquidity"


class AmountADesiredTooLow(ValidationError):
    """amountADesired is below amountAMin."""

    reason = "amountADesired too low"


class AmountBDesiredTooLow(ValidationError):
    """amountBDesired is below amountBMin."""

    reason = "amountBDesired too low"


class InvalidAmount(ValidationError):
    """Amount is not an int in the uint256 range."""

    reason = "Invalid amount"


class InvalidAddress(ValidationError):
    reason = "Invalid address"


# =============================================================================
# StateError
# =============================================================================


class EmptyReserves(StateError):
    reason = "Empty reserves"


class InsufficientReserves(StateError):
    reason = "Insufficient reserves"


# =============================================================================
# ConstraintError
# =============================================================================


class AmountsDoNotMeetConstraints(ConstraintError):
    reason = "Amounts do not meet constraints"


class AmountATooLow(ConstraintError):
    reason = "amountA too low"


class AmountBTooLow(ConstraintError):
    reason = "amountB too low"


class SlippageExceeded(ConstraintError):
    reason = "Slippage exceeded"


class LiquidityTooLow(ConstraintError):
    reason = "Liquidity too low"


# =============================================================================
# TemporalError / ConcurrencyError
# =============================================================================


class TransactionExpired(TemporalError):
    reason = "Transaction expired"


class NoReentrancy(ConcurrencyError):
    reason = "No reentrancy"


# =============================================================================
# TransferError
# =============================================================================


class InsufficientBalance(TransferError):
    reason = "Insufficient balance"


class InsufficientAllowance(TransferError):
    reason = "Insufficient allowance"


class InsufficientShares(TransferError):
    """Share burn or share transfer exceeds the holder's balance."""

    reason = "Insufficient liquidity balance"


__all__ = [
    "AmmError",
    "ValidationError",
    "StateError",
    "ConstraintError",
    "TemporalError",
    "ConcurrencyError",
    "TransferError",
    "TokensMustDiffer",
    "ZeroAmountIn",
    "ZeroAmountOutMin",
    "OnlyOnePairSwapsAllowed",
    "ZeroLiquidity",
    "AmountADesiredTooLow",
    "AmountBDesiredTooLow",
    "InvalidAmount",
    "InvalidAddress",
    "EmptyReserves",
    "InsufficientReserves",
    "AmountsDoNotMeetConstraints",
    "AmountATooLow",
    "AmountBTooLow",
    "SlippageExceeded",
    "LiquidityTooLow",
    "TransactionExpired",
    "NoReentrancy",
    "InsufficientBalance",
    "InsufficientAllowance",
    "InsufficientShares",
]
