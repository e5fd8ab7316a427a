from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum
from typing import Optional

ZERO = Decimal("0.0")


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"


DISPUTE_TYPES = frozenset({
    TransactionType.DISPUTE,
    TransactionType.RESOLVE,
    TransactionType.CHARGEBACK,
})


class ProcessingResult(Enum):
    APPLIED = "applied"
    SKIPPED_LOCKED = "skipped_locked"
    SKIPPED_NOT_FOUND = "skipped_not_found"
    REJECTED_INSUFFICIENT_FUNDS = "rejected_insufficient_funds"
    SKIPPED_UNSUPPORTED = "skipped_unsupported"


@dataclass(frozen=True)
class Transaction:
    transaction_type: TransactionType
    client_id: int
    transaction_id: int
    amount: Optional[Decimal] = None

    @property
    def is_dispute(self) -> bool:
        """Dispute, resolve and chargeback reference a deposit instead of carrying an amount."""
        return self.transaction_type in DISPUTE_TYPES

    def __repr__(self) -> str:
        return f"Transaction({self.transaction_type.value}, client={self.client_id}, tx={self.transaction_id}, amount={self.amount})"


@dataclass(frozen=True)
class ClientAccount:
    client_id: int
    available: Decimal = ZERO
    held: Decimal = ZERO
    total: Decimal = ZERO
    locked: bool = False

    def can_withdraw(self, amount: Decimal) -> bool:
        # Strict: a withdrawal that would leave exactly zero is refused.
        return self.available - amount > 0

    def apply(self, transaction_type: TransactionType, amount: Decimal) -> "ClientAccount":
        """
        Return the account state after one transaction.

        For dispute-family types `amount` is the amount of the referenced deposit,
        resolved by the caller. The lock flag is not checked here.
        Inapplicable combinations return an equivalent account, never raise.
        """
        available = self.available
        held = self.held
        locked = self.locked

        match transaction_type:
            case TransactionType.DEPOSIT:
                available += amount
            case TransactionType.WITHDRAWAL:
                if self.can_withdraw(amount):
                    available -= amount
            case TransactionType.DISPUTE:
                available -= amount
                held += amount
            case TransactionType.RESOLVE:
                # Releases the whole held balance but only clears the disputed amount.
                available += held
                held -= amount
            case TransactionType.CHARGEBACK:
                held -= amount
                locked = True

        return replace(self, available=available, held=held, total=available + held, locked=locked)


class ProcessingStats:
    """Counters for the outcomes of one replay."""

    def __init__(self):
        self.applied = 0
        self.skipped_locked = 0
        self.skipped_not_found = 0
        self.rejected = 0
        self.unsupported = 0

    def record(self, result: ProcessingResult) -> None:
        if result == ProcessingResult.APPLIED:
            self.applied += 1
        elif result == ProcessingResult.SKIPPED_LOCKED:
            self.skipped_locked += 1
        elif result == ProcessingResult.SKIPPED_NOT_FOUND:
            self.skipped_not_found += 1
        elif result == ProcessingResult.REJECTED_INSUFFICIENT_FUNDS:
            self.rejected += 1
        elif result == ProcessingResult.SKIPPED_UNSUPPORTED:
            self.unsupported += 1

    @property
    def total(self) -> int:
        return self.applied + self.skipped_locked + self.skipped_not_found + self.rejected + self.unsupported

    def summary(self) -> str:
        return (
            f"Processed: {self.total}, "
            f"Applied: {self.applied}, "
            f"Locked: {self.skipped_locked}, "
            f"Not found: {self.skipped_not_found}, "
            f"Rejected: {self.rejected}, "
            f"Unsupported: {self.unsupported}"
        )
