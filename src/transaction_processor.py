import logging

from models import Transaction, TransactionType, ClientAccount, ProcessingResult
from ledger import Ledger, DepositIndex

logger = logging.getLogger(__name__)


class TransactionProcessor:
    """
    Applies transactions to a ledger one at a time.
    Returns ProcessingResult to report what happened; never raises for
    inapplicable transactions, they are skipped.
    """

    def __init__(self, ledger: Ledger, deposits: DepositIndex):
        self._ledger = ledger
        self._deposits = deposits

    def process_transaction(self, transaction: Transaction) -> ProcessingResult:
        """
        Process a single transaction.

        Returns:
            APPLIED: Account transition was applied
            SKIPPED_LOCKED: Account is locked, nothing changed
            SKIPPED_NOT_FOUND: Referenced deposit does not exist, nothing changed
            REJECTED_INSUFFICIENT_FUNDS: Withdrawal refused, nothing changed
            SKIPPED_UNSUPPORTED: Transaction type has no handler, nothing changed
        """
        account = self._ledger.get_or_create_account(transaction.client_id)

        if account.locked:
            logger.debug(f"Tx {transaction.transaction_id}: client {transaction.client_id} is locked, skipping")
            return ProcessingResult.SKIPPED_LOCKED

        if transaction.is_dispute:
            return self._handle_dispute(account, transaction)

        match transaction.transaction_type:
            case TransactionType.DEPOSIT:
                return self._handle_deposit(account, transaction)
            case TransactionType.WITHDRAWAL:
                return self._handle_withdrawal(account, transaction)
            case _:
                logger.warning(f"Tx {transaction.transaction_id}: unsupported type {transaction.transaction_type!r}, skipping")
                return ProcessingResult.SKIPPED_UNSUPPORTED

    def _handle_deposit(self, account: ClientAccount, transaction: Transaction) -> ProcessingResult:
        self._ledger.store_account(account.apply(TransactionType.DEPOSIT, transaction.amount))
        return ProcessingResult.APPLIED

    def _handle_withdrawal(self, account: ClientAccount, transaction: Transaction) -> ProcessingResult:
        if not account.can_withdraw(transaction.amount):
            logger.debug(
                f"Withdrawal tx {transaction.transaction_id}: {transaction.amount} exceeds or drains "
                f"available {account.available} of client {account.client_id}"
            )
            return ProcessingResult.REJECTED_INSUFFICIENT_FUNDS

        self._ledger.store_account(account.apply(TransactionType.WITHDRAWAL, transaction.amount))
        return ProcessingResult.APPLIED

    def _handle_dispute(self, account: ClientAccount, transaction: Transaction) -> ProcessingResult:
        amount = self._deposits.get_amount(transaction.transaction_id)

        if amount is None:
            logger.debug(
                f"{transaction.transaction_type.value.capitalize()} for tx {transaction.transaction_id}: "
                f"no deposit with that id, skipping"
            )
            return ProcessingResult.SKIPPED_NOT_FOUND

        self._ledger.store_account(account.apply(transaction.transaction_type, amount))
        return ProcessingResult.APPLIED
