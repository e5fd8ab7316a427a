import logging
from typing import Iterable, List

from models import Transaction, ClientAccount, ProcessingStats
from ledger import Ledger, DepositIndex
from reader import read_transactions
from transaction_processor import TransactionProcessor

logger = logging.getLogger(__name__)


class ReplayEngine:
    """
    Replays a transaction set against per-client accounts in one pass.
    Transactions are applied in tx id order regardless of input order.
    """

    def __init__(self):
        self.stats = ProcessingStats()

    def process_file(self, filepath: str) -> List[ClientAccount]:
        """Process CSV file and return final account states."""
        transactions = read_transactions(filepath)
        logger.info(f"Read {len(transactions)} transactions from {filepath}")
        return self.replay(transactions)

    def replay(self, transactions: Iterable[Transaction]) -> List[ClientAccount]:
        """Return the final accounts in order of each client's first appearance."""
        ordered = sorted(transactions, key=lambda transaction: transaction.transaction_id)

        ledger = Ledger()
        processor = TransactionProcessor(ledger, DepositIndex(ordered))
        self.stats = ProcessingStats()

        for transaction in ordered:
            self.stats.record(processor.process_transaction(transaction))

        logger.info(self.stats.summary())
        return ledger.get_all_accounts()
