from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from models import Transaction, TransactionType, ClientAccount


class Ledger:
    """
    Client accounts for one replay.
    Accounts are created lazily and kept in first-appearance order,
    which is the order of the final report.
    """

    def __init__(self):
        self._accounts: Dict[int, ClientAccount] = {}

    def get_or_create_account(self, client_id: int) -> ClientAccount:
        """Get existing account or create new one."""
        if client_id not in self._accounts:
            self._accounts[client_id] = ClientAccount(client_id=client_id)
        return self._accounts[client_id]

    def store_account(self, account: ClientAccount) -> None:
        """Replace the stored state of an existing client; position is kept."""
        self._accounts[account.client_id] = account

    def get_all_accounts(self) -> List[ClientAccount]:
        """Return all accounts in insertion order (for final output)."""
        return list(self._accounts.values())

    def __len__(self) -> int:
        return len(self._accounts)


class DepositIndex:
    """
    Read-only map of deposit tx id to its amount.
    Built once before the pass so dispute lookups stay constant time.
    """

    def __init__(self, transactions: Iterable[Transaction]):
        self._amounts: Dict[int, Decimal] = {}
        for transaction in transactions:
            if transaction.transaction_type != TransactionType.DEPOSIT:
                continue
            # First deposit in replay order wins on duplicate ids
            self._amounts.setdefault(transaction.transaction_id, transaction.amount)

    def get_amount(self, transaction_id: int) -> Optional[Decimal]:
        """Amount of the deposit with this id, None if there is none."""
        return self._amounts.get(transaction_id)

    def __contains__(self, transaction_id: int) -> bool:
        return transaction_id in self._amounts

    def __len__(self) -> int:
        return len(self._amounts)
