import csv
import logging
from decimal import Decimal, InvalidOperation, getcontext
from typing import Dict, Iterable, List, Optional

from models import Transaction, TransactionType

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("type", "client", "tx")
AMOUNT_COLUMN = "amount"


class TransactionParseError(ValueError):
    """A row of the transaction CSV could not be turned into a Transaction."""

    def __init__(self, line_number: Optional[int], message: str):
        self.line_number = line_number
        if line_number is None:
            super().__init__(message)
        else:
            super().__init__(f"line {line_number}: {message}")


def read_transactions(filepath: str) -> List[Transaction]:
    """Read a transaction CSV file. Raises OSError or TransactionParseError."""
    # utf-8-sig drops the BOM spreadsheet exports put in front of the header
    with open(filepath, "r", newline="", encoding="utf-8-sig") as f:
        try:
            return parse_transactions(f)
        except UnicodeDecodeError as e:
            raise TransactionParseError(None, f"file is not valid UTF-8: {e}") from e


def parse_transactions(lines: Iterable[str]) -> List[Transaction]:
    """
    Parse CSV lines with a `type, client, tx, amount` header into transactions.

    Fields are trimmed and the amount column may be empty or missing entirely
    for dispute, resolve and chargeback rows. Order is kept as read; sorting is
    the engine's job. The first malformed row aborts parsing.
    """
    reader = csv.reader(lines)
    header = next(reader, None)
    if header is None:
        return []

    columns = _column_positions(header)
    transactions = []
    for row in reader:
        if not any(field.strip() for field in row):
            continue
        transactions.append(_parse_row(row, columns, reader.line_num))

    logger.debug(f"Parsed {len(transactions)} transactions")
    return transactions


def _column_positions(header: List[str]) -> Dict[str, int]:
    columns = {name.strip().lower(): idx for idx, name in enumerate(header)}
    missing = [name for name in REQUIRED_COLUMNS if name not in columns]
    if missing:
        raise TransactionParseError(1, f"missing column(s) {', '.join(missing)} in header {header}")
    return columns


def _field(row: List[str], columns: Dict[str, int], name: str) -> str:
    idx = columns.get(name)
    if idx is None or idx >= len(row):
        return ""
    return row[idx].strip()


def _parse_row(row: List[str], columns: Dict[str, int], line_number: int) -> Transaction:
    """Parse CSV row into Transaction."""
    type_str = _field(row, columns, "type").lower()
    try:
        transaction_type = TransactionType(type_str)
    except ValueError:
        raise TransactionParseError(line_number, f"unknown transaction type {type_str!r}") from None

    client_id = _parse_id(_field(row, columns, "client"), "client", line_number)
    transaction_id = _parse_id(_field(row, columns, "tx"), "tx", line_number)
    amount = _parse_amount(_field(row, columns, AMOUNT_COLUMN), line_number)

    if amount is None and transaction_type in (TransactionType.DEPOSIT, TransactionType.WITHDRAWAL):
        raise TransactionParseError(line_number, f"{transaction_type.value} tx {transaction_id} has no amount")

    if transaction_type not in (TransactionType.DEPOSIT, TransactionType.WITHDRAWAL):
        amount = None

    return Transaction(
        transaction_type=transaction_type,
        client_id=client_id,
        transaction_id=transaction_id,
        amount=amount,
    )


def _parse_id(value: str, column: str, line_number: int) -> int:
    try:
        parsed = int(value)
    except ValueError:
        raise TransactionParseError(line_number, f"invalid {column} id {value!r}") from None
    if parsed < 0:
        raise TransactionParseError(line_number, f"invalid {column} id {value!r}")
    return parsed


def _parse_amount(value: str, line_number: int) -> Optional[Decimal]:
    if not value:
        return None
    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise TransactionParseError(line_number, f"invalid amount {value!r}") from None
    if not amount.is_finite():
        raise TransactionParseError(line_number, f"invalid amount {value!r}")
    # Sums of amounts bounded here stay inside the decimal context
    if amount.adjusted() > getcontext().Emax // 2:
        raise TransactionParseError(line_number, f"amount {value!r} out of range")
    return amount
