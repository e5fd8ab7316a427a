import csv
import io
from decimal import Decimal
from typing import Iterable, List, TextIO

from models import ClientAccount

FIELDNAMES = ["client", "available", "held", "total", "locked"]


def write_accounts(accounts: Iterable[ClientAccount], stream: TextIO) -> None:
    """Write accounts as CSV rows, in the order given."""
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(FIELDNAMES)
    for account in accounts:
        writer.writerow([
            account.client_id,
            account.available,
            account.held,
            account.total,
            str(account.locked).lower(),
        ])


def render_accounts(accounts: Iterable[ClientAccount]) -> str:
    buffer = io.StringIO()
    write_accounts(accounts, buffer)
    return buffer.getvalue()


def read_report(text: str) -> List[ClientAccount]:
    """Decode a report produced by render_accounts back into accounts."""
    reader = csv.DictReader(io.StringIO(text))
    return [
        ClientAccount(
            client_id=int(row["client"]),
            available=Decimal(row["available"]),
            held=Decimal(row["held"]),
            total=Decimal(row["total"]),
            locked=row["locked"] == "true",
        )
        for row in reader
    ]
