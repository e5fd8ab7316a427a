import sys
import logging
from typing import List, Optional

from pydantic import ValidationError

from config import Settings, get_settings
from engine import ReplayEngine
from reader import TransactionParseError
from report import write_accounts


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format=settings.log_format,
        stream=sys.stderr,
        force=True,
    )


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1
    configure_logging(settings)

    if len(argv) != 1:
        print("Usage: python main.py <transactions.csv>", file=sys.stderr)
        return 1

    filepath = argv[0]
    engine = ReplayEngine()
    try:
        accounts = engine.process_file(filepath)
    except OSError as e:
        print(f"Something went wrong reading the file: {e}", file=sys.stderr)
        return 1
    except TransactionParseError as e:
        print(f"Invalid transaction in {filepath}: {e}", file=sys.stderr)
        return 1

    write_accounts(accounts, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
