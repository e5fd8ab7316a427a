import sys
import os
from decimal import Decimal

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from models import Transaction, TransactionType
from engine import ReplayEngine
from reader import TransactionParseError, parse_transactions, read_transactions


class TestParseTransactions:
    def test_trims_whitespace(self):
        transactions = parse_transactions([
            "type, client, tx, amount",
            "deposit, 1, 1, 1.0",
            "  withdrawal ,  2 , 4 ,  1.5  ",
        ])

        assert transactions == [
            Transaction(TransactionType.DEPOSIT, client_id=1, transaction_id=1, amount=Decimal("1.0")),
            Transaction(TransactionType.WITHDRAWAL, client_id=2, transaction_id=4, amount=Decimal("1.5")),
        ]

    def test_keeps_input_order(self):
        transactions = parse_transactions([
            "type,client,tx,amount",
            "deposit,1,9,1",
            "deposit,1,2,1",
        ])

        assert [transaction.transaction_id for transaction in transactions] == [9, 2]

    def test_dispute_rows_without_amount(self):
        transactions = parse_transactions([
            "type,client,tx,amount",
            "dispute,1,1,",
            "resolve,1,1",
            "chargeback,1,1,5.0",
        ])

        assert [transaction.transaction_type for transaction in transactions] == [
            TransactionType.DISPUTE,
            TransactionType.RESOLVE,
            TransactionType.CHARGEBACK,
        ]
        assert all(transaction.amount is None for transaction in transactions)

    def test_type_case_insensitive(self):
        transactions = parse_transactions(["type,client,tx,amount", "Deposit,1,1,2"])
        assert transactions[0].transaction_type == TransactionType.DEPOSIT

    def test_blank_lines_skipped(self):
        transactions = parse_transactions(["type,client,tx,amount", "", "deposit,1,1,2", ""])
        assert len(transactions) == 1

    def test_empty_input(self):
        assert parse_transactions([]) == []
        assert parse_transactions(["type,client,tx,amount"]) == []

    def test_unknown_type(self):
        with pytest.raises(TransactionParseError) as exc_info:
            parse_transactions(["type,client,tx,amount", "deposit,1,1,2", "transfer,1,2,3"])

        assert exc_info.value.line_number == 3
        assert "unknown transaction type 'transfer'" in str(exc_info.value)

    def test_invalid_ids(self):
        with pytest.raises(TransactionParseError, match="invalid client id 'abc'"):
            parse_transactions(["type,client,tx,amount", "deposit,abc,1,2"])

        with pytest.raises(TransactionParseError, match="invalid tx id '-1'"):
            parse_transactions(["type,client,tx,amount", "deposit,1,-1,2"])

    def test_invalid_amount(self):
        with pytest.raises(TransactionParseError, match="invalid amount 'ten'"):
            parse_transactions(["type,client,tx,amount", "deposit,1,1,ten"])

        with pytest.raises(TransactionParseError, match="invalid amount 'NaN'"):
            parse_transactions(["type,client,tx,amount", "deposit,1,1,NaN"])

    def test_amount_out_of_range(self):
        with pytest.raises(TransactionParseError, match="amount '9e999999' out of range"):
            parse_transactions(["type,client,tx,amount", "deposit,1,1,9e999999", "deposit,1,2,9e999999"])

    def test_large_amounts_within_range_replay(self):
        transactions = parse_transactions(["type,client,tx,amount", "deposit,1,1,9e400000", "deposit,1,2,9e400000"])

        account = ReplayEngine().replay(transactions)[0]

        assert account.total == Decimal("1.8e400001")

    def test_deposit_without_amount(self):
        with pytest.raises(TransactionParseError, match="deposit tx 1 has no amount"):
            parse_transactions(["type,client,tx,amount", "deposit,1,1,"])

    def test_missing_header_column(self):
        with pytest.raises(TransactionParseError, match="missing column"):
            parse_transactions(["type,client,amount", "deposit,1,2"])

    def test_parse_error_is_value_error(self):
        assert issubclass(TransactionParseError, ValueError)


class TestReadTransactions:
    def test_reads_file(self, tmp_path):
        csv_file = tmp_path / "test.csv"
        csv_file.write_text("type, client, tx, amount\ndeposit, 1, 1, 1.0\ndispute, 1, 1,\n")

        transactions = read_transactions(str(csv_file))

        assert len(transactions) == 2
        assert transactions[1].is_dispute

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            read_transactions(str(tmp_path / "missing.csv"))

    def test_byte_order_mark(self, tmp_path):
        csv_file = tmp_path / "test.csv"
        csv_file.write_bytes("type,client,tx,amount\ndeposit,1,1,1.0\n".encode("utf-8-sig"))

        transactions = read_transactions(str(csv_file))

        assert transactions == [Transaction(TransactionType.DEPOSIT, 1, 1, Decimal("1.0"))]

    def test_invalid_utf8(self, tmp_path):
        csv_file = tmp_path / "test.csv"
        csv_file.write_bytes(b"type,client,tx,amount\ndeposit,1,1,1.0\xff\n")

        with pytest.raises(TransactionParseError, match="not valid UTF-8") as exc_info:
            read_transactions(str(csv_file))

        assert exc_info.value.line_number is None
