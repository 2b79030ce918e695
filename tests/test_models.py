from datetime import datetime
from decimal import Decimal

import pytest
from bson.decimal128 import Decimal128
from pymongo.errors import AutoReconnect, ServerSelectionTimeoutError

from app.errors import CONNECTION_ERROR_MESSAGE, describe_store_error, is_connection_error
from app.models import PaymentType, SaleEntry, coerce_amount


class TestCoercion:
    @pytest.mark.parametrize("raw, expected", [
        (12.5, 12.5),
        (3, 3.0),
        ("7", 7.0),
        (" 4.25 ", 4.25),
        ("12,5", 12.5),
        (Decimal("9.99"), 9.99),
        (Decimal128("1.50"), 1.5),
        ("abc", 0.0),
        ("", 0.0),
        (None, 0.0),
        ([1], 0.0),
        (float("inf"), 0.0),
        (-5, -5.0),
    ])
    def test_coerce_amount(self, raw, expected):
        assert coerce_amount(raw) == expected

    @pytest.mark.parametrize("raw, expected", [
        ("cash", PaymentType.CASH),
        ("QR", PaymentType.QR),
        (" loan ", PaymentType.LOAN),
        (PaymentType.QR, PaymentType.QR),
        ("card", PaymentType.CASH),
        (None, PaymentType.CASH),
    ])
    def test_payment_type(self, raw, expected):
        assert PaymentType.coerce(raw) is expected


class TestSaleEntryDocuments:
    def test_from_document_tolerates_odd_values(self):
        entry = SaleEntry.from_document({
            "id": 17, "productName": 42, "amount": "1,5",
            "paymentType": "qr", "date": "2026-03-14", "createdAt": "n/a",
        })
        assert entry.id == "17"
        assert entry.product_name == "42"
        assert entry.amount == 1.5
        assert entry.payment_type is PaymentType.QR
        assert entry.created_at == 0

    def test_datetime_created_at_becomes_millis(self):
        moment = datetime(2026, 3, 14, 9, 30)
        entry = SaleEntry.from_document({"id": "a", "createdAt": moment})
        assert entry.created_at == int(moment.timestamp() * 1000)

    def test_camel_case_wire_names(self):
        entry = SaleEntry(id="a", product_name="Tea", amount=2, payment_type="loan",
                          date="2026-03-14", created_at=5)
        assert entry.to_document() == {
            "id": "a", "productName": "Tea", "amount": 2.0,
            "paymentType": "loan", "date": "2026-03-14", "createdAt": 5,
        }


class TestErrorClassification:
    def test_pymongo_connection_failures(self):
        assert is_connection_error(ServerSelectionTimeoutError("timed out"))
        assert is_connection_error(AutoReconnect("lost"))

    def test_refused_message_in_plain_error(self):
        assert is_connection_error(OSError("connect ECONNREFUSED 127.0.0.1:27017"))

    def test_refused_cause(self):
        try:
            try:
                raise OSError("[Errno 111] Connection refused")
            except OSError as inner:
                raise RuntimeError("query failed") from inner
        except RuntimeError as exc:
            assert is_connection_error(exc)

    def test_other_errors(self):
        assert not is_connection_error(ValueError("duplicate key"))
        assert describe_store_error(ValueError("duplicate key"), "x") == "duplicate key"
        assert describe_store_error(ValueError(), "fallback") == "fallback"
        assert describe_store_error(AutoReconnect("lost"), "x") == CONNECTION_ERROR_MESSAGE
