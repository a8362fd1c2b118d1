import unittest
from datetime import datetime

from voucher_analyzer.presentation import (
    describe_transaction,
    first_field,
    format_entry_value,
    transaction_badge,
    transaction_value,
)


class FieldLookupTests(unittest.TestCase):
    def test_first_non_empty_key_wins(self):
        row = {"Date": "", "Create Date": "02/01/2024"}
        self.assertEqual(first_field(row, ("date", "create date")), "02/01/2024")

    def test_zero_counts_as_missing(self):
        row = {"Total Amount": 0, "Total Paid": "$12"}
        self.assertEqual(first_field(row, ("total amount", "total paid")), "$12")

    def test_nothing_found(self):
        self.assertIsNone(first_field({"Other": 1}, ("purpose",)))

    def test_transaction_value_defaults_to_zero(self):
        self.assertEqual(transaction_value({"Other": 1}), 0)
        self.assertEqual(transaction_value({"Total Paid": 9}), 9)


class TransactionCardTests(unittest.TestCase):
    def test_full_card(self):
        row = {
            "PV Code": "PV-0001",
            "Customer Name": "Angkor",
            "Customer": "Angkor Trading",
            "Invoice No": 1001.0,
            "Date": datetime(2024, 1, 3),
            "Expire Date": "10/01/2024",
            "Purpose": "Office supplies",
            "Total Amount": "$1,250.00",
        }
        card = describe_transaction(row, 0)
        self.assertEqual(card.title, "PV-0001")
        self.assertEqual(card.amount, "$1,250.00")
        self.assertEqual(card.customer, "Angkor Trading")
        self.assertEqual(card.invoice_no, "1001")
        self.assertEqual(card.date, "01/03/2024")
        self.assertEqual(card.expire_date, "01/10/2024")
        self.assertEqual(card.processing_days, 7)
        self.assertEqual(card.purpose, "Office supplies")

    def test_sparse_card(self):
        card = describe_transaction({"Total Amount": "N/A"}, 2)
        self.assertEqual(card.title, "Transaction #3")
        self.assertEqual(card.amount, "$0.00")
        self.assertIsNone(card.customer)
        self.assertIsNone(card.invoice_no)
        self.assertEqual(card.date, "N/A")
        self.assertEqual(card.expire_date, "N/A")
        self.assertIsNone(card.processing_days)
        self.assertIsNone(card.purpose)

    def test_paid_date_is_an_end_date(self):
        card = describe_transaction({"Create Date": "01/02/2024", "Paid Date": "11/02/2024"}, 0)
        self.assertEqual(card.processing_days, 10)

    def test_negative_span_has_no_processing_days(self):
        card = describe_transaction({"Date": "11/02/2024", "Expire Date": "01/02/2024"}, 0)
        self.assertIsNone(card.processing_days)
        self.assertEqual(card.date, "02/11/2024")


class FormattingTests(unittest.TestCase):
    def test_entry_value(self):
        self.assertEqual(format_entry_value(1234, True), "1,234")
        self.assertEqual(format_entry_value(1234.5, False), "$1,234.50")

    def test_badge(self):
        self.assertIsNone(transaction_badge(1))
        self.assertIsNone(transaction_badge(0))
        self.assertEqual(transaction_badge(3), "3 transactions")


if __name__ == "__main__":
    unittest.main()
