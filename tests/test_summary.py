import unittest

from voucher_analyzer.config import ALL_ITEMS, COUNT_MODE
from voucher_analyzer.models import SummaryStats, freeze_rows
from voucher_analyzer.summary import (
    build_chart_notice,
    build_title,
    compute_summary_stats,
    measure_display_name,
    scope_label,
)


class SummaryStatsTests(unittest.TestCase):
    def test_counts_entities_and_sums_totals(self):
        rows = freeze_rows([
            {"Customer Name": "A", "Total Amount": "$1,000.50"},
            {"Customer Name": "A", "Total Amount": "N/A"},
            {"Customer Name": "B", "Total Amount": -50},
            {"Customer Name": None, "Total Amount": "$9.50"},
        ])
        stats = compute_summary_stats(rows, ("Customer Name", "Total Amount"))
        self.assertEqual(stats.total_rows, 4)
        self.assertEqual(stats.distinct_entities, 2)
        # unlike ranking, the stat card sums negatives too
        self.assertAlmostEqual(stats.total_monetary, 960.0)

    def test_total_paid_column_is_used_when_no_total_amount(self):
        rows = freeze_rows([{"Supplier": "S", "Total Paid": "12.5"}])
        stats = compute_summary_stats(rows, ("Supplier", "Total Paid"))
        self.assertAlmostEqual(stats.total_monetary, 12.5)
        self.assertEqual(stats.distinct_entities, 1)

    def test_missing_role_columns_give_zeros(self):
        rows = freeze_rows([{"Region": "North"}])
        self.assertEqual(compute_summary_stats(rows, ("Region",)), SummaryStats(1, 0, 0.0))

    def test_empty_rows(self):
        self.assertEqual(compute_summary_stats((), ()), SummaryStats())


class TitleTests(unittest.TestCase):
    def test_scope_label(self):
        self.assertEqual(scope_label(10), "Top 10")
        self.assertEqual(scope_label(ALL_ITEMS), "All")

    def test_measure_display_name(self):
        self.assertEqual(measure_display_name(COUNT_MODE), "Total Cooperated")
        self.assertEqual(measure_display_name("Total Amount"), "Total Amount")
        self.assertEqual(measure_display_name(None), "")

    def test_title_with_payment_column(self):
        title = build_title(("Customer", "Total Amount", "Payment Status"), "Customer", "Total Amount", 10)
        self.assertEqual(title, "Top 10 Customer by Total Amount (Paid Only)")

    def test_title_without_payment_column(self):
        title = build_title(("Customer", "Total Amount"), "Customer", COUNT_MODE, ALL_ITEMS)
        self.assertEqual(title, "All Customer by Total Cooperated")

    def test_unconfigured_title(self):
        self.assertEqual(build_title(("Customer",), None, "Total Amount", 10), "Top Items")
        self.assertEqual(build_title(("Customer",), "Customer", None, 10), "Top Items")

    def test_chart_notice(self):
        notice = build_chart_notice(("Customer", "Payment Status"), "Customer", COUNT_MODE, 20)
        self.assertEqual(notice, "Chart updated: Top 20 Customer by Total Cooperated (Paid items only).")
        notice = build_chart_notice(("Customer",), "Customer", "Qty", ALL_ITEMS)
        self.assertEqual(notice, "Chart updated: All Customer by Qty.")


if __name__ == "__main__":
    unittest.main()
