import unittest
from unittest import mock

from voucher_analyzer import analysis
from voucher_analyzer.analysis import Analyzer, Selection, run_analysis
from voucher_analyzer.config import ALL_ITEMS, COUNT_MODE, DEFAULT_TOP_N
from voucher_analyzer.models import freeze_rows

COLUMNS = ("PV Code", "Customer Name", "Total Amount", "Payment Status")


def sample_rows():
    return freeze_rows([
        {"PV Code": "PV-1", "Customer Name": "Angkor", "Total Amount": "$1,250.00", "Payment Status": "Paid"},
        {"PV Code": "PV-2", "Customer Name": "Mekong", "Total Amount": 2890.75, "Payment Status": "paid "},
        {"PV Code": "PV-3", "Customer Name": "Angkor", "Total Amount": "$320.40", "Payment Status": "PAID"},
        {"PV Code": "PV-4", "Customer Name": "Bayon", "Total Amount": "N/A", "Payment Status": "Paid"},
        {"PV Code": "PV-5", "Customer Name": "Mekong", "Total Amount": "$4,100.00", "Payment Status": "Pending"},
    ])


class SelectionTests(unittest.TestCase):
    def test_defaults(self):
        selection = Selection()
        self.assertEqual(selection.top_n, DEFAULT_TOP_N)
        self.assertFalse(selection.is_configured)
        self.assertFalse(selection.count_mode)

    def test_count_mode_flag(self):
        self.assertTrue(Selection("Customer Name", COUNT_MODE).count_mode)

    def test_invalid_top_n(self):
        with self.assertRaises(ValueError):
            Selection("Customer Name", "Total Amount", top_n=0)

    def test_selections_are_hashable_values(self):
        self.assertEqual(Selection("A", "B", 10), Selection("A", "B", 10))
        self.assertEqual(len({Selection("A", "B", 10), Selection("A", "B", 10)}), 1)


class RunAnalysisTests(unittest.TestCase):
    def test_full_pass(self):
        result = run_analysis(sample_rows(), COLUMNS, Selection("Customer Name", "Total Amount", 10))
        self.assertEqual(result.payment_column, "Payment Status")
        self.assertEqual(len(result.settled_rows), 4)
        self.assertEqual([entry.name for entry in result.entries], ["Mekong", "Angkor"])
        self.assertAlmostEqual(result.entries[0].value, 2890.75)
        self.assertAlmostEqual(result.entries[1].value, 1570.40)
        self.assertEqual([d.name for d in result.detailed_entries], ["Mekong", "Angkor"])
        self.assertEqual([r["PV Code"] for r in result.detailed_entries[1].details], ["PV-1", "PV-3"])
        self.assertEqual(result.title, "Top 10 Customer Name by Total Amount (Paid Only)")
        self.assertEqual(result.measure_name, "Total Amount")
        self.assertTrue(result.has_chart)

    def test_stats_cover_settled_rows(self):
        result = run_analysis(sample_rows(), COLUMNS, Selection("Customer Name", "Total Amount", 1))
        self.assertEqual(result.stats.total_rows, 4)
        self.assertEqual(result.stats.distinct_entities, 3)
        self.assertAlmostEqual(result.stats.total_monetary, 4461.15)
        self.assertEqual(len(result.entries), 1)

    def test_count_mode(self):
        result = run_analysis(sample_rows(), COLUMNS, Selection("Customer Name", COUNT_MODE, ALL_ITEMS))
        self.assertTrue(result.count_mode)
        self.assertEqual([(e.name, e.value) for e in result.entries], [("Angkor", 2), ("Mekong", 1), ("Bayon", 1)])
        self.assertEqual(result.measure_name, "Total Cooperated")

    def test_unconfigured_selection_still_has_stats(self):
        result = run_analysis(sample_rows(), COLUMNS, Selection())
        self.assertEqual(result.entries, ())
        self.assertFalse(result.has_chart)
        self.assertEqual(result.title, "Top Items")
        self.assertEqual(result.stats.total_rows, 4)

    def test_chart_list_and_details_agree(self):
        result = run_analysis(sample_rows(), COLUMNS, Selection("Customer Name", "Total Amount", ALL_ITEMS))
        self.assertEqual(
            [(e.name, e.value) for e in result.entries],
            [(d.name, d.value) for d in result.detailed_entries],
        )

    def test_idempotent(self):
        rows = sample_rows()
        selection = Selection("Customer Name", "Total Amount", 10)
        self.assertEqual(run_analysis(rows, COLUMNS, selection), run_analysis(rows, COLUMNS, selection))


class AnalyzerMemoTests(unittest.TestCase):
    def test_same_inputs_reuse_result(self):
        analyzer = Analyzer()
        rows = sample_rows()
        selection = Selection("Customer Name", "Total Amount", 10)
        with mock.patch.object(analysis, "run_analysis", wraps=analysis.run_analysis) as spy:
            first = analyzer.analyze(rows, COLUMNS, selection)
            second = analyzer.analyze(rows, COLUMNS, Selection("Customer Name", "Total Amount", 10))
        self.assertIs(first, second)
        self.assertEqual(spy.call_count, 1)

    def test_changed_selection_or_rows_recompute(self):
        analyzer = Analyzer()
        rows = sample_rows()
        with mock.patch.object(analysis, "run_analysis", wraps=analysis.run_analysis) as spy:
            analyzer.analyze(rows, COLUMNS, Selection("Customer Name", "Total Amount", 10))
            analyzer.analyze(rows, COLUMNS, Selection("Customer Name", COUNT_MODE, 10))
            analyzer.analyze(sample_rows(), COLUMNS, Selection("Customer Name", COUNT_MODE, 10))
        self.assertEqual(spy.call_count, 3)

    def test_memo_matches_fresh_computation(self):
        analyzer = Analyzer()
        rows = sample_rows()
        selection = Selection("PV Code", "Total Amount", ALL_ITEMS)
        analyzer.analyze(rows, COLUMNS, selection)
        self.assertEqual(analyzer.analyze(rows, COLUMNS, selection), run_analysis(rows, COLUMNS, selection))

    def test_clear_forces_recompute(self):
        analyzer = Analyzer()
        rows = sample_rows()
        selection = Selection("Customer Name", "Total Amount", 10)
        first = analyzer.analyze(rows, COLUMNS, selection)
        analyzer.clear()
        self.assertIsNot(analyzer.analyze(rows, COLUMNS, selection), first)


if __name__ == "__main__":
    unittest.main()
