import unittest

from ipam_console.core.selection import SelectionLevel, SelectionTracker, Tristate
from ipam_console.tests.helpers import make_records


class TestSelectionTracker(unittest.TestCase):
    def setUp(self):
        self.records = make_records(4)
        self.tracker = SelectionTracker(self.records)

    def test_starts_empty(self):
        state = self.tracker.derived_state()
        self.assertEqual(state.count, 0)
        self.assertEqual(state.level, SelectionLevel.NONE)
        self.assertIs(state.checkbox, Tristate.UNCHECKED)

    def test_select_all_checked(self):
        self.tracker.select_all(Tristate.CHECKED)
        state = self.tracker.derived_state()
        self.assertEqual(state.count, 4)
        self.assertEqual(state.level, SelectionLevel.ALL)
        self.assertIs(state.checkbox, Tristate.CHECKED)

    def test_select_all_accepts_booleans(self):
        self.tracker.select_all(True)
        self.assertEqual(self.tracker.derived_state().count, 4)
        self.tracker.select_all(False)
        self.assertEqual(self.tracker.derived_state().count, 0)

    def test_indeterminate_is_not_a_command(self):
        with self.assertRaises(ValueError):
            self.tracker.select_all(Tristate.INDETERMINATE)

    def test_raw_indeterminate_value_is_rejected(self):
        with self.assertRaises(ValueError):
            self.tracker.select_all("indeterminate")
        self.assertIs(self.tracker.derived_state().level, SelectionLevel.NONE)

    def test_to_command_normalizes(self):
        self.assertTrue(Tristate.CHECKED.to_command())
        self.assertFalse(Tristate.UNCHECKED.to_command())
        self.assertFalse(Tristate.INDETERMINATE.to_command())
        self.tracker.select_all(True)
        self.tracker.select_all(Tristate.from_value("indeterminate").to_command())
        self.assertEqual(self.tracker.derived_state().count, 0)

    def test_some_selected_is_indeterminate(self):
        self.tracker.select_one("r01", True)
        self.tracker.select_one("r03", True)
        state = self.tracker.derived_state()
        self.assertEqual(state.count, 2)
        self.assertEqual(state.level, SelectionLevel.SOME)
        self.assertIs(state.checkbox, Tristate.INDETERMINATE)

    def test_deselect_one(self):
        self.tracker.select_all(True)
        self.tracker.select_one("r02", False)
        self.assertFalse(self.tracker.is_selected("r02"))
        self.assertEqual(self.tracker.derived_state().level, SelectionLevel.SOME)

    def test_foreign_id_ignored(self):
        self.tracker.select_one("nope", True)
        self.assertEqual(self.tracker.derived_state().count, 0)

    def test_new_page_resets_selection(self):
        self.tracker.select_all(True)
        self.tracker.set_items(make_records(2))
        state = self.tracker.derived_state()
        self.assertEqual(state.count, 0)
        self.assertEqual(state.level, SelectionLevel.NONE)

    def test_empty_page_is_none_not_all(self):
        tracker = SelectionTracker([])
        tracker.select_all(True)
        self.assertEqual(tracker.derived_state().level, SelectionLevel.NONE)

    def test_toggle_all_from_some_selects_everything(self):
        self.tracker.select_one("r01", True)
        self.tracker.toggle_all()
        self.assertEqual(self.tracker.derived_state().level, SelectionLevel.ALL)
        self.tracker.toggle_all()
        self.assertEqual(self.tracker.derived_state().level, SelectionLevel.NONE)

    def test_toggle_and_page_order(self):
        self.assertTrue(self.tracker.toggle("r04"))
        self.tracker.toggle("r02")
        self.assertEqual(self.tracker.selected_in_page_order(), ["r02", "r04"])
        self.assertFalse(self.tracker.toggle("r04"))
        self.assertEqual(self.tracker.selected_ids, frozenset({"r02"}))

    def test_glyphs(self):
        self.assertEqual(Tristate.CHECKED.glyph, "[x]")
        self.assertEqual(Tristate.UNCHECKED.glyph, "[ ]")
        self.assertEqual(Tristate.INDETERMINATE.glyph, "[-]")


if __name__ == "__main__":
    unittest.main()
