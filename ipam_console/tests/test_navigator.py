import unittest
from unittest.mock import Mock

from ipam_console.core.navigator import PageNavigator
from ipam_console.core.query_store import QueryStringStore
from ipam_console.models.pagination import PaginatedResult
from ipam_console.tests.helpers import make_records


class TestPageNavigator(unittest.TestCase):
    def setUp(self):
        self.store = QueryStringStore("q=edge")
        self.notify = Mock()
        self.navigator = PageNavigator(self.store, notify=self.notify)

    def settle(self, total, page=1, size=10):
        rows = make_records(total)[(page - 1) * size:page * size]
        result = PaginatedResult.build(rows, total, page, size)
        self.navigator.sync(result)
        return result

    def test_missing_or_invalid_page_reads_as_one(self):
        self.assertEqual(self.navigator.current_page(), 1)
        self.store.update(page="abc")
        self.assertEqual(self.navigator.current_page(), 1)
        self.store.update(page="-4")
        self.assertEqual(self.navigator.current_page(), 1)

    def test_twenty_three_records_make_three_pages(self):
        result = self.settle(23)
        self.assertEqual(result.total_pages, 3)
        self.assertEqual(self.navigator.total_pages, 3)

    def test_go_to_writes_store_and_keeps_filters(self):
        self.settle(23)
        self.assertEqual(self.navigator.go_to(2), 2)
        self.assertEqual(self.store.params(), {"q": "edge", "page": "2"})

    def test_go_to_clamps_once_total_known(self):
        self.settle(23)
        self.assertEqual(self.navigator.go_to(9), 3)
        self.assertEqual(self.navigator.go_to(0), 1)

    def test_go_to_before_first_settle_only_floors(self):
        self.assertEqual(self.navigator.go_to(7), 7)

    def test_zero_pages_clamp_to_one(self):
        self.settle(0)
        self.assertEqual(self.navigator.total_pages, 0)
        self.assertEqual(self.navigator.go_to(5), 1)
        self.assertEqual(self.navigator.last_page(), 1)

    def test_next_and_prev(self):
        self.settle(23)
        self.navigator.next_page()
        self.navigator.next_page()
        self.navigator.next_page()
        self.assertEqual(self.navigator.current_page(), 3)
        self.navigator.prev_page()
        self.assertEqual(self.navigator.current_page(), 2)

    def test_jump_accepts_in_range(self):
        self.settle(23)
        self.assertTrue(self.navigator.jump_to_page(" 3 "))
        self.assertEqual(self.navigator.current_page(), 3)
        self.assertEqual(self.navigator.input_text, "3")
        self.notify.assert_not_called()

    def test_jump_out_of_range_rejected(self):
        self.settle(23)
        self.navigator.go_to(2)
        self.navigator.input_text = "4"

        self.assertFalse(self.navigator.jump_to_page("4"))

        self.assertEqual(self.navigator.current_page(), 2)
        self.assertEqual(self.navigator.input_text, "2")
        message = self.notify.call_args.args[0]
        self.assertIn("between 1 and 3", message)
        self.assertEqual(self.notify.call_args.kwargs["severity"], "warning")

    def test_jump_non_numeric_rejected(self):
        self.settle(23)
        self.assertFalse(self.navigator.jump_to_page("abc"))
        self.assertEqual(self.navigator.current_page(), 1)
        self.assertEqual(self.notify.call_args.args[0], "Please enter a whole page number.")

    def test_jump_does_not_touch_store_when_rejected(self):
        self.settle(23)
        listener = Mock()
        self.store.subscribe(listener)
        self.navigator.jump_to_page("0")
        listener.assert_not_called()


if __name__ == "__main__":
    unittest.main()
