import unittest

from ipam_console.errors import (
    ActionError,
    GENERIC_FAILURE_MESSAGE,
    RemoteFailure,
    ValidationError,
    describe_error,
    to_action_error,
)
from ipam_console.models.pagination import PaginatedResult, count_pages
from ipam_console.models.query import Query
from ipam_console.models.results import ActionResult, ItemFailure
from ipam_console.tests.helpers import make_records


class TestPaginatedResult(unittest.TestCase):
    def test_count_pages(self):
        self.assertEqual(count_pages(0, 10), 0)
        self.assertEqual(count_pages(10, 10), 1)
        self.assertEqual(count_pages(23, 10), 3)

    def test_page_larger_than_size_rejected(self):
        with self.assertRaises(ValueError):
            PaginatedResult.build(make_records(11), 11, 1, 10)

    def test_stranded(self):
        self.assertTrue(PaginatedResult.build([], 20, 3, 10).is_stranded())
        self.assertFalse(PaginatedResult.build([], 0, 1, 10).is_stranded())
        self.assertFalse(PaginatedResult.build(make_records(3), 23, 3, 10).is_stranded())

    def test_from_dict(self):
        result = PaginatedResult.from_dict(
            {"data": [{"id": "a"}], "totalCount": 11, "currentPage": 2, "totalPages": 2, "pageSize": 10},
            item_factory=lambda doc: make_records(1)[0],
        )
        self.assertEqual(result.total_count, 11)
        self.assertEqual(result.current_page, 2)
        self.assertTrue(result.has_prev())
        self.assertFalse(result.has_next())


class TestQuery(unittest.TestCase):
    def test_validation(self):
        with self.assertRaises(ValueError):
            Query(page=0)
        with self.assertRaises(ValueError):
            Query(page_size=0)

    def test_offset_and_params(self):
        query = Query(page=3, page_size=10, filters={"q": "core"})
        self.assertEqual(query.offset, 20)
        self.assertEqual(query.to_params(), {"q": "core", "page": "3"})
        self.assertEqual(query.with_page(1).page, 1)


class TestActionResult(unittest.TestCase):
    def test_partial(self):
        result = ActionResult.from_batch(2, [ItemFailure("x", "nope")])
        self.assertTrue(result.success)
        self.assertTrue(result.is_partial)
        self.assertEqual(result.failure_count, 1)

    def test_all_failed(self):
        result = ActionResult.from_batch(0, [ItemFailure("x", "a"), ItemFailure("y", "b")], item_label="VLAN")
        self.assertFalse(result.success)
        self.assertEqual(result.error.user_message, "All 2 selected VLANs could not be processed.")


class TestErrors(unittest.TestCase):
    def test_describe_known_and_unknown(self):
        self.assertEqual(describe_error(ValidationError("bad", user_message="Fix it.")), "Fix it.")
        self.assertEqual(describe_error(RuntimeError("boom")), GENERIC_FAILURE_MESSAGE)

    def test_to_action_error(self):
        remote = RemoteFailure(ActionError("NOT_FOUND", "Gone.", field="id"))
        self.assertEqual(to_action_error(remote), remote.error)
        self.assertEqual(remote.code, "NOT_FOUND")
        self.assertEqual(to_action_error(KeyError("x")).code, "UNEXPECTED_ACTION_ERROR")


if __name__ == "__main__":
    unittest.main()
