import unittest
from unittest.mock import Mock

from ipam_console.core.query_store import QueryStringStore


class TestQueryStringStore(unittest.TestCase):
    def test_parses_initial_string(self):
        store = QueryStringStore("?page=3&q=core&vlan_id=abc")
        self.assertEqual(store.get("page"), "3")
        self.assertEqual(store.params(), {"page": "3", "q": "core", "vlan_id": "abc"})

    def test_update_preserves_other_params(self):
        store = QueryStringStore("q=core&page=1&sort=name")
        store.update(page=2)
        self.assertEqual(store.to_string(), "q=core&page=2&sort=name")

    def test_untouched_params_keep_their_encoding(self):
        store = QueryStringStore("a=b%20c&page=1&tag=x%2By")
        store.update(page=2)
        self.assertEqual(store.to_string(), "a=b%20c&page=2&tag=x%2By")
        self.assertEqual(store.get("a"), "b c")
        self.assertEqual(store.get("tag"), "x+y")

    def test_update_appends_missing_param(self):
        store = QueryStringStore("q=core")
        store.update(page=4)
        self.assertEqual(store.to_string(), "q=core&page=4")

    def test_none_removes_param(self):
        store = QueryStringStore("q=core&page=2")
        store.update(q=None)
        self.assertEqual(store.params(), {"page": "2"})

    def test_listeners_only_hear_real_changes(self):
        store = QueryStringStore("page=2")
        listener = Mock()
        store.subscribe(listener)

        self.assertFalse(store.update(page=2))
        listener.assert_not_called()

        self.assertTrue(store.update(page=3))
        listener.assert_called_once_with({"page": "3"})

    def test_broken_listener_does_not_block_others(self):
        store = QueryStringStore()
        broken = Mock(side_effect=RuntimeError("boom"))
        healthy = Mock()
        store.subscribe(broken)
        store.subscribe(healthy)
        store.update(page=2)
        healthy.assert_called_once()

    def test_unsubscribe(self):
        store = QueryStringStore()
        listener = Mock()
        store.subscribe(listener)
        self.assertTrue(store.unsubscribe(listener))
        self.assertFalse(store.unsubscribe(listener))
        store.update(page=2)
        listener.assert_not_called()


if __name__ == "__main__":
    unittest.main()
