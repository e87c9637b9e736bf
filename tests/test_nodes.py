"""
Tests for the node pool candidate ordering.
"""

import unittest

from cvp_client.errors import ConfigurationError
from cvp_client.nodes import NodePool


class TestNodePool(unittest.TestCase):
    def test_empty_list_rejected(self):
        with self.assertRaises(ConfigurationError):
            NodePool([])

    def test_single_string_is_one_node(self):
        self.assertEqual(NodePool("cvp1").nodes, ("cvp1",))

    def test_order_preserved(self):
        self.assertEqual(NodePool(["c", "a", "b"]).nodes, ("c", "a", "b"))

    def test_duplicates_dropped(self):
        pool = NodePool(["a", "b", "a"])
        self.assertEqual(pool.nodes, ("a", "b"))
        self.assertEqual(len(pool), 2)


class TestNextCandidates(unittest.TestCase):
    def setUp(self):
        self.pool = NodePool(["a", "b", "c"])

    def test_no_session_returns_pool_order(self):
        self.assertEqual(self.pool.next_candidates(), ("a", "b", "c"))
        self.assertEqual(self.pool.next_candidates(None, exclude_current=True),
                         ("a", "b", "c"))

    def test_exclude_current(self):
        self.assertEqual(self.pool.next_candidates("b", exclude_current=True), ("a", "c"))

    def test_relogin_tries_current_first(self):
        self.assertEqual(self.pool.next_candidates("b"), ("b", "a", "c"))

    def test_single_node_never_excluded(self):
        pool = NodePool(["only"])
        self.assertEqual(pool.next_candidates("only", exclude_current=True), ("only",))

    def test_unknown_current_ignored(self):
        self.assertEqual(self.pool.next_candidates("z", exclude_current=True),
                         ("a", "b", "c"))

    def test_is_deterministic(self):
        first = self.pool.next_candidates("c", exclude_current=True)
        second = self.pool.next_candidates("c", exclude_current=True)
        self.assertEqual(first, second)


if __name__ == "__main__":
    unittest.main()
