import copy
import unittest

from bidimap.datastructures.mappings import (AssociationConflictError,
                                             BidirectionalMap,
                                             StalePositionError)


class TestBidirectionalMap(unittest.TestCase):
    def setUp(self):
        self.browsers: BidirectionalMap[str, str] = BidirectionalMap(
            {"Apple": "Safari", "Google": "Chrome",
             "Microsoft": "Edge", "Mozilla": "Firefox"}
        )

    def assertConsistent(self, bimap: BidirectionalMap) -> None:
        self.assertEqual(len(bimap.forward), len(bimap.backward))
        self.assertEqual(len(bimap.forward), len(bimap))
        for left, right in bimap:
            self.assertEqual(bimap.get_right(left), right)
            self.assertEqual(bimap.get_left(right), left)

    def test_mapping(self):
        self.assertEqual(self.browsers.get_right("Apple"), "Safari")
        self.assertEqual(self.browsers.get_left("Safari"), "Apple")
        self.assertEqual(self.browsers.get_right("Microsoft"), "Edge")
        self.assertEqual(self.browsers.get_left("Edge"), "Microsoft")
        self.assertConsistent(self.browsers)

    def test_lookup_miss(self):
        self.assertIsNone(self.browsers.get_right("Opera"))
        self.assertIsNone(self.browsers.get_left("Apple"))
        self.assertEqual(self.browsers.get_right("Opera", "none"), "none")
        self.assertFalse(self.browsers.has_left("Safari"))
        self.assertTrue(self.browsers.has_right("Safari"))

    def test_values(self):
        self.assertSetEqual(set(self.browsers.left_values),
                            {"Apple", "Google", "Microsoft", "Mozilla"})
        self.assertSetEqual(set(self.browsers.right_values),
                            {"Safari", "Chrome", "Edge", "Firefox"})

    def test_remove(self):
        browsers = self.browsers.copy()
        self.assertEqual(browsers.disassociate_left("Apple"), "Safari")
        self.assertIsNone(browsers.get_right("Apple"))
        self.assertIsNone(browsers.get_left("Safari"))
        browsers.disassociate_all()
        self.assertTrue(browsers.is_empty)
        self.assertEqual(len(self.browsers), 4)

    def test_disassociate_right(self):
        self.assertEqual(self.browsers.disassociate_right("Chrome"), "Google")
        self.assertIsNone(self.browsers.get_right("Google"))
        self.assertIsNone(self.browsers.get_left("Chrome"))
        self.assertConsistent(self.browsers)

    def test_disassociate_absent(self):
        self.assertIsNone(self.browsers.disassociate_left("Opera"))
        self.assertIsNone(self.browsers.disassociate_right("Opera"))
        self.assertEqual(len(self.browsers), 4)

    def test_overwrite_left(self):
        bimap: BidirectionalMap[str, str] = BidirectionalMap()
        bimap.associate_values("A", "X")
        result = bimap.associate_values("A", "Y")
        self.assertEqual(result, ("X", None))
        self.assertEqual(bimap.get_right("A"), "Y")
        self.assertIsNone(bimap.get_left("X"))
        self.assertEqual(len(bimap), 1)
        self.assertConsistent(bimap)

    def test_overwrite_right(self):
        bimap: BidirectionalMap[str, str] = BidirectionalMap()
        bimap.associate_values("A", "X")
        result = bimap.associate_values("B", "X")
        self.assertEqual(result.previous_right, None)
        self.assertEqual(result.previous_left, "A")
        self.assertEqual(bimap.get_left("X"), "B")
        self.assertIsNone(bimap.get_right("A"))
        self.assertConsistent(bimap)

    def test_cross_eviction(self):
        bimap = BidirectionalMap({"A": "X", "B": "Y"})
        result = bimap.associate_values("A", "Y")
        self.assertEqual(result.previous_right, "X")
        self.assertEqual(result.previous_left, "B")
        self.assertEqual(list(bimap), [("A", "Y")])
        self.assertIsNone(bimap.get_left("X"))
        self.assertIsNone(bimap.get_right("B"))
        self.assertConsistent(bimap)

    def test_reassociate_same_pair(self):
        bimap = BidirectionalMap({"A": "X", "B": "Y"})
        result = bimap.associate_values("A", "X")
        self.assertEqual(result, ("X", "A"))
        self.assertEqual(len(bimap), 2)
        self.assertConsistent(bimap)

    def test_reassociated_pair_moves_to_end(self):
        bimap = BidirectionalMap({"A": "X", "B": "Y", "C": "Z"})
        bimap.associate_values("A", "W")
        self.assertEqual(list(bimap), [("B", "Y"), ("C", "Z"), ("A", "W")])

    def test_none_values(self):
        bimap = BidirectionalMap({None: 1, 2: None})
        self.assertEqual(bimap.get_right(None), 1)
        self.assertEqual(bimap.get_left(None), 2)
        bimap.associate_values(None, None)
        self.assertEqual(list(bimap), [(None, None)])
        self.assertConsistent(bimap)

    def test_update(self):
        bimap = BidirectionalMap({"A": "X"})
        bimap.update([("A", "Y"), ("B", "Y")], C="Z")
        self.assertEqual(list(bimap), [("B", "Y"), ("C", "Z")])
        self.assertConsistent(bimap)

    def test_construction_conflict(self):
        with self.assertRaises(AssociationConflictError):
            BidirectionalMap([("A", "X"), ("A", "Y")])
        with self.assertRaises(AssociationConflictError):
            BidirectionalMap([("A", "X"), ("B", "X")])
        with self.assertRaises(AssociationConflictError):
            BidirectionalMap({"A": "X", "B": "X"})
        with self.assertRaises(ValueError):
            BidirectionalMap({"A": "X"}, B="X")

    def test_construction_conflict_details(self):
        with self.assertRaises(AssociationConflictError) as context:
            BidirectionalMap([("A", "X"), ("B", "Y"), ("A", "Y")])
        self.assertEqual(context.exception.left, "A")
        self.assertEqual(context.exception.right, "Y")
        self.assertEqual(context.exception.previous, ("X", "B"))

    def test_from_pairs(self):
        bimap = BidirectionalMap.from_pairs([("A", "X"), ("B", "Y")])
        self.assertIsNotNone(bimap)
        self.assertEqual(list(bimap), [("A", "X"), ("B", "Y")])
        self.assertIsNone(BidirectionalMap.from_pairs([("A", "X"),
                                                       ("A", "Y")]))
        self.assertIsNone(BidirectionalMap.from_pairs([("A", "X"),
                                                       ("B", "X")]))
        self.assertIsNone(BidirectionalMap.from_pairs([("A", "X"),
                                                       ("A", "X")]))

    def test_from_pairs_logs_conflict(self):
        with self.assertLogs("BidirectionalMap", level="DEBUG") as logs:
            BidirectionalMap.from_pairs([("A", "X"), ("B", "X")])
        self.assertIn("Rejected construction", logs.output[0])

    def test_keyword_construction(self):
        bimap = BidirectionalMap(one=1, two=2)
        self.assertEqual(bimap.get_left(2), "two")
        self.assertEqual(len(bimap), 2)

    def test_size_symmetry(self):
        bimap: BidirectionalMap[int, str] = BidirectionalMap()
        operations = [(1, "a"), (2, "b"), (1, "b"), (3, "c"), (3, "a"),
                      (4, "d"), (2, "d")]
        for left, right in operations:
            bimap.associate_values(left, right)
            self.assertConsistent(bimap)
        bimap.disassociate_left(3)
        self.assertConsistent(bimap)
        bimap.disassociate_right("d")
        self.assertConsistent(bimap)

    def test_disassociate_all(self):
        for keep_capacity in (False, True):
            bimap = self.browsers.copy()
            bimap.disassociate_all(keep_capacity=keep_capacity)
            self.assertTrue(bimap.is_empty)
            self.assertEqual(len(bimap), 0)
            self.assertEqual(list(bimap.left_values), [])
            self.assertEqual(list(bimap.right_values), [])
            bimap.associate_values("Apple", "Safari")
            self.assertEqual(bimap.get_left("Safari"), "Apple")

    def test_pop_first(self):
        self.assertEqual(self.browsers.pop_first(), ("Apple", "Safari"))
        self.assertEqual(self.browsers.pop_first(), ("Google", "Chrome"))
        self.assertIsNone(self.browsers.get_left("Safari"))
        self.assertEqual(len(self.browsers), 2)
        self.browsers.disassociate_all()
        self.assertIsNone(self.browsers.pop_first())

    def test_positions(self):
        position = self.browsers.position_of_left("Microsoft")
        self.assertIsNotNone(position)
        self.assertEqual(position, self.browsers.position_of_right("Edge"))
        self.assertEqual(self.browsers.pair_at(position),
                         ("Microsoft", "Edge"))
        self.assertIsNone(self.browsers.position_of_left("Opera"))
        self.assertIsNone(self.browsers.position_of_right("Opera"))

    def test_disassociate_at(self):
        position = self.browsers.position_of_right("Chrome")
        self.assertEqual(self.browsers.disassociate_at(position),
                         ("Google", "Chrome"))
        self.assertIsNone(self.browsers.get_right("Google"))
        self.assertIsNone(self.browsers.get_left("Chrome"))
        self.assertConsistent(self.browsers)

    def test_stale_position(self):
        position = self.browsers.position_of_left("Apple")
        self.browsers.associate_values("Opera", "Presto")
        with self.assertRaises(StalePositionError):
            self.browsers.pair_at(position)
        with self.assertRaises(StalePositionError):
            self.browsers.disassociate_at(position)
        with self.assertRaises(StalePositionError):
            self.browsers.position_after(position)
        self.assertEqual(len(self.browsers), 5)

    def test_position_from_other_map(self):
        other = self.browsers.copy()
        position = other.position_of_left("Apple")
        with self.assertRaises(StalePositionError):
            self.browsers.disassociate_at(position)
        self.assertEqual(len(self.browsers), 4)

    def test_position_traversal(self):
        lefts: list[str] = []
        position = self.browsers.first_position
        while position is not None:
            lefts.append(self.browsers.pair_at(position)[0])
            position = self.browsers.position_after(position)
        self.assertEqual(lefts, list(self.browsers.left_values))
        self.assertIsNone(BidirectionalMap().first_position)

    def test_iteration(self):
        self.assertEqual(list(self.browsers),
                         [("Apple", "Safari"), ("Google", "Chrome"),
                          ("Microsoft", "Edge"), ("Mozilla", "Firefox")])
        self.assertEqual(list(self.browsers), list(self.browsers))

    def test_contains(self):
        self.assertIn(("Apple", "Safari"), self.browsers)
        self.assertNotIn(("Apple", "Chrome"), self.browsers)
        self.assertNotIn("Apple", self.browsers)
        self.assertNotIn(("Apple", "Safari", "Edge"), self.browsers)

    def test_copy_independence(self):
        browsers = copy.copy(self.browsers)
        browsers.associate_values("Apple", "Chrome")
        self.assertEqual(self.browsers.get_right("Apple"), "Safari")
        self.assertEqual(self.browsers.get_left("Chrome"), "Google")
        self.assertEqual(len(self.browsers), 4)
        self.assertEqual(len(browsers), 3)

    def test_deepcopy(self):
        bimap = BidirectionalMap({("a", 1): frozenset({1})})
        bimap_copy = copy.deepcopy(bimap)
        self.assertEqual(bimap, bimap_copy)
        bimap_copy.disassociate_left(("a", 1))
        self.assertEqual(len(bimap), 1)
        self.assertTrue(bimap_copy.is_empty)

    def test_inverse(self):
        inverse = self.browsers.inverse()
        self.assertEqual(inverse.get_right("Safari"), "Apple")
        self.assertEqual(inverse.get_left("Apple"), "Safari")
        inverse.disassociate_left("Safari")
        self.assertEqual(self.browsers.get_right("Apple"), "Safari")

    def test_equality(self):
        self.assertEqual(BidirectionalMap({"A": 1, "B": 2}),
                         BidirectionalMap([("B", 2), ("A", 1)]))
        self.assertNotEqual(BidirectionalMap({"A": 1}),
                            BidirectionalMap({"A": 2}))
        self.assertNotEqual(BidirectionalMap({"A": 1}), {"A": 1})

    def test_representation(self):
        bimap = BidirectionalMap({"A": 1, "B": 2})
        self.assertEqual(repr(bimap), "BidirectionalMap({'A': 1, 'B': 2})")
        self.assertEqual(str(bimap), "{'A' <-> 1, 'B' <-> 2}")
        self.assertEqual(str(BidirectionalMap()), "{}")

    def test_debug_logging(self):
        bimap = BidirectionalMap({"A": "X", "B": "Y"}, debug=True)
        with self.assertLogs("BidirectionalMap", level="DEBUG") as logs:
            bimap.associate_values("A", "Y")
            bimap.disassociate_all()
        self.assertEqual(len(logs.output), 2)
        self.assertIn("Associated 'A' with 'Y'", logs.output[0])

    def test_debug_logging_of_copies(self):
        bimap = BidirectionalMap({"A": "X", "B": "Y"}, debug=True)
        with self.assertLogs("BidirectionalMap", level="DEBUG") as logs:
            bimap_copy = bimap.copy()
            bimap_deepcopy = copy.deepcopy(bimap)
            bimap_inverse = bimap.inverse()
        self.assertEqual(len(logs.output), 3)
        for output in logs.output:
            self.assertIn("Created bidirectional map with 2 pairs.", output)
        self.assertEqual(len(bimap_copy), 2)
        self.assertEqual(bimap_deepcopy, bimap)
        self.assertEqual(bimap_inverse.get_right("X"), "A")
        with self.assertLogs("BidirectionalMap", level="DEBUG"):
            bimap_copy.disassociate_left("A")


if __name__ == "__main__":
    unittest.main()
