"""
Tests for canonical encoding, value equality and the version constant.

These tests verify:
1. canon() is deterministic and independent of key order
2. deep_equal() follows JSON semantics for numbers and booleans
3. Unsupported values are rejected
"""

import unittest

from stackdiff import STACKDIFF_VERSION
from stackdiff.core.canon import canon, deep_equal, fingerprint
from stackdiff.core.errors import InvalidValueError, StackDiffError


class TestCanon(unittest.TestCase):
    def test_key_order_is_irrelevant(self):
        self.assertEqual(canon({"b": 1, "a": [1, 2]}), canon({"a": [1, 2], "b": 1}))

    def test_compact_output(self):
        self.assertEqual(canon({"b": None, "a": "é"}), '{"a":"é","b":null}'.encode())

    def test_tuple_encodes_like_list(self):
        self.assertEqual(canon((1, 2)), canon([1, 2]))

    def test_non_finite_floats(self):
        self.assertEqual(canon(float("nan")), b"NaN")
        self.assertEqual(canon(float("-inf")), b"-Infinity")
        self.assertEqual(canon({"a": float("inf")}), b'{"a":Infinity}')

    def test_fingerprint_is_short_and_stable(self):
        value = {"Properties": {"BucketName": "a"}}
        self.assertEqual(len(fingerprint(value)), 12)
        self.assertEqual(fingerprint(value), fingerprint(dict(value)))

    def test_unsupported_value_raises(self):
        with self.assertRaises(InvalidValueError) as ctx:
            canon({"when": object()})
        self.assertIsInstance(ctx.exception, StackDiffError)
        self.assertIsInstance(ctx.exception, TypeError)


class TestDeepEqual(unittest.TestCase):
    def test_integral_float_equals_int(self):
        self.assertTrue(deep_equal(1, 1.0))
        self.assertTrue(deep_equal({"a": [2.0]}, {"a": [2]}))

    def test_bool_is_not_number(self):
        self.assertFalse(deep_equal(True, 1))
        self.assertFalse(deep_equal([False], [0]))

    def test_none_is_not_empty(self):
        self.assertFalse(deep_equal(None, {}))
        self.assertFalse(deep_equal("", None))

    def test_non_finite_float_is_not_its_spelling(self):
        self.assertFalse(deep_equal(float("nan"), "NaN"))
        self.assertFalse(deep_equal([float("inf")], ["Infinity"]))
        self.assertFalse(deep_equal(float("-inf"), "-Infinity"))

    def test_non_finite_float_equals_itself(self):
        self.assertTrue(deep_equal(float("nan"), float("nan")))
        self.assertTrue(deep_equal({"a": float("inf")}, {"a": float("inf")}))

    def test_array_order_matters(self):
        self.assertFalse(deep_equal([1, 2], [2, 1]))


class TestVersion(unittest.TestCase):
    def test_version_format(self):
        parts = STACKDIFF_VERSION.split(".")
        self.assertEqual(len(parts), 3)
        for part in parts:
            self.assertTrue(part.isdigit())


if __name__ == "__main__":
    unittest.main()
