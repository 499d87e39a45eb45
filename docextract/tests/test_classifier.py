"""
Unit tests for primitive type classification.
"""

import unittest

from docextract.classifier import build_primitive_table, is_primitive_type
from docextract.grammars.csharp import CSHARP_PRIMITIVE_TYPES
from docextract.grammars.visual_basic import VB_PRIMITIVE_TYPES


class TestBuildPrimitiveTable(unittest.TestCase):
    def test_table_is_lower_cased(self):
        table = build_primitive_table(["Int32", "BOOL"])
        self.assertEqual(table, frozenset({"int32", "bool"}))


class TestCSharpPrimitives(unittest.TestCase):
    """Test the C# primitive table."""

    def test_known_primitives(self):
        for name in ("int", "bool", "double", "decimal", "char", "float", "void", "ulong", "sbyte"):
            with self.subTest(name=name):
                self.assertTrue(is_primitive_type(name, CSHARP_PRIMITIVE_TYPES))

    def test_case_insensitive(self):
        self.assertTrue(is_primitive_type("Int32", CSHARP_PRIMITIVE_TYPES))
        self.assertTrue(is_primitive_type("DOUBLE", CSHARP_PRIMITIVE_TYPES))

    def test_composite_names(self):
        for name in ("string", "object", "List<int>", "int[]", "int?", "System.Int32", "Warehouse"):
            with self.subTest(name=name):
                self.assertFalse(is_primitive_type(name, CSHARP_PRIMITIVE_TYPES))

    def test_absent_type_is_not_primitive(self):
        self.assertFalse(is_primitive_type(None, CSHARP_PRIMITIVE_TYPES))

    def test_vb_spelling_is_not_csharp_primitive(self):
        self.assertFalse(is_primitive_type("Integer", CSHARP_PRIMITIVE_TYPES))

    def test_repeated_calls_agree(self):
        results = {is_primitive_type("long", CSHARP_PRIMITIVE_TYPES) for _ in range(5)}
        self.assertEqual(results, {True})


class TestVisualBasicPrimitives(unittest.TestCase):
    """Test the VB.NET primitive table."""

    def test_known_primitives(self):
        for name in ("Integer", "Boolean", "Double", "Decimal", "Char", "UInteger", "Long", "Single"):
            with self.subTest(name=name):
                self.assertTrue(is_primitive_type(name, VB_PRIMITIVE_TYPES))

    def test_case_insensitive(self):
        self.assertTrue(is_primitive_type("integer", VB_PRIMITIVE_TYPES))
        self.assertTrue(is_primitive_type("BOOLEAN", VB_PRIMITIVE_TYPES))

    def test_composite_names(self):
        for name in ("String", "Object", "List(Of Integer)", "Integer()", "Date"):
            with self.subTest(name=name):
                self.assertFalse(is_primitive_type(name, VB_PRIMITIVE_TYPES))

    def test_csharp_only_spellings(self):
        self.assertFalse(is_primitive_type("int", VB_PRIMITIVE_TYPES))
        self.assertFalse(is_primitive_type("bool", VB_PRIMITIVE_TYPES))


if __name__ == "__main__":
    unittest.main()
