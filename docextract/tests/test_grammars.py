"""
Unit tests for the grammar adapters and their registry.
"""

import unittest

from docextract.config import DeclarationKind, DocTag, MemberKind
from docextract.grammars import (
    SUPPORTED_GRAMMARS,
    CSharpAdapter,
    GrammarAdapter,
    VisualBasicAdapter,
    adapter_for_path,
    get_adapter,
    supported_extensions,
)
from docextract.models import undocumented
from docextract.parser import parse_bytes

CSHARP_SOURCE = b"""namespace Shop
{
    /// <summary>Widget.</summary>
    public class Widget : Base, IFoo<int>
    {
        private int x, y = 2;
        public string Name { get; set; }
        public T Get<T>(int a, string b = "q", params object[] rest) { return default; }
        public void Run() { }
    }
}
"""

VB_SOURCE = b"""Namespace Shop
    ''' <summary>Widget.</summary>
    Public Class Widget
        Inherits Base
        Implements IFoo, IBar

        Private x, y As Double, name As String
        Private grid() As Integer
        Public Property Title As String

        Public Function Total(ByVal a As Integer, Optional b As String = "x") As Boolean
            Return True
        End Function

        Public Sub Reset()
        End Sub
    End Class
End Namespace
"""


def _members_by_type(type_node, adapter):
    members = {}
    for member in adapter.member_nodes(type_node):
        members.setdefault(member.type, []).append(member)
    return members


class TestRegistry(unittest.TestCase):
    """Test adapter lookup."""

    def test_supported_grammars(self):
        self.assertEqual(SUPPORTED_GRAMMARS, ("csharp", "vb"))

    def test_get_adapter(self):
        self.assertIsInstance(get_adapter("csharp"), CSharpAdapter)
        self.assertIsInstance(get_adapter("vb"), VisualBasicAdapter)

    def test_get_adapter_unknown(self):
        with self.assertRaises(ValueError):
            get_adapter("java")

    def test_adapter_for_path(self):
        self.assertEqual(adapter_for_path("a/b/Widget.cs").name, "csharp")
        self.assertEqual(adapter_for_path("Module1.Vb").name, "vb")

    def test_adapter_for_unsupported_path(self):
        with self.assertRaises(ValueError):
            adapter_for_path("widget.java")

    def test_supported_extensions(self):
        self.assertEqual(supported_extensions(), (".cs", ".vb"))


class TestGrammarAdapterBase(unittest.TestCase):
    """Test the shared adapter contract."""

    def test_base_adapter_is_abstract(self):
        with self.assertRaises(TypeError):
            GrammarAdapter()

    def test_adapter_must_implement_field_and_return_hooks(self):
        class _PartialAdapter(GrammarAdapter):
            def field_variables(self, node):
                return []

        with self.assertRaises(TypeError):
            _PartialAdapter()

    def test_void_type_belongs_to_visual_basic(self):
        self.assertFalse(hasattr(get_adapter("csharp"), "void_type"))
        self.assertEqual(VisualBasicAdapter.void_type, "Void")


class TestCSharpAdapter(unittest.TestCase):
    """Test C# node shape mapping."""

    def setUp(self):
        self.adapter = get_adapter("csharp")
        tree = parse_bytes(CSHARP_SOURCE, "csharp")
        namespace = tree.root_node.named_children[0]
        self.assertEqual(self.adapter.classify(namespace), DeclarationKind.NAMESPACE)
        children = self.adapter.container_children(namespace)
        self.class_node = next(c for c in children if c.type == "class_declaration")
        self.members = _members_by_type(self.class_node, self.adapter)

    def test_classify_class(self):
        self.assertEqual(self.adapter.classify(self.class_node), DeclarationKind.CLASS)

    def test_declaration_name(self):
        self.assertEqual(self.adapter.declaration_name(self.class_node), "Widget")

    def test_base_types(self):
        self.assertEqual(self.adapter.base_types(self.class_node), ["Base", "IFoo<int>"])

    def test_member_kinds(self):
        self.assertEqual(self.adapter.member_kind(self.members["field_declaration"][0]), MemberKind.FIELD)
        self.assertEqual(self.adapter.member_kind(self.members["property_declaration"][0]), MemberKind.PROPERTY)
        self.assertEqual(self.adapter.member_kind(self.members["method_declaration"][0]), MemberKind.METHOD)

    def test_grouped_field_variables(self):
        variables = self.adapter.field_variables(self.members["field_declaration"][0])
        self.assertEqual(variables, [("x", "int"), ("y", "int")])

    def test_property_type(self):
        self.assertEqual(self.adapter.property_type(self.members["property_declaration"][0]), "string")

    def test_method_parameters_verbatim(self):
        method = self.members["method_declaration"][0]
        self.assertEqual(self.adapter.method_return_type(method), "T")
        self.assertEqual(
            self.adapter.method_parameters(method),
            ["int a", 'string b = "q"', "params object[] rest"],
        )

    def test_method_without_parameters(self):
        method = self.members["method_declaration"][1]
        self.assertEqual(self.adapter.method_return_type(method), "void")
        self.assertEqual(self.adapter.method_parameters(method), [])

    def test_read_documentation(self):
        self.assertEqual(self.adapter.read_documentation(self.class_node, DocTag.SUMMARY), "Widget.")
        method = self.members["method_declaration"][1]
        self.assertEqual(self.adapter.read_documentation(method, DocTag.RETURNS), undocumented(DocTag.RETURNS))


class TestVisualBasicAdapter(unittest.TestCase):
    """Test VB.NET node shape mapping."""

    def setUp(self):
        self.adapter = get_adapter("vb")
        tree = parse_bytes(VB_SOURCE, "vb")
        namespace = tree.root_node.named_children[0]
        self.assertEqual(self.adapter.classify(namespace), DeclarationKind.NAMESPACE)
        wrapper = next(c for c in self.adapter.container_children(namespace) if c.type == "type_declaration")
        self.wrapper = wrapper
        self.class_node = self.adapter.resolve_declaration(wrapper)
        self.members = _members_by_type(self.class_node, self.adapter)

    def test_resolve_unwraps_type_declaration(self):
        self.assertEqual(self.class_node.type, "class_block")
        self.assertEqual(self.adapter.classify(self.class_node), DeclarationKind.CLASS)

    def test_doc_anchor_is_wrapper(self):
        self.assertEqual(self.adapter.doc_anchor(self.class_node), self.wrapper)

    def test_base_types_combine_inherits_and_implements(self):
        self.assertEqual(self.adapter.base_types(self.class_node), ["Base", "IFoo", "IBar"])

    def test_declarators_share_trailing_type(self):
        variables = self.adapter.field_variables(self.members["field_declaration"][0])
        self.assertEqual(variables, [("x", "Double"), ("y", "Double"), ("name", "String")])

    def test_array_rank_is_part_of_type(self):
        variables = self.adapter.field_variables(self.members["field_declaration"][1])
        self.assertEqual(variables, [("grid", "Integer()")])
        self.assertFalse(self.adapter.is_primitive("Integer()"))

    def test_property_type(self):
        self.assertEqual(self.adapter.property_type(self.members["property_declaration"][0]), "String")

    def test_function_signature(self):
        method = self.members["method_declaration"][0]
        self.assertEqual(self.adapter.method_return_type(method), "Boolean")
        self.assertEqual(
            self.adapter.method_parameters(method),
            ["ByVal a As Integer", 'Optional b As String = "x"'],
        )

    def test_sub_returns_void(self):
        method = self.members["method_declaration"][1]
        self.assertEqual(self.adapter.method_return_type(method), "Void")
        self.assertTrue(self.adapter.is_primitive("Void"))
        self.assertEqual(self.adapter.method_parameters(method), [])

    def test_read_documentation(self):
        self.assertEqual(self.adapter.read_documentation(self.class_node, DocTag.SUMMARY), "Widget.")


if __name__ == "__main__":
    unittest.main()
