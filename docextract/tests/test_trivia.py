"""
Unit tests for trivia.py

Tests documentation comment detection, leading comment collection, block
grouping and section lookup for both grammars.
"""

import unittest

from docextract.config import DocTag
from docextract.grammars.csharp import CSHARP_LAYOUT_NODES
from docextract.grammars.visual_basic import VB_LAYOUT_NODES
from docextract.parser import CSHARP, VISUAL_BASIC, node_text, parse_bytes
from docextract.trivia import (
    find_doc_section,
    find_top_level_section,
    get_leading_comments,
    group_doc_blocks,
    is_doc_comment,
)

EDGE_CASES = b"""/// <summary>Uses <see cref="Foo"/> inside.</summary>
class A { }

/// <summary>Unclosed
class B { }

//// <summary>Not a doc.</summary>
class C { }

/// <summary/>
class D { }

/// <summary>Old.</summary>

/// <summary>Detached gap.</summary>
class E { }

/// <summary>Before a plain comment.</summary>
// plain note
class F { }

class G { }
"""


def _csharp_classes(source: bytes) -> dict:
    tree = parse_bytes(source, CSHARP)
    return {
        node_text(child.child_by_field_name("name")): child
        for child in tree.root_node.named_children
        if child.type == "class_declaration"
    }


def _csharp_section(node, tag: DocTag):
    return find_doc_section(node, tag, "///", CSHARP_LAYOUT_NODES)


class TestDocCommentDetection(unittest.TestCase):
    """Test documentation comment recognition."""

    def test_triple_slash(self):
        self.assertTrue(is_doc_comment("/// <summary>", "///"))

    def test_double_slash_is_not_doc(self):
        self.assertFalse(is_doc_comment("// note", "///"))

    def test_quadruple_slash_is_not_doc(self):
        self.assertFalse(is_doc_comment("//// commented out", "///"))

    def test_vb_triple_quote(self):
        self.assertTrue(is_doc_comment("''' <summary>", "'''"))
        self.assertFalse(is_doc_comment("' note", "'''"))
        self.assertFalse(is_doc_comment("'''' old", "'''"))

    def test_block_comment_is_not_doc(self):
        self.assertFalse(is_doc_comment("/** not xml doc */", "///"))


class TestLeadingComments(unittest.TestCase):
    """Test collecting the comments attached before a declaration."""

    def test_collects_run_in_source_order(self):
        classes = _csharp_classes(b"/// one\n/// two\nclass A { }\n")
        comments = get_leading_comments(classes["A"], CSHARP_LAYOUT_NODES)
        self.assertEqual([node_text(c) for c in comments], ["/// one", "/// two"])

    def test_stops_at_previous_declaration(self):
        classes = _csharp_classes(b"/// first\nclass A { }\nclass B { }\n")
        self.assertEqual(get_leading_comments(classes["B"], CSHARP_LAYOUT_NODES), [])

    def test_skips_region_directives(self):
        source = b"class A { }\n/// <summary>Doc.</summary>\n#region Tools\nclass B { }\n#endregion\n"
        classes = _csharp_classes(source)
        comments = get_leading_comments(classes["B"], CSHARP_LAYOUT_NODES)
        self.assertEqual(len(comments), 1)


class TestGroupDocBlocks(unittest.TestCase):
    def test_row_gap_splits_blocks(self):
        classes = _csharp_classes(EDGE_CASES)
        comments = get_leading_comments(classes["E"], CSHARP_LAYOUT_NODES)
        blocks = group_doc_blocks(comments, "///")
        self.assertEqual(len(blocks), 2)
        self.assertEqual(blocks[0], ["/// <summary>Old.</summary>"])

    def test_plain_comment_splits_blocks(self):
        classes = _csharp_classes(EDGE_CASES)
        comments = get_leading_comments(classes["F"], CSHARP_LAYOUT_NODES)
        blocks = group_doc_blocks(comments, "///")
        self.assertEqual(blocks, [["/// <summary>Before a plain comment.</summary>"]])


class TestFindTopLevelSection(unittest.TestCase):
    """Test the tag-balanced section scan of one block."""

    def test_multi_section_block(self):
        block = "/// <summary>\n/// Text.\n/// </summary>\n/// <returns>R</returns>"
        self.assertEqual(find_top_level_section(block, DocTag.SUMMARY), "<summary>\n/// Text.\n/// </summary>")
        self.assertEqual(find_top_level_section(block, DocTag.RETURNS), "<returns>R</returns>")

    def test_unclosed_section(self):
        self.assertIsNone(find_top_level_section("/// <summary>Unclosed", DocTag.SUMMARY))

    def test_prose_angle_bracket_and_ampersand(self):
        block = "/// <summary>True when a < b & b > 0.</summary>"
        self.assertEqual(find_top_level_section(block, DocTag.SUMMARY), "<summary>True when a < b & b > 0.</summary>")

    def test_unclosed_child_is_closed_by_parent(self):
        block = "/// <summary>Use <b>bold text.</summary>"
        self.assertEqual(find_top_level_section(block, DocTag.SUMMARY), block[4:])

    def test_nested_element_is_not_top_level(self):
        block = "/// <returns>See <summary>x</summary></returns>"
        self.assertIsNone(find_top_level_section(block, DocTag.SUMMARY))

    def test_attributes_on_section_tag(self):
        block = '/// <summary lang="en">Text.</summary>'
        self.assertEqual(find_top_level_section(block, DocTag.SUMMARY), '<summary lang="en">Text.</summary>')


class TestFindDocSectionCSharp(unittest.TestCase):
    """Test section lookup on C# declarations."""

    def setUp(self):
        self.classes = _csharp_classes(EDGE_CASES)

    def test_nested_markup_is_returned_raw(self):
        section = _csharp_section(self.classes["A"], DocTag.SUMMARY)
        self.assertEqual(section, '<summary>Uses <see cref="Foo"/> inside.</summary>')

    def test_unclosed_section_is_undocumented(self):
        self.assertIsNone(_csharp_section(self.classes["B"], DocTag.SUMMARY))

    def test_quadruple_slash_is_undocumented(self):
        self.assertIsNone(_csharp_section(self.classes["C"], DocTag.SUMMARY))

    def test_self_closing_tag_is_undocumented(self):
        self.assertIsNone(_csharp_section(self.classes["D"], DocTag.SUMMARY))

    def test_first_matching_block_wins(self):
        self.assertEqual(_csharp_section(self.classes["E"], DocTag.SUMMARY), "<summary>Old.</summary>")

    def test_undocumented_declaration(self):
        self.assertIsNone(_csharp_section(self.classes["G"], DocTag.SUMMARY))

    def test_only_requested_tag_is_searched(self):
        source = b"/// <summary>Adds.</summary>\n/// <returns>Total.</returns>\nclass H { }\n"
        node = _csharp_classes(source)["H"]
        self.assertEqual(_csharp_section(node, DocTag.RETURNS), "<returns>Total.</returns>")
        self.assertEqual(_csharp_section(node, DocTag.SUMMARY), "<summary>Adds.</summary>")

    def test_missing_tag_in_valid_block(self):
        node = _csharp_classes(b"/// <remarks>Only remarks.</remarks>\nclass H { }\n")["H"]
        self.assertIsNone(_csharp_section(node, DocTag.SUMMARY))

    def test_bare_ampersand_in_summary(self):
        node = _csharp_classes(b"/// <summary>Loads R&D data.</summary>\nclass H { }\n")["H"]
        self.assertEqual(_csharp_section(node, DocTag.SUMMARY), "<summary>Loads R&D data.</summary>")

    def test_malformed_sibling_section(self):
        source = b"/// <summary>Good summary.</summary>\n/// <remarks>if a < b then</remarks>\nclass H { }\n"
        node = _csharp_classes(source)["H"]
        self.assertEqual(_csharp_section(node, DocTag.SUMMARY), "<summary>Good summary.</summary>")

    def test_section_nested_in_another_is_ignored(self):
        node = _csharp_classes(b"/// <returns>See <summary>x</summary></returns>\nclass H { }\n")["H"]
        self.assertIsNone(_csharp_section(node, DocTag.SUMMARY))

    def test_multi_line_section_keeps_markers(self):
        source = b"/// <summary>\n/// Line one.\n/// </summary>\nclass H { }\n"
        node = _csharp_classes(source)["H"]
        self.assertEqual(
            _csharp_section(node, DocTag.SUMMARY),
            "<summary>\n/// Line one.\n/// </summary>",
        )


class TestFindDocSectionVisualBasic(unittest.TestCase):
    """Test section lookup on VB.NET declarations."""

    def test_member_documentation_across_blank_lines(self):
        source = (
            b"Public Class Order\n"
            b"    ''' <summary>\n"
            b"    ''' Order number.\n"
            b"    ''' </summary>\n"
            b"    Public Number As Integer\n"
            b"End Class\n"
        )
        tree = parse_bytes(source, VISUAL_BASIC)
        class_block = tree.root_node.named_children[0].named_children[0]
        field = next(c for c in class_block.named_children if c.type == "field_declaration")

        section = find_doc_section(field, DocTag.SUMMARY, "'''", VB_LAYOUT_NODES)
        self.assertEqual(section, "<summary>\n''' Order number.\n''' </summary>")

    def test_type_documentation_before_attribute(self):
        source = b"''' <summary>Order.</summary>\n<Serializable>\nPublic Class Order\nEnd Class\n"
        tree = parse_bytes(source, VISUAL_BASIC)
        wrapper = next(c for c in tree.root_node.named_children if c.type == "type_declaration")

        section = find_doc_section(wrapper, DocTag.SUMMARY, "'''", VB_LAYOUT_NODES)
        self.assertEqual(section, "<summary>Order.</summary>")


if __name__ == "__main__":
    unittest.main()
