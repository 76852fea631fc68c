from yamlshadow.comments.exporter import CommentExporter, inner_block, outer_block, reindent
from yamlshadow.comments.keytree import KeyTree
from yamlshadow.comments.shadow import capture
from yamlshadow.core.models import CommentType


def test_reindent_shifts_non_blank_lines():
    assert reindent("  # a\n\n  # b\n", 2, 4) == "    # a\n\n    # b\n"
    assert reindent("    # a\n", 4, 2) == "  # a\n"
    assert reindent("# a\n", 0, 0) == "# a\n"


def test_merge_places_block_and_side_comments():
    tree = KeyTree()
    tree.set_comment(("a",), "# about a\n")
    tree.get_or_create(("a", "b"), indent=2)
    tree.set_comment(("a", "b"), " # bee", CommentType.SIDE)
    out = CommentExporter(tree).export("a:\n  b: 1\n")
    assert out == "# about a\na:\n  b: 1 # bee\n"


def test_merge_reindents_to_emitted_column():
    tree = KeyTree()
    tree.get_or_create(("a",), indent=0)
    tree.get_or_create(("a", "b"), indent=2)
    tree.set_comment(("a", "b"), "  # moved\n")
    out = CommentExporter(tree).export("a:\n    b: 1\n")
    assert out == "a:\n    # moved\n    b: 1\n"


def test_missing_paths_are_dropped():
    tree = KeyTree()
    tree.set_comment(("gone",), "# lost\n")
    tree.set_comment(("kept",), "# kept\n")
    assert CommentExporter(tree).export("kept: 1\n") == "# kept\nkept: 1\n"


def test_header_and_footer_surround_content():
    tree = KeyTree()
    tree.root.comment = "# head\n\n"
    tree.footer.comment = "# End"
    assert CommentExporter(tree).export("a: 1\n") == "# head\n\na: 1\n# End\n"


def test_side_comment_deferred_to_closing_quote():
    tree = KeyTree()
    tree.get_or_create(("msg",), indent=0)
    tree.set_comment(("msg",), " # note", CommentType.SIDE)
    out = CommentExporter(tree).export("msg: 'a\n\n  b'\nnext: 1\n")
    assert out == "msg: 'a\n\n  b' # note\nnext: 1\n"


def test_parse_then_export_is_identity():
    """STABILITY TEST: comments read from a document land where they were."""
    text = "# h\n\nroot:\n  # c\n  - a # x\n  - b\n# f\n"
    tree = capture(text)
    plain = "root:\n  - a\n  - b\n"
    assert CommentExporter(tree).export(plain) == text


def dash_line_tree():
    tree = KeyTree()
    tree.get_or_create(("items",), indent=0)
    tree.get_or_create(("items", 0), indent=2)
    tree.get_or_create(("items", 0, "name"), indent=4)
    return tree


def test_side_comments_sharing_a_line_are_merged():
    """Nothing is lost when the element and its first key both carry one."""
    tree = dash_line_tree()
    tree.set_comment(("items", 0), " # item", CommentType.SIDE)
    tree.set_comment(("items", 0, "name"), " # key", CommentType.SIDE)
    out = CommentExporter(tree).export("items:\n  - name: x\n")
    assert out == "items:\n  - name: x # item # key\n"


def test_dash_line_blocks_read_back_onto_their_paths():
    tree = dash_line_tree()
    tree.set_comment(("items", 0), "  # about item\n")
    tree.set_comment(("items", 0, "name"), "    # about name\n")
    out = CommentExporter(tree).export("items:\n  - name: x\n")
    assert out == "items:\n  # about item\n    # about name\n  - name: x\n"

    again = capture(out)
    assert again.get_comment(("items", 0)) == "  # about item\n"
    assert again.get_comment(("items", 0, "name")) == "    # about name\n"


def test_inner_block_stays_in_its_column():
    assert inner_block("# shallow\n\n      # deeper\n", 4) == "    # shallow\n      # deeper\n"
    assert inner_block("\n", 4) == ""


def test_outer_block_pulls_back_trailing_deep_lines():
    assert outer_block("  # a\n      # deep\n", 2, 4) == "  # a\n  # deep\n"
    assert outer_block("      # kept\n\n", 2, 4) == "      # kept\n\n"


def test_element_block_with_deep_tail_stays_on_element():
    tree = dash_line_tree()
    tree.set_comment(("items", 0), "  # a\n      # deep\n")
    out = CommentExporter(tree).export("items:\n  - name: x\n")
    assert out == "items:\n  # a\n  # deep\n  - name: x\n"
    assert capture(out).get_comment(("items", 0, "name")) is None
