import pytest

from yamlshadow.comments.shadow import CommentShadow, capture, split_block, split_header
from yamlshadow.core.models import CommentType


def test_block_comment_attaches_to_next_key():
    tree = capture("test:\n  # Hello!\n  string: Hello world\n")
    assert tree.get_comment(("test", "string")) == "  # Hello!\n"
    assert tree.get(("test", "string")).indent == 2
    assert tree.get_comment(("test",)) is None


def test_side_comment_raw_form():
    tree = capture("value: 5 # five\n")
    assert tree.get_comment(("value",), CommentType.SIDE) == " # five"
    assert tree.get_comment(("value",), CommentType.BLOCK) is None


def test_footer_captures_trailing_comments():
    tree = capture("a: 1\n\n# End\n")
    assert tree.footer.comment == "\n# End\n"
    assert tree.get_comment(("a",)) is None


def test_header_needs_a_closing_blank_line():
    tree = capture("# Header\n\n# About a\na: 1\n")
    assert tree.root.comment == "# Header\n\n"
    assert tree.get_comment(("a",)) == "# About a\n"

    tree = capture("# About a\na: 1\n")
    assert tree.root.comment is None
    assert tree.get_comment(("a",)) == "# About a\n"


def test_split_header():
    assert split_header(["# h", "", "# c"]) == 2
    assert split_header(["", "# h", "", "x"]) == 3
    assert split_header(["# only"]) == 0
    assert split_header(["", ""]) == 0


def test_document_without_content_splits_header_and_footer():
    tree = capture("# head\n\n# tail\n")
    assert tree.root.comment == "# head\n\n"
    assert tree.footer.comment == "# tail\n"


def test_blank_lines_are_kept_in_block_comments():
    tree = capture("first: 1\n\n# second key\nsecond: 2\n")
    assert tree.get_comment(("second",)) == "\n# second key\n"


def test_list_item_comments():
    """Comments on a dash line anchor to the element path."""
    text = (
        "servers:\n"
        "  - host: a\n"
        "    port: 1\n"
        "  # backup\n"
        "  - host: b # spare\n"
        "    port: 2\n"
    )
    tree = capture(text)
    assert tree.get_comment(("servers", 1)) == "  # backup\n"
    assert tree.get_comment(("servers", 1, "host")) is None
    assert tree.get_comment(("servers", 1), CommentType.SIDE) == " # spare"
    assert tree.get_comment(("servers", 1, "host"), CommentType.SIDE) is None
    assert tree.get(("servers", 1)).indent == 2
    assert tree.get(("servers", 1, "host")).indent == 4


def test_deeper_indented_comment_lines_stay_together():
    tree = capture("a:\n  # outer\n      # deeper\n  b: 1\n")
    assert tree.get_comment(("a", "b")) == "  # outer\n      # deeper\n"


def test_comment_inside_block_scalar_is_content():
    tree = capture("conf: |\n  # literal\n  text\nnext: 1\n")
    assert tree.get_comment(("next",)) is None
    assert tree.footer.comment is None


def test_side_comment_on_closing_quote_line():
    tree = capture("msg: 'a\n  b' # note\nnext: 1\n")
    assert tree.get_comment(("msg",), CommentType.SIDE) == " # note"


def test_crlf_input():
    tree = capture("# c\r\na: 1 # one\r\n")
    assert tree.get_comment(("a",)) == "# c\n"
    assert tree.get_comment(("a",), CommentType.SIDE) == " # one"


def test_shadow_reuses_given_tree():
    shadow = CommentShadow()
    tree = shadow.capture("a: 1 # x\n")
    assert shadow.tree is tree
    assert tree.paths() == [("a",)]


def test_dash_line_block_comments_split_by_column():
    """Lines reaching the key's column belong to the key, the rest to the element."""
    text = (
        "items:\n"
        "  # about item\n"
        "    # about name\n"
        "  - name: x\n"
        "    v: 1\n"
    )
    tree = capture(text)
    assert tree.get_comment(("items", 0)) == "  # about item\n"
    assert tree.get_comment(("items", 0, "name")) == "    # about name\n"


def test_blank_line_keeps_deep_lines_on_the_element():
    tree = capture("items:\n    # deep\n\n  - name: x\n")
    assert tree.get_comment(("items", 0)) == "    # deep\n\n"
    assert tree.get_comment(("items", 0, "name")) is None


@pytest.mark.parametrize("lines, expected", [
    (["  # a", "    # b"], [["  # a"], ["    # b"]]),
    (["    # a", "  # b"], [["    # a", "  # b"], []]),
    (["    # a", "", "    # b"], [["    # a", ""], ["    # b"]]),
    ([], [[], []]),
])
def test_split_block(lines, expected):
    nodes = [(("items", 0), 2), (("items", 0, "name"), 4)]
    assert split_block(lines, nodes) == expected


def test_nested_element_lines_split_three_ways():
    text = "grid:\n  # row\n    # cell\n      # key\n  - - a: 1\n"
    tree = capture(text)
    assert tree.get_comment(("grid", 0)) == "  # row\n"
    assert tree.get_comment(("grid", 0, 0)) == "    # cell\n"
    assert tree.get_comment(("grid", 0, 0, "a")) == "      # key\n"


def test_document_marker_side_comment_joins_header():
    tree = capture("--- # doc\na: 1\n")
    assert tree.root.comment == "# doc\n\n"
    assert tree.get_comment(("a",)) is None


def test_document_marker_side_comment_after_header():
    tree = capture("# head\n\n--- # doc\na: 1\n")
    assert tree.root.comment == "# head\n# doc\n\n"


def test_end_marker_side_comment_becomes_footer():
    tree = capture("a: 1\n... # end\n")
    assert tree.get_comment(("a",), CommentType.SIDE) is None
    assert tree.footer.comment == "# end\n"
