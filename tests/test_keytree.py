import pytest

from yamlshadow.comments.keytree import KeyTree, format_path, parse_path
from yamlshadow.core.models import CommentType


@pytest.mark.parametrize("text, expected", [
    ("a", ("a",)),
    ("a.b.c", ("a", "b", "c")),
    ("servers[2].host", ("servers", 2, "host")),
    ("matrix[0][1]", ("matrix", 0, 1)),
    ("[0].name", (0, "name")),
    (r"dotted\.key.child", ("dotted.key", "child")),
    (r"odd\[1]", ("odd[1]",)),
    ("", ()),
])
def test_parse_path(text, expected):
    assert parse_path(text) == expected


@pytest.mark.parametrize("text", ["a..b", "a.", "a[x]", "a[1", ".a"])
def test_parse_path_rejects_malformed(text):
    with pytest.raises(ValueError):
        parse_path(text)


def test_format_path_escapes_keys():
    """Keys holding the separator or '[' survive a format/parse cycle."""
    path = ("dotted.key", "odd[1]", 3, "leaf")
    text = format_path(path)
    assert text == r"dotted\.key.odd\[1][3].leaf"
    assert parse_path(text) == path


def test_custom_separator():
    assert parse_path("a/b[1]/c", "/") == ("a", "b", 1, "c")
    assert format_path(("a", "b", 1, "c"), "/") == "a/b[1]/c"


def test_get_or_create_builds_ancestors_with_default_indent():
    tree = KeyTree(indent=2)
    node = tree.get_or_create(("a", "b", "c"))
    assert node.indent == 4
    assert tree.get(("a",)).indent == 0
    assert tree.get(("a", "b")).indent == 2
    assert tree.root.children == ["a"]
    assert len(tree) == 3


def test_get_or_create_is_unique_per_path():
    tree = KeyTree()
    first = tree.get_or_create(("a",), indent=0)
    assert tree.get_or_create(("a",)) is first


def test_children_keep_first_seen_order():
    tree = KeyTree()
    for key in ("zeta", "alpha", "mid"):
        tree.get_or_create((key,))
    tree.get_or_create(("alpha",))
    assert tree.root.children == ["zeta", "alpha", "mid"]
    assert [n.path for n in tree.walk()] == [("zeta",), ("alpha",), ("mid",)]
    assert [tree.get((k,)).position for k in ("zeta", "alpha", "mid")] == [0, 1, 2]


def test_walk_is_depth_first():
    tree = KeyTree()
    tree.get_or_create(("a", "x"))
    tree.get_or_create(("b",))
    tree.get_or_create(("a", "y"))
    assert tree.paths() == [("a",), ("a", "x"), ("a", "y"), ("b",)]


def test_block_and_side_comments_are_independent():
    tree = KeyTree()
    tree.set_comment(("a",), "# block\n", CommentType.BLOCK)
    tree.set_comment(("a",), " # side", CommentType.SIDE)
    tree.set_comment(("a",), None, CommentType.SIDE)
    assert tree.get_comment(("a",), CommentType.BLOCK) == "# block\n"
    assert tree.get_comment(("a",), CommentType.SIDE) is None


def test_get_comment_on_unknown_path_is_none():
    tree = KeyTree()
    assert tree.get_comment(("nope",)) is None
    assert tree.set_comment(("nope",), None) is None
    assert ("nope",) not in tree


def test_shift_elements_moves_following_subtrees():
    tree = KeyTree()
    tree.set_comment(("items", 0), "# zero\n")
    tree.set_comment(("items", 1), "# one\n")
    tree.set_comment(("items", 2), "# two\n")
    tree.set_comment(("items", 2, "name"), " # nested", CommentType.SIDE)

    tree.shift_elements(("items",), 1)

    assert tree.get_comment(("items", 0)) == "# zero\n"
    assert tree.get_comment(("items", 1)) == "# two\n"
    assert tree.get_comment(("items", 1, "name"), CommentType.SIDE) == " # nested"
    assert tree.get(("items", 2)) is None
    assert tree.get(("items",)).children == [0, 1]


def test_clear_resets_footer_and_nodes():
    tree = KeyTree()
    tree.set_comment(("a",), "# a\n")
    tree.footer.comment = "# end\n"
    tree.clear()
    assert len(tree) == 0
    assert tree.footer.comment is None
