import pytest

from yamlshadow.core.engine import YamlEngine
from yamlshadow.core.exceptions import InvalidConfigurationError
from yamlshadow.core.options import YamlOptions


def test_dump_keeps_insertion_order():
    assert YamlEngine().dump({"b": 1, "a": 2}) == "b: 1\na: 2\n"


def test_dump_block_layout():
    engine = YamlEngine()
    assert engine.dump({"items": ["a", "b"]}) == "items:\n  - a\n  - b\n"
    assert engine.dump({"servers": [{"host": "a", "port": 1}]}) == "servers:\n  - host: a\n    port: 1\n"
    assert engine.dump({"a": {"b": {"c": True}}}) == "a:\n  b:\n    c: true\n"


def test_dump_list_offset_option():
    engine = YamlEngine(YamlOptions(indent_list=0))
    assert engine.dump({"items": ["a"]}) == "items:\n- a\n"


def test_empty_values_dump_to_empty_text():
    engine = YamlEngine()
    assert engine.dump({}) == ""
    assert engine.dump(None) == ""


def test_load_ignores_comments():
    assert YamlEngine().load("# c\na: 1 # side\n") == {"a": 1}


def test_load_error_carries_position():
    with pytest.raises(InvalidConfigurationError) as excinfo:
        YamlEngine().load("key: value\n  bad: x\n")
    assert excinfo.value.line == 2
    assert str(excinfo.value).startswith("L2:")


def test_atomic_write(tmp_path):
    target = tmp_path / "out.yml"
    YamlEngine().atomic_write(target, "a: 1\n")
    assert target.read_text(encoding="utf-8") == "a: 1\n"
    assert list(tmp_path.iterdir()) == [target]


def test_invalid_options_are_rejected():
    with pytest.raises(ValueError):
        YamlOptions(indent=0)
    with pytest.raises(ValueError):
        YamlOptions(path_separator="[")
