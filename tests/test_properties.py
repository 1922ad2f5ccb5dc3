import io

import pytest

from confz import LayeredProperties, PropertiesFormatError, dumps_properties, load_properties


def _load(text):
    return load_properties(io.StringIO(text))


def test_separators_and_whitespace():
    props = _load("a=1\nb : 2\nc 3\n  d=  spaced value \n")
    assert props == {"a": "1", "b": "2", "c": "3", "d": "spaced value "}


def test_comments_and_blank_lines_are_skipped():
    props = _load("# comment\n! also a comment\n\n   \nkey=value\n")
    assert props == {"key": "value"}


def test_continuation_lines():
    props = _load("path=a:\\\n    b:\\\n    c\nnext=1\n")
    assert props == {"path": "a:b:c", "next": "1"}


def test_escaped_backslash_is_not_a_continuation():
    props = _load("dir=C:\\\\\nnext=1\n")
    assert props == {"dir": "C:\\", "next": "1"}


def test_escapes_in_keys_and_values():
    props = _load("my\\ key\\=x=tab\\there\nuni=\\u00e9t\\u00e9\n")
    assert props == {"my key=x": "tab\there", "uni": "\u00e9t\u00e9"}


def test_key_without_value():
    assert _load("flag\n") == {"flag": ""}


def test_later_duplicates_win():
    assert _load("a=1\na=2\n") == {"a": "2"}


def test_binary_stream_is_decoded_as_latin1():
    props = load_properties(io.BytesIO("name=caf\u00e9\n".encode("latin-1")))
    assert props == {"name": "caf\u00e9"}


def test_malformed_unicode_escape():
    with pytest.raises(PropertiesFormatError) as info:
        _load("ok=1\nbad=\\u12x\n")
    assert info.value.lineno == 2
    assert isinstance(info.value, IOError)


def test_string_instead_of_stream_is_rejected():
    with pytest.raises(TypeError):
        load_properties("a=1")


def test_dump_escapes_special_characters():
    entries = {"a key": "x=y", "multi": "line\nbreak", "lead": " space"}
    text = dumps_properties(entries)
    assert text.splitlines()[0] == "a\\ key=x\\=y"
    assert _load(text) == entries


def test_layered_lookup_falls_back_to_defaults():
    props = LayeredProperties({"a": "default-a", "b": "default-b"})
    props.set("a", "explicit-a")
    assert props.get("a") == "explicit-a"
    assert props.get("b") == "default-b"
    assert props.get("c") is None
    assert props.get("c", "fallback") == "fallback"
    assert "a" in props
    assert "b" not in props
    assert props.is_present("b")


def test_layered_lookup_order_is_explicit_then_defaults():
    defaults = {"a": "1"}
    props = LayeredProperties(defaults)
    assert props.lookup_order() == [props.values, defaults]
    assert LayeredProperties().lookup_order() == [{}]


def test_set_default_creates_default_layer():
    props = LayeredProperties()
    assert props.set_default("a", "1") is None
    assert props.set_default("a", "2") == "1"
    assert props.get("a") == "2"
    assert "a" not in props


def test_rebase_keeps_explicit_values():
    props = LayeredProperties({"a": "old"})
    props.set("b", "explicit")
    props.rebase({"a": "new", "b": "new-b"})
    assert props.get("a") == "new"
    assert props.get("b") == "explicit"
    props.clear()
    assert props.get("b") == "new-b"


def test_items_flatten_both_layers():
    props = LayeredProperties({"a": "1", "b": "2"})
    props.set("b", "3")
    props.set("c", "4")
    assert props.items() == [("a", "1"), ("b", "3"), ("c", "4")]
    assert props.explicit_items() == [("b", "3"), ("c", "4")]


def test_update_merges_into_explicit_layer():
    props = LayeredProperties({"a": "1"})
    props.update({"a": "2", "b": "3"})
    assert props.explicit_items() == [("a", "2"), ("b", "3")]
    assert props.defaults == {"a": "1"}
