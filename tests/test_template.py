"""Tests for [[name]] template substitution and deep key search."""

from feedlist.template import populate_template
from feedlist.treesearch import find_first


def test_populate_template_replaces_known_and_blanks_unknown():
    template = "Hello [[name]], welcome to [[app-name]] in [[missing]]!"
    assert populate_template(template, {"name": "Chad", "app-name": "feedlist"}) == (
        "Hello Chad, welcome to feedlist in !"
    )


def test_populate_template_handles_namespaced_names_and_values():
    assert populate_template("[[media:title]]/[[count]]/[[none]]", {"media:title": "T", "count": 3, "none": None}) == "T/3/"


def test_populate_template_without_mapping():
    assert populate_template("a[[b]]c") == "ac"


def test_find_first_prefers_own_key_then_document_order():
    assert find_first({"a": {"item": 1}, "item": 0}, "item") == 0
    assert find_first({"a": [{"b": {"item": 2}}, {"item": 3}]}, "item") == 2
    assert find_first({"a": 1}, "missing") is None


def test_find_first_is_depth_bounded():
    tree = {"l1": {"l2": {"l3": {"item": "deep"}}}}
    assert find_first(tree, "item", max_depth=2) is None
    assert find_first(tree, "item", max_depth=3) == "deep"
