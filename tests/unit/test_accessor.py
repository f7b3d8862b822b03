"""Tests for TranslationAccessor key resolution and validation."""

import pickle

import pytest

from i18n_accessor.accessor import (
    TranslationAccessor,
    keys_of,
    node_of,
    path_of,
    resolve_key,
    wrap,
)
from i18n_accessor.errors import InvalidKeyError, MissingPluralError
from i18n_accessor.tree import TranslatedString, build_tree


class TestLeafAccess:
    def test_leaf_returns_value(self, tree):
        assert wrap(tree).errors().not_found() == "missing"

    def test_branch_accessor_reused_for_siblings(self, tree):
        errors = wrap(tree).errors()
        assert errors.permission_denied() == "You do not have access to %1"

    def test_leaf_is_plain_str(self, tree):
        result = wrap(tree).status().ok()

        assert type(result) is str
        assert not isinstance(result, TranslatedString)

    def test_tree_itself_returns_translated_strings(self, tree):
        """The underlying tree hands out its own string type; the accessor must not."""
        leaf = tree.child("status").child("ok")
        assert isinstance(leaf.to_display_string(), TranslatedString)

    def test_item_access_matches_attribute_access(self, tree):
        text = wrap(tree)
        assert text["errors"]()["not_found"]() == text.errors().not_found()

    def test_keys_that_are_not_identifiers(self):
        text = wrap(build_tree({"http": {"404": "not found", "not-allowed": "nope"}}))

        assert text.http()["404"]() == "not found"
        assert text.http()["not-allowed"]() == "nope"


class TestBranchAccess:
    def test_branch_returns_accessor(self, tree):
        assert isinstance(wrap(tree).errors(), TranslationAccessor)

    def test_branch_matches_direct_wrap(self, tree):
        via_root = wrap(tree).errors()
        direct = wrap(tree.child("errors"))

        assert keys_of(via_root) == keys_of(direct)
        assert via_root.not_found() == direct.not_found()
        assert via_root == direct

    def test_deep_branch(self, tree):
        text = wrap(tree)
        assert text.deep().a().b().c() == "bottom"
        assert path_of(text.deep().a().b()) == "deep.a.b"

    def test_empty_branch_is_a_string(self, tree):
        result = wrap(tree).empty()

        assert result == ""
        assert type(result) is str

    def test_plural_entry_is_a_leaf(self, tree):
        """A '!!pl' entry is resolved, not wrapped, even though its keys are integers."""
        count = wrap(tree).items().count
        assert count(0) == "no items"
        assert count(1) == "one item"
        assert count(7) == "many items"
        assert type(count(7)) is str

    def test_plural_entry_without_count(self, tree):
        assert wrap(tree).items().count() == "many items"


class TestChainedAccess:
    """Attributes of a key resolve the key first: ``text.errors.not_found()``."""

    def test_leaf_through_branch_key(self, tree):
        assert wrap(tree).errors.not_found() == "missing"

    def test_plural_through_branch_key(self, tree):
        count = wrap(tree).items.count

        assert count(1) == "one item"
        assert count(5) == "many items"
        assert type(count(5)) is str

    def test_deep_chain(self, tree):
        assert wrap(tree).deep.a.b.c() == "bottom"

    def test_items_chain(self, tree):
        assert wrap(tree)["errors"]["not_found"]() == "missing"

    def test_chain_matches_calls(self, tree):
        text = wrap(tree)
        assert text.errors.permission_denied() == text.errors().permission_denied()

    def test_unknown_child_of_key(self, tree):
        with pytest.raises(InvalidKeyError) as exc_info:
            wrap(tree).errors.nope

        assert exc_info.value.path == "errors"
        assert exc_info.value.terminus == "nope"

    def test_leaf_has_no_children(self, tree):
        with pytest.raises(InvalidKeyError) as exc_info:
            wrap(tree).status.ok.extra

        assert exc_info.value.path == "status.ok"
        assert exc_info.value.terminus == "extra"

    def test_empty_branch_has_no_children(self, tree):
        with pytest.raises(InvalidKeyError) as exc_info:
            wrap(tree).empty["anything"]

        assert exc_info.value.key == "empty.anything"

    def test_untagged_plurals_fail_on_chain(self, malformed_tree):
        with pytest.raises(MissingPluralError) as exc_info:
            wrap(malformed_tree).errors.count.one

        assert exc_info.value.path == "errors.count"
        assert exc_info.value.terminus == 1

    def test_key_is_read_only(self, tree):
        key = wrap(tree).errors

        with pytest.raises(AttributeError):
            key.not_found = "x"

    def test_repr(self, tree):
        assert repr(wrap(tree).errors.not_found) == "<KeyAccessor key='errors.not_found'>"


class TestInvalidKey:
    def test_unknown_key_raises(self, tree):
        errors = wrap(tree).errors()

        with pytest.raises(InvalidKeyError) as exc_info:
            errors.nope()

        assert exc_info.value.path == "errors"
        assert exc_info.value.terminus == "nope"
        assert exc_info.value.key == "errors.nope"

    @pytest.mark.parametrize("name", ["d", "wrap", "keys", "_node", "_accessors", "_lookup", "items_"])
    def test_every_unregistered_name_raises(self, tree, name):
        """Names of the accessor's own machinery are ordinary lookup misses."""
        status = wrap(tree).status()

        with pytest.raises(InvalidKeyError) as exc_info:
            getattr(status, name)

        assert exc_info.value.terminus == name
        assert exc_info.value.path == "status"

    def test_unknown_key_at_root(self, tree):
        with pytest.raises(InvalidKeyError) as exc_info:
            wrap(tree).missing

        assert exc_info.value.path == ""
        assert exc_info.value.key == "missing"
        assert "i18n key missing does not exist." in str(exc_info.value)

    def test_unknown_item_raises(self, tree):
        with pytest.raises(InvalidKeyError):
            wrap(tree)["nope"]

    def test_unhashable_item_raises_invalid_key(self, tree):
        with pytest.raises(InvalidKeyError):
            wrap(tree)[["errors"]]

    def test_message_names_call_site(self, tree):
        with pytest.raises(InvalidKeyError) as exc_info:
            wrap(tree).errors().nope()

        error = exc_info.value
        assert "test_accessor.py" in error.line
        assert "i18n key errors.nope does not exist." in str(error)
        assert f"Referenced from {error.line}" in str(error)

    def test_keys_with_machinery_names_resolve(self):
        """A translation key named like an internal is still a translation key."""
        text = wrap(build_tree({"keys": "Keys", "_node": "node", "wrap": "Wrap"}))

        assert text.keys() == "Keys"
        assert text._node() == "node"
        assert text.wrap() == "Wrap"


class TestMissingPlural:
    def test_wrap_fails_on_integer_keys(self):
        node = build_tree({1: "one item", 2: "two items", 5: "many items"})

        with pytest.raises(MissingPluralError) as exc_info:
            wrap(node)

        assert exc_info.value.terminus == 1
        assert exc_info.value.path == ""

    def test_sibling_access_still_works(self, malformed_tree):
        """Integer keys are only checked when their own parent is wrapped."""
        errors = wrap(malformed_tree).errors()
        assert errors.not_found() == "missing"

    def test_subtree_wrap_fails(self, malformed_tree):
        errors = wrap(malformed_tree).errors()

        with pytest.raises(MissingPluralError) as exc_info:
            errors.count()

        error = exc_info.value
        assert error.path == "errors.count"
        assert error.terminus == 1
        assert "appears to reference a pluralization" in str(error)
        assert "append the plural indicator '!!pl' to the end of errors.count" in str(error)

    def test_fails_before_any_access(self):
        calls = []

        class RecordingNode:
            path = "errors.count"

            def keys(self):
                return ["first", 3]

            def child(self, key, *args):
                calls.append(key)

        with pytest.raises(MissingPluralError):
            TranslationAccessor(RecordingNode())
        assert calls == []

    def test_bool_keys_are_not_plural_indexes(self):
        text = wrap(build_tree({True: "yes", False: "no"}))
        assert keys_of(text) == ["True", "False"]


class TestIdempotentWrap:
    def test_two_wraps_agree(self, tree):
        first = wrap(tree)
        second = TranslationAccessor.wrap(tree)

        assert first is not second
        assert keys_of(first) == keys_of(second)
        assert first.errors().not_found() == second.errors().not_found()
        assert first.deep().a().b().c() == second.deep().a().b().c()

    def test_wrap_does_not_touch_tree(self, tree):
        before = tree.keys()
        wrap(tree).errors().not_found()
        assert tree.keys() == before


class TestAccessorProtocol:
    def test_read_only(self, tree):
        text = wrap(tree)

        with pytest.raises(AttributeError):
            text.errors = "x"
        with pytest.raises(AttributeError):
            del text.errors

    def test_container_behaviour(self, tree):
        text = wrap(tree)

        assert "errors" in text
        assert "nope" not in text
        assert list(text) == ["errors", "items", "status", "empty", "deep"]
        assert len(text) == 5
        assert "errors" in dir(text)

    def test_repr(self, tree):
        assert repr(wrap(tree).status()) == "<TranslationAccessor path='status' keys=[ok]>"

    def test_node_of(self, tree):
        assert node_of(wrap(tree)) is tree


class TestResolveKey:
    def test_dotted_leaf(self, tree):
        assert resolve_key(wrap(tree), "errors.not_found") == "missing"

    def test_dotted_branch(self, tree):
        assert path_of(resolve_key(wrap(tree), "deep.a")) == "deep.a"

    def test_args_go_to_last_segment(self, tree):
        assert resolve_key(wrap(tree), "items.count", 1) == "one item"

    def test_empty_key_returns_accessor(self, tree):
        text = wrap(tree)
        assert resolve_key(text, "") is text

    def test_unknown_segment(self, tree):
        with pytest.raises(InvalidKeyError) as exc_info:
            resolve_key(wrap(tree), "deep.x.c")

        assert exc_info.value.path == "deep"
        assert exc_info.value.terminus == "x"

    def test_past_a_leaf(self, tree):
        with pytest.raises(InvalidKeyError) as exc_info:
            resolve_key(wrap(tree), "errors.not_found.extra")

        assert exc_info.value.key == "errors.not_found.extra"


class TestErrorsPickle:
    def test_errors_survive_pickling(self, tree):
        with pytest.raises(InvalidKeyError) as exc_info:
            wrap(tree).nope

        restored = pickle.loads(pickle.dumps(exc_info.value))
        assert restored.key == "nope"
        assert restored.line == exc_info.value.line
        assert str(restored) == str(exc_info.value)
