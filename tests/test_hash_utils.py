"""Tests for canonical JSON and bundle digests."""

import hashlib

import pytest

from pycnab._internal.canonical_json import canonical_dumps
from pycnab.api import bundle_digest, load_bundle, parse_bundle
from pycnab.kernel.hash_utils import DIGEST_PREFIX, hash_document, strip_digest_prefix


class TestCanonicalDumps:
    """Tests for canonical_dumps."""

    def test_simple_dict_sorts_keys(self):
        assert canonical_dumps({"b": 2, "a": 1, "c": 3}) == '{"a":1,"b":2,"c":3}'

    def test_nested_dict_sorts_recursively(self):
        obj = {"z": {"b": 2, "a": 1}, "a": {"d": 4, "c": 3}}
        assert canonical_dumps(obj) == '{"a":{"c":3,"d":4},"z":{"a":1,"b":2}}'

    def test_array_preserves_order(self):
        assert canonical_dumps({"keywords": ["z", "a"]}) == '{"keywords":["z","a"]}'

    def test_non_ascii_not_escaped(self):
        """Strings are written as UTF-8, not \\u escapes."""
        assert canonical_dumps({"name": "café"}) == '{"name":"café"}'

    def test_null_and_bool(self):
        assert canonical_dumps([None, True, False]) == "[null,true,false]"


class TestHashDocument:
    """Tests for hash_document."""

    def test_prefixed_sha256(self):
        digest = hash_document({"a": 1})
        expected = hashlib.sha256(b'{"a":1}').hexdigest()
        assert digest == DIGEST_PREFIX + expected

    def test_key_order_irrelevant(self):
        assert hash_document({"a": 1, "b": 2}) == hash_document({"b": 2, "a": 1})

    def test_array_order_matters(self):
        assert hash_document([1, 2]) != hash_document([2, 1])

    @pytest.mark.parametrize("digest,expected", [
        ("sha256:abc", "abc"),
        ("abc", "abc"),
    ])
    def test_strip_digest_prefix(self, digest, expected):
        assert strip_digest_prefix(digest) == expected


class TestBundleDigest:
    """Tests for bundle_digest."""

    def test_digest_is_stable_across_formatting(self, hello_bundle_path):
        bundle = load_bundle(hello_bundle_path)
        reparsed = parse_bundle(bundle.to_json(indent=4))
        assert bundle_digest(bundle) == bundle_digest(reparsed)

    def test_digest_ignores_unknown_fields(self, make_bundle_json):
        plain = parse_bundle(make_bundle_json())
        extended = parse_bundle(make_bundle_json(somethingNew={"x": 1}))
        assert bundle_digest(plain) == bundle_digest(extended)

    def test_digest_changes_with_content(self, make_bundle_json):
        a = parse_bundle(make_bundle_json(description="a"))
        b = parse_bundle(make_bundle_json(description="b"))
        assert bundle_digest(a) != bundle_digest(b)

    def test_digest_covers_stated_defaults(self, make_bundle_json):
        """An explicit "required": false is part of the document, so part of the digest."""
        stated = parse_bundle(make_bundle_json(credentials={"c": {"env": "C", "required": False}}))
        defaulted = parse_bundle(make_bundle_json(credentials={"c": {"env": "C"}}))
        assert stated == defaulted
        assert bundle_digest(stated) != bundle_digest(defaulted)

    def test_digest_format(self, minimal_bundle_json):
        digest = bundle_digest(parse_bundle(minimal_bundle_json))
        assert digest.startswith(DIGEST_PREFIX)
        assert len(strip_digest_prefix(digest)) == 64
