from __future__ import annotations

import hashlib

from specwatch.domain.reconciliation import content_changed, fingerprint


def test_fingerprint_is_deterministic() -> None:
    payload = b"openapi: 3.0.0\n"

    assert fingerprint(payload) == fingerprint(payload)
    assert fingerprint(payload) == hashlib.sha256(payload).hexdigest()


def test_fingerprint_hashes_text_as_utf8() -> None:
    text = "title: Café\n"

    assert fingerprint(text) == fingerprint(text.encode("utf-8"))


def test_fingerprint_distinguishes_single_byte_difference() -> None:
    assert fingerprint(b"version: 1.0.0") != fingerprint(b"version: 1.0.1")


def test_absent_previous_digest_counts_as_change() -> None:
    digest = fingerprint(b"anything")

    assert content_changed(None, digest) is True
    assert content_changed("", digest) is True


def test_equal_digests_are_unchanged() -> None:
    digest = fingerprint(b"anything")

    assert content_changed(digest, digest) is False
    assert content_changed(fingerprint(b"other"), digest) is True
