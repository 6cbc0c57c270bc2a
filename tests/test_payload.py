"""Tests for body decoding and envelope classification."""
from __future__ import annotations

import pytest

from bouncehook.services.classifier import NotificationType, classify
from bouncehook.services.payload import PayloadParseError, decode_body, dig, find_discriminator


def test_decode_body_accepts_bytes_and_str():
    assert decode_body(b'{"Type": "Notification"}') == {"Type": "Notification"}
    assert decode_body('{"Type": "Notification"}') == {"Type": "Notification"}


@pytest.mark.parametrize("body", [b"", b"not json", b'{"Type": ', b"[1, 2]", b'"Notification"', b"\xff\xfe"])
def test_decode_body_rejects_non_objects(body):
    with pytest.raises(PayloadParseError):
        decode_body(body)


def test_dig_follows_dicts_and_lists():
    tree = {"mail": {"headers": [{"name": "X-EMAIL-ID", "value": "abc"}]}}
    assert dig(tree, "mail", "headers", 0, "value") == "abc"
    assert dig(tree, "mail", "headers", 3, "value") is None
    assert dig(tree, "mail", "missing", default="unknown") == "unknown"
    assert dig({"bounce": None}, "bounce", "bounceType", default="x") == "x"
    assert dig("scalar", "key") is None


def test_find_discriminator_priority():
    assert find_discriminator({"notificationType": "Bounce", "Type": "Notification"}) == "Notification"
    assert find_discriminator({"notificationType": "Bounce", "eventType": "Complaint"}) == "Complaint"
    assert find_discriminator({"notificationType": "Bounce"}) == "Bounce"
    assert find_discriminator({"message": "hello"}) is None


def test_classify_envelope_types_are_ours():
    for value in ("Notification", "SubscriptionConfirmation", "UnsubscribeConfirmation"):
        result = classify({"Type": value})
        assert result.is_ours is True
        assert result.raw_type == value


def test_classify_nested_types_are_not_ours_at_top_level():
    result = classify({"notificationType": "Bounce"})
    assert result.type is NotificationType.BOUNCE
    assert result.is_ours is False


def test_classify_without_discriminator():
    result = classify({"hello": "world"})
    assert result.raw_type is None
    assert result.type is NotificationType.UNKNOWN
    assert result.is_ours is False


def test_classify_unknown_value():
    result = classify({"Type": "SomethingElse"})
    assert result.type is NotificationType.UNKNOWN
    assert result.is_ours is False
