"""Tests for the chainable mapping validator."""

from __future__ import annotations

from datetime import datetime
import logging
from enum import Enum

import numpy as np
import pytest

from mapping_control.core import (
    ALL_KEYS,
    InsufficientAlternativesError,
    KeyMode,
    MappingValidationError,
    MissingRequiredKeysError,
    NullValueError,
    TypeMismatchError,
    UnexpectedKeysError,
    ViolationKind,
)
from mapping_control.validation import Validator


class Field(str, Enum):
    AUTHOR = "author"


def _comment(**extra) -> dict:
    """Build one comment mapping."""

    return {"author": "me", "body": "x", "date": datetime(2024, 1, 1), **extra}


def _post_request() -> dict:
    """Build one POST request mapping."""

    return {"post": "/api/article/23/comment/34/update", "body": {"body": "hullo"}}


class RequestValidator(Validator):
    """Validator with request recipes."""

    def validate_request(self) -> Validator:
        return self.require_one_of("get", "post")

    def validate_get_request(self) -> Validator:
        return self.validate_request().only()

    def validate_post_request(self) -> Validator:
        return self.validate_request().permit("body").only()


def test_require_returns_same_validator_when_keys_present() -> None:
    """Require should pass through and return the validator itself."""

    validator = Validator(_post_request())

    assert validator.require("post") is validator
    assert validator.require("post", "body") is validator


def test_require_reports_missing_keys_in_argument_order() -> None:
    """Missing keys should be listed in the order they were required."""

    with pytest.raises(MissingRequiredKeysError, match=r"required params \['id', 'author'\] missing") as info:
        Validator({"body": "x"}).require("id", "body", "author")

    assert info.value.kind is ViolationKind.MISSING_REQUIRED_KEYS
    assert info.value.keys == ("id", "author")


def test_error_message_ends_with_mapping_suffix() -> None:
    """Every message should end with the tab-indented mapping dump."""

    with pytest.raises(MappingValidationError) as info:
        Validator({"body": "x"}).require("id")

    assert str(info.value) == "required params ['id'] missing\n\tin {'body': 'x'}"
    assert info.value.data == {"body": "x"}


def test_missing_required_is_a_value_error() -> None:
    """Default errors should be catchable as ValueError."""

    with pytest.raises(ValueError):
        Validator({}).require("id")


def test_comment_with_declared_keys_passes_only() -> None:
    """Required keys followed by only should accept an exact mapping."""

    Validator(_comment()).require("author", "body", "date").only()


def test_comment_with_extra_key_fails_only() -> None:
    """Only should report keys never required or permitted."""

    with pytest.raises(UnexpectedKeysError, match=r"extra params \['extra'\]") as info:
        Validator(_comment(extra="y")).require("author", "body", "date").only()

    assert info.value.keys == ("extra",)


def test_only_before_any_rule_flags_every_key() -> None:
    """Only is positional: nothing is permitted before the first rule."""

    with pytest.raises(UnexpectedKeysError) as info:
        Validator(_post_request()).only()

    assert info.value.keys == ("post", "body")


def test_only_honours_permit_declared_earlier() -> None:
    """Permit should count for a later only check."""

    with pytest.raises(UnexpectedKeysError, match=r"\['body'\]"):
        Validator(_post_request()).require("post").only()

    Validator(_post_request()).require("post").permit("body").only()


def test_permit_never_raises() -> None:
    """Permit is bookkeeping only."""

    Validator(_post_request()).permit("body")
    Validator(_post_request()).permit("nonexistent")
    Validator({}).permit()


def test_permit_is_idempotent() -> None:
    """Permitting twice should equal permitting once."""

    once = Validator(_post_request()).permit("post", "body")
    twice = Validator(_post_request()).permit("post", "body").permit("post", "body")

    assert once.permitted_keys == twice.permitted_keys == frozenset({"post", "body"})
    twice.only()


def test_permit_only_combines_permit_and_only() -> None:
    """Permit-only should accept permitted keys and reject others."""

    Validator(_post_request()).permit_only("post", "body")
    with pytest.raises(UnexpectedKeysError):
        Validator(_post_request()).permit_only("post")


def test_permit_all_disables_only() -> None:
    """After permit_all, only should accept any key."""

    validator = Validator(_comment(extra="y")).permit_all().require("author").only()

    assert validator.permitted_keys is ALL_KEYS


def test_require_n_of_tolerates_up_to_n_missing() -> None:
    """Require-n-of should fail only when more than n keys are missing."""

    Validator(_post_request()).require_n_of(2, "post", "body")
    Validator({"post": "/a"}).require_n_of(1, "post", "body")

    with pytest.raises(InsufficientAlternativesError, match=r"1 or more params in \['a', 'b'\] must be given"):
        Validator({"c": 1}).require_n_of(1, "a", "b", "c")


def test_require_n_of_rejects_negative_n() -> None:
    """Require-n-of should fail fast on invalid n."""

    with pytest.raises(ValueError, match="non-negative integer"):
        Validator({}).require_n_of(-1, "a")


def test_require_one_of_matches_require_n_of_one() -> None:
    """Require-one-of should accept one alternative and reject none."""

    Validator({"get": "/a"}).require_one_of("get", "post").only()

    with pytest.raises(InsufficientAlternativesError):
        Validator({}).require_one_of("get", "post").only()


def test_require_one_of_permits_its_keys() -> None:
    """Keys of an alternative group should count as permitted."""

    Validator({"get": "/a", "post": "/b"}).require_one_of("get", "post").only()


def test_integer_accepts_ints_and_absent_keys() -> None:
    """Integer should pass for integer values and missing keys."""

    Validator({"id": 3, "count": np.int64(4)}).integer("id", "count", "missing").only()


def test_integer_rejects_non_integer_values() -> None:
    """Integer should fail on strings, floats, booleans and None."""

    for value in ("3", 3.0, True, None):
        with pytest.raises(TypeMismatchError, match="param 'id' must be integer but was"):
            Validator({"id": value}).integer("id")


def test_integer_message_renders_value() -> None:
    """Type mismatch messages should show the offending value."""

    with pytest.raises(TypeMismatchError) as info:
        Validator({"id": "3"}).integer("id")

    assert str(info.value).startswith("param 'id' must be integer but was '3'\n\tin ")
    assert info.value.keys == ("id",)


def test_integer_or_none_accepts_none() -> None:
    """Integer-or-none should accept explicit None and absent keys."""

    Validator({"parent": None}).integer_or_none("parent", "other").only()

    with pytest.raises(TypeMismatchError):
        Validator({"parent": "x"}).integer_or_none("parent")


def test_not_none_rejects_none_and_absent() -> None:
    """Not-none should treat explicit None and absence alike."""

    Validator({"author": "me"}).not_none("author")

    with pytest.raises(NullValueError, match="param 'author' is None"):
        Validator({"author": None}).not_none("author")
    with pytest.raises(NullValueError):
        Validator({}).not_none("author")


def test_type_rules_extend_permitted_keys() -> None:
    """Integer and not-none keys should count as permitted for only."""

    Validator({"id": 1, "author": "me"}).integer("id").not_none("author").only()


def test_first_violation_stops_the_chain() -> None:
    """Only the first failing rule should surface."""

    with pytest.raises(MissingRequiredKeysError):
        Validator({"extra": 1}).require("id").only()


def test_normalized_keys_match_across_representations() -> None:
    """Normalized mode should treat str, bytes and str-enum keys alike."""

    for data in ({"author": "me"}, {b"author": "me"}, {Field.AUTHOR: "me"}):
        Validator(data).require("author").only()
        Validator(data).require(Field.AUTHOR).only()
        Validator(data).require(b"author").only()


def test_raw_keys_compare_literal_objects() -> None:
    """Raw mode should not unify different key representations."""

    Validator({"author": "me"}, key_mode=KeyMode.RAW).require("author").only()

    with pytest.raises(MissingRequiredKeysError, match=r"\[b'author'\]"):
        Validator({"author": "me"}, key_mode="raw").require(b"author")


def test_custom_term_is_pluralized() -> None:
    """Messages should use the configured term and its plural."""

    with pytest.raises(MissingRequiredKeysError, match=r"required keys \['id'\] missing"):
        Validator({}, term="key").require("id")
    with pytest.raises(NullValueError, match="field 'id' is None"):
        Validator({}, term="field").not_none("id")


def test_custom_error_type_receives_message() -> None:
    """A plain exception class should be raised with the formatted message."""

    class RequestRejected(Exception):
        pass

    with pytest.raises(RequestRejected, match=r"required params \['id'\] missing"):
        Validator({}, error_type=RequestRejected).require("id")


def test_custom_structured_error_type_keeps_fields() -> None:
    """Error subclasses should still receive structured fields."""

    class ApiError(MappingValidationError):
        pass

    with pytest.raises(ApiError) as info:
        Validator({"a": 1}, error_type=ApiError).only()

    assert info.value.kind is ViolationKind.UNEXPECTED_KEYS
    assert info.value.keys == ("a",)


def test_validator_does_not_mutate_input() -> None:
    """The caller's mapping should be left untouched."""

    data = {b"author": "me", "extra": 1}
    with pytest.raises(UnexpectedKeysError):
        Validator(data).require("author").only()

    assert data == {b"author": "me", "extra": 1}


def test_validator_rejects_non_mapping_and_empty_term() -> None:
    """Construction should fail fast on invalid arguments."""

    with pytest.raises(TypeError, match="data must be a mapping"):
        Validator([("a", 1)])
    with pytest.raises(ValueError, match="term must be a non-empty string"):
        Validator({}, term="")


def test_subclass_recipes_accept_allowed_mappings() -> None:
    """Recipe methods defined on a subclass should chain base rules."""

    RequestValidator({"get": "/a"}).validate_get_request()
    RequestValidator(_post_request()).validate_post_request()
    RequestValidator({"get": "a", "post": "b"}).validate_post_request()


def test_subclass_recipes_reject_invalid_mappings() -> None:
    """Recipe methods should surface base rule violations."""

    with pytest.raises(InsufficientAlternativesError):
        RequestValidator({}).validate_get_request()
    with pytest.raises(UnexpectedKeysError, match=r"\['body'\]"):
        RequestValidator(_post_request()).validate_get_request()


def test_violation_is_logged_at_debug(caplog) -> None:
    """Violations should be logged before they are raised."""

    caplog.set_level(logging.DEBUG, logger="mapping_control.validation.validator")
    with pytest.raises(MissingRequiredKeysError):
        Validator({}).require("id")

    assert "missing_required_keys" in caplog.text
