"""Shape validator (layer 1): primitives, shapes and intent payloads."""

import math

import pytest

from aln_runtime.protocol import (
    INTENTS,
    PrimitiveTag,
    validate_intent_input,
    validate_intent_output,
    validate_primitive,
    validate_shape,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    "tag,value",
    [
        (PrimitiveTag.STRING, ""),
        (PrimitiveTag.NUMBER, 0),
        (PrimitiveTag.NUMBER, -3.5),
        (PrimitiveTag.NUMBER, 10**400),
        (PrimitiveTag.BOOLEAN, False),
        (PrimitiveTag.OBJECT, {}),
        (PrimitiveTag.ARRAY, []),
        (PrimitiveTag.ARRAY, ("a",)),
        (PrimitiveTag.VIRTUAL_OBJECT, {"id": "vo"}),
        (PrimitiveTag.INTENT, []),
        (PrimitiveTag.PLAN, {}),
        (PrimitiveTag.SIGNAL, [1, 2]),
    ],
)
def test_validate_primitive_accepts_matching_values(tag: PrimitiveTag, value: object) -> None:
    """Values whose runtime shape matches the tag are valid with no error."""
    # Act - validate the value against its tag
    result = validate_primitive(value, tag)

    # Assert - valid with no error text
    assert result.valid is True
    assert result.error is None


@pytest.mark.unit
@pytest.mark.parametrize(
    "tag,value",
    [
        (PrimitiveTag.STRING, 1),
        (PrimitiveTag.STRING, None),
        (PrimitiveTag.NUMBER, math.nan),
        (PrimitiveTag.NUMBER, math.inf),
        (PrimitiveTag.NUMBER, "1"),
        (PrimitiveTag.NUMBER, True),
        (PrimitiveTag.BOOLEAN, 1),
        (PrimitiveTag.OBJECT, []),
        (PrimitiveTag.OBJECT, None),
        (PrimitiveTag.ARRAY, {}),
        (PrimitiveTag.ARRAY, "abc"),
        (PrimitiveTag.PLAN, None),
        (PrimitiveTag.SIGNAL, "signal"),
    ],
)
def test_validate_primitive_rejects_mismatched_values(tag: PrimitiveTag, value: object) -> None:
    """Mismatched values are invalid and carry an error naming the tag."""
    # Act - validate the mismatched value
    result = validate_primitive(value, tag)

    # Assert - invalid, error mentions the tag
    assert result.valid is False
    assert result.error is not None
    assert tag.value in result.error


@pytest.mark.unit
def test_validate_primitive_error_messages() -> None:
    """Error text names the expected kind and what was received."""
    # Act - collect errors for three mismatches
    object_error = validate_primitive([], PrimitiveTag.OBJECT).error
    number_error = validate_primitive(math.inf, PrimitiveTag.NUMBER).error
    string_error = validate_primitive(None, PrimitiveTag.STRING).error

    # Assert - exact wording
    assert object_error == "Expected object for aln::object, got array"
    assert number_error == "Expected finite number for aln::number, got inf"
    assert string_error == "Expected string for aln::string, got null"


@pytest.mark.unit
@pytest.mark.parametrize(
    "tag,label",
    [("aln::mystery", "aln::mystery"), (["aln::string"], "['aln::string']"), (None, "None")],
    ids=["unknown-string", "unhashable", "none"],
)
def test_validate_primitive_unknown_tag_never_raises(tag: object, label: str) -> None:
    """Unknown or non-string tags produce an error result instead of an exception."""
    # Act - validate against a tag outside the closed set
    result = validate_primitive("x", tag)  # type: ignore[arg-type]

    # Assert - invalid with the unknown-type error
    assert result.valid is False
    assert result.error == f"Unknown primitive type: {label}"


@pytest.mark.unit
def test_validate_shape_reports_single_missing_field() -> None:
    """Missing description yields exactly one missing-field error."""
    # Arrange - two-field shape
    shape = {"name": PrimitiveTag.STRING, "description": PrimitiveTag.STRING}

    # Act - validate a payload lacking description
    result = validate_shape({"name": "x"}, shape)

    # Assert - exactly one missing-field error
    assert result.valid is False
    assert result.errors == ('Missing required field "description" (expected string)',)


@pytest.mark.unit
@pytest.mark.parametrize(
    "payload,got",
    [([], "array"), (None, "null"), ("text", "string"), (3, "number")],
    ids=["array", "none", "string", "number"],
)
def test_validate_shape_rejects_non_object_payload(payload: object, got: str) -> None:
    """Non-object payloads fail immediately with one error."""
    # Act - validate a non-object payload
    result = validate_shape(payload, {"name": PrimitiveTag.STRING})

    # Assert - single payload-type error
    assert result.valid is False
    assert result.errors == (f"Payload must be an object, got {got}",)


@pytest.mark.unit
def test_validate_shape_accumulates_every_violation() -> None:
    """Missing, mistyped and unexpected fields are all reported in one pass."""
    # Arrange - shape with three typed fields
    shape = {
        "name": PrimitiveTag.STRING,
        "count": PrimitiveTag.NUMBER,
        "tags": PrimitiveTag.ARRAY,
    }

    # Act - validate a payload with several problems
    result = validate_shape({"name": 5, "tags": [], "extra": 1, "other": 2}, shape)

    # Assert - every violation listed in shape then payload order
    assert result.valid is False
    assert result.errors == (
        'Field "name" invalid: Expected string for aln::string, got number',
        'Missing required field "count" (expected number)',
        'Unexpected field "extra" not defined in shape',
        'Unexpected field "other" not defined in shape',
    )


@pytest.mark.unit
def test_validate_shape_extra_keys_only_fail_when_disallowed() -> None:
    """An extra field flips validity only when allow_extra_keys is False."""
    # Arrange - one-field shape and a payload with an extra key
    shape = {"name": PrimitiveTag.STRING}
    payload = {"name": "x", "extra": True}

    # Act / Assert - extra key matters only when disallowed
    assert validate_shape({"name": "x"}, shape).valid is True
    assert validate_shape(payload, shape).valid is False
    assert validate_shape(payload, shape, allow_extra_keys=True).valid is True


@pytest.mark.unit
def test_validate_intent_input_accepts_exact_payload() -> None:
    """A payload with exactly the input shape's keys and types is valid."""
    # Act - validate a complete define_virtual_object payload
    result = validate_intent_input(
        "aln::define_virtual_object",
        {"name": "Widget", "description": "A widget", "schema": {}, "tags": ["ui"]},
    )

    # Assert - valid with no errors
    assert result.valid is True
    assert result.errors == ()


@pytest.mark.unit
def test_validate_intent_unknown_name_skips_shape_check() -> None:
    """Unknown intents yield one error and no field-level errors."""
    # Act - validate against an unregistered intent
    result = validate_intent_input("aln::nope", "not even an object")

    # Assert - only the unknown-intent error
    assert result.valid is False
    assert result.unknown_intent is True
    assert result.errors == ('Unknown intent "aln::nope"',)


@pytest.mark.unit
def test_validate_intent_output_uses_output_shape() -> None:
    """Output validation checks the output shape, not the input shape."""
    # Act - validate a matching and a mismatching output
    ok = validate_intent_output(
        "aln::interop_python", {"sessionId": "s1", "stdout": "", "stderr": ""}
    )
    bad = validate_intent_output("aln::interop_python", {"sessionId": "s1", "code": "x"})

    # Assert - input-only field is unexpected in output
    assert ok.valid is True
    assert bad.valid is False
    assert 'Unexpected field "code" not defined in shape' in bad.errors


@pytest.mark.unit
def test_registry_shapes_are_read_only() -> None:
    """Registered shapes cannot be mutated in place."""
    # Arrange - a registered input shape
    shape = INTENTS["aln::plan_repository"].input_shape

    # Act / Assert - item assignment is rejected
    with pytest.raises(TypeError):
        shape["extra"] = PrimitiveTag.STRING  # type: ignore[index]
