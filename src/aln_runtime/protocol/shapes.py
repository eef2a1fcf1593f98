"""Shape validator (layer 1): structural type checks for primitives, shapes and intents.

Validators never raise. They return result objects and accumulate every
violation so a caller sees all problems in one pass.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field

from aln_runtime.protocol.errors import ProtocolError, UnknownIntentError, join_errors
from aln_runtime.protocol.primitives import STRUCTURED_TAGS, PrimitiveTag, primitive_label
from aln_runtime.protocol.registry import Shape, get_intent


@dataclass(frozen=True)
class PrimitiveResult:
    """Outcome of checking one value against one tag."""

    valid: bool
    error: str | None = None


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a shape or envelope check: validity plus every error found."""

    valid: bool
    errors: tuple[str, ...] = field(default_factory=tuple)
    unknown_intent: bool = False

    @classmethod
    def from_errors(cls, errors: list[str]) -> ValidationResult:
        """Build a result that is valid iff errors is empty."""
        return cls(valid=not errors, errors=tuple(errors))

    def raise_for_errors(
        self, error_type: type[ProtocolError], prefix: str
    ) -> None:
        """Raise error_type with all errors joined when the result is invalid.

        UnknownIntentError replaces error_type when the failure came from an
        unregistered intent name.
        """
        if self.valid:
            return
        if self.unknown_intent:
            error_type = UnknownIntentError
        raise error_type(f"{prefix}: {join_errors(self.errors)}", self.errors)


def json_type_name(value: object) -> str:
    """Name a runtime value in JSON vocabulary for error messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def is_object(value: object) -> bool:
    """Mapping, not a sequence."""
    return isinstance(value, Mapping)


def is_array(value: object) -> bool:
    return isinstance(value, (list, tuple))


def is_finite_number(value: object) -> bool:
    """int/float but not bool, and not NaN or infinity."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def is_structured(value: object) -> bool:
    """Non-null structured value: an object or an array."""
    return is_object(value) or is_array(value)


def validate_primitive(value: object, tag: str) -> PrimitiveResult:
    """Validate one value against one primitive tag.

    Args:
        value: Any runtime value.
        tag: Primitive tag string.

    Returns:
        PrimitiveResult; error is set when invalid.
    """
    match tag:
        case PrimitiveTag.STRING:
            if isinstance(value, str):
                return PrimitiveResult(valid=True)
            return PrimitiveResult(
                valid=False,
                error=f"Expected string for {tag}, got {json_type_name(value)}",
            )
        case PrimitiveTag.NUMBER:
            if is_finite_number(value):
                return PrimitiveResult(valid=True)
            return PrimitiveResult(
                valid=False, error=f"Expected finite number for {tag}, got {value!s}"
            )
        case PrimitiveTag.BOOLEAN:
            if isinstance(value, bool):
                return PrimitiveResult(valid=True)
            return PrimitiveResult(
                valid=False,
                error=f"Expected boolean for {tag}, got {json_type_name(value)}",
            )
        case PrimitiveTag.OBJECT:
            if is_object(value):
                return PrimitiveResult(valid=True)
            return PrimitiveResult(
                valid=False,
                error=f"Expected object for {tag}, got {json_type_name(value)}",
            )
        case PrimitiveTag.ARRAY:
            if is_array(value):
                return PrimitiveResult(valid=True)
            return PrimitiveResult(
                valid=False,
                error=f"Expected array for {tag}, got {json_type_name(value)}",
            )
        case str() if tag in STRUCTURED_TAGS:
            if is_structured(value):
                return PrimitiveResult(valid=True)
            return PrimitiveResult(
                valid=False,
                error=f"Expected structured object for {tag}, got {json_type_name(value)}",
            )
        case _:
            return PrimitiveResult(valid=False, error=f"Unknown primitive type: {tag}")


def validate_shape(
    payload: object, shape: Shape, allow_extra_keys: bool = False
) -> ValidationResult:
    """Validate payload against a shape of {field: tag}.

    Args:
        payload: Candidate payload; must be an object.
        shape: Field name to primitive tag mapping.
        allow_extra_keys: When False, keys outside shape are errors.

    Returns:
        ValidationResult with every missing, mistyped and unexpected field.
    """
    if not is_object(payload):
        return ValidationResult.from_errors(
            [f"Payload must be an object, got {json_type_name(payload)}"]
        )

    errors: list[str] = []
    for name, tag in shape.items():
        if name not in payload:
            errors.append(
                f'Missing required field "{name}" (expected {primitive_label(tag)})'
            )
            continue
        result = validate_primitive(payload[name], tag)
        if not result.valid:
            errors.append(f'Field "{name}" invalid: {result.error}')

    if not allow_extra_keys:
        for key in payload:
            if key not in shape:
                errors.append(f'Unexpected field "{key}" not defined in shape')

    return ValidationResult.from_errors(errors)


def _unknown_intent(intent_name: object) -> ValidationResult:
    return ValidationResult(
        valid=False, errors=(f'Unknown intent "{intent_name}"',), unknown_intent=True
    )


def validate_intent_input(
    intent_name: str, payload: object, allow_extra_keys: bool = False
) -> ValidationResult:
    """Validate an intent request payload against the intent's input shape."""
    intent = get_intent(intent_name)
    if intent is None:
        return _unknown_intent(intent_name)
    return validate_shape(payload, intent.input_shape, allow_extra_keys)


def validate_intent_output(
    intent_name: str, payload: object, allow_extra_keys: bool = False
) -> ValidationResult:
    """Validate an execution result payload against the intent's output shape."""
    intent = get_intent(intent_name)
    if intent is None:
        return _unknown_intent(intent_name)
    return validate_shape(payload, intent.output_shape, allow_extra_keys)
