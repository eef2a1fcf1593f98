"""Intent registry (layer 0): read-only table of named intents and their shapes."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, field_validator

from aln_runtime.protocol.primitives import ALN_VERSION, PrimitiveTag

type Shape = Mapping[str, PrimitiveTag]


class IntentSpecification(BaseModel):
    """Named operation contract with typed input and output shapes. Immutable."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    description: str
    input_shape: Mapping[str, PrimitiveTag]
    output_shape: Mapping[str, PrimitiveTag]

    @field_validator("input_shape", "output_shape", mode="after")
    @classmethod
    def _freeze_shape(cls, value: Mapping[str, PrimitiveTag]) -> Mapping[str, PrimitiveTag]:
        return MappingProxyType(dict(value))


class ProtocolIdentity(BaseModel):
    """Who defines the protocol."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    language_name: str
    short_name: str
    authority: str


IDENTITY = ProtocolIdentity(
    language_name="Augmented Language Networks",
    short_name="ALN",
    authority="GoogolswarmAI Nanoswarm + Javaspectre Initiative",
)

INTENTS: Mapping[str, IntentSpecification] = MappingProxyType(
    {
        "aln::define_virtual_object": IntentSpecification(
            description="Define or update a virtual-object in the global registry.",
            input_shape={
                "name": PrimitiveTag.STRING,
                "description": PrimitiveTag.STRING,
                "schema": PrimitiveTag.OBJECT,
                "tags": PrimitiveTag.ARRAY,
            },
            output_shape={
                "id": PrimitiveTag.STRING,
                "name": PrimitiveTag.STRING,
            },
        ),
        "aln::plan_repository": IntentSpecification(
            description="Create a repository plan including files, workflows, and policies.",
            input_shape={
                "description": PrimitiveTag.STRING,
                "constraints": PrimitiveTag.OBJECT,
            },
            output_shape={
                "planId": PrimitiveTag.STRING,
                "files": PrimitiveTag.ARRAY,
                "workflows": PrimitiveTag.ARRAY,
            },
        ),
        "aln::interop_python": IntentSpecification(
            description="Request a Python operation compatible with ML systems and notebooks.",
            input_shape={
                "sessionId": PrimitiveTag.STRING,
                "code": PrimitiveTag.STRING,
                "ioContract": PrimitiveTag.OBJECT,
            },
            output_shape={
                "sessionId": PrimitiveTag.STRING,
                "stdout": PrimitiveTag.STRING,
                "stderr": PrimitiveTag.STRING,
            },
        ),
    }
)


def get_intent(name: object) -> IntentSpecification | None:
    """Return the intent registered under name, or None."""
    if not isinstance(name, str):
        return None
    return INTENTS.get(name)


def is_registered_intent(name: object) -> bool:
    """Return True if name is a registered intent id."""
    return get_intent(name) is not None


def describe_protocol() -> dict[str, object]:
    """Describe the protocol for manifest builders and tooling.

    Returns:
        Mapping with version, languageName, shortName and supportedIntents.
    """
    return {
        "version": ALN_VERSION,
        "languageName": IDENTITY.language_name,
        "shortName": IDENTITY.short_name,
        "supportedIntents": list(INTENTS),
    }
