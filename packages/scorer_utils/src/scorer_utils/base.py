"""Base Pydantic models with strict validation."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class StrictModel(BaseModel):
    """Base model with strict validation for engine inputs and results.

    Models that carry scores, buffers or configuration tables inherit from
    this class so that:
    - No type coercion (strict=True)
    - Immutable after creation (frozen=True)
    - Fail on unknown fields (extra="forbid")
    """

    model_config = ConfigDict(
        strict=True,
        frozen=True,
        extra="forbid",
        validate_assignment=True,
        use_enum_values=True,
    )


class ConfigModel(BaseModel):
    """Base model for configuration files.

    Same guarantees as StrictModel, but accepts camelCase aliases and lax
    coercion so that hand-written JSON (ints for floats, strings for enums)
    validates cleanly.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        use_enum_values=True,
    )
