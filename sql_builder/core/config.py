"""
Settings for SQLBuilder.

Plain pydantic model (no environment or file lookup); callers construct it
explicitly and pass it to ``SQLBuilder(settings=...)``.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sql_builder.models import BindTypeEnum


class SQLBuilderSettings(BaseModel):
    """Construction-time defaults for SQLBuilder."""

    model_config = ConfigDict(frozen=True)

    bind_type: BindTypeEnum | None = Field(
        default=None,
        description="Default dialect for generate_parameterized_sql when none is passed per call.",
    )
    error_preview_chars: int = Field(
        default=500,
        ge=0,
        description="Max template characters included in render failure logs.",
    )

    @field_validator("bind_type", mode="before")
    @classmethod
    def normalize_bind_type(cls, v: Any) -> Any:
        if isinstance(v, str) and not isinstance(v, BindTypeEnum):
            return v.strip().lower()
        return v
