"""
objcache - Tool Input Validation Schemas

Pydantic models for validating object cache tool inputs.
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator


class ObjectCacheGetInput(BaseModel):
    """Input validation for objcache_get tool."""

    id: str = Field(..., min_length=1, max_length=1_000, description="Item id")
    group: str = Field(default="default", max_length=200, description="Cache group")
    tenant_id: int | None = Field(default=None, ge=0, description="Tenant id (None = configured default)")

    @field_validator("id")
    @classmethod
    def validate_id_not_blank(cls, v: str) -> str:
        """Ensure id is not just whitespace."""
        if not v.strip():
            raise ValueError("id cannot be empty or only whitespace")
        return v


class ObjectCacheSetInput(ObjectCacheGetInput):
    """Input validation for objcache_set, objcache_add and objcache_replace tools."""

    value: Any = Field(..., description="Value to store")
    expire: int = Field(default=0, ge=0, description="TTL in seconds (0 = configured lifetime)")


class ObjectCacheDeleteInput(ObjectCacheGetInput):
    """Input validation for objcache_delete tool."""

    force: bool = Field(default=False, description="Delete even if the item looks missing")


class ObjectCacheFlushInput(BaseModel):
    """Input validation for objcache_flush tool (no parameters)."""

    pass


class ObjectCacheStatusInput(BaseModel):
    """Input validation for objcache_status tool."""

    include_backend_stats: bool = Field(default=True, description="Include backend statistics")
