"""
objcache - Input Validation Module

Pydantic-based validation for tool inputs, with standardized error
responses built from ErrorCode.
"""

from .decorators import validate_input
from .tool_schemas import (
    ObjectCacheDeleteInput,
    ObjectCacheFlushInput,
    ObjectCacheGetInput,
    ObjectCacheSetInput,
    ObjectCacheStatusInput,
)

__all__ = [
    "validate_input",
    "ObjectCacheGetInput",
    "ObjectCacheSetInput",
    "ObjectCacheDeleteInput",
    "ObjectCacheFlushInput",
    "ObjectCacheStatusInput",
]
