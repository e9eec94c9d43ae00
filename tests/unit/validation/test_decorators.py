"""
Tests for Validation Decorators

Covers @validate_input on async and sync functions. Valid input passes
through with schema defaults applied; invalid input becomes an INVALID_INPUT
response; errors raised by the function map to CONFIGURATION_ERROR or
INTERNAL_ERROR.
"""

import pytest
from pydantic import BaseModel, Field

from objcache.errors import ConfigurationError, ErrorCode
from objcache.validation.decorators import validate_input


class LookupInput(BaseModel):
    """Sample validation schema for testing."""

    id: str = Field(..., min_length=1, max_length=100)
    group: str = Field(default="default", max_length=20)
    expire: int = Field(default=0, ge=0)


class EmptyInput(BaseModel):
    """Schema with no fields."""

    pass


class TestValidateInputDecorator:
    """Test @validate_input decorator."""

    @pytest.mark.asyncio
    async def test_valid_async_input(self):
        @validate_input(LookupInput)
        async def lookup(id: str, group: str = "default", expire: int = 0):
            return {"id": id, "group": group, "expire": expire}

        result = await lookup(id="post_1", group="posts", expire=60)

        assert result == {"id": "post_1", "group": "posts", "expire": 60}

    @pytest.mark.asyncio
    async def test_schema_defaults_are_passed(self):
        @validate_input(LookupInput)
        async def lookup(id: str, group: str, expire: int):
            return {"id": id, "group": group, "expire": expire}

        result = await lookup(id="post_1")

        assert result["group"] == "default"
        assert result["expire"] == 0

    @pytest.mark.asyncio
    async def test_missing_field(self):
        @validate_input(LookupInput)
        async def lookup(id: str, group: str = "default", expire: int = 0):
            return {"id": id}

        result = await lookup(group="posts")

        assert result["success"] is False
        assert result["error_code"] == ErrorCode.INVALID_INPUT
        errors = result["details"]["validation_errors"]
        assert any(err["field"] == "id" for err in errors)

    @pytest.mark.asyncio
    async def test_constraint_violation(self):
        @validate_input(LookupInput)
        async def lookup(id: str, group: str = "default", expire: int = 0):
            return {"id": id}

        result = await lookup(id="post_1", expire=-1)

        assert result["success"] is False
        errors = result["details"]["validation_errors"]
        assert any("expire" in err["field"] for err in errors)

    @pytest.mark.asyncio
    async def test_multiple_validation_errors(self):
        @validate_input(LookupInput)
        async def lookup(id: str, group: str = "default", expire: int = 0):
            return {"id": id}

        result = await lookup(id="", group="g" * 50)

        assert len(result["details"]["validation_errors"]) >= 2

    @pytest.mark.asyncio
    async def test_error_response_structure(self):
        @validate_input(LookupInput)
        async def my_special_function(id: str, group: str = "default", expire: int = 0):
            return {"id": id}

        result = await my_special_function(expire="soon")

        assert result["success"] is False
        assert result["error_code"] == ErrorCode.INVALID_INPUT
        assert result["message"] == "Input validation failed"
        assert result["details"]["function"] == "my_special_function"
        for error in result["details"]["validation_errors"]:
            assert set(error) == {"field", "message", "type"}

    @pytest.mark.asyncio
    async def test_unexpected_error_becomes_internal_error(self):
        @validate_input(LookupInput)
        async def broken(id: str, group: str = "default", expire: int = 0):
            raise RuntimeError("backend exploded")

        result = await broken(id="post_1")

        assert result["success"] is False
        assert result["error_code"] == ErrorCode.INTERNAL_ERROR
        assert "backend exploded" in result["message"]

    @pytest.mark.asyncio
    async def test_configuration_error_code(self):
        @validate_input(LookupInput)
        async def misconfigured(id: str, group: str = "default", expire: int = 0):
            raise ConfigurationError("bad engine", details={"engine": "apc"})

        result = await misconfigured(id="post_1")

        assert result["error_code"] == ErrorCode.CONFIGURATION_ERROR
        assert result["message"] == "bad engine"
        assert result["details"]["engine"] == "apc"
        assert result["details"]["function"] == "misconfigured"

    @pytest.mark.asyncio
    async def test_preserves_function_metadata(self):
        @validate_input(LookupInput)
        async def documented_function(id: str, group: str = "default", expire: int = 0):
            """This function has documentation."""
            return {"id": id}

        assert documented_function.__name__ == "documented_function"
        assert documented_function.__doc__ == "This function has documentation."

    @pytest.mark.asyncio
    async def test_empty_schema(self):
        @validate_input(EmptyInput)
        async def no_args():
            return {"success": True}

        assert (await no_args())["success"] is True

    def test_valid_sync_input(self):
        @validate_input(LookupInput)
        def lookup(id: str, group: str = "default", expire: int = 0):
            return {"id": id, "group": group}

        assert lookup(id="post_1") == {"id": "post_1", "group": "default"}

    def test_invalid_sync_input(self):
        @validate_input(LookupInput)
        def lookup(id: str, group: str = "default", expire: int = 0):
            return {"id": id}

        result = lookup(id="")

        assert result["success"] is False
        assert result["error_code"] == ErrorCode.INVALID_INPUT
