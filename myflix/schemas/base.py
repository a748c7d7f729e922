"""Base schemas for common patterns."""

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        from_attributes=True,  # Enable ORM mode
        str_strip_whitespace=True,  # Strip whitespace from strings
        validate_assignment=True,  # Validate on attribute assignment
        populate_by_name=True,  # Accept field names alongside aliases
    )


class MessageResponse(BaseModel):
    """Simple message response."""

    message: str
