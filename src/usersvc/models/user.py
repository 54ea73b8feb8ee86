"""
User - the single entity of the service.

Two shapes:
- User: a persisted row, always with its server-assigned id
- UserPayload: the body clients send on create/update (name and email only)

UserPayload is decoded strictly: malformed JSON, a non-object body, missing
fields or non-string values all raise InvalidJSONBody instead of silently
defaulting to empty strings. Unknown fields (a client-sent "id") are ignored.
"""

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..errors import InvalidJSONBody


class User(BaseModel):
    """Persisted user record as returned by the store and the API."""

    id: int = Field(..., description="Server-generated primary key")
    name: str = Field(..., description="Display name (trimmed, non-empty)")
    email: str = Field(..., description="Email address (local@domain.tld)")


class UserPayload(BaseModel):
    """Client-submitted user fields for POST and PUT."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., description="Display name, validated after decoding")
    email: str = Field(..., description="Email address, validated after decoding")

    @classmethod
    def from_json(cls, raw: bytes | str) -> "UserPayload":
        """
        Decode a request body.

        Args:
            raw: Raw request body

        Returns:
            Decoded payload (fields not yet validated)

        Raises:
            InvalidJSONBody: On any decode or shape error
        """
        try:
            return cls.model_validate_json(raw)
        except ValidationError as e:
            raise InvalidJSONBody() from e
