"""
User Schemas
============
The caller identity produced by the bearer-token check, and the
response of the user sync endpoint.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AuthenticatedUser(BaseModel):
    """Subject identifier and email of a verified bearer token.

    ``id`` is the only value ever used as an entry owner.
    """

    id: str
    email: Optional[str] = None


class UserSyncResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    message: str
    user_id: str
    created: bool = Field(
        ...,
        description="True if this call registered the user for the first time.",
    )
