"""User record model returned by the users endpoint."""

from typing import Optional
from pydantic import BaseModel, Field


class UserRecord(BaseModel):
    """One row of the users table, normalized for JSON output."""

    user_id: str = Field("", description="User identifier (empty string if the source is null)")
    email: str = Field("", description="User email address (empty string if the source is null)")
    phone_number: Optional[str] = Field(None, description="Phone number")
    full_name: Optional[str] = Field(None, description="Display name")
    role: Optional[int] = Field(None, description="Numeric role (null if missing or not a 32-bit integer)")
    created_at: Optional[str] = Field(None, description="Creation timestamp, UTC ISO-8601")
    updated_at: Optional[str] = Field(None, description="Last update timestamp, UTC ISO-8601")
