"""Pydantic schemas for sharing."""

from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from vault.utils import parse_emails


class ShareSettings(BaseModel):
    """
    Share settings as submitted by the caller.

    Accepts camelCase or snake_case keys. Shape and enum checks happen here;
    the cross-field rules (password, custom date, email channel) are enforced
    by ShareService against the current clock.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    access: Literal["view", "comment", "edit", "admin"] = "view"
    expiration: Literal["never", "1day", "7days", "30days", "custom"] = "never"
    custom_expiration: Optional[date] = Field(default=None, alias="customExpiration")
    require_password: bool = Field(default=False, alias="requirePassword")
    password: Optional[str] = None
    allowed_emails: List[str] = Field(default_factory=list, alias="allowedEmails")

    @field_validator("custom_expiration", mode="before")
    @classmethod
    def _blank_date_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        if isinstance(value, datetime):
            return value.date()
        return value

    @field_validator("allowed_emails", mode="before")
    @classmethod
    def _split_emails(cls, value):
        return parse_emails(value)


class ShareRecordResponse(BaseModel):
    """Response model for a share record. Never exposes the password hash."""
    share_id: str
    type: Literal["file", "folder"]
    item_id: str
    channel: str
    access: str
    expiration: str
    custom_expiration: Optional[date] = None
    require_password: bool
    allowed_emails: List[str]
    created_at: datetime
    expires_at: Optional[datetime] = None
