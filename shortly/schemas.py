"""Pydantic schemas for backend requests and responses."""

from typing import List, Optional

from pydantic import BaseModel, Field


class ShortenRequest(BaseModel):
    """Body of the shorten call."""

    source_url: str = Field(..., description="The URL to shorten", min_length=1)
    email: str = Field(..., description="Requester email or the anonymous marker")
    captcha_token: str = Field(..., description="One-time verification token", min_length=1)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "source_url": "https://example.com/very/long/path/to/resource",
                    "email": "null",
                    "captcha_token": "03AFcWeA...",
                },
            ]
        }
    }


class ShortenResponse(BaseModel):
    """Successful shorten response."""

    result_short_url: str = Field(..., description="Short-url fragment, e.g. /abc123")


class ErrorResponse(BaseModel):
    """Error body returned with HTTP 422."""

    error: Optional[str] = Field(None, description="Reason the URL was rejected")


class UserURL(BaseModel):
    """One entry of a user's history."""

    original_url: str
    short_url: str


class HistoryResponse(BaseModel):
    """History listing for one user, in backend order."""

    user_urls: List[UserURL] = Field(default_factory=list)
