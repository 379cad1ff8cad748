"""Pydantic models for SendGrid API payloads."""

from collections.abc import Sequence

from pydantic import BaseModel


class SendGridError(BaseModel):
    """A single error reported by the SendGrid API."""

    message: str
    field: str | None = None


class SendGridErrorResponse(BaseModel):
    """Error response body from the mail send API."""

    errors: Sequence[SendGridError] = ()
