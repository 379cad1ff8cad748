"""Configuration for the SendGrid notifier."""

from collections.abc import Sequence

from pydantic import BaseModel, Field, SecretStr, field_validator


class SendGridConfig(BaseModel):
    """Configuration for the SendGrid notifier."""

    api_key: SecretStr
    to: Sequence[str] = Field(..., min_length=1)
    from_address: str = "e2e-runner@localhost"
    from_name: str = "End-to-end test runner"
    category: str = "EndToEnd Testing"
    api_base_url: str = "https://api.sendgrid.com"

    @field_validator("to")
    @classmethod
    def _check_addresses(cls, to: Sequence[str]) -> Sequence[str]:
        for address in to:
            local, at, domain = address.partition("@")
            if not (local and at and domain):
                raise ValueError(f"bad email address: {address}")
        return to
