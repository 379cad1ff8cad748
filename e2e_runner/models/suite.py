"""Models for allow-lists loaded from tests.yaml files."""

from collections.abc import Sequence

from pydantic import Field, field_validator

from e2e_runner.models.base import Model


class AllowList(Model):
    """Names of the tests considered in scope for a run."""

    version: str = Field(..., description="Allow-list schema version")
    tests: Sequence[str] = Field(
        default_factory=list, description="Test names, in execution order"
    )

    @field_validator("tests")
    @classmethod
    def _strip_names(cls, tests: Sequence[str]) -> Sequence[str]:
        names = [name.strip() for name in tests]
        if any(not name for name in names):
            raise ValueError("test names must not be empty")
        return names
