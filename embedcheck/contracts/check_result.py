"""
Result contracts for embed validation and image probing.
All models use Pydantic V2.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Severity(str, Enum):
    """How much a finding matters for the embed."""

    ERROR = "error"  # embed would be rejected or malformed
    WARNING = "warning"  # embed is accepted but something degrades


class ImageCheckStatus(str, Enum):
    """Classification of one image URL fetch."""

    OK = "ok"
    UNREACHABLE = "unreachable"
    BAD_STATUS = "bad_status"
    NOT_AN_IMAGE = "not_an_image"
    UNSUPPORTED_TYPE = "unsupported_type"


class ImageCheckOutcome(BaseModel):
    """Label-independent result of fetching an image URL.

    This is what gets memoized per URL, so it must not carry the field
    label the URL was found under.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    status: ImageCheckStatus
    status_code: int | None = Field(default=None, description="HTTP status for bad_status")
    reason: str | None = Field(default=None, description="HTTP reason phrase for bad_status")
    content_type: str | None = Field(default=None, description="Media type the server sent")

    @property
    def is_ok(self) -> bool:
        return self.status is ImageCheckStatus.OK

    @property
    def severity(self) -> Severity | None:
        """Network and content-type findings never invalidate the document."""
        if self.is_ok:
            return None
        return Severity.WARNING


class ImageIssue(BaseModel):
    """A label-prefixed finding produced by the image prober."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    text: str
    severity: Severity


class CheckResult(BaseModel):
    """Aggregated errors and warnings for one validation pass.

    Order follows rule evaluation order and is stable for identical input.
    """

    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def __str__(self) -> str:
        """Human-readable validation report."""
        lines = [f"Valid: {self.is_valid}"]

        if self.errors:
            lines.append("\nErrors:")
            for err in self.errors:
                lines.append(f"  - {err}")

        if self.warnings:
            lines.append("\nWarnings:")
            for warn in self.warnings:
                lines.append(f"  - {warn}")

        return "\n".join(lines)
