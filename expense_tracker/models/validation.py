"""
Validation Models

Raw CLI arguments are checked field by field. Each problem becomes a
ValidationIssue; the collected issues form a ValidationResult that the
command parser turns into a typed command or an InvalidInputError.
"""

from typing import Any

from pydantic import BaseModel, Field


class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Argument with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'not_a_number', 'not_positive')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning)$",
        description="Errors block the command, warnings drop the field"
    )


class ValidationResult(BaseModel):
    """Result of validating the arguments for one command."""

    command: str
    values: dict[str, Any] = Field(
        default_factory=dict,
        description="Accepted, converted argument values"
    )
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == "warning"]
