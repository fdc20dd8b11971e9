"""
Command Models

Every CLI invocation is parsed into exactly one of these commands before
any handler runs. Each variant carries only the fields its handler needs,
already validated.

DESIGN DECISION: Commands are a tagged union keyed on `kind`.
The executor dispatches on the concrete type and never looks at raw
argument strings.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class AddCommand(BaseModel):
    """Create a new expense."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["add"] = "add"
    description: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0, allow_inf_nan=False)


class ListCommand(BaseModel):
    """Print every stored expense."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["list"] = "list"


class DeleteCommand(BaseModel):
    """
    Remove an expense by id.

    expense_id is None when the supplied id was missing or not an integer;
    it then matches no stored expense.
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal["delete"] = "delete"
    expense_id: Optional[int] = None


class UpdateCommand(BaseModel):
    """
    Partially update an expense.

    expense_id, description and amount are None when they were not
    supplied or when the supplied value was rejected during parsing. A None
    id matches no stored expense.
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal["update"] = "update"
    expense_id: Optional[int] = None
    description: Optional[str] = None
    amount: Optional[float] = None


class SummaryCommand(BaseModel):
    """Total of all expenses, optionally for one calendar month."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["summary"] = "summary"
    month: Optional[int] = Field(
        default=None,
        description="Calendar month filter; not range-checked"
    )


class HelpCommand(BaseModel):
    """Print usage. Also produced for unknown commands."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["help"] = "help"
    requested: Optional[str] = Field(
        default=None,
        description="The unrecognized command name, if any"
    )


Command = Annotated[
    Union[
        AddCommand,
        ListCommand,
        DeleteCommand,
        UpdateCommand,
        SummaryCommand,
        HelpCommand,
    ],
    Field(discriminator="kind"),
]


class CommandResult(BaseModel):
    """
    Outcome of executing one command.

    The CLI prints `message` to stdout on success, to stderr on failure,
    and exits with `exit_code`.
    """

    command: str = Field(
        ...,
        description="Kind of command that produced this result"
    )
    success: bool
    message: str
    exit_code: int = Field(default=0, ge=0)

    @classmethod
    def ok(cls, command: str, message: str) -> "CommandResult":
        return cls(command=command, success=True, message=message)

    @classmethod
    def failed(cls, command: str, message: str, exit_code: int = 1) -> "CommandResult":
        return cls(
            command=command,
            success=False,
            message=message,
            exit_code=exit_code,
        )
