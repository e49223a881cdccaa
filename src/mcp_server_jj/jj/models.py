"""Pydantic models for jj tool parameters"""

import logging
from typing import Any, Dict, Optional, Type, TypeVar, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeInt,
    PositiveInt,
    ValidationError,
)

from ..error_handling import MalformedParameters

logger = logging.getLogger(__name__)


class JjParams(BaseModel):
    """Fields shared by every jj tool."""

    model_config = ConfigDict(populate_by_name=True, strict=True)

    repo_path: Optional[str] = Field(
        default=None,
        alias="repoPath",
        description="Optional path to repo root",
    )
    cwd: Optional[str] = Field(
        default=None,
        description="Optional working directory",
    )


class JjStatus(JjParams):
    pass


class JjRebase(JjParams):
    source: Optional[str] = Field(default=None, description="Source revision to rebase")
    destination: Optional[str] = Field(
        default=None, description="Destination revision to rebase onto"
    )


class JjCommit(JjParams):
    message: str = Field(description="Commit message")


class JjNew(JjParams):
    parents: Optional[Union[str, list[str]]] = Field(
        default=None, description="Parent revisions for the new commit"
    )


class JjLog(JjParams):
    limit: Optional[PositiveInt] = Field(
        default=None, description="Maximum number of commits to show"
    )
    template: Optional[str] = Field(default=None, description="Template for formatting output")
    revisions: Optional[str] = Field(default=None, description="Revisions to show")


class JjDiff(JjParams):
    from_: Optional[str] = Field(default=None, alias="from", description="Source revision")
    to: Optional[str] = Field(default=None, description="Target revision")
    paths: Optional[list[str]] = Field(default=None, description="Specific paths to diff")
    context: Optional[NonNegativeInt] = Field(
        default=None, description="Number of context lines"
    )
    summary: Optional[bool] = Field(default=None, description="Show summary only")
    stat: Optional[bool] = Field(default=None, description="Show file statistics")


class JjGitClone(JjParams):
    source: str = Field(description="Git repository URL to clone")
    destination: Optional[str] = Field(default=None, description="Destination directory")
    colocate: Optional[bool] = Field(
        default=None, description="Create a colocated jj/git repository"
    )
    remote: Optional[str] = Field(default=None, description="Name for the remote")
    depth: Optional[PositiveInt] = Field(default=None, description="Depth for shallow clone")


T = TypeVar("T", bound=JjParams)


def validate_params(model: Type[T], arguments: Optional[Dict[str, Any]], tool: str) -> T:
    """
    Validates tool arguments against a parameter model.

    Args:
        model: The pydantic model class for the tool.
        arguments: Raw arguments from the tool call; None is treated as empty.
        tool: Tool name, used in the error message.

    Returns:
        An instance of the model if validation is successful.

    Raises:
        MalformedParameters: If a field is missing, mistyped or out of range.
    """
    try:
        return model.model_validate(arguments or {})
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or '<arguments>'}: {err['msg']}"
            for err in e.errors()
        )
        logger.debug(f"Validation failed for {model.__name__}: {e}")
        raise MalformedParameters(f"Invalid parameters for '{tool}': {problems}") from e
