"""Pydantic models for git workflow tool arguments"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CommitAndPush(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    custom_message: Optional[str] = Field(
        default=None,
        alias="customMessage",
        description="Optional custom commit message. If not provided, one is generated from the changes.",
    )
    branch: str = Field(default="main", description="Branch to push to")


class FullWorkflow(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    custom_message: Optional[str] = Field(
        default=None,
        alias="customMessage",
        description="Optional custom commit message",
    )
    branch: str = Field(
        default="main",
        description="Branch to push to (if not mentioned default to main)",
    )


class AnalyzeChanges(BaseModel):
    pass


class ValidateProject(BaseModel):
    pass
