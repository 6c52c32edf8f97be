"""Data models for collected commit records."""

from typing import Optional

from pydantic import BaseModel, Field


class ProjectRef(BaseModel):
    """Identifies a project on the GitLab instance."""

    namespace: str = Field(..., description="Group or user namespace (may contain subgroups)")
    name: str = Field(..., description="Project name")

    @property
    def path(self) -> str:
        """Full project path as used by the GitLab API, e.g. ``teamx/app``."""
        return f"{self.namespace}/{self.name}"

    class Config:
        """Pydantic config."""
        frozen = True
        json_schema_extra = {"example": {"namespace": "teamx", "name": "app"}}


class CommitRecord(BaseModel):
    """A single commit as seen by the changelog pipeline."""

    author: str = Field(..., description="Author name")
    original_message: str = Field("", description="Commit subject as written")
    translated_message: Optional[str] = Field(None, description="English subject, set at most once")
    project_ref: Optional[ProjectRef] = Field(None, description="GitLab project the commit came from")

    class Config:
        """Pydantic config."""
        validate_assignment = True
        json_schema_extra = {
            "example": {
                "author": "Alice",
                "original_message": "Fix crash {#42}",
                "translated_message": None,
                "project_ref": {"namespace": "teamx", "name": "app"},
            }
        }

    @property
    def message(self) -> str:
        """Subject to display: the translation when one exists."""
        if self.translated_message is not None:
            return self.translated_message
        return self.original_message

    def set_translation(self, text: str) -> None:
        """Record the translated subject.

        Raises:
            ValueError: If a translation was already recorded
        """
        if self.translated_message is not None:
            raise ValueError("translated_message is already set")
        self.translated_message = text
