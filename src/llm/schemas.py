from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from taskflow_ai.models import ExtractedTask, TaskParseResult
from taskflow_ai.normalize import (
    validate_confidence,
    validate_due_date,
    validate_estimated_hours,
    validate_priority,
)


class LLMTask(BaseModel):
    """One task as returned by the model (camelCase keys on the wire)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    priority: str = "medium"
    assignee_id: Optional[str] = Field(default=None, alias="assigneeId")
    project_id: Optional[str] = Field(default=None, alias="projectId")
    estimated_hours: Optional[float] = Field(default=None, alias="estimatedHours")
    due_date: Optional[Any] = Field(default=None, alias="dueDate")
    tags: List[str] = Field(default_factory=list)
    dependencies: List[str] = Field(default_factory=list)
    confidence: float = 0.5

    @field_validator("description", mode="before")
    @classmethod
    def null_description(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("priority", mode="before")
    @classmethod
    def coerce_priority(cls, v: Any) -> str:
        return validate_priority(v)

    @field_validator("estimated_hours", mode="before")
    @classmethod
    def coerce_hours(cls, v: Any) -> Optional[float]:
        return validate_estimated_hours(v)

    @field_validator("confidence", mode="before")
    @classmethod
    def coerce_confidence(cls, v: Any) -> float:
        return validate_confidence(v)

    @field_validator("tags", "dependencies", mode="before")
    @classmethod
    def null_list(cls, v: Any) -> Any:
        return [] if v is None else v

    def to_task(self, now: Optional[datetime] = None) -> ExtractedTask:
        return ExtractedTask(
            title=self.title,
            description=self.description,
            priority=self.priority,
            assignee_id=self.assignee_id,
            project_id=self.project_id,
            estimated_hours=self.estimated_hours,
            due_date=validate_due_date(self.due_date, now),
            tags=self.tags,
            dependencies=self.dependencies,
            confidence=self.confidence,
        )


class LLMExtractionResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    tasks: List[LLMTask]
    confidence: float = 0.5
    suggestions: List[str] = Field(default_factory=list)

    @field_validator("confidence", mode="before")
    @classmethod
    def coerce_confidence(cls, v: Any) -> float:
        return validate_confidence(v)

    @field_validator("suggestions", mode="before")
    @classmethod
    def null_suggestions(cls, v: Any) -> Any:
        return [] if v is None else v

    def to_result(self, now: Optional[datetime] = None) -> TaskParseResult:
        return TaskParseResult(
            tasks=[t.to_task(now) for t in self.tasks],
            confidence=self.confidence,
            suggestions=self.suggestions,
        )
