from __future__ import annotations

from datetime import datetime
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from taskflow_ai.normalize import (
    dedupe,
    parse_datetime,
    validate_confidence,
    validate_estimated_hours,
    validate_priority,
)

Priority = Literal["low", "medium", "high", "urgent"]


class ExtractedTask(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    priority: Priority = "medium"
    tags: List[str] = Field(default_factory=list)
    estimated_hours: Optional[float] = None
    due_date: Optional[datetime] = None
    assignee_id: Optional[str] = None
    project_id: Optional[str] = None
    dependencies: List[str] = Field(default_factory=list)
    confidence: float = 0.5

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("title must not be blank")
        return v2

    @field_validator("priority", mode="before")
    @classmethod
    def coerce_priority(cls, v: Any) -> str:
        return validate_priority(v)

    @field_validator("estimated_hours", mode="before")
    @classmethod
    def coerce_hours(cls, v: Any) -> Optional[float]:
        return validate_estimated_hours(v)

    @field_validator("due_date", mode="before")
    @classmethod
    def coerce_due_date(cls, v: Any) -> Optional[datetime]:
        return parse_datetime(v)

    @field_validator("confidence", mode="before")
    @classmethod
    def coerce_confidence(cls, v: Any) -> float:
        return validate_confidence(v)

    @field_validator("tags")
    @classmethod
    def unique_tags(cls, v: List[str]) -> List[str]:
        return dedupe([t for t in v if t])


class TaskParseResult(BaseModel):
    tasks: List[ExtractedTask] = Field(default_factory=list)
    confidence: float = 0.5
    suggestions: List[str] = Field(default_factory=list)

    @field_validator("confidence", mode="before")
    @classmethod
    def coerce_confidence(cls, v: Any) -> float:
        return validate_confidence(v)


class EmailMetadata(BaseModel):
    from_address: str = Field(..., alias="from")
    subject: str = ""
    date: Optional[datetime] = None
    is_client: bool = False

    model_config = ConfigDict(populate_by_name=True)


# Reference data the analyzers can match a message against.


class TeamMemberRef(BaseModel):
    id: str
    name: str
    role: str = ""
    skills: List[str] = Field(default_factory=list)


class ProjectRef(BaseModel):
    id: str
    name: str
    client: str = ""
    keywords: List[str] = Field(default_factory=list)


class ExistingTaskRef(BaseModel):
    id: Optional[str] = None
    title: str = ""


class ReferenceData(BaseModel):
    team_members: List[TeamMemberRef] = Field(default_factory=list)
    projects: List[ProjectRef] = Field(default_factory=list)
    existing_tasks: List[ExistingTaskRef] = Field(default_factory=list)


# Context analysis results. Frozen: built once per analyze call.


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class UrgencyAnalysis(_Frozen):
    level: Priority = "medium"
    confidence: float
    indicators: List[str] = Field(default_factory=list)
    reasoning: str


class AssigneeSuggestion(_Frozen):
    type: Literal["name", "role", "mention", "team"]
    value: str
    confidence: float
    context: str


class AssigneeAnalysis(_Frozen):
    suggestions: List[AssigneeSuggestion] = Field(default_factory=list)
    confidence: float
    reasoning: str


class DeadlineAnalysis(_Frozen):
    extracted_date: Optional[datetime] = None
    confidence: float
    type: Literal["explicit", "relative", "implied"] = "implied"
    original_text: str = ""
    reasoning: str

    @field_validator("extracted_date", mode="before")
    @classmethod
    def naive_local(cls, v: Any) -> Optional[datetime]:
        return parse_datetime(v)


class ProjectSuggestion(_Frozen):
    type: Literal["name", "client", "keyword"]
    value: str
    confidence: float
    context: str


class ProjectAnalysis(_Frozen):
    suggestions: List[ProjectSuggestion] = Field(default_factory=list)
    confidence: float
    reasoning: str


class DependencySuggestion(_Frozen):
    type: Literal["blocking", "prerequisite", "sequence"]
    description: str
    confidence: float
    task_id: Optional[str] = None


class DependencyAnalysis(_Frozen):
    suggestions: List[DependencySuggestion] = Field(default_factory=list)
    confidence: float
    reasoning: str


class ContextAnalysis(_Frozen):
    urgency: UrgencyAnalysis
    assignees: AssigneeAnalysis
    deadlines: DeadlineAnalysis
    projects: ProjectAnalysis
    dependencies: DependencyAnalysis
