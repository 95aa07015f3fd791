"""Data models for the auto-assignment engine."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from taskflow_ai.models import Priority
from taskflow_ai.normalize import parse_datetime, validate_priority


class UserRole(str, Enum):
    SUPER_ADMIN = "super_admin"
    AGENCY_ADMIN = "agency_admin"
    PROJECT_MANAGER = "project_manager"
    TEAM_MEMBER = "team_member"
    CLIENT = "client"


DEFAULT_ROLE = UserRole.TEAM_MEMBER


def coerce_role(value: Any) -> UserRole:
    """Accept enum members and "project-manager" / "Project Manager" spellings."""
    if isinstance(value, UserRole):
        return value
    if isinstance(value, str):
        key = value.strip().lower().replace("-", "_").replace(" ", "_")
        try:
            return UserRole(key)
        except ValueError:
            pass
    return DEFAULT_ROLE


class WorkloadData(BaseModel):
    active_tasks: int = 0
    total_estimated_hours: float = 0.0
    weekly_capacity: float = 40.0
    utilization_percentage: float = 0.0  # authoritative, may exceed 100
    overdue_tasks: int = 0
    urgent_tasks: int = 0
    average_task_completion: float = 0.0  # days


class AvailabilityWindow(BaseModel):
    start_date: datetime
    end_date: datetime
    hours_per_day: float = 8.0
    is_fully_available: bool = True
    blocked_dates: List[datetime] = Field(default_factory=list)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def naive_local(cls, v: Any) -> Any:
        return parse_datetime(v) or v

    def covers(self, start: datetime, end: datetime) -> bool:
        return self.start_date <= start and self.end_date >= end


class WorkingHours(BaseModel):
    start: str = "09:00"
    end: str = "17:00"
    timezone: str = "UTC"


class AssignmentPreferences(BaseModel):
    preferred_task_types: List[str] = Field(default_factory=list)
    project_types: List[str] = Field(default_factory=list)
    working_hours: WorkingHours = Field(default_factory=WorkingHours)
    max_concurrent_tasks: int = 5
    preferred_urgency_levels: List[Priority] = Field(default_factory=list)


class PerformanceMetrics(BaseModel):
    task_completion_rate: float = Field(0.0, ge=0, le=1)
    average_time_to_complete: float = 0.0  # days
    quality_score: float = Field(0.0, ge=0, le=10)
    client_satisfaction_score: float = Field(0.0, ge=0, le=10)
    on_time_delivery_rate: float = Field(0.0, ge=0, le=1)
    collaboration_score: float = Field(0.0, ge=0, le=10)


class TeamMember(BaseModel):
    id: str
    name: str
    email: Optional[str] = None
    role: UserRole = DEFAULT_ROLE
    skills: List[str] = Field(default_factory=list)
    current_workload: WorkloadData = Field(default_factory=WorkloadData)
    availability: List[AvailabilityWindow] = Field(default_factory=list)
    preferences: AssignmentPreferences = Field(default_factory=AssignmentPreferences)
    performance: PerformanceMetrics = Field(default_factory=PerformanceMetrics)

    @field_validator("role", mode="before")
    @classmethod
    def known_role(cls, v: Any) -> UserRole:
        return coerce_role(v)


class TaskRequirements(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    skills_required: List[str] = Field(default_factory=list)
    role_required: Optional[UserRole] = None
    priority: Priority = "medium"
    estimated_hours: float = Field(4.0, gt=0)
    deadline: Optional[datetime] = None
    project_id: Optional[str] = None
    complexity: Literal["simple", "medium", "complex"] = "medium"
    requires_collaboration: bool = False
    client_facing: bool = False

    @field_validator("priority", mode="before")
    @classmethod
    def coerce_priority(cls, v: Any) -> str:
        return validate_priority(v)

    @field_validator("role_required", mode="before")
    @classmethod
    def known_role(cls, v: Any) -> Optional[UserRole]:
        return None if v in (None, "") else coerce_role(v)

    @field_validator("deadline", mode="before")
    @classmethod
    def naive_deadline(cls, v: Any) -> Optional[datetime]:
        return parse_datetime(v)


class AssignmentContext(BaseModel):
    project_id: Optional[str] = None
    requester_id: Optional[str] = None
    urgency_override: bool = False


class FactorScores(BaseModel):
    skill_match: float
    workload_balance: float
    role_alignment: float
    performance: float
    availability: float
    preferences: float
    collaboration: float
    urgency_fit: float
    total: float


class AlternativeOption(BaseModel):
    member_id: str
    member_name: str
    confidence: float
    reason: str


class WorkloadImpact(BaseModel):
    new_utilization: int
    task_load_increase: int
    estimated_delivery_date: datetime


class AssignmentRecommendation(BaseModel):
    member_id: str
    member_name: str
    confidence: float = Field(..., ge=0, le=1)
    reasoning: List[str] = Field(default_factory=list)
    risk_factors: List[str] = Field(default_factory=list)
    alternative_options: List[AlternativeOption] = Field(default_factory=list)
    workload_impact: WorkloadImpact


MemberStatus = Literal["available", "optimal", "busy", "overloaded"]


class MemberWorkloadSummary(BaseModel):
    id: str
    name: str
    utilization: float
    active_tasks: int
    status: MemberStatus


class WorkloadSummary(BaseModel):
    total_members: int
    average_utilization: float
    overloaded_members: int
    available_capacity: float
    urgent_tasks_count: int
    member_summaries: List[MemberWorkloadSummary] = Field(default_factory=list)
