import logging
import time
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, field_validator

from api.backend import BackendAPI
from api.dependencies import get_backend
from api.metrics import RECOMMENDATIONS_TOTAL, record_request
from assignment.engine import NoEligibleMembersError
from assignment.models import (
    AssignmentContext,
    AssignmentRecommendation,
    TaskRequirements,
    TeamMember,
    WorkloadSummary,
)
from taskflow_ai.normalize import parse_datetime

router = APIRouter()
logger = logging.getLogger(__name__)


class RecommendIn(BaseModel):
    task: TaskRequirements
    team_members: List[TeamMember] = Field(default_factory=list)
    context: Optional[AssignmentContext] = None
    now: Optional[datetime] = None

    @field_validator("now", mode="before")
    @classmethod
    def naive_now(cls, v):
        return parse_datetime(v)


class RecommendOut(BaseModel):
    recommendations: List[AssignmentRecommendation]


class RosterIn(BaseModel):
    team_members: List[TeamMember] = Field(default_factory=list)


@router.post("/assignments/recommend", response_model=RecommendOut)
async def recommend(payload: RecommendIn, backend: BackendAPI = Depends(get_backend)) -> RecommendOut:
    start = time.time()
    try:
        recommendations = backend.get_assignment_recommendations(
            payload.task, payload.team_members, payload.context, now=payload.now
        )
    except NoEligibleMembersError as e:
        logger.info(f"No assignee for '{payload.task.title}': {e}")
        RECOMMENDATIONS_TOTAL.labels(outcome="no_eligible").inc()
        record_request("/assignments/recommend", "rejected", start)
        raise HTTPException(status_code=422, detail=f"cannot auto-assign this task: {e}")

    RECOMMENDATIONS_TOTAL.labels(outcome="recommended").inc()
    record_request("/assignments/recommend", "ok", start)
    return RecommendOut(recommendations=recommendations)


@router.post("/team/workload", response_model=WorkloadSummary)
async def team_workload(payload: RosterIn, backend: BackendAPI = Depends(get_backend)) -> WorkloadSummary:
    start = time.time()
    summary = backend.get_team_workload_summary(payload.team_members)
    record_request("/team/workload", "ok", start)
    return summary
