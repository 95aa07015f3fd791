from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import List, Optional

from assignment.models import AvailabilityWindow, TaskRequirements, TeamMember

logger = logging.getLogger(__name__)

MAX_ELIGIBLE_UTILIZATION = 95.0
DEFAULT_HORIZON = timedelta(days=7)


class AssignmentError(Exception):
    pass


class NoEligibleMembersError(AssignmentError):
    def __init__(self, message: str = "No eligible team members found for this task"):
        super().__init__(message)


def task_window(task: TaskRequirements, now: datetime) -> tuple[datetime, datetime]:
    return now, task.deadline or now + DEFAULT_HORIZON


def skills_overlap(required: str, member_skill: str) -> bool:
    """Case-insensitive substring match in either direction ("react" ~ "React Native")."""
    a, b = required.strip().lower(), member_skill.strip().lower()
    if not a or not b:
        return False
    return a in b or b in a


def has_skill(member: TeamMember, required: str) -> bool:
    return any(skills_overlap(required, s) for s in member.skills)


def covering_window(
    member: TeamMember, start: datetime, end: datetime, fully_available: bool = False
) -> Optional[AvailabilityWindow]:
    for window in member.availability:
        if fully_available and not window.is_fully_available:
            continue
        if window.covers(start, end):
            return window
    return None


def is_eligible(task: TaskRequirements, member: TeamMember, now: datetime) -> bool:
    if task.role_required is not None and member.role != task.role_required:
        return False

    if task.skills_required and not all(has_skill(member, s) for s in task.skills_required):
        return False

    start, end = task_window(task, now)
    if covering_window(member, start, end, fully_available=True) is None:
        return False

    return member.current_workload.utilization_percentage <= MAX_ELIGIBLE_UTILIZATION


def filter_eligible(
    task: TaskRequirements, members: List[TeamMember], now: Optional[datetime] = None
) -> List[TeamMember]:
    now = now or datetime.now()
    eligible = [m for m in members if is_eligible(task, m, now)]
    logger.info(f"{len(eligible)}/{len(members)} member(s) eligible for '{task.title}'")
    if not eligible:
        raise NoEligibleMembersError()
    return eligible
