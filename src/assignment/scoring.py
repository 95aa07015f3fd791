"""Weighted multi-factor scoring of a team member against a task.

Each factor returns a value in [0, 1]; the total is their weighted sum.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from assignment.eligibility import covering_window, has_skill, task_window
from assignment.models import FactorScores, TaskRequirements, TeamMember, UserRole
from taskflow_ai.normalize import clamp

WEIGHTS: Dict[str, float] = {
    "skill_match": 0.25,
    "workload_balance": 0.20,
    "role_alignment": 0.15,
    "performance": 0.15,
    "availability": 0.10,
    "preferences": 0.08,
    "collaboration": 0.05,
    "urgency_fit": 0.02,
}

ROLE_KEYWORDS: Dict[UserRole, Tuple[str, ...]] = {
    UserRole.PROJECT_MANAGER: ("planning", "coordination", "management", "communication"),
    UserRole.TEAM_MEMBER: ("development", "design", "implementation", "execution"),
    UserRole.AGENCY_ADMIN: ("strategy", "oversight", "planning"),
    UserRole.SUPER_ADMIN: ("technical", "complex", "urgent"),
    UserRole.CLIENT: (),
}

NEUTRAL_SKILL_SCORE = 0.8
NEUTRAL_COLLABORATION_SCORE = 0.8
NEUTRAL_URGENCY_SCORE = 0.8


def _text(task: TaskRequirements) -> str:
    return f"{task.title} {task.description or ''}".lower()


def skill_match_score(task: TaskRequirements, member: TeamMember) -> float:
    if not task.skills_required:
        return NEUTRAL_SKILL_SCORE

    matched = sum(1 for s in task.skills_required if has_skill(member, s))
    base = matched / len(task.skills_required)

    description = (task.description or "").lower()
    bonus = sum(1 for s in member.skills if description and s.strip() and s.lower() in description)
    return min(base + bonus * 0.1, 1.0)


def workload_score(member: TeamMember) -> float:
    # 75-85% utilization is the sweet spot
    u = member.current_workload.utilization_percentage / 100
    if u <= 0.75:
        return 1.0 - (0.75 - u) * 0.5
    if u <= 0.85:
        return 1.0
    return max(0.1, 1.0 - (u - 0.85) * 4)


def role_alignment_score(task: TaskRequirements, member: TeamMember) -> float:
    keywords = ROLE_KEYWORDS.get(member.role, ())
    if not keywords:
        return 0.5

    text = _text(task)
    hits = sum(1 for k in keywords if k in text)
    base = hits / len(keywords)
    return max(base, 0.6) if hits else base


def performance_score(member: TeamMember) -> float:
    p = member.performance
    return (
        p.task_completion_rate * 0.3
        + p.on_time_delivery_rate * 0.25
        + (p.quality_score / 10) * 0.2
        + (p.client_satisfaction_score / 10) * 0.15
        + (p.collaboration_score / 10) * 0.1
    )


def availability_score(task: TaskRequirements, member: TeamMember, now: datetime) -> float:
    start, deadline = task_window(task, now)
    window = covering_window(member, start, deadline)
    if window is None:
        return 0.1

    days = max(1, math.ceil((deadline - now).total_seconds() / 86400))
    available = window.hours_per_day * days
    required = task.estimated_hours

    if available >= required * 2:
        return 1.0
    if available >= required * 1.5:
        return 0.9
    if available >= required:
        return 0.7
    return 0.3


def preference_score(task: TaskRequirements, member: TeamMember) -> float:
    prefs = member.preferences
    score = 0.5

    text = _text(task)
    if any(t.lower() in text for t in prefs.preferred_task_types if t):
        score += 0.3
    if task.priority in prefs.preferred_urgency_levels:
        score += 0.2
    if member.current_workload.active_tasks < prefs.max_concurrent_tasks:
        score += 0.1
    return min(score, 1.0)


def collaboration_score(task: TaskRequirements, member: TeamMember) -> float:
    if not task.requires_collaboration:
        return NEUTRAL_COLLABORATION_SCORE
    return member.performance.collaboration_score / 10


def urgency_fit_score(task: TaskRequirements, member: TeamMember) -> float:
    if task.priority != "urgent":
        return NEUTRAL_URGENCY_SCORE
    w = member.current_workload
    overdue_ratio = w.overdue_tasks / max(w.active_tasks, 1)
    return max(0.1, 1.0 - overdue_ratio) * member.performance.on_time_delivery_rate


def score_member(
    task: TaskRequirements, member: TeamMember, now: Optional[datetime] = None
) -> FactorScores:
    now = now or datetime.now()
    factors = {
        "skill_match": skill_match_score(task, member),
        "workload_balance": workload_score(member),
        "role_alignment": role_alignment_score(task, member),
        "performance": performance_score(member),
        "availability": availability_score(task, member, now),
        "preferences": preference_score(task, member),
        "collaboration": collaboration_score(task, member),
        "urgency_fit": urgency_fit_score(task, member),
    }
    total = sum(score * WEIGHTS[name] for name, score in factors.items())
    return FactorScores(**factors, total=clamp(total))


def rank_members(
    task: TaskRequirements, members: List[TeamMember], now: Optional[datetime] = None
) -> List[Tuple[TeamMember, FactorScores]]:
    """Score every member and sort best first (stable for ties)."""
    now = now or datetime.now()
    scored = [(m, score_member(task, m, now)) for m in members]
    return sorted(scored, key=lambda pair: pair[1].total, reverse=True)
