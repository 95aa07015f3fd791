from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import List, Sequence, Tuple

from assignment.models import (
    AlternativeOption,
    AssignmentRecommendation,
    FactorScores,
    TaskRequirements,
    TeamMember,
    WorkloadImpact,
)

DEFAULT_HOURS_PER_DAY = 8.0
MAX_ALTERNATIVES = 2


def build_reasoning(member: TeamMember, scores: FactorScores) -> List[str]:
    reasoning: List[str] = []
    if scores.skill_match > 0.8:
        reasoning.append(f"Excellent skill match ({round(scores.skill_match * 100)}% alignment)")
    if scores.workload_balance > 0.8:
        utilization = round(member.current_workload.utilization_percentage)
        reasoning.append(f"Good workload balance ({utilization}% utilization)")
    if scores.performance > 0.8:
        completion = round(member.performance.task_completion_rate * 100)
        reasoning.append(f"Strong performance history ({completion}% completion rate)")
    if scores.role_alignment > 0.7:
        reasoning.append("Role aligns well with task requirements")
    return reasoning


def build_risk_factors(member: TeamMember, scores: FactorScores) -> List[str]:
    risks: List[str] = []
    workload = member.current_workload
    if workload.utilization_percentage > 85:
        risks.append(f"High current workload ({round(workload.utilization_percentage)}% utilized)")
    if workload.overdue_tasks > 0:
        risks.append(f"Has {workload.overdue_tasks} overdue task(s)")
    if scores.availability < 0.5:
        risks.append("Limited availability for task timeline")
    return risks


def workload_impact(task: TaskRequirements, member: TeamMember, now: datetime) -> WorkloadImpact:
    workload = member.current_workload
    load_increase = task.estimated_hours / workload.weekly_capacity * 100 if workload.weekly_capacity else 0.0

    hours_per_day = member.availability[0].hours_per_day if member.availability else DEFAULT_HOURS_PER_DAY
    days = math.ceil(task.estimated_hours / (hours_per_day or DEFAULT_HOURS_PER_DAY))

    return WorkloadImpact(
        new_utilization=round(workload.utilization_percentage + load_increase),
        task_load_increase=round(load_increase),
        estimated_delivery_date=now + timedelta(days=days),
    )


def alternatives_for(
    member: TeamMember, ranked: Sequence[Tuple[TeamMember, FactorScores]]
) -> List[AlternativeOption]:
    options = [
        AlternativeOption(
            member_id=other.id,
            member_name=other.name,
            confidence=scores.total,
            reason="Good skill match" if scores.skill_match > 0.7 else "Available capacity",
        )
        for other, scores in ranked
        if other.id != member.id
    ]
    return options[:MAX_ALTERNATIVES]


def build_recommendation(
    task: TaskRequirements,
    member: TeamMember,
    scores: FactorScores,
    ranked: Sequence[Tuple[TeamMember, FactorScores]],
    now: datetime,
) -> AssignmentRecommendation:
    return AssignmentRecommendation(
        member_id=member.id,
        member_name=member.name,
        confidence=scores.total,
        reasoning=build_reasoning(member, scores),
        risk_factors=build_risk_factors(member, scores),
        alternative_options=alternatives_for(member, ranked),
        workload_impact=workload_impact(task, member, now),
    )
