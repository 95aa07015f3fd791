from __future__ import annotations

from typing import List

from assignment.models import MemberStatus, MemberWorkloadSummary, TeamMember, WorkloadSummary

OVERLOADED_ABOVE = 95.0


def member_status(utilization: float) -> MemberStatus:
    if utilization < 65:
        return "available"
    if utilization < 85:
        return "optimal"
    if utilization <= OVERLOADED_ABOVE:
        return "busy"
    return "overloaded"


def summarize_workload(members: List[TeamMember]) -> WorkloadSummary:
    utilizations = [m.current_workload.utilization_percentage for m in members]

    summaries = [
        MemberWorkloadSummary(
            id=m.id,
            name=m.name,
            utilization=m.current_workload.utilization_percentage,
            active_tasks=m.current_workload.active_tasks,
            status=member_status(m.current_workload.utilization_percentage),
        )
        for m in members
    ]

    return WorkloadSummary(
        total_members=len(members),
        average_utilization=sum(utilizations) / len(utilizations) if utilizations else 0.0,
        overloaded_members=sum(1 for u in utilizations if u > OVERLOADED_ABOVE),
        available_capacity=sum(max(0.0, 100 - u) for u in utilizations),
        urgent_tasks_count=sum(m.current_workload.urgent_tasks for m in members),
        member_summaries=summaries,
    )
