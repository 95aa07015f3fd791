import logging
from datetime import datetime
from typing import List, Optional

from assignment.eligibility import AssignmentError, NoEligibleMembersError, filter_eligible
from assignment.models import (
    AssignmentContext,
    AssignmentRecommendation,
    TaskRequirements,
    TeamMember,
    WorkloadSummary,
)
from assignment.recommendations import build_recommendation
from assignment.scoring import rank_members
from assignment.workload import summarize_workload

logger = logging.getLogger(__name__)

MAX_RECOMMENDATIONS = 3

__all__ = ["AutoAssignmentEngine", "AssignmentError", "NoEligibleMembersError"]


class AutoAssignmentEngine:
    """Ranks eligible team members for a task and explains the ranking."""

    def get_assignment_recommendations(
        self,
        requirements: TaskRequirements,
        members: List[TeamMember],
        context: Optional[AssignmentContext] = None,
        now: Optional[datetime] = None,
    ) -> List[AssignmentRecommendation]:
        now = now or datetime.now()
        if context is not None and context.project_id and not requirements.project_id:
            requirements = requirements.model_copy(update={"project_id": context.project_id})

        eligible = filter_eligible(requirements, members, now=now)
        top = rank_members(requirements, eligible, now=now)[:MAX_RECOMMENDATIONS]

        recommendations = [
            build_recommendation(requirements, member, scores, top, now) for member, scores in top
        ]
        best = recommendations[0]
        logger.info(
            f"Recommended {best.member_name} for '{requirements.title}' "
            f"(confidence {best.confidence:.2f}, {len(recommendations)} candidate(s))"
        )
        return recommendations

    def get_team_workload_summary(self, members: List[TeamMember]) -> WorkloadSummary:
        return summarize_workload(members)
