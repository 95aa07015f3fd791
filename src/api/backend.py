from datetime import datetime
from typing import List, Optional

from analysis.context_analyzer import ContextAnalyzer
from analysis.task_enhancer import enhance_task
from assignment.engine import AutoAssignmentEngine
from assignment.models import (
    AssignmentContext,
    AssignmentRecommendation,
    TaskRequirements,
    TeamMember,
    WorkloadSummary,
)
from extraction.task_extractor import TaskExtractor
from taskflow_ai.models import (
    ContextAnalysis,
    EmailMetadata,
    ExtractedTask,
    ReferenceData,
    TaskParseResult,
)


class BackendAPI:
    """Central orchestration component: one method per public operation."""

    def __init__(
        self,
        extractor: Optional[TaskExtractor] = None,
        engine: Optional[AutoAssignmentEngine] = None,
    ):
        self.analyzer = ContextAnalyzer()
        self.extractor = extractor or TaskExtractor(analyzer=self.analyzer, use_default_llm=True)
        self.engine = engine or AutoAssignmentEngine()

    def analyze_context(
        self,
        message: str,
        reference: Optional[ReferenceData] = None,
        now: Optional[datetime] = None,
    ) -> ContextAnalysis:
        return self.analyzer.analyze(message, reference, now=now)

    def extract_tasks(
        self,
        message: str,
        reference: Optional[ReferenceData] = None,
        now: Optional[datetime] = None,
    ) -> TaskParseResult:
        return self.extractor.extract(message, reference, now=now)

    def extract_email_tasks(
        self,
        content: str,
        metadata: EmailMetadata,
        reference: Optional[ReferenceData] = None,
        now: Optional[datetime] = None,
    ) -> TaskParseResult:
        return self.extractor.extract_email(content, metadata, reference, now=now)

    def enhance_task(self, task: ExtractedTask, analysis: ContextAnalysis) -> ExtractedTask:
        return enhance_task(task, analysis)

    def get_assignment_recommendations(
        self,
        requirements: TaskRequirements,
        members: List[TeamMember],
        context: Optional[AssignmentContext] = None,
        now: Optional[datetime] = None,
    ) -> List[AssignmentRecommendation]:
        return self.engine.get_assignment_recommendations(requirements, members, context, now=now)

    def get_team_workload_summary(self, members: List[TeamMember]) -> WorkloadSummary:
        return self.engine.get_team_workload_summary(members)
