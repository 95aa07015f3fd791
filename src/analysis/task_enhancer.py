from __future__ import annotations

from taskflow_ai.models import ContextAnalysis, ExtractedTask
from taskflow_ai.normalize import clamp, dedupe

URGENCY_THRESHOLD = 0.6
ASSIGNEE_THRESHOLD = 0.7
DEADLINE_THRESHOLD = 0.6
PROJECT_THRESHOLD = 0.7

DEADLINE_TAG_THRESHOLD = 0.5
DEPENDENCY_TAG_THRESHOLD = 0.6

CONTEXT_CONFIDENCE_BOOST = 0.2


def enhance_task(task: ExtractedTask, analysis: ContextAnalysis) -> ExtractedTask:
    """Fold a context analysis into a draft task.

    Fields are only overwritten when the matching axis clears its threshold;
    the draft itself is left untouched and a new task is returned.
    """
    update: dict = {}

    if analysis.urgency.confidence > URGENCY_THRESHOLD:
        update["priority"] = analysis.urgency.level

    assignees = analysis.assignees
    if assignees.confidence > ASSIGNEE_THRESHOLD and assignees.suggestions:
        update["assignee_id"] = assignees.suggestions[0].value

    deadline = analysis.deadlines
    if deadline.confidence > DEADLINE_THRESHOLD and deadline.extracted_date is not None:
        update["due_date"] = deadline.extracted_date

    projects = analysis.projects
    if projects.confidence > PROJECT_THRESHOLD and projects.suggestions:
        update["project_id"] = projects.suggestions[0].value

    context_tags = []
    if analysis.urgency.level == "urgent":
        context_tags.append("urgent")
    if deadline.confidence > DEADLINE_TAG_THRESHOLD:
        context_tags.append("deadline")
    if analysis.dependencies.confidence > DEPENDENCY_TAG_THRESHOLD:
        context_tags.append("dependency")
    update["tags"] = dedupe([*task.tags, *context_tags])

    # dependency confidence stays out of the average
    factors = (
        analysis.urgency.confidence,
        assignees.confidence,
        deadline.confidence,
        projects.confidence,
    )
    average = sum(factors) / len(factors)
    update["confidence"] = clamp(task.confidence + average * CONTEXT_CONFIDENCE_BOOST)

    return task.model_copy(update=update, deep=True)
