from datetime import datetime

from analysis.context_analyzer import analyze_context
from analysis.task_enhancer import enhance_task
from taskflow_ai.models import ExtractedTask


def _draft():
    return ExtractedTask(title="Finish it", tags=["general"], confidence=0.5)


def test_confident_axes_are_applied(now):
    analysis = analyze_context("This is urgent, @sarah needs to finish it by tomorrow", now=now)
    task = enhance_task(_draft(), analysis)

    assert task.priority == "urgent"
    assert task.assignee_id == "sarah"
    assert task.due_date == datetime(2024, 1, 16, 17, 0)
    assert task.project_id is None
    assert task.tags == ["general", "urgent", "deadline", "dependency"]
    assert 0.5 < task.confidence <= 1.0


def test_weak_axes_leave_draft_alone(now):
    draft = ExtractedTask(title="Update homepage", priority="high", tags=["general"], confidence=0.5)
    task = enhance_task(draft, analyze_context("Update the homepage", now=now))

    assert task.priority == "high"
    assert task.assignee_id is None
    assert task.due_date is None
    assert task.tags == ["general"]
    assert abs(task.confidence - 0.555) < 1e-9


def test_enhance_returns_copy(now):
    draft = _draft()
    enhance_task(draft, analyze_context("urgent: finish it today", now=now))
    assert draft.priority == "medium"
    assert draft.tags == ["general"]
    assert draft.due_date is None


def test_confidence_never_exceeds_one(now):
    draft = ExtractedTask(title="X", confidence=0.99)
    task = enhance_task(draft, analyze_context("URGENT @amy Acme website by tomorrow", now=now))
    assert task.confidence == 1.0


def test_existing_tags_not_duplicated(now):
    draft = ExtractedTask(title="X", tags=["deadline"])
    task = enhance_task(draft, analyze_context("finish by tomorrow", now=now))
    assert task.tags.count("deadline") == 1
