"""
Deterministic first-pass task extraction.

Splits a message (or an inbound email) into draft ``ExtractedTask`` records
using lexical triggers. This is also the fallback whenever the LLM path
fails, so it must never raise on odd input.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta
from typing import List, Optional

from analysis.context_analyzer import ContextAnalyzer
from taskflow_ai.models import EmailMetadata, ExtractedTask, TaskParseResult

logger = logging.getLogger(__name__)

TASK_TRIGGERS = ("need to", "should", "must", "have to")
_TASK_TRIGGER_RE = re.compile(r"\b(?:" + "|".join(TASK_TRIGGERS) + r")\b")
DEADLINE_TRIGGERS = ("deadline", "due")
LONG_MESSAGE_CHARS = 100

_TITLE_PATTERNS = [
    re.compile(rf"\b{trigger} (.+?)(?:\.|$)", re.IGNORECASE) for trigger in TASK_TRIGGERS
]

# (keywords, tag); first hit per row adds the tag
_TAG_KEYWORDS = [
    (("design", "mockup"), "design"),
    (("development", "code"), "development"),
    (("meeting", "call"), "meeting"),
    (("client",), "client"),
    (("review", "feedback"), "review"),
    (("test", "qa"), "testing"),
    (("content", "copy"), "content"),
]

_EMAIL_URGENT = ("urgent", "asap", "critical", "emergency", "immediate")
_EMAIL_HIGH = ("important", "priority", "soon", "deadline")

_HOURS_RE = re.compile(r"(\d+)\s*hour", re.IGNORECASE)
_DAYS_RE = re.compile(r"(\d+)\s*day", re.IGNORECASE)

NO_TASKS_HINT = "I didn't detect specific tasks. Try phrases like 'I need to...' or 'We should...'"


def _has_any(text: str, keywords) -> bool:
    return any(k in text for k in keywords)


def extract_title(message: str) -> str:
    for pattern in _TITLE_PATTERNS:
        m = pattern.search(message)
        if m and m.group(1).strip():
            title = m.group(1).strip()
            return title[0].upper() + title[1:]

    words = message.split(" ")[:6]
    return re.sub(r"[.,!?]$", "", " ".join(words)).strip()


def determine_priority(lower: str) -> str:
    if _has_any(lower, ("urgent", "asap", "critical")):
        return "urgent"
    if _has_any(lower, ("important", "priority", "soon")):
        return "high"
    if _has_any(lower, ("eventually", "when you can", "low priority")):
        return "low"
    return "medium"


def determine_email_urgency(content: str, subject: str) -> str:
    text = f"{content} {subject}".lower()
    if _has_any(text, _EMAIL_URGENT):
        return "urgent"
    if _has_any(text, _EMAIL_HIGH):
        return "high"
    return "medium"


def extract_tags(lower: str) -> List[str]:
    tags = [tag for keywords, tag in _TAG_KEYWORDS if _has_any(lower, keywords)]
    return tags or ["general"]


def estimate_hours(lower: str) -> Optional[float]:
    m = _HOURS_RE.search(lower)
    if m:
        return float(m.group(1))
    m = _DAYS_RE.search(lower)
    if m:
        return float(m.group(1)) * 8

    if _has_any(lower, ("quick", "small")):
        return 1.0
    if _has_any(lower, ("complex", "major")):
        return 8.0
    if _has_any(lower, ("review", "check")):
        return 2.0
    return None


class PatternTaskExtractor:
    def __init__(self, analyzer: Optional[ContextAnalyzer] = None):
        self.analyzer = analyzer or ContextAnalyzer()

    def parse_message(self, message: str, now: Optional[datetime] = None) -> TaskParseResult:
        now = now or datetime.now()
        lower = message.lower()
        tasks: List[ExtractedTask] = []

        if _TASK_TRIGGER_RE.search(lower):
            tasks.append(
                ExtractedTask(
                    title=extract_title(message) or "Untitled task",
                    description=f'Task extracted from: "{message[:50]}..."',
                    priority=determine_priority(lower),
                    tags=extract_tags(lower),
                    estimated_hours=estimate_hours(lower),
                    confidence=0.85,
                )
            )

        if _has_any(lower, DEADLINE_TRIGGERS):
            due = self.analyzer.analyze_deadline(message, now).extracted_date
            if tasks:
                tasks[0] = tasks[0].model_copy(update={"due_date": due})
            else:
                tasks.append(
                    ExtractedTask(
                        title="Deadline-based task",
                        description="Task with identified deadline",
                        priority="high",
                        due_date=due,
                        tags=["deadline"],
                        confidence=0.75,
                    )
                )

        if tasks and len(lower) > LONG_MESSAGE_CHARS:
            tasks.append(
                ExtractedTask(
                    title="Follow up on discussion",
                    description="Additional context from longer message",
                    priority="medium",
                    tags=["follow-up"],
                    estimated_hours=1,
                    confidence=0.65,
                )
            )

        if not tasks:
            return TaskParseResult(tasks=[], confidence=0.3, suggestions=[NO_TASKS_HINT])

        suggestions = [f"Found {len(tasks)} potential task{'s' if len(tasks) > 1 else ''}"]
        if any(t.assignee_id is None for t in tasks):
            suggestions.append("Consider specifying who should handle these tasks")
        if any(t.due_date is None for t in tasks):
            suggestions.append("Add deadlines for better priority management")

        return TaskParseResult(tasks=tasks, confidence=0.8, suggestions=suggestions)

    def parse_email(
        self,
        content: str,
        metadata: EmailMetadata,
        now: Optional[datetime] = None,
    ) -> TaskParseResult:
        now = now or datetime.now()
        lower = content.lower()
        sender = metadata.from_address
        is_client = metadata.is_client or "client" in sender.lower()
        urgency = determine_email_urgency(content, metadata.subject)
        tasks: List[ExtractedTask] = []

        if is_client:
            if _has_any(lower, ("review", "feedback")):
                tasks.append(
                    ExtractedTask(
                        title=f"Review feedback from {sender.split('@')[0]}",
                        description=f"Client feedback received: {metadata.subject}",
                        priority=urgency,
                        tags=["client", "review", "feedback"],
                        estimated_hours=2,
                        due_date=now + timedelta(days=2),
                        confidence=0.9,
                    )
                )
            if _has_any(lower, ("change", "revisions")):
                tasks.append(
                    ExtractedTask(
                        title="Implement client revisions",
                        description="Client has requested changes to current deliverables",
                        priority="high",
                        tags=["client", "revisions", "changes"],
                        estimated_hours=4,
                        confidence=0.85,
                    )
                )
            if _has_any(lower, ("meeting", "call")):
                tasks.append(
                    ExtractedTask(
                        title="Schedule client meeting",
                        description=f"Meeting request from {sender}",
                        priority="medium",
                        tags=["client", "meeting", "scheduling"],
                        estimated_hours=0.5,
                        due_date=now + timedelta(days=1),
                        confidence=0.8,
                    )
                )
        elif _has_any(lower, ("status", "update")):
            tasks.append(
                ExtractedTask(
                    title="Provide project status update",
                    description="Team member requesting project status",
                    priority="medium",
                    tags=["internal", "status", "communication"],
                    estimated_hours=1,
                    confidence=0.75,
                )
            )

        logger.debug(f"Pattern email parse: {len(tasks)} task(s) from {'client' if is_client else 'team'} email")
        return TaskParseResult(
            tasks=tasks,
            confidence=0.8 if tasks else 0.3,
            suggestions=[
                f"Parsed {len(tasks)} tasks from {'client' if is_client else 'team'} email",
                "No clear action items detected" if not tasks else "Consider assigning team members",
                "Email context preserved for reference",
            ],
        )
