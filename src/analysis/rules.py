"""
Read-only pattern tables for the context analyzers.

Each table is a tuple of ``PatternRule`` built once at import time. Tables
overlap on purpose (e.g. "today" feeds both urgency and deadline) because
each analyzer's output is consumed independently.
"""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class PatternRule:
    pattern: re.Pattern
    category: str
    weight: float


def _rule(regex: str, category: str, weight: float, flags: int = re.IGNORECASE) -> PatternRule:
    return PatternRule(pattern=re.compile(regex, flags), category=category, weight=weight)


# Declaration order doubles as the urgency tie-break order.
URGENCY_LEVELS = ("urgent", "high", "medium", "low")

URGENCY_RULES = (
    _rule(r"\b(urgent|emergency|critical|asap|immediately|right now|drop everything)\b", "urgent", 1.0),
    _rule(r"\b(due today|needed today|must be done today|end of day)\b", "urgent", 0.9),
    _rule(r"\b(crisis|blocker|blocking|show stopper)\b", "urgent", 0.8),
    _rule(r"\b(high priority|important|priority|soon|quickly|fast track)\b", "high", 0.8),
    _rule(r"\b(due (tomorrow|this week)|needed (tomorrow|this week)|by (tomorrow|this week))\b", "high", 0.7),
    _rule(r"\b(client (wants|needs|requesting)|for the client|deadline approaching)\b", "high", 0.7),
    _rule(r"\b(time sensitive|time critical|rush job)\b", "high", 0.6),
    _rule(r"\b(should|ought to|need to|when possible|next week)\b", "medium", 0.5),
    _rule(r"\b(scheduled|planned|routine|regular)\b", "medium", 0.4),
    _rule(r"\b(eventually|someday|when you can|low priority|nice to have)\b", "low", 0.3),
    _rule(r"\b(backlog|future|later|down the road)\b", "low", 0.2),
)

ASSIGNEE_RULES = (
    _rule(r"@(\w+)", "mention", 1.0, flags=0),
    _rule(r"\b([A-Z][a-z]+ [A-Z][a-z]+)\b", "name", 0.8, flags=0),
    _rule(r"\b(designer|design team|creative team)\b", "role", 0.9),
    _rule(r"\b(developer|dev team|engineering|tech team)\b", "role", 0.9),
    _rule(r"\b(project manager|pm|account manager|am)\b", "role", 0.9),
    _rule(r"\b(copywriter|content team|writer)\b", "role", 0.9),
    _rule(r"\b(qa|quality assurance|tester|testing team)\b", "role", 0.9),
    _rule(r"\b(marketing team|social media team|seo team)\b", "role", 0.8),
    _rule(r"\b(team|everyone|all hands|group)\b", "team", 0.6),
    _rule(r"\b(assign to|give to|have (\w+) do|(\w+) should handle)\b", "name", 0.7),
)

DEADLINE_RULES = (
    _rule(r"\b(\d{1,2}/\d{1,2}/\d{2,4})\b", "explicit", 1.0),
    _rule(r"\b(\d{1,2}[-/]\d{1,2}[-/]\d{2,4})\b", "explicit", 1.0),
    _rule(r"\b(january|february|march|april|may|june|july|august|september|october|november|december)\s+\d{1,2}", "explicit", 0.9),
    _rule(r"\b(jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)\s+\d{1,2}", "explicit", 0.9),
    _rule(r"\b(today|tonight|end of day|eod)\b", "relative", 1.0),
    _rule(r"\b(tomorrow|next day)\b", "relative", 1.0),
    _rule(r"\b(this week|end of week|eow|by friday)\b", "relative", 0.9),
    _rule(r"\b(next week|following week)\b", "relative", 0.9),
    _rule(r"\b(this month|end of month|eom)\b", "relative", 0.8),
    _rule(r"\b(in (\d+) (days?|weeks?|months?))\b", "relative", 0.8),
    _rule(r"\b(\d+) (days?|weeks?|months?) from now\b", "relative", 0.8),
    _rule(r"\b(monday|tuesday|wednesday|thursday|friday|saturday|sunday)\b", "relative", 0.7),
    _rule(r"\b(mon|tue|wed|thu|fri|sat|sun)\b", "relative", 0.7),
)

PROJECT_RULES = (
    _rule(r"\b([A-Z][A-Za-z]*\s+(?:project|campaign|website|app|brand|identity))\b", "name", 0.9, flags=0),
    _rule(r"\b(project\s+[A-Z][A-Za-z]*)\b", "name", 0.9),
    _rule(r"\b([A-Z][A-Za-z]*\s+(?:inc|llc|corp|ltd|company|co)\b)", "client", 0.8),
    _rule(r"\b(client\s+[A-Z][A-Za-z]*)\b", "client", 0.8),
    _rule(r"\bfor\s+([A-Z][A-Za-z]+)\b", "client", 0.6, flags=0),
    _rule(
        r"\b(website|web development|web design|mobile app|brand identity|logo design"
        r"|marketing campaign|social media|seo|content strategy)\b",
        "keyword",
        0.7,
    ),
)

DEPENDENCY_RULES = (
    _rule(r"\b(after|once|when|following|depends on|requires|needs)\b", "prerequisite", 0.8),
    _rule(r"\b(before|prior to|ahead of|in advance of)\b", "blocking", 0.8),
    _rule(r"\b(then|next|subsequently|followed by)\b", "sequence", 0.7),
    _rule(r"\b(blocks|blocking|prevents|stops)\b", "blocking", 0.9),
    _rule(r"\b(waiting for|pending|on hold until)\b", "prerequisite", 0.8),
)
