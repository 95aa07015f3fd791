from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import List, Optional, Sequence

from analysis.deadline_resolver import resolve_deadline_text
from analysis.rules import (
    ASSIGNEE_RULES,
    DEADLINE_RULES,
    DEPENDENCY_RULES,
    PROJECT_RULES,
    URGENCY_LEVELS,
    URGENCY_RULES,
    PatternRule,
)
from taskflow_ai.models import (
    AssigneeAnalysis,
    AssigneeSuggestion,
    ContextAnalysis,
    DeadlineAnalysis,
    DependencyAnalysis,
    DependencySuggestion,
    ExistingTaskRef,
    ProjectAnalysis,
    ProjectRef,
    ProjectSuggestion,
    ReferenceData,
    TeamMemberRef,
    UrgencyAnalysis,
)
from taskflow_ai.normalize import clamp

logger = logging.getLogger(__name__)

DEFAULT_ASSIGNEE_CONFIDENCE = 0.2
DEFAULT_DEADLINE_CONFIDENCE = 0.1
DEFAULT_PROJECT_CONFIDENCE = 0.3
DEFAULT_DEPENDENCY_CONFIDENCE = 0.2

_WS_RE = re.compile(r"\s+")


def normalize_message(message: str) -> str:
    return _WS_RE.sub(" ", message.strip())


def _phrase_pattern(phrase: str) -> re.Pattern:
    """Whole-word, case-insensitive match that tolerates any inner whitespace."""
    words = [re.escape(w) for w in phrase.split()]
    return re.compile(r"\b" + r"\s+".join(words) + r"\b", re.IGNORECASE)


def _captured(match: re.Match) -> str:
    if match.re.groups and match.group(1):
        return match.group(1)
    return match.group(0)


def _aggregate_confidence(confidences: Sequence[float], default: float) -> float:
    if not confidences:
        return default
    return clamp(max(confidences) + 0.05 * len(confidences))


class ContextAnalyzer:
    """Scores a message along five independent axes.

    Every call works only on its arguments; the rule tables are shared
    read-only configuration, so one analyzer can serve concurrent callers.
    """

    def analyze(
        self,
        message: str,
        reference: Optional[ReferenceData] = None,
        now: Optional[datetime] = None,
    ) -> ContextAnalysis:
        text = normalize_message(message)
        reference = reference or ReferenceData()
        now = now or datetime.now()

        analysis = ContextAnalysis(
            urgency=self.analyze_urgency(text),
            assignees=self.analyze_assignees(text, reference.team_members),
            deadlines=self.analyze_deadline(text, now),
            projects=self.analyze_projects(text, reference.projects),
            dependencies=self.analyze_dependencies(text, reference.existing_tasks),
        )
        logger.debug(
            f"Context analysis: urgency={analysis.urgency.level} "
            f"({analysis.urgency.confidence:.2f}), "
            f"assignees={len(analysis.assignees.suggestions)}, "
            f"deadline={analysis.deadlines.extracted_date}, "
            f"projects={len(analysis.projects.suggestions)}, "
            f"dependencies={len(analysis.dependencies.suggestions)}"
        )
        return analysis

    def analyze_urgency(self, text: str) -> UrgencyAnalysis:
        matches = [
            (rule.category, rule.weight, m.group(0))
            for rule in URGENCY_RULES
            for m in rule.pattern.finditer(text)
        ]

        if not matches:
            return UrgencyAnalysis(
                level="medium",
                confidence=0.5,
                indicators=[],
                reasoning="No explicit urgency indicators found, defaulting to medium priority",
            )

        total_weight = sum(weight for _, weight, _ in matches)
        scores = {level: 0.0 for level in URGENCY_LEVELS}
        for level, weight, _ in matches:
            scores[level] += weight / total_weight

        # max() keeps the first maximal level, so ties resolve in declaration order
        level = max(URGENCY_LEVELS, key=lambda lvl: scores[lvl])
        indicators = [indicator for _, _, indicator in matches]

        return UrgencyAnalysis(
            level=level,
            confidence=clamp(scores[level] + 0.1 * len(matches)),
            indicators=indicators,
            reasoning=f"Detected {len(matches)} urgency indicator(s): {', '.join(indicators)}",
        )

    def analyze_assignees(
        self, text: str, team_members: Sequence[TeamMemberRef] = ()
    ) -> AssigneeAnalysis:
        suggestions: List[AssigneeSuggestion] = []

        for rule in ASSIGNEE_RULES:
            for m in rule.pattern.finditer(text):
                suggestions.append(
                    AssigneeSuggestion(
                        type=rule.category,
                        value=_captured(m).lower(),
                        confidence=rule.weight,
                        context=m.group(0),
                    )
                )

        for member in team_members:
            suggestions.extend(self._match_team_member(text, member))

        suggestions.sort(key=lambda s: s.confidence, reverse=True)
        confidence = _aggregate_confidence(
            [s.confidence for s in suggestions], DEFAULT_ASSIGNEE_CONFIDENCE
        )
        reasoning = (
            f"Found {len(suggestions)} potential assignee reference(s)"
            if suggestions
            else "No clear assignee indicators found"
        )
        return AssigneeAnalysis(suggestions=suggestions, confidence=confidence, reasoning=reasoning)

    def _match_team_member(self, text: str, member: TeamMemberRef) -> List[AssigneeSuggestion]:
        found: List[AssigneeSuggestion] = []
        name = member.name.strip()
        if not name:
            return found

        first_name = name.split()[0]
        if re.search(rf"@{re.escape(first_name)}\b", text, re.IGNORECASE):
            found.append(
                AssigneeSuggestion(
                    type="mention", value=member.id, confidence=1.0,
                    context=f"@mention match: {member.name}",
                )
            )

        if _phrase_pattern(name).search(text):
            found.append(
                AssigneeSuggestion(
                    type="name", value=member.id, confidence=0.95,
                    context=f"Named assignment: {member.name}",
                )
            )

        if member.role.strip() and _phrase_pattern(member.role).search(text):
            found.append(
                AssigneeSuggestion(
                    type="role", value=member.id, confidence=0.8,
                    context=f"Role-based assignment: {member.role}",
                )
            )

        for skill in member.skills:
            if skill.strip() and _phrase_pattern(skill).search(text):
                found.append(
                    AssigneeSuggestion(
                        type="role", value=member.id, confidence=0.7,
                        context=f"Skill-based assignment: {skill}",
                    )
                )
        return found

    def analyze_deadline(self, text: str, now: datetime) -> DeadlineAnalysis:
        # First rule whose phrase resolves to a date wins.
        for rule in DEADLINE_RULES:
            m = rule.pattern.search(text)
            if not m:
                continue
            resolved = resolve_deadline_text(m.group(0), now)
            if resolved is None:
                continue
            return DeadlineAnalysis(
                extracted_date=resolved,
                confidence=rule.weight,
                type=rule.category,
                original_text=m.group(0),
                reasoning=f'Extracted {rule.category} deadline from: "{m.group(0)}"',
            )

        return DeadlineAnalysis(
            extracted_date=None,
            confidence=DEFAULT_DEADLINE_CONFIDENCE,
            type="implied",
            original_text="",
            reasoning="No clear deadline indicators found",
        )

    def analyze_projects(
        self, text: str, projects: Sequence[ProjectRef] = ()
    ) -> ProjectAnalysis:
        suggestions: List[ProjectSuggestion] = []

        for rule in PROJECT_RULES:
            for m in rule.pattern.finditer(text):
                suggestions.append(
                    ProjectSuggestion(
                        type=rule.category,
                        value=_captured(m).strip(),
                        confidence=rule.weight,
                        context=m.group(0),
                    )
                )

        for project in projects:
            if project.name.strip() and _phrase_pattern(project.name).search(text):
                suggestions.append(
                    ProjectSuggestion(
                        type="name", value=project.id, confidence=0.95,
                        context=f"Project name match: {project.name}",
                    )
                )
            if project.client.strip() and _phrase_pattern(project.client).search(text):
                suggestions.append(
                    ProjectSuggestion(
                        type="client", value=project.id, confidence=0.9,
                        context=f"Client name match: {project.client}",
                    )
                )
            for keyword in project.keywords:
                if keyword.strip() and _phrase_pattern(keyword).search(text):
                    suggestions.append(
                        ProjectSuggestion(
                            type="keyword", value=project.id, confidence=0.7,
                            context=f"Keyword match: {keyword}",
                        )
                    )

        suggestions.sort(key=lambda s: s.confidence, reverse=True)
        confidence = _aggregate_confidence(
            [s.confidence for s in suggestions], DEFAULT_PROJECT_CONFIDENCE
        )
        reasoning = (
            f"Found {len(suggestions)} potential project reference(s)"
            if suggestions
            else "No clear project indicators found"
        )
        return ProjectAnalysis(suggestions=suggestions, confidence=confidence, reasoning=reasoning)

    def analyze_dependencies(
        self, text: str, existing_tasks: Sequence[ExistingTaskRef] = ()
    ) -> DependencyAnalysis:
        suggestions: List[DependencySuggestion] = []

        for rule in DEPENDENCY_RULES:
            if rule.pattern.search(text):
                suggestions.append(
                    DependencySuggestion(
                        type=rule.category,
                        description=f"Detected {rule.category} dependency indicator in message",
                        confidence=rule.weight,
                    )
                )

        for task in existing_tasks:
            if task.title.strip() and _phrase_pattern(task.title).search(text):
                suggestions.append(
                    DependencySuggestion(
                        type="prerequisite",
                        description=f"References existing task: {task.title}",
                        confidence=0.8,
                        task_id=task.id,
                    )
                )

        if suggestions:
            confidence = clamp(max(s.confidence for s in suggestions))
            reasoning = f"Found {len(suggestions)} potential dependency indicator(s)"
        else:
            confidence = DEFAULT_DEPENDENCY_CONFIDENCE
            reasoning = "No clear dependency relationships detected"
        return DependencyAnalysis(suggestions=suggestions, confidence=confidence, reasoning=reasoning)


def analyze_context(
    message: str,
    reference: Optional[ReferenceData] = None,
    now: Optional[datetime] = None,
) -> ContextAnalysis:
    return ContextAnalyzer().analyze(message, reference, now=now)
