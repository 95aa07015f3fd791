from datetime import datetime

import pytest

from analysis.context_analyzer import ContextAnalyzer, analyze_context
from taskflow_ai.models import ExistingTaskRef, ProjectRef, ReferenceData, TeamMemberRef


@pytest.fixture
def analyzer():
    return ContextAnalyzer()


@pytest.fixture
def reference():
    return ReferenceData(
        team_members=[
            TeamMemberRef(id="u1", name="Sarah Chen", role="designer", skills=["figma"]),
            TeamMemberRef(id="u2", name="Mike Ross", role="developer", skills=["react"]),
        ],
        projects=[ProjectRef(id="p1", name="Rebrand", client="Acme", keywords=["logo"])],
        existing_tasks=[ExistingTaskRef(id="t9", title="homepage mockups")],
    )


# Urgency

def test_urgent_keywords(analyzer):
    u = analyzer.analyze_urgency("This is urgent! Please fix ASAP")
    assert u.level == "urgent"
    assert u.confidence == 1.0
    assert u.indicators == ["urgent", "ASAP"]


def test_low_priority_outweighs_single_should(analyzer):
    u = analyzer.analyze_urgency("Eventually we should update this when you can")
    assert u.level == "low"
    assert 0.8 < u.confidence < 0.9


def test_no_urgency_defaults_to_medium(analyzer):
    u = analyzer.analyze_urgency("Update the homepage copy")
    assert u.level == "medium"
    assert u.confidence == 0.5
    assert u.indicators == []
    assert "defaulting to medium" in u.reasoning


def test_urgency_mix_prefers_heavier_level(analyzer):
    u = analyzer.analyze_urgency("This is urgent, finish it by tomorrow")
    assert u.level == "urgent"
    assert len(u.indicators) == 2


# Assignees

def test_mention(analyzer):
    a = analyzer.analyze_assignees("@sarah please review the deck")
    assert a.suggestions[0].type == "mention"
    assert a.suggestions[0].value == "sarah"
    assert a.confidence == 1.0


def test_roster_name_match_ranks_first(analyzer, reference):
    a = analyzer.analyze_assignees(
        "Sarah Chen should update the figma mockups", reference.team_members
    )
    assert a.suggestions[0].value == "u1"
    assert a.suggestions[0].confidence == 0.95
    contexts = [s.context for s in a.suggestions]
    assert "Skill-based assignment: figma" in contexts
    assert [s.confidence for s in a.suggestions] == sorted(
        (s.confidence for s in a.suggestions), reverse=True
    )


def test_roster_role_match(analyzer, reference):
    a = analyzer.analyze_assignees("the developer will look at it", reference.team_members)
    assert any(s.value == "u2" and s.confidence == 0.8 for s in a.suggestions)


def test_no_assignee(analyzer):
    a = analyzer.analyze_assignees("update the homepage")
    assert a.suggestions == []
    assert a.confidence == 0.2
    assert a.reasoning == "No clear assignee indicators found"


# Deadlines

def test_relative_deadline(analyzer, now):
    d = analyzer.analyze_deadline("Need this by tomorrow", now)
    assert d.extracted_date == datetime(2024, 1, 16, 17, 0)
    assert d.type == "relative"
    assert d.confidence == 1.0
    assert d.original_text == "tomorrow"


def test_explicit_deadline(analyzer, now):
    d = analyzer.analyze_deadline("Ship it by 1/20/2024 please", now)
    assert d.extracted_date == datetime(2024, 1, 20, 17, 0)
    assert d.type == "explicit"


def test_unresolvable_date_falls_through_to_next_rule(analyzer, now):
    d = analyzer.analyze_deadline("Was 2/30/2024, now it is tomorrow", now)
    assert d.extracted_date == datetime(2024, 1, 16, 17, 0)


def test_no_deadline(analyzer, now):
    d = analyzer.analyze_deadline("Update the homepage", now)
    assert d.extracted_date is None
    assert d.type == "implied"
    assert d.confidence == 0.1


# Projects

def test_project_name_pattern(analyzer):
    p = analyzer.analyze_projects("Work on the Acme website layout")
    assert p.suggestions[0].value == "Acme website"
    assert p.suggestions[0].type == "name"
    assert p.confidence == 1.0


def test_project_reference_match(analyzer, reference):
    p = analyzer.analyze_projects("acme wants a new logo", reference.projects)
    assert p.suggestions[0].value == "p1"
    assert p.suggestions[0].type == "client"
    assert {s.context for s in p.suggestions} >= {"Client name match: Acme", "Keyword match: logo"}


def test_no_project(analyzer):
    p = analyzer.analyze_projects("fix the bug")
    assert p.suggestions == []
    assert p.confidence == 0.3


# Dependencies

def test_prerequisite(analyzer):
    d = analyzer.analyze_dependencies("Start the build after the designs are approved")
    assert [s.type for s in d.suggestions] == ["prerequisite"]
    assert d.confidence == 0.8


def test_existing_task_reference(analyzer, reference):
    d = analyzer.analyze_dependencies(
        "Finish once the homepage  mockups are done", reference.existing_tasks
    )
    linked = [s for s in d.suggestions if s.task_id == "t9"]
    assert linked and linked[0].description == "References existing task: homepage mockups"


def test_no_dependency(analyzer):
    d = analyzer.analyze_dependencies("Fix the login bug")
    assert d.suggestions == []
    assert d.confidence == 0.2
    assert d.reasoning == "No clear dependency relationships detected"


# Whole analysis

def test_analyze_context_bundle(reference, now):
    a = analyze_context("URGENT: @mike needs the Acme website fixed by tomorrow", reference, now=now)
    assert a.urgency.level == "urgent"
    assert a.assignees.suggestions[0].value == "mike"
    assert a.deadlines.extracted_date == datetime(2024, 1, 16, 17, 0)
    assert any(s.value == "p1" for s in a.projects.suggestions)
    assert a.dependencies.suggestions


def test_whitespace_is_collapsed(analyzer, now):
    a = analyzer.analyze("  please   finish\n\nby   tomorrow ", now=now)
    assert a.deadlines.extracted_date == datetime(2024, 1, 16, 17, 0)


def test_analysis_is_deterministic(analyzer, reference, now):
    msg = "Sarah Chen should finish the logo before Friday"
    assert analyzer.analyze(msg, reference, now=now) == analyzer.analyze(msg, reference, now=now)
