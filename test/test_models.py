from datetime import datetime

from assignment.models import TaskRequirements, TeamMember, UserRole
from taskflow_ai.models import EmailMetadata, ExtractedTask, TaskParseResult


def test_task_defaults():
    t = ExtractedTask(title="Test")
    assert t.priority == "medium"
    assert t.confidence == 0.5
    assert t.tags == []
    assert t.due_date is None


def test_task_title_is_stripped():
    t = ExtractedTask(title="  Send invoice  ")
    assert t.title == "Send invoice"


def test_task_normalizes_fields():
    t = ExtractedTask(
        title="X",
        priority="whenever",
        estimated_hours=2.3,
        confidence=1.7,
        tags=["design", "client", "design"],
    )
    assert t.priority == "medium"
    assert t.estimated_hours == 2.5
    assert t.confidence == 1.0
    assert t.tags == ["design", "client"]


def test_task_accepts_uppercase_priority():
    assert ExtractedTask(title="X", priority="URGENT").priority == "urgent"


def test_aware_due_date_becomes_naive():
    t = ExtractedTask(title="X", due_date="2030-06-01T12:00:00Z")
    assert t.due_date is not None
    assert t.due_date.tzinfo is None


def test_parse_result_confidence_clamped():
    assert TaskParseResult(confidence=-3).confidence == 0.0


def test_email_metadata_alias():
    m = EmailMetadata(**{"from": "client@acme.com", "subject": "Hi"})
    assert m.from_address == "client@acme.com"
    assert EmailMetadata(from_address="a@b.c").subject == ""


def test_team_member_role_spellings():
    assert TeamMember(id="1", name="A", role="project-manager").role is UserRole.PROJECT_MANAGER
    assert TeamMember(id="1", name="A", role="Agency Admin").role is UserRole.AGENCY_ADMIN
    assert TeamMember(id="1", name="A", role="wizard").role is UserRole.TEAM_MEMBER


def test_requirements_defaults():
    r = TaskRequirements(title="Write copy", priority="nope", deadline="2024-02-01T09:00:00")
    assert r.priority == "medium"
    assert r.complexity == "medium"
    assert r.role_required is None
    assert r.deadline == datetime(2024, 2, 1, 9, 0)
