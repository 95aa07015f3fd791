from __future__ import annotations

from typing import List, Optional

from taskflow_ai.models import EmailMetadata, ReferenceData

# Keep excerpts short; the prompt is sent on every extraction.
MAX_REFERENCE_ITEMS = 20

SYSTEM_PROMPT = (
    "You are a project coordination assistant for a creative agency. "
    "You turn messages into actionable work items. "
    "Respond with a single JSON object and nothing else."
)

RESPONSE_SHAPE = """Return ONLY valid JSON with this exact shape:
{
  "tasks": [
    {
      "title": "short imperative title",
      "description": "one or two sentences",
      "priority": "low" | "medium" | "high" | "urgent",
      "assigneeId": "team member id or null",
      "projectId": "project id or null",
      "estimatedHours": number or null,
      "dueDate": "ISO 8601 datetime or null",
      "tags": ["string"],
      "dependencies": ["string"],
      "confidence": number between 0 and 1
    }
  ],
  "confidence": number between 0 and 1,
  "suggestions": ["string"]
}
Only use assigneeId / projectId values from the lists above. If the message
contains no actionable work, return an empty tasks list."""


def _reference_lines(reference: Optional[ReferenceData]) -> List[str]:
    if reference is None:
        return []

    lines: List[str] = []
    if reference.team_members:
        lines.append("Team members:")
        for m in reference.team_members[:MAX_REFERENCE_ITEMS]:
            skills = ", ".join(m.skills) if m.skills else "none listed"
            lines.append(f"- {m.id}: {m.name} ({m.role or 'unspecified role'}; skills: {skills})")
    if reference.projects:
        lines.append("Projects:")
        for p in reference.projects[:MAX_REFERENCE_ITEMS]:
            lines.append(f"- {p.id}: {p.name} (client: {p.client or 'unknown'})")
    if reference.existing_tasks:
        lines.append("Existing tasks:")
        for t in reference.existing_tasks[:MAX_REFERENCE_ITEMS]:
            lines.append(f"- {t.id or 'n/a'}: {t.title}")
    return lines


def build_message_prompt(message: str, reference: Optional[ReferenceData] = None) -> str:
    parts = ["Extract tasks from the following message.", "", "Message:", message.strip(), ""]
    parts.extend(_reference_lines(reference))
    parts.extend(["", RESPONSE_SHAPE])
    return "\n".join(parts)


def build_email_prompt(
    content: str,
    metadata: EmailMetadata,
    reference: Optional[ReferenceData] = None,
    is_client: bool = False,
) -> str:
    sender_kind = "CLIENT" if is_client else "TEAM MEMBER"
    parts = [
        "Extract tasks from the following email.",
        "",
        f"Sender type: {sender_kind}",
        f"From: {metadata.from_address}",
        f"Subject: {metadata.subject}",
    ]
    if metadata.date is not None:
        parts.append(f"Date: {metadata.date.isoformat()}")
    parts.extend(["", "Body:", content.strip(), ""])
    parts.extend(_reference_lines(reference))
    parts.extend(["", RESPONSE_SHAPE])
    return "\n".join(parts)
