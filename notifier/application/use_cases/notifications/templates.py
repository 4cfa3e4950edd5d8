"""Template catalog and ``{placeholder}`` rendering."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Final

from sqlalchemy.orm import Session

from notifier.domain.entities import NotificationTemplate, NotificationType, RenderedMessage
from notifier.domain.errors import TemplateNotFoundError
from notifier.infrastructure.push import to_display_string
from notifier.infrastructure.repositories import NotificationTemplateRepository

_PLACEHOLDER_PATTERN: Final[re.Pattern[str]] = re.compile(r"\{([^{}]+)\}")


def _template(
    notification_type: NotificationType,
    title: str,
    body: str,
    variables: list[str],
    description: str,
) -> NotificationTemplate:
    return NotificationTemplate(
        id=None,
        type=notification_type.value,
        title=title,
        body=body,
        variables=variables,
        description=description,
        is_active=True,
    )


DEFAULT_TEMPLATES: Final[tuple[NotificationTemplate, ...]] = (
    # Candidates
    _template(
        NotificationType.WELCOME,
        "Welcome to LokalHunt! 🎉",
        "Hi {candidateName}! Your push notifications are now active. "
        "We'll keep you updated on new job opportunities!",
        ["candidateName"],
        "Welcome notification sent to new candidates",
    ),
    _template(
        NotificationType.JOB_ALERT,
        "New job alert: {jobTitle}",
        "New {jobTitle} position at {companyName} in {location}. Salary: {salary}. Apply now!",
        ["jobTitle", "companyName", "location", "salary"],
        "Job matching candidate preferences",
    ),
    _template(
        NotificationType.APPLICATION_UPDATE,
        "Application update",
        "Your application for {jobTitle} at {companyName} has been {status}.",
        ["jobTitle", "companyName", "status"],
        "Application status changes",
    ),
    _template(
        NotificationType.INTERVIEW_SCHEDULED,
        "Interview scheduled",
        "Your interview for {jobTitle} at {companyName} is scheduled for {interviewDate}.",
        ["jobTitle", "companyName", "interviewDate"],
        "Interview reminders for candidates",
    ),
    _template(
        NotificationType.PROFILE_UPDATE,
        "Profile update",
        "{message}",
        ["message"],
        "Reminders about the candidate profile",
    ),
    _template(
        NotificationType.PROFILE_VIEWED,
        "Profile viewed",
        "{companyName} viewed your profile. Increase your visibility by updating "
        "your skills and experience!",
        ["companyName"],
        "When employer views candidate profile",
    ),
    _template(
        NotificationType.JOB_CLOSED,
        "Job Application Closed",
        'The job "{jobTitle}" at {companyName} has been closed. Thank you for your interest!',
        ["jobTitle", "companyName"],
        "Sent to candidates when a job they applied to is closed",
    ),
    # Employers
    _template(
        NotificationType.NEW_APPLICATION,
        "New application received",
        "{candidateName} applied for {jobTitle}. Review their profile and take action.",
        ["candidateName", "jobTitle"],
        "When candidate applies for a job",
    ),
    _template(
        NotificationType.JOB_APPROVED,
        "Job Ad Approved! ✅",
        'Great news! Your job posting "{jobTitle}" has been approved and is now live '
        "on LokalHunt. Start receiving applications!",
        ["jobTitle", "adId"],
        "When branch admin approves a job ad",
    ),
    _template(
        NotificationType.JOB_REJECTED,
        "Job Ad Needs Review ❌",
        'Your job posting "{jobTitle}" requires some changes. Reason: {reason}. '
        "Please edit and resubmit.",
        ["jobTitle", "adId", "reason"],
        "When branch admin rejects a job ad",
    ),
    _template(
        NotificationType.JOB_VIEW_MILESTONE,
        "Job milestone reached! 🎯",
        'Your job "{jobTitle}" has reached {viewCount} views! Keep promoting to get '
        "more applications.",
        ["jobTitle", "viewCount"],
        "Job view count milestones (10, 25, 50, 100)",
    ),
    _template(
        NotificationType.JOB_BOOKMARKED,
        "Job bookmarked",
        "{candidateName} bookmarked your job: {jobTitle}. They might apply soon!",
        ["candidateName", "jobTitle"],
        "When candidate bookmarks a job",
    ),
    _template(
        NotificationType.JOB_VIEWED,
        "Job Viewed",
        "{candidateName} viewed your job posting: {jobTitle}",
        ["candidateName", "jobTitle", "companyName"],
        "Sent to employer when a candidate views their job",
    ),
    # System
    _template(
        NotificationType.SYSTEM,
        "System notification",
        "{message}",
        ["message"],
        "General system notifications",
    ),
    _template(
        NotificationType.PROMOTIONAL,
        "{headline}",
        "{message}",
        ["headline", "message"],
        "Promotional offers",
    ),
    _template(
        NotificationType.TEST,
        "Test notification",
        "This is a test notification to verify your push notification setup is "
        "working correctly.",
        [],
        "Test notifications for verification",
    ),
    # Branch admins
    _template(
        NotificationType.ADMIN_ALERT,
        "Admin Alert",
        "System alert: {message}",
        ["message"],
        "General admin system alerts",
    ),
    _template(
        NotificationType.NEW_EMPLOYER_REGISTERED,
        "New Employer Registration 🏢",
        "{employerName} ({employerEmail}) from {companyName} has registered in your "
        "city. Please review their profile.",
        ["employerName", "employerEmail", "companyName"],
        "When a new employer registers in the branch admin's city",
    ),
    _template(
        NotificationType.NEW_CANDIDATE_REGISTERED,
        "New Candidate Registration 👤",
        "{candidateName} ({candidateEmail}) has registered as a job seeker in your city.",
        ["candidateName", "candidateEmail"],
        "When a new candidate registers in the branch admin's city",
    ),
    _template(
        NotificationType.NEW_AD_SUBMITTED,
        "New Job Ad Submitted ✍️",
        '{employerName} from {companyName} submitted "{jobTitle}" for approval. '
        "Please review the job posting.",
        ["employerName", "companyName", "jobTitle", "adId"],
        "When employer submits a new job ad for branch admin approval",
    ),
)


def render_text(text: str, variables: Mapping[str, Any] | None) -> str:
    """Replace every ``{key}`` in ``text`` with the display string of its value.

    Keys missing from ``variables`` render as an empty string.
    """

    values = variables or {}
    return _PLACEHOLDER_PATTERN.sub(
        lambda match: to_display_string(values.get(match.group(1))), text
    )


def render(template: NotificationTemplate, variables: Mapping[str, Any] | None) -> RenderedMessage:
    return RenderedMessage(
        title=render_text(template.title, variables),
        body=render_text(template.body, variables),
    )


def resolve_template(
    session: Session, notification_type: NotificationType | str
) -> tuple[NotificationType, NotificationTemplate]:
    """Return the enumeration member and active template for ``notification_type``.

    Raises :class:`TemplateNotFoundError` for types outside the enumeration and
    for types without an active template.
    """

    member = NotificationType.lookup(notification_type)
    if member is None:
        raise TemplateNotFoundError(str(notification_type))
    template = NotificationTemplateRepository(session).get_active_by_type(member.value)
    if template is None:
        raise TemplateNotFoundError(member.value)
    return member, template


def render_template(
    session: Session,
    notification_type: NotificationType | str,
    variables: Mapping[str, Any] | None = None,
) -> RenderedMessage:
    """Render the active template of ``notification_type`` with ``variables``."""

    _, template = resolve_template(session, notification_type)
    return render(template, variables)


def seed_default_templates(session: Session) -> int:
    """Replace the stored catalog with :data:`DEFAULT_TEMPLATES`."""

    return NotificationTemplateRepository(session).replace_all(DEFAULT_TEMPLATES)


__all__ = [
    "DEFAULT_TEMPLATES",
    "render",
    "render_template",
    "render_text",
    "resolve_template",
    "seed_default_templates",
]
