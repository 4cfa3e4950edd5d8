"""Helpers that turn marketplace events into notification dispatches.

Each helper is called from a business action (a registration, an approval, a
job view) and must never make that action fail, so dispatch errors are logged
and swallowed here.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from notifier.domain.entities import (
    BulkDispatchResult,
    CandidateJobPreferences,
    DispatchResult,
    JobPosting,
    NotificationType,
    Recipient,
)
from notifier.infrastructure.repositories import UserRepository

from .dispatcher import NotificationDispatcher

logger = logging.getLogger(__name__)

JOB_VIEW_MILESTONES = (10, 25, 50, 100)


def _safe_dispatch(
    dispatcher: NotificationDispatcher,
    user_id: int,
    notification_type: NotificationType,
    variables: Mapping[str, Any],
) -> DispatchResult | None:
    try:
        return dispatcher.dispatch(user_id, notification_type, variables)
    except Exception:
        dispatcher.session.rollback()
        logger.exception("Failed to send %s notification to user %s", notification_type, user_id)
        return None


def _safe_dispatch_many(
    dispatcher: NotificationDispatcher,
    user_ids: Iterable[int],
    notification_type: NotificationType,
    variables: Mapping[str, Any],
) -> BulkDispatchResult:
    try:
        return dispatcher.dispatch_to_many(user_ids, notification_type, variables)
    except Exception:
        dispatcher.session.rollback()
        logger.exception("Failed to send %s notifications", notification_type)
        return BulkDispatchResult()


def notify_welcome(dispatcher: NotificationDispatcher, *, user: Recipient) -> DispatchResult | None:
    """Greet a newly registered user."""

    return _safe_dispatch(
        dispatcher, user.id, NotificationType.WELCOME, {"candidateName": user.name or "there"}
    )


def notify_application_status(
    dispatcher: NotificationDispatcher,
    *,
    candidate_user_id: int,
    job_title: str,
    company_name: str,
    status: str,
) -> DispatchResult | None:
    """Tell a candidate that the status of an application changed."""

    return _safe_dispatch(
        dispatcher,
        candidate_user_id,
        NotificationType.APPLICATION_UPDATE,
        {"jobTitle": job_title, "companyName": company_name, "status": status.lower()},
    )


def notify_job_view_milestone(
    dispatcher: NotificationDispatcher,
    *,
    employer_user_id: int,
    job_title: str,
    view_count: int,
) -> DispatchResult | None:
    """Congratulate the employer when a job reaches a milestone view count."""

    if view_count not in JOB_VIEW_MILESTONES:
        return None
    return _safe_dispatch(
        dispatcher,
        employer_user_id,
        NotificationType.JOB_VIEW_MILESTONE,
        {"jobTitle": job_title, "viewCount": view_count},
    )


def notify_branch_admins(
    dispatcher: NotificationDispatcher,
    *,
    city: str | None,
    notification_type: NotificationType,
    variables: Mapping[str, Any],
) -> BulkDispatchResult:
    """Dispatch to every active branch admin responsible for ``city``."""

    if not city:
        return BulkDispatchResult()
    admin_ids = UserRepository(dispatcher.session).list_branch_admin_ids_for_city(city)
    if not admin_ids:
        logger.info("No branch admin found for city %s; skipping %s", city, notification_type)
        return BulkDispatchResult()
    return _safe_dispatch_many(dispatcher, admin_ids, notification_type, variables)


def job_matches_preferences(job: JobPosting, preferences: CandidateJobPreferences) -> bool:
    """Return ``True`` when any preferred title, location or industry overlaps ``job``."""

    title = (job.title or "").strip().lower()
    if title and any(
        _overlaps(title, preferred) for preferred in preferences.preferred_titles
    ):
        return True

    location = (job.location or "").strip().lower()
    if location and any(
        location == (preferred or "").strip().lower()
        for preferred in preferences.preferred_locations
    ):
        return True

    industry = (job.industry or "").strip().lower()
    return bool(industry) and any(
        industry == (preferred or "").strip().lower()
        for preferred in preferences.preferred_industries
    )


def _overlaps(title: str, preferred: str | None) -> bool:
    preferred = (preferred or "").strip().lower()
    return bool(preferred) and (preferred in title or title in preferred)


def find_job_alert_recipients(dispatcher: NotificationDispatcher, job: JobPosting) -> list[int]:
    candidates = UserRepository(dispatcher.session).list_candidate_job_preferences()
    return [
        preferences.user_id
        for preferences in candidates
        if job_matches_preferences(job, preferences)
    ]


def notify_job_match(dispatcher: NotificationDispatcher, *, job: JobPosting) -> BulkDispatchResult:
    """Send a job alert to every candidate whose preferences match ``job``."""

    try:
        recipients = find_job_alert_recipients(dispatcher, job)
    except Exception:
        dispatcher.session.rollback()
        logger.exception("Failed to resolve job alert recipients for job %s", job.id)
        return BulkDispatchResult()

    if not recipients:
        logger.info("No candidate matches job %s", job.id)
        return BulkDispatchResult()

    variables = {
        "jobTitle": job.title,
        "companyName": job.company_name,
        "location": job.location or "",
        "salary": job.salary or "Competitive",
    }
    return _safe_dispatch_many(dispatcher, recipients, NotificationType.JOB_ALERT, variables)


__all__ = [
    "JOB_VIEW_MILESTONES",
    "find_job_alert_recipients",
    "job_matches_preferences",
    "notify_application_status",
    "notify_branch_admins",
    "notify_job_match",
    "notify_job_view_milestone",
    "notify_welcome",
]
