"""Public helpers for rendering, gating and dispatching notifications."""

from .devices import register_device_token
from .dispatcher import NotificationDispatcher
from .events import (
    JOB_VIEW_MILESTONES,
    find_job_alert_recipients,
    job_matches_preferences,
    notify_application_status,
    notify_branch_admins,
    notify_job_match,
    notify_job_view_milestone,
    notify_welcome,
)
from .preferences import can_send, evaluate_preferences, get_preferences, update_preferences
from .rate_limit import check_limit, daily_cap_for, evaluate_rate_limit, record_send
from .records import (
    delete_notification,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
)
from .templates import (
    DEFAULT_TEMPLATES,
    render,
    render_template,
    render_text,
    resolve_template,
    seed_default_templates,
)

__all__ = [
    "DEFAULT_TEMPLATES",
    "JOB_VIEW_MILESTONES",
    "NotificationDispatcher",
    "can_send",
    "check_limit",
    "daily_cap_for",
    "delete_notification",
    "evaluate_preferences",
    "evaluate_rate_limit",
    "find_job_alert_recipients",
    "get_preferences",
    "job_matches_preferences",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
    "notify_application_status",
    "notify_branch_admins",
    "notify_job_match",
    "notify_job_view_milestone",
    "notify_welcome",
    "record_send",
    "register_device_token",
    "render",
    "render_template",
    "render_text",
    "resolve_template",
    "seed_default_templates",
    "update_preferences",
]
