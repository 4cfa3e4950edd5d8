"""Read models describing who can receive notifications."""

from __future__ import annotations

from dataclasses import dataclass, field

ROLE_CANDIDATE = "CANDIDATE"
ROLE_EMPLOYER = "EMPLOYER"
ROLE_BRANCH_ADMIN = "BRANCH_ADMIN"
ROLE_ADMIN = "ADMIN"


@dataclass
class Recipient:
    """User attributes needed to address a push notification."""

    id: int
    name: str
    email: str | None
    role: str
    city: str | None = None
    device_token: str | None = None
    is_active: bool = True


@dataclass
class CandidateJobPreferences:
    """Job preferences of a candidate used for job-alert targeting."""

    user_id: int
    preferred_titles: list[str] = field(default_factory=list)
    preferred_locations: list[str] = field(default_factory=list)
    preferred_industries: list[str] = field(default_factory=list)


@dataclass
class JobPosting:
    """Job ad attributes used to build job alerts."""

    id: int | None
    title: str
    company_name: str
    location: str | None = None
    industry: str | None = None
    salary: str | None = None


__all__ = [
    "CandidateJobPreferences",
    "JobPosting",
    "ROLE_ADMIN",
    "ROLE_BRANCH_ADMIN",
    "ROLE_CANDIDATE",
    "ROLE_EMPLOYER",
    "Recipient",
]
