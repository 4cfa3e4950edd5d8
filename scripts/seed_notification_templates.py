"""Install the default notification template catalog."""

from __future__ import annotations

import argparse

from sqlalchemy.exc import SQLAlchemyError

from notifier.application.use_cases.notifications import seed_default_templates
from notifier.config import get_settings
from notifier.infrastructure.database import Database
from notifier.infrastructure.repositories import NotificationTemplateRepository


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Replace the stored notification templates with the default catalog.",
    )
    parser.add_argument(
        "--database-url",
        default=None,
        help="Database URL (defaults to the DATABASE_URL setting)",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Only print the stored templates without changing them.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    database = Database(args.database_url or get_settings().database_url)
    with database:
        database.create_all()
        session = database.session()
        try:
            if not args.list:
                count = seed_default_templates(session)
                print(f"Seeded {count} notification templates")
            for template in NotificationTemplateRepository(session).list():
                state = "active" if template.is_active else "inactive"
                print(f"  {template.type:<26} {state:<8} {template.title}")
        except SQLAlchemyError as exc:
            session.rollback()
            raise SystemExit(f"Could not seed notification templates: {exc}") from exc
        finally:
            session.close()


if __name__ == "__main__":
    main()
