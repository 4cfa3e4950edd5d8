"""Aggregate application use cases."""

from .notifications import NotificationDispatcher, render_template

__all__ = ["NotificationDispatcher", "render_template"]
