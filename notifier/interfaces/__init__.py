"""Delivery interfaces of the notification engine."""
