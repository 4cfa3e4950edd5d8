"""Notification dispatch engine for the job marketplace backend."""
