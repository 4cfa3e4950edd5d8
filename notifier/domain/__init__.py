"""Domain layer of the notification engine."""
