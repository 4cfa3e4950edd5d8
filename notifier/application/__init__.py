"""Application layer: notification use cases."""
