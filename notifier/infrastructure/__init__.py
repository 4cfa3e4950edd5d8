"""Infrastructure adapters: persistence, push delivery and security."""
