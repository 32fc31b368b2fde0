"""Adapters – Redis, MongoDB, Sentry and FastAPI integrations."""
