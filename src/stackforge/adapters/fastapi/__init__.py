"""FastAPI adapter – app factory, archive/health routers and exception mapper."""
from stackforge.adapters.fastapi.app import build_app, create_app
from stackforge.adapters.fastapi.exception_mapper import FastAPIExceptionMapper
from stackforge.adapters.fastapi.routers import FastAPIHealthRouter, ReadinessCheck, StackRouter

__all__ = [
    "FastAPIExceptionMapper",
    "FastAPIHealthRouter",
    "ReadinessCheck",
    "StackRouter",
    "build_app",
    "create_app",
]
