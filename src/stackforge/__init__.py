"""
stackforge – boilerplate archive service core.

Import path convention::

    from stackforge.resilience.circuit_breaker import CircuitBreakerRegistry
    from stackforge.resilience.cache import ResilientCache
    from stackforge.application.archive import ArchivePipeline
    from stackforge.adapters.fastapi import create_app
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
