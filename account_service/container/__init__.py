"""
Dependency injection container for managing service dependencies.
"""

from .container import Container

__all__ = [
    "Container"
]
