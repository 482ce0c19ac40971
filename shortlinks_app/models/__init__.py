"""
Database models for the shortlinks service.

A single table holds every link together with its click counter.
"""

from .link import Link

__all__ = ["Link"]
