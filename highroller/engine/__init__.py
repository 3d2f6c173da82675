"""
Shared engine contract for the highroller games.
"""

from highroller.engine.base import WagerEngine

__all__ = ["WagerEngine"]
