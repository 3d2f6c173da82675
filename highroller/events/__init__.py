"""
Event system for the highroller engines.

This package lets a presentation layer observe engine activity without any
game rule leaking into it.
"""

from highroller.events.emitter import (
    EventEmitter,
    EventBus,
    EventPriority,
    CasinoEventType,
)

__all__ = ["EventEmitter", "EventBus", "EventPriority", "CasinoEventType"]
