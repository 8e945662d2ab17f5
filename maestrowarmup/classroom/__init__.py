"""
MaestroWarmup Classroom - Session state machine.

This module provides:
- session: pure transition functions over SessionState
- SessionController: async actions wrapping the AI calls
"""

from . import session

from .controller import (
    SessionController,
    WarmupGenerator,
    MetadataExtractor,
    Speaker,
)

__all__ = [
    "session",
    "SessionController",
    "WarmupGenerator",
    "MetadataExtractor",
    "Speaker",
]
