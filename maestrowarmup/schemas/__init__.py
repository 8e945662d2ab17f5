"""
MaestroWarmup Schemas - Pydantic models for the warm-up generator.

This module exports all schema classes for:
- Warm-up: class profiles, activity types, requests, results, metadata
- Session: step enum and session state
"""

# Warm-up schemas
from .warmup import (
    ClassType,
    ActivityType,
    ACTIVITY_LABELS,
    ProfileColor,
    ClassProfile,
    CLASS_PROFILES,
    get_class_profile,
    FileAttachment,
    WarmUpRequest,
    LessonMetadata,
    WarmUpResult,
)

# Session schemas
from .session import (
    Step,
    SessionState,
)

__all__ = [
    # Warm-up
    'ClassType',
    'ActivityType',
    'ACTIVITY_LABELS',
    'ProfileColor',
    'ClassProfile',
    'CLASS_PROFILES',
    'get_class_profile',
    'FileAttachment',
    'WarmUpRequest',
    'LessonMetadata',
    'WarmUpResult',
    # Session
    'Step',
    'SessionState',
]
