"""
Session state schemas for MaestroWarmup.

A session walks through three steps (class selection, detail entry,
result view) and carries three independent busy flags.
"""

from enum import IntEnum
from typing import Optional

from pydantic import BaseModel, Field

from .warmup import WarmUpRequest, WarmUpResult


class Step(IntEnum):
    SELECT_CLASS = 1
    EDIT_DETAILS = 2
    VIEW_RESULT = 3


class SessionState(BaseModel):
    step: Step = Step.SELECT_CLASS
    generating: bool = False
    analyzing: bool = False
    speaking: bool = False
    request: WarmUpRequest = Field(default_factory=WarmUpRequest)
    result: Optional[WarmUpResult] = None
    notice: Optional[str] = None  # last user-facing alert
    epoch: int = 0                # bumped on every reset
