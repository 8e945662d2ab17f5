"""
MaestroWarmup Viewer - Rendering components for the warm-up app.

This module provides:
- Class profile cards
- Warm-up result card rendering
- Audio playback
"""

from .class_selector import (
    get_class_selector_css,
    render_level_badge,
    render_class_card,
)

from .result import (
    get_result_css,
    render_result,
    render_listening_script,
    render_teacher_key,
)

from .audio import (
    to_player_array,
    play_clip,
)

__all__ = [
    # Class selector
    "get_class_selector_css",
    "render_level_badge",
    "render_class_card",
    # Result
    "get_result_css",
    "render_result",
    "render_listening_script",
    "render_teacher_key",
    # Audio
    "to_player_array",
    "play_clip",
]
