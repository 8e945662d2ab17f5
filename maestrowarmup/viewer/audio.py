"""
Audio viewer - Play synthesized speech in the browser.
"""

import streamlit as st

from maestrowarmup.ai import AudioClip


def to_player_array(clip: AudioClip):
    """Streamlit expects multi-channel audio as (channels, frames)."""
    if clip.num_channels > 1:
        return clip.samples.T
    return clip.samples


def play_clip(clip: AudioClip):
    """Start playback immediately; returns without waiting for it to finish."""
    st.audio(to_player_array(clip), sample_rate=clip.sample_rate, autoplay=True)
