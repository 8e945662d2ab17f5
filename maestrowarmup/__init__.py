"""
MaestroWarmup - AI-generated classroom warm-ups for Spanish teachers.

Subpackages:
- schemas: Pydantic models for requests, results and session state
- ai: Gemini-backed metadata extraction, warm-up generation and speech
- classroom: session state transitions and the async controller
- viewer: HTML/Streamlit rendering helpers
- utils: attachment encoding, prompt loading, response parsing
"""

__version__ = "0.1.0"
