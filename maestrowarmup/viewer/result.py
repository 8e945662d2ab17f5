"""
Result renderer - HTML for the generated warm-up card.

Features:
- Title header with activity badge
- Highlighted student instructions
- Pre-formatted exercise content
- Listening script block
"""

import html

from maestrowarmup.schemas import ActivityType, WarmUpResult


def get_result_css() -> str:
    """Get CSS styles for the result card."""
    return """
    <style>
    .warmup-card {
        background: white;
        border: 1px solid #E2E8F0;
        border-radius: 16px;
        overflow: hidden;
        margin: 1em 0;
    }
    .warmup-header {
        background: #2563EB;
        color: white;
        padding: 1.5em;
        display: flex;
        justify-content: space-between;
        align-items: flex-start;
    }
    .warmup-kicker {
        font-size: 0.8em;
        font-weight: 700;
        text-transform: uppercase;
        letter-spacing: 0.1em;
        opacity: 0.8;
    }
    .warmup-title {
        font-size: 1.6em;
        font-weight: 700;
        margin: 0.2em 0 0 0;
    }
    .warmup-badge {
        background: rgba(255, 255, 255, 0.2);
        padding: 0.2em 0.8em;
        border-radius: 4px;
        font-size: 0.75em;
        font-weight: 700;
        text-transform: uppercase;
        letter-spacing: 0.1em;
    }
    .warmup-body {
        padding: 1.5em 2em;
    }
    .warmup-instruction {
        background: #EFF6FF;
        border: 1px solid #DBEAFE;
        border-radius: 12px;
        padding: 1em;
        color: #1E40AF;
        margin-bottom: 1.5em;
    }
    .warmup-instruction h4 {
        color: #1E3A8A;
        font-size: 0.9em;
        margin: 0 0 0.3em 0;
    }
    .warmup-content {
        white-space: pre-wrap;
        background: #F8FAFC;
        border: 1px solid #F1F5F9;
        border-radius: 12px;
        padding: 1.5em;
        color: #334155;
        font-weight: 500;
    }
    .listening-script {
        background: #F8FAFC;
        border: 1px solid #F1F5F9;
        border-radius: 12px;
        padding: 1em;
        font-style: italic;
        color: #475569;
        font-size: 0.95em;
        line-height: 1.6;
    }
    .teacher-key {
        background: #F0FDF4;
        border: 1px solid #DCFCE7;
        border-radius: 12px;
        padding: 1em;
        color: #475569;
        font-size: 0.95em;
    }
    </style>
    """


def render_result(result: WarmUpResult, activity_type: ActivityType) -> str:
    """
    Render the warm-up card (title, instructions, content).

    Listening script and teacher key are rendered separately so the app can
    attach the play button and the expander to them.
    """
    activity = ActivityType(activity_type)
    return f"""
    <div class="warmup-card">
        <div class="warmup-header">
            <div>
                <div class="warmup-kicker">Generated Warm-Up</div>
                <div class="warmup-title">{html.escape(result.title)}</div>
            </div>
            <div class="warmup-badge">{html.escape(activity.value)}</div>
        </div>
        <div class="warmup-body">
            <div class="warmup-instruction">
                <h4>Student Instructions:</h4>
                <p>{html.escape(result.instruction)}</p>
            </div>
            <div class="warmup-content">{html.escape(result.content)}</div>
        </div>
    </div>
    """


def render_listening_script(result: WarmUpResult) -> str:
    if not result.has_listening_script:
        return ""
    return f'<div class="listening-script">{html.escape(result.listening_script)}</div>'


def render_teacher_key(result: WarmUpResult) -> str:
    if not result.teacher_key:
        return ""
    return f'<div class="teacher-key">{html.escape(result.teacher_key)}</div>'
