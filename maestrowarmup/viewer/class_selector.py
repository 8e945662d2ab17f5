"""
Class selector renderer - Profile cards for the four class tiers.
"""

import html

from maestrowarmup.schemas import CLASS_PROFILES, ClassProfile, ClassType


def render_level_badge(profile: ClassProfile) -> str:
    """Render the colored level badge for a class profile."""
    color = profile.color
    style = (
        f"background:{color.background};color:{color.text};"
        f"border:1px solid {color.border};"
    )
    return (
        f'<span class="level-badge" style="{style}">'
        f"{html.escape(profile.level)}</span>"
    )


def render_class_card(class_type: ClassType, selected: bool = False) -> str:
    """Render one class profile card; the selected card gets a blue ring."""
    profile = CLASS_PROFILES[ClassType(class_type)]
    css_class = "class-card selected" if selected else "class-card"
    return f"""
    <div class="{css_class}">
        {render_level_badge(profile)}
        <h3>{html.escape(profile.name)}</h3>
    </div>
    """


def get_class_selector_css() -> str:
    """Get CSS styles for the class cards."""
    return """
    <style>
    .class-card {
        padding: 1em;
        border-radius: 12px;
        border: 2px solid #E2E8F0;
        background: white;
        margin-bottom: 0.5em;
    }
    .class-card.selected {
        border-color: #2563EB;
        box-shadow: 0 0 0 3px #DBEAFE;
    }
    .class-card h3 {
        margin: 0.5em 0 0 0;
        font-weight: 700;
    }
    .level-badge {
        font-size: 0.75em;
        font-weight: 700;
        text-transform: uppercase;
        letter-spacing: 0.05em;
        padding: 0.1em 0.6em;
        border-radius: 999px;
    }
    </style>
    """
