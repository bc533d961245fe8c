"""Question rendering utilities for displaying trivia questions."""

from __future__ import annotations

from trivia_app.core.markdown_renderer import renderer


def render_question_html(question_text: str, font_size: int = 16) -> str:
    """Render question text as HTML for a rich-text QLabel.

    Args:
        question_text: The question text (supports Markdown)
        font_size: Font size in points for the question text (default 16)

    Returns:
        HTML fragment wrapped in a sized container
    """
    body = renderer.render_fragment(question_text)
    return f'<div style="font-size: {font_size}pt;">{body}</div>'
