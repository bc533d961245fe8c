"""Markdown rendering for question text shown in rich-text Qt labels.

Qt labels understand a subset of HTML and cannot run scripts, so questions
are rendered to plain HTML fragments. Raw HTML in the source is escaped
rather than passed through.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from markdown_it import MarkdownIt


@dataclass(slots=True)
class MarkdownRenderer:
    """Converts markdown into HTML fragments."""

    enable_html: bool = False
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = MarkdownIt("commonmark", {"html": self.enable_html}).enable(
            "strikethrough"
        )

    def render_fragment(self, markdown_text: str) -> str:
        """Render a markdown string into an HTML fragment."""

        sanitized = markdown_text.strip()
        if not sanitized:
            return "<p><em>No question text.</em></p>"
        return self._markdown.render(sanitized)


# Shared instance; rendering happens on the Qt main thread only.
renderer = MarkdownRenderer()
