"""Enhancement formatter: vendor text -> styled markup keyed by category."""

from __future__ import annotations

import html
from typing import NamedTuple

from solver.models import EnhancementCategory


class EnhancementStyle(NamedTuple):
    bg_color: str
    border_color: str
    text_color: str
    icon: str


ENHANCEMENT_STYLES: dict[EnhancementCategory, EnhancementStyle] = {
    EnhancementCategory.ELABORATE: EnhancementStyle(
        "bg-blue-50", "border-blue-100", "text-blue-800", "fas fa-info-circle"
    ),
    EnhancementCategory.EXAMPLES: EnhancementStyle(
        "bg-green-50", "border-green-100", "text-green-800", "fas fa-list-ul"
    ),
    EnhancementCategory.ACTION_STEPS: EnhancementStyle(
        "bg-purple-50", "border-purple-100", "text-purple-800", "fas fa-tasks"
    ),
    EnhancementCategory.METRICS: EnhancementStyle(
        "bg-yellow-50", "border-yellow-100", "text-yellow-800", "fas fa-chart-line"
    ),
}

DEFAULT_STYLE = EnhancementStyle("bg-gray-50", "border-gray-200", "text-gray-800", "fas fa-lightbulb")


def style_for(category: EnhancementCategory | str) -> EnhancementStyle:
    try:
        return ENHANCEMENT_STYLES[EnhancementCategory(category)]
    except ValueError:
        return DEFAULT_STYLE


def to_paragraphs(text: str) -> str:
    """Escape, then turn blank lines into paragraph breaks and newlines into <br>."""
    escaped = html.escape(text)
    return escaped.replace("\n\n", "</p><p>").replace("\n", "<br>")


def format_enhancement(text: str, category: EnhancementCategory | str) -> str:
    style = style_for(category)
    label = html.escape(str(getattr(category, "value", category)))

    return (
        f'<div class="mt-4 {style.bg_color} p-4 rounded-lg border {style.border_color}">'
        f'<h4 class="font-medium {style.text_color} mb-2 flex items-center">'
        f'<i class="{style.icon} mr-2"></i> {label}'
        "</h4>"
        '<div class="text-gray-700">'
        f"<p>{to_paragraphs(text)}</p>"
        "</div>"
        "</div>"
    )
