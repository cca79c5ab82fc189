"""
View layer for the reflection journal.

The store hands sorted reflections to a ReflectionView after every
mutation; views never write to storage themselves.
"""

import html
from abc import ABC, abstractmethod
from datetime import date
from typing import Callable, List, Optional

from prompt_toolkit import print_formatted_text
from prompt_toolkit.formatted_text import HTML

from .journal_schema import Reflection, MAX_ACTION_PLANS

EMPTY_STATE = "No reflections written yet."
LIMIT_REACHED = f"Action plans are limited to {MAX_ACTION_PLANS} per reflection."


class ReflectionView(ABC):

    @abstractmethod
    def render(self, reflections: List[Reflection]) -> None:
        """Redraw the journal from an already sorted list."""
        raise NotImplementedError


def format_long_date(value: str) -> str:
    """'2024-05-01' -> 'May 1, 2024'. Unparseable input is returned unchanged."""
    try:
        d = date.fromisoformat(value)
    except (ValueError, TypeError):
        return value
    return f"{d.strftime('%B')} {d.day}, {d.year}"


def format_reflection(reflection: Reflection, position: Optional[int] = None) -> str:
    """Build prompt_toolkit HTML markup for one reflection, escaping user text."""
    prefix = f"{position}. " if position is not None else ""
    lines = [
        f"<b>{prefix}{html.escape(format_long_date(reflection.date))}</b>",
        f"   {html.escape(reflection.content)}",
        "   <u>Action Plans</u>",
    ]

    for i, plan in enumerate(reflection.action_plans, 1):
        mark = "[x]" if plan.completed else "[ ]"
        text = html.escape(plan.text)
        if plan.completed:
            lines.append(f"     {i}. <ansigreen>{mark} <s>{text}</s></ansigreen>")
        else:
            lines.append(f"     {i}. {mark} {text}")

    if not reflection.can_add_action_plan():
        lines.append(f"     <style fg=\"#999999\">{html.escape(LIMIT_REACHED)}</style>")

    return "\n".join(lines)


class TerminalView(ReflectionView):
    """Prints the journal to the terminal, newest reflection first."""

    def __init__(self, output: Callable = print_formatted_text):
        self.output = output

    def render(self, reflections: List[Reflection]) -> None:
        self.output(HTML("\n<b>=== REFLECTIONS ===</b>"))

        if not reflections:
            self.output(HTML(f"<i>{html.escape(EMPTY_STATE)}</i>"))
            return

        for position, reflection in enumerate(reflections, 1):
            self.output(HTML(format_reflection(reflection, position)))
