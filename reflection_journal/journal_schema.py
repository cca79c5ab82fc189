"""
Journal Schema for Reflections
==============================
Defines data structures for:
- Reflections (dated journal entries)
- Action Plans (up to three small tasks per reflection)

Serialized shape matches the stored JSON array, one object per reflection.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any

MAX_ACTION_PLANS = 3


@dataclass
class ActionPlan:
    """A short task tied to a reflection."""
    id: int
    text: str
    completed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ActionPlan":
        if not isinstance(data, dict):
            raise TypeError("action plan must be an object")
        completed = data.get("completed", False)
        if not isinstance(completed, bool):
            raise TypeError("completed must be true or false")
        return cls(
            id=int(data["id"]),
            text=str(data["text"]),
            completed=completed
        )


@dataclass
class Reflection:
    """
    A dated journal entry.
    Owns its action plans; they never move between reflections.
    """
    id: int
    date: str  # calendar date as entered, usually "YYYY-MM-DD"
    content: str
    action_plans: List[ActionPlan] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date,
            "content": self.content,
            "actionPlans": [a.to_dict() for a in self.action_plans]
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Reflection":
        if not isinstance(data, dict):
            raise TypeError("reflection must be an object")
        # Records written by the browser version used "actionplans"
        raw_plans = data.get("actionPlans", data.get("actionplans", []))
        if not isinstance(raw_plans, list):
            raise ValueError("actionPlans must be a list")
        return cls(
            id=int(data["id"]),
            date=str(data["date"]),
            content=str(data["content"]),
            action_plans=[ActionPlan.from_dict(a) for a in raw_plans]
        )

    def find_action_plan(self, action_plan_id: int):
        """Return the action plan with this id, or None."""
        return next((a for a in self.action_plans if a.id == action_plan_id), None)

    def can_add_action_plan(self) -> bool:
        return len(self.action_plans) < MAX_ACTION_PLANS
