"""
Reflection Store for the Journal
================================
Manages CRUD operations for:
- Reflections (dated journal entries)
- Action Plans (nested under a reflection, at most three each)

The whole collection lives in memory and is written back to a key-value
storage as one JSON array after every mutation.
"""

import json
import time
from datetime import date
from typing import Callable, List, Optional

from .journal_schema import Reflection, ActionPlan, MAX_ACTION_PLANS
from .storage import KeyValueStorage

DEFAULT_STORAGE_KEY = "reflections"


class ReflectionStore:
    """
    Owns the reflection collection and its persistence.
    Construct one per session, load() it, and close() it when done.
    """

    def __init__(self, storage: KeyValueStorage,
                 key: str = DEFAULT_STORAGE_KEY,
                 clock: Callable[[], float] = time.time):
        """
        Args:
            storage: Backend holding the serialized collection
            key: Storage key for the JSON blob
            clock: Seconds since epoch, used to issue ids
        """
        self.storage = storage
        self.key = key
        self._clock = clock
        self._reflections: List[Reflection] = []
        self._last_id = 0
        self._closed = False

    def __enter__(self) -> "ReflectionStore":
        self.load()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    # ==================== PERSISTENCE ====================

    def load(self) -> List[Reflection]:
        """
        Load the collection from storage.
        Absent or unreadable data yields an empty collection.
        """
        self._reflections = []
        self._last_id = 0

        try:
            raw = self.storage.get_item(self.key)
        except (OSError, ValueError) as e:
            print(f"[ReflectionStore] Could not read '{self.key}': {e}. Starting empty.")
            return self.all()

        if raw is None:
            return self.all()

        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError("stored value is not a list")
            loaded = [Reflection.from_dict(item) for item in data]
        except (ValueError, TypeError, KeyError, RecursionError) as e:
            print(f"[ReflectionStore] Discarding invalid data under '{self.key}': {e}")
            return self.all()

        seen = set()
        for reflection in loaded:
            if reflection.id in seen:
                print(f"[ReflectionStore] Skipping duplicate reflection id {reflection.id}")
                continue
            seen.add(reflection.id)
            self._reflections.append(reflection)

        self._last_id = max(
            [r.id for r in self._reflections] +
            [a.id for r in self._reflections for a in r.action_plans] +
            [0]
        )
        return self.all()

    def _save(self):
        """Write the full collection back to storage."""
        self._check_open()
        payload = json.dumps([r.to_dict() for r in self._reflections], ensure_ascii=False)
        self.storage.set_item(self.key, payload)

    def close(self):
        """Release the store. Later mutations raise RuntimeError."""
        self._closed = True

    def _check_open(self):
        if self._closed:
            raise RuntimeError("ReflectionStore is closed")

    def _next_id(self) -> int:
        """Millisecond timestamp, bumped past any id already issued."""
        candidate = int(self._clock() * 1000)
        if candidate <= self._last_id:
            candidate = self._last_id + 1
        self._last_id = candidate
        return candidate

    # ==================== REFLECTIONS ====================

    def add_reflection(self, date: str, content: str) -> Reflection:
        """Create a reflection with no action plans and persist it."""
        self._check_open()
        reflection = Reflection(id=self._next_id(), date=date, content=content)
        self._reflections.append(reflection)
        self._save()
        return reflection

    def get_reflection(self, reflection_id: int) -> Optional[Reflection]:
        """Get a reflection by ID."""
        return next((r for r in self._reflections if r.id == reflection_id), None)

    def all(self) -> List[Reflection]:
        """All reflections in insertion order."""
        return list(self._reflections)

    def update_reflection(self, reflection_id: int, content: str) -> bool:
        self._check_open()
        reflection = self.get_reflection(reflection_id)
        if not reflection:
            return False

        reflection.content = content
        self._save()
        return True

    def delete_reflection(self, reflection_id: int):
        """Delete a reflection. Persists even when the id is unknown."""
        self._check_open()
        self._reflections = [r for r in self._reflections if r.id != reflection_id]
        self._save()

    # ==================== ACTION PLANS ====================

    def add_action_plan(self, reflection_id: int, text: str) -> Optional[ActionPlan]:
        """
        Append an action plan to a reflection.
        Returns None when the reflection is missing or already holds
        MAX_ACTION_PLANS plans; the two cases are not told apart.
        """
        self._check_open()
        reflection = self.get_reflection(reflection_id)
        if not reflection or not reflection.can_add_action_plan():
            return None

        action_plan = ActionPlan(id=self._next_id(), text=text, completed=False)
        reflection.action_plans.append(action_plan)
        self._save()
        return action_plan

    def _find_action_plan(self, reflection_id: int,
                          action_plan_id: int) -> Optional[ActionPlan]:
        reflection = self.get_reflection(reflection_id)
        if not reflection:
            return None
        return reflection.find_action_plan(action_plan_id)

    def update_action_plan(self, reflection_id: int, action_plan_id: int,
                           text: str) -> bool:
        self._check_open()
        action_plan = self._find_action_plan(reflection_id, action_plan_id)
        if not action_plan:
            return False

        action_plan.text = text
        self._save()
        return True

    def toggle_action_plan(self, reflection_id: int, action_plan_id: int) -> bool:
        self._check_open()
        action_plan = self._find_action_plan(reflection_id, action_plan_id)
        if not action_plan:
            return False

        action_plan.completed = not action_plan.completed
        self._save()
        return True

    def delete_action_plan(self, reflection_id: int, action_plan_id: int) -> bool:
        """
        Remove an action plan. Persists unconditionally.
        Returns whether the parent reflection exists.
        """
        self._check_open()
        reflection = self.get_reflection(reflection_id)
        if reflection:
            reflection.action_plans = [
                a for a in reflection.action_plans if a.id != action_plan_id
            ]
        self._save()
        return reflection is not None

    def remaining_action_plans(self, reflection_id: int) -> Optional[int]:
        """Free action plan slots, or None for an unknown reflection."""
        reflection = self.get_reflection(reflection_id)
        if not reflection:
            return None
        return MAX_ACTION_PLANS - len(reflection.action_plans)

    # ==================== ORDERING ====================

    def get_sorted(self) -> List[Reflection]:
        """
        Reflections newest date first.
        Equal dates keep insertion order; unparseable dates go last.
        """
        return sorted(self._reflections, key=_date_sort_key, reverse=True)


def _date_sort_key(reflection: Reflection):
    try:
        return (1, date.fromisoformat(reflection.date))
    except (ValueError, TypeError):
        return (0, date.min)
