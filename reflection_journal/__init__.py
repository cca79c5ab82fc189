# Reflection journal package
# Core modules for storing dated reflections and their action plans.
# The terminal view and markdown export are imported from their own modules.

from .journal_schema import Reflection, ActionPlan, MAX_ACTION_PLANS
from .storage import KeyValueStorage, InMemoryStorage, JsonFileStorage
from .reflection_store import ReflectionStore, DEFAULT_STORAGE_KEY
