import os
from dotenv import load_dotenv

from .reflection_store import DEFAULT_STORAGE_KEY

# --- CONFIGURATION ---
load_dotenv()

PROJECT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# Directory holding <storage key>.json
DATA_DIR = os.getenv("REFLECTION_JOURNAL_DATA_DIR") or os.path.join(PROJECT_DIR, "data")
STORAGE_KEY = os.getenv("REFLECTION_JOURNAL_STORAGE_KEY") or DEFAULT_STORAGE_KEY
