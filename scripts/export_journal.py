"""Export the reflection journal to markdown files with YAML front matter."""

import argparse
import os
import sys

# Add parent directory to path for imports when run as script
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from reflection_journal import config
from reflection_journal.export import export_markdown
from reflection_journal.reflection_store import ReflectionStore
from reflection_journal.storage import JsonFileStorage


def main(argv=None):
    parser = argparse.ArgumentParser(description="Export journal reflections to markdown")
    parser.add_argument("--data-dir", default=config.DATA_DIR, help="Directory holding the journal data")
    parser.add_argument("--key", default=config.STORAGE_KEY, help="Storage key of the journal")
    parser.add_argument("--out", default="journal_export", help="Output directory for .md files")
    args = parser.parse_args(argv)

    with ReflectionStore(JsonFileStorage(args.data_dir), key=args.key) as store:
        reflections = store.get_sorted()

    if not reflections:
        print("No reflections to export.")
        return []
    return export_markdown(reflections, args.out)


if __name__ == "__main__":
    main()
