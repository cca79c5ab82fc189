"""Markdown export of journal reflections, one file per entry."""

import os
from typing import Iterable, List

import yaml

from .journal_schema import Reflection


def reflection_to_markdown(reflection: Reflection) -> str:
    """Render a reflection as markdown with YAML front matter."""
    front_matter = {
        "id": reflection.id,
        "date": reflection.date,
        "action_plans": [
            {"text": a.text, "completed": a.completed}
            for a in reflection.action_plans
        ],
    }
    header = yaml.safe_dump(front_matter, sort_keys=False, allow_unicode=True)
    return f"---\n{header}---\n\n{reflection.content}\n"


def export_markdown(reflections: Iterable[Reflection], out_dir: str) -> List[str]:
    """
    Write each reflection to <out_dir>/<date>-<id>.md.
    Existing files with the same name are overwritten.

    Returns:
        Paths written, in input order
    """
    os.makedirs(out_dir, exist_ok=True)
    written = []

    for reflection in reflections:
        safe_date = "".join(c if c.isalnum() or c == "-" else "_" for c in reflection.date)
        filename = os.path.join(out_dir, f"{safe_date}-{reflection.id}.md")
        with open(filename, 'w', encoding='utf-8') as f:
            f.write(reflection_to_markdown(reflection))
        written.append(filename)

    print(f"[Export] Wrote {len(written)} reflection(s) to {out_dir}")
    return written
