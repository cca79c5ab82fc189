from datetime import date
from typing import Callable, Optional

from prompt_toolkit import prompt
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.formatted_text import HTML

from reflection_journal import config
from reflection_journal.journal_schema import Reflection, ActionPlan
from reflection_journal.reflection_store import ReflectionStore
from reflection_journal.storage import JsonFileStorage
from reflection_journal.view import ReflectionView, TerminalView, LIMIT_REACHED

MENU = """
╔══════════════════════════════════╗
║   REFLECTION JOURNAL             ║
╠══════════════════════════════════╣
║  1: Write Reflection             ║
║  2: Edit Reflection              ║
║  3: Delete Reflection            ║
║  4: Add Action Plan              ║
║  5: Edit Action Plan             ║
║  6: Toggle Action Plan           ║
║  7: Delete Action Plan           ║
║  8: Show Journal                 ║
║  9: Exit                         ║
╚══════════════════════════════════╝"""


class ReflectionJournalApp:
    """
    Terminal front-end for a ReflectionStore.
    Every mutation is followed by a full re-render from get_sorted().
    """

    def __init__(self, store: ReflectionStore,
                 view: Optional[ReflectionView] = None,
                 ask: Callable[[str], str] = input,
                 ask_multiline: Optional[Callable[[str], str]] = None):
        self.store = store
        self.view = view or TerminalView()
        self.ask = ask
        self.ask_multiline = ask_multiline or self._get_multiline_input

        # Read once; default for new reflections
        self.today = date.today().isoformat()

        # Key Bindings for Multi-line Input
        self.kb = KeyBindings()

        @self.kb.add('escape', 'enter')
        def _(event):
            """Submit input when Esc then Enter is pressed."""
            event.app.exit(event.app.current_buffer.text)

    def _get_multiline_input(self, label: str = "Reflection") -> str:
        """
        Uses prompt_toolkit to allow multi-line input.
        User presses Esc, then Enter to submit.
        """
        print(f"\n--- {label} (Press 'Esc' then 'Enter' to save) ---")
        return prompt(
            HTML(f'<style fg="#ansigreen">{label}: </style>'),
            multiline=True,
            key_bindings=self.kb,
            bottom_toolbar=HTML(" <b>[Esc] + [Enter]</b> to save | empty text cancels")
        )

    def refresh(self):
        self.view.render(self.store.get_sorted())

    # ==================== SELECTION ====================

    def _select_reflection(self) -> Optional[Reflection]:
        """Pick a reflection by its position in the rendered (sorted) list."""
        reflections = self.store.get_sorted()
        if not reflections:
            print("No reflections yet. Write one first.")
            return None

        self.view.render(reflections)
        try:
            idx = int(self.ask("Reflection #: ").strip()) - 1
            if idx < 0:
                raise IndexError(idx)
            return reflections[idx]
        except (ValueError, IndexError):
            print("Invalid selection.")
            return None

    def _select_action_plan(self, reflection: Reflection) -> Optional[ActionPlan]:
        if not reflection.action_plans:
            print("This reflection has no action plans.")
            return None

        try:
            idx = int(self.ask("Action plan #: ").strip()) - 1
            if idx < 0:
                raise IndexError(idx)
            return reflection.action_plans[idx]
        except (ValueError, IndexError):
            print("Invalid selection.")
            return None

    # ==================== REFLECTIONS ====================

    def run_add_reflection(self):
        print("\n--- Write Reflection ---")
        entry_date = self.ask(f"Date [{self.today}]: ").strip() or self.today
        content = self.ask_multiline("Reflection")

        if not content.strip():
            print("Cancelled.")
            return

        self.store.add_reflection(entry_date, content)
        print("\n✓ Reflection saved.")
        self.refresh()

    def run_edit_reflection(self):
        reflection = self._select_reflection()
        if not reflection:
            return

        print(f"\nCurrent text:\n{reflection.content}")
        new_content = self.ask_multiline("New text").strip()
        if not new_content:
            print("Unchanged.")
            return

        self.store.update_reflection(reflection.id, new_content)
        self.refresh()

    def run_delete_reflection(self):
        reflection = self._select_reflection()
        if not reflection:
            return

        confirm = self.ask("Really delete this reflection? (y/n): ").strip().lower()
        if confirm != 'y':
            print("Cancelled.")
            return

        self.store.delete_reflection(reflection.id)
        print("✓ Deleted.")
        self.refresh()

    # ==================== ACTION PLANS ====================

    def run_add_action_plan(self):
        reflection = self._select_reflection()
        if not reflection:
            return

        if not self.store.remaining_action_plans(reflection.id):
            print(LIMIT_REACHED)
            return

        text = self.ask("Action plan: ").strip()
        if not text:
            print("Cancelled.")
            return

        if self.store.add_action_plan(reflection.id, text) is None:
            print("Could not add action plan.")
            return
        self.refresh()

    def run_edit_action_plan(self):
        reflection = self._select_reflection()
        if not reflection:
            return
        plan = self._select_action_plan(reflection)
        if not plan:
            return

        text = self.ask(f"New text [{plan.text}]: ").strip()
        if not text:
            print("Unchanged.")
            return

        self.store.update_action_plan(reflection.id, plan.id, text)
        self.refresh()

    def run_toggle_action_plan(self):
        reflection = self._select_reflection()
        if not reflection:
            return
        plan = self._select_action_plan(reflection)
        if not plan:
            return

        self.store.toggle_action_plan(reflection.id, plan.id)
        self.refresh()

    def run_delete_action_plan(self):
        reflection = self._select_reflection()
        if not reflection:
            return
        plan = self._select_action_plan(reflection)
        if not plan:
            return

        self.store.delete_action_plan(reflection.id, plan.id)
        self.refresh()

    # ==================== MENU ====================

    def handle_choice(self, choice: str) -> bool:
        """Run one menu action. Returns False when the user chose to exit."""
        actions = {
            '1': self.run_add_reflection,
            '2': self.run_edit_reflection,
            '3': self.run_delete_reflection,
            '4': self.run_add_action_plan,
            '5': self.run_edit_action_plan,
            '6': self.run_toggle_action_plan,
            '7': self.run_delete_action_plan,
            '8': self.refresh,
        }
        choice = choice.strip()
        if choice == '9':
            return False

        action = actions.get(choice)
        if not action:
            print("Invalid choice.")
            return True

        try:
            action()
        except (KeyboardInterrupt, EOFError):
            print("\nCancelled.")
        return True

    def run(self):
        self.refresh()
        while True:
            print(MENU)
            try:
                choice = self.ask("Select: ")
            except (KeyboardInterrupt, EOFError):
                break
            if not self.handle_choice(choice):
                break


def main():
    storage = JsonFileStorage(config.DATA_DIR)
    with ReflectionStore(storage, key=config.STORAGE_KEY) as store:
        ReflectionJournalApp(store).run()


if __name__ == "__main__":
    main()
