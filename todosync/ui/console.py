"""
Console front end

Renders the derived view as text and turns typed commands into
synchronizer calls.
"""

import asyncio
import logging
import shlex
from typing import Callable, List, Optional

from todosync.core.models import Filter
from todosync.core.view import TodoView

HELP_TEXT = """Commands:
  add <title>             add a todo
  done <id> / undo <id>   mark a todo completed / active
  rename <id> <title>     change a todo's title
  rm <id>                 delete a todo
  clear                   delete all completed todos
  filter all|active|completed
  list                    show the list again
  quit                    exit"""

EMPTY_PLACEHOLDER = "Nothing to show."


def format_view(view: TodoView) -> str:
    """
    Render a derived view as text

    Args:
        view: View to render

    Returns:
        Multi-line string
    """
    lines = [f"Todos [{view.filter.value}]"]

    if view.is_empty:
        lines.append(f"  {EMPTY_PLACEHOLDER}")
    else:
        for todo in view.items:
            mark = 'x' if todo.is_done else ' '
            lines.append(f"  [{mark}] {todo.id:>3}  {todo.title}")

    noun = 'item' if view.active_count == 1 else 'items'
    lines.append(f"{view.active_count} {noun} left")

    if view.has_completed:
        lines.append(f"({view.completed_count} completed - type 'clear' to remove them)")

    return "\n".join(lines)


class TodoConsole:
    """
    Interactive text front end driving a TodoSynchronizer
    """

    def __init__(self, output: Callable[[str], None] = print,
                 input_func: Callable[[str], str] = input):
        """
        Initialize console

        Args:
            output: Called with each block of text to display
            input_func: Reads one line given a prompt
        """
        self.logger = logging.getLogger(__name__)
        self.output = output
        self.input_func = input_func
        self.synchronizer = None

    # Callbacks wired into the synchronizer and notifier

    def show_view(self, view: TodoView):
        self.output(format_view(view))

    def show_loading(self, loading: bool):
        if loading:
            self.output("Loading...")

    def show_toast(self, message: str):
        self.output(f"! {message}")

    async def confirm_clear(self, count: int) -> bool:
        loop = asyncio.get_running_loop()
        answer = await loop.run_in_executor(
            None, self.input_func, f"Delete {count} completed todo(s)? [y/N] "
        )
        return answer.strip().lower() in ('y', 'yes')

    def _parse_id(self, value: str) -> Optional[int]:
        try:
            return int(value)
        except ValueError:
            self.output(f"Not a todo id: {value}")
            return None

    async def handle_command(self, line: str) -> bool:
        """
        Execute one command line

        Args:
            line: Raw input

        Returns:
            False when the user asked to quit
        """
        try:
            parts: List[str] = shlex.split(line)
        except ValueError:
            parts = line.split()
        if not parts:
            return True

        command, args = parts[0].lower(), parts[1:]
        sync = self.synchronizer

        if command in ('quit', 'exit', 'q'):
            return False

        if command == 'help':
            self.output(HELP_TEXT)
        elif command == 'list':
            sync.render()
        elif command == 'add' and args:
            await sync.create_todo(' '.join(args))
        elif command in ('done', 'undo') and len(args) == 1:
            todo_id = self._parse_id(args[0])
            if todo_id is not None:
                await sync.toggle_status(todo_id, command == 'done')
        elif command == 'rename' and len(args) >= 2:
            todo_id = self._parse_id(args[0])
            if todo_id is not None:
                await sync.rename_todo(todo_id, ' '.join(args[1:]))
        elif command == 'rm' and len(args) == 1:
            todo_id = self._parse_id(args[0])
            if todo_id is not None:
                await sync.delete_todo(todo_id)
        elif command == 'clear':
            await sync.clear_completed(confirm=self.confirm_clear)
        elif command == 'filter' and len(args) == 1:
            if not sync.set_filter(args[0]):
                choices = ', '.join(f.value for f in Filter)
                self.output(f"Unknown filter '{args[0]}' (choose {choices})")
        else:
            self.output(HELP_TEXT)

        return True

    async def run(self):
        """Load the list, then process commands until quit or end of input"""
        loop = asyncio.get_running_loop()
        await self.synchronizer.load_initial()
        self.output("Type 'help' for commands.")

        while True:
            try:
                line = await loop.run_in_executor(None, self.input_func, '> ')
            except EOFError:
                break
            if not await self.handle_command(line):
                break

        self.logger.info("Console closed")
