"""Interactive text menu driving a :class:`TodoApp`.

The shell holds no state of its own beyond the app it was given; every
choice maps onto one core operation. Domain errors are printed and the loop
continues. A :class:`StorageFailure` is not caught here and ends the session.
"""

from __future__ import annotations

import sys
from typing import Callable, Optional, TextIO

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .app import TodoApp
from .errors import AccountError, TaskError
from .models import TaskView

DOMAIN_ERRORS = (AccountError, TaskError)


def parse_task_id(raw: str) -> Optional[int]:
    try:
        task_id = int(raw)
    except ValueError:
        return None
    return task_id if task_id >= 0 else None


class TodoShell:
    def __init__(
        self,
        app: TodoApp,
        *,
        console: Optional[Console] = None,
        stream: Optional[TextIO] = None,
    ) -> None:
        self.app = app
        self.console = console or Console(highlight=False)
        self.stream = stream or sys.stdin

    # -- I/O helpers --------------------------------------------------------

    def _say(self, message: str) -> None:
        self.console.print(message, markup=False, highlight=False)

    def _ask(self, label: str) -> str:
        self.console.print(label, end="", markup=False, highlight=False)
        line = self.stream.readline()
        if not line:
            raise EOFError
        return line.strip()

    def _attempt(self, action: Callable[[], object], success: str) -> None:
        try:
            action()
        except DOMAIN_ERRORS as exc:
            self._say(f"Error: {exc.message}")
            return
        self._say(success)

    # -- rendering ----------------------------------------------------------

    def render_tasks(self, tasks: list[TaskView]) -> None:
        if not tasks:
            self._say("No tasks yet.")
            return
        table = Table(title="Your tasks")
        table.add_column("ID", justify="right")
        table.add_column("Title")
        table.add_column("Description")
        table.add_column("Status")
        table.add_column("Created")
        for task in tasks:
            table.add_row(
                str(task.id),
                Text(task.title),
                Text(task.description),
                task.status_label,
                task.created.strftime("%Y-%m-%d %H:%M:%S UTC"),
            )
        self.console.print(table)

    # -- menus --------------------------------------------------------------

    def _guest_menu(self) -> bool:
        self._say("\nWelcome to Todo App!")
        self._say("1. Login")
        self._say("2. Register")
        self._say("3. Exit")
        choice = self._ask("")

        if choice == "1":
            username = self._ask("Username: ")
            password = self._ask("Password: ")
            self._attempt(lambda: self.app.login(username, password), "Login successful!")
        elif choice == "2":
            username = self._ask("Username: ")
            password = self._ask("Password: ")
            self._attempt(lambda: self.app.register(username, password), "Registration successful!")
        elif choice == "3":
            return False
        else:
            self._say("Invalid choice")
        return True

    def _account_menu(self) -> bool:
        self._say("\nTodo App Menu:")
        self._say("1. Add Task")
        self._say("2. List Tasks")
        self._say("3. Complete Task")
        self._say("4. Edit Task")
        self._say("5. Delete Task")
        self._say("6. Logout")
        choice = self._ask("")

        if choice == "1":
            title = self._ask("Title: ")
            description = self._ask("Description: ")
            self._attempt(lambda: self.app.add(title, description), "Task added successfully!")
        elif choice == "2":
            try:
                tasks = list(self.app.list())
            except DOMAIN_ERRORS as exc:
                self._say(f"Error: {exc.message}")
            else:
                self.render_tasks(tasks)
        elif choice == "3":
            task_id = parse_task_id(self._ask("Task ID: "))
            if task_id is None:
                self._say("Invalid task ID")
            else:
                self._attempt(lambda: self.app.complete(task_id), "Task marked as completed!")
        elif choice == "4":
            task_id = parse_task_id(self._ask("Task ID: "))
            title = self._ask("New Title: ")
            description = self._ask("New Description: ")
            if task_id is None:
                self._say("Invalid task ID")
            else:
                self._attempt(lambda: self.app.edit(task_id, title, description), "Task updated successfully!")
        elif choice == "5":
            task_id = parse_task_id(self._ask("Task ID: "))
            if task_id is None:
                self._say("Invalid task ID")
            else:
                self._attempt(lambda: self.app.delete(task_id), "Task deleted successfully!")
        elif choice == "6":
            self.app.logout()
            self._say("Logged out successfully!")
        else:
            self._say("Invalid choice")
        return True

    def run(self) -> None:
        """Loop until the user exits or input reaches EOF."""
        try:
            while True:
                menu = self._guest_menu if self.app.current_account() is None else self._account_menu
                if not menu():
                    break
        except EOFError:
            self._say("")
