"""Interactive task form powered by Textual.

Used by ``tasktrack add`` and ``tasktrack edit`` when no fields are given
on the command line.
"""

from __future__ import annotations

from dataclasses import dataclass

from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Checkbox, Footer, Header, Input, Label, Static

from tasktrack.models import MIN_TITLE_LENGTH


@dataclass
class FormResult:
    title: str
    completed: bool


CSS = """
Screen {
    align: center middle;
}

#form {
    width: 60;
    height: auto;
    padding: 1 2;
    border: tall $primary-background-darken-2;
}

.section-title {
    text-style: bold;
    color: $text;
    margin: 0 0 1 0;
}

#title-input {
    margin: 0 0 1 0;
}

#form-error {
    height: auto;
    color: $error;
    margin: 0 0 1 0;
}

#buttons {
    height: auto;
    align-horizontal: right;
}

#buttons Button {
    margin: 0 0 0 1;
}
"""


class TaskFormApp(App[FormResult | None]):
    """Ask for a task title and completion flag."""

    CSS = CSS

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
        Binding("ctrl+s", "save", "Save"),
    ]

    def __init__(self, heading: str = "New task", title: str = "", completed: bool = False) -> None:
        super().__init__()
        self.heading = heading
        self.initial_title = title
        self.initial_completed = completed
        self.problem: str | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        yield Vertical(
            Label(self.heading, classes="section-title"),
            Label("Title"),
            Input(value=self.initial_title, placeholder="enter your title name…", id="title-input"),
            Checkbox("Is this task completed?", value=self.initial_completed, id="completed-box"),
            Static(id="form-error"),
            Horizontal(
                Button("Cancel", id="cancel"),
                Button("Save", variant="primary", id="save"),
                id="buttons",
            ),
            id="form",
        )
        yield Footer()

    def on_mount(self) -> None:
        self.title = "tasktrack"
        self.query_one("#title-input", Input).focus()

    def _validate(self, title: str) -> str | None:
        if len(title) < MIN_TITLE_LENGTH:
            return f"The title must contain at least {MIN_TITLE_LENGTH} letters."
        return None

    def action_save(self) -> None:
        title = self.query_one("#title-input", Input).value.strip()
        self.problem = self._validate(title)
        if self.problem:
            self.query_one("#form-error", Static).update(self.problem)
            return
        completed = self.query_one("#completed-box", Checkbox).value
        self.exit(FormResult(title=title, completed=completed))

    def action_cancel(self) -> None:
        self.exit(None)

    @on(Button.Pressed, "#save")
    def _on_save(self) -> None:
        self.action_save()

    @on(Button.Pressed, "#cancel")
    def _on_cancel(self) -> None:
        self.action_cancel()

    @on(Input.Submitted, "#title-input")
    def _on_submit(self) -> None:
        self.action_save()

    @on(Input.Changed, "#title-input")
    def _on_title_change(self) -> None:
        self.problem = None
        self.query_one("#form-error", Static).update("")


def prompt_task(heading: str = "New task", title: str = "", completed: bool = False) -> FormResult | None:
    """Run the form and return what the user entered, or None if cancelled."""
    return TaskFormApp(heading=heading, title=title, completed=completed).run()
