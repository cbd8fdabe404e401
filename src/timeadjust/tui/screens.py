from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from textual.app import ComposeResult  # type: ignore[import]
from textual.binding import Binding  # type: ignore[import]
from textual.containers import Vertical  # type: ignore[import]
from textual.screen import ModalScreen  # type: ignore[import]
from textual.widgets import ListItem, ListView, Static  # type: ignore[import]

from .clipboard import copy_text


@dataclass(slots=True)
class PresetChoice:
    name: str
    expression: str

    def label(self) -> str:
        return f"{self.name}\n[dim]{self.expression}[/dim]"


class PresetPickerScreen(ModalScreen[str | None]):
    """Pick a configured preset; dismisses with its expression."""

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def __init__(self, presets: Sequence[PresetChoice]) -> None:
        super().__init__()
        self.presets = list(presets)

    def compose(self) -> ComposeResult:
        items = [
            ListItem(Static(choice.label(), classes="dialog-item"), name=choice.expression)
            for choice in self.presets
        ]
        yield Vertical(
            Static("Presets", classes="dialog-title"),
            ListView(*items, initial_index=0, id="preset-picker-list"),
            Static("Enter = Use preset • Esc = Cancel", classes="dialog-help"),
            id="preset-picker",
        )

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        self.dismiss(event.item.name)

    def action_cancel(self) -> None:
        self.dismiss(None)


def issue_report(expression: str, issues: Sequence[str]) -> str:
    lines = [f"Expression: {expression!r}"]
    lines.extend(f"{index}. {issue}" for index, issue in enumerate(issues, start=1))
    return "\n".join(lines)


class IssuesScreen(ModalScreen[None]):
    """Lists why an expression was rejected. ``c`` copies the report."""

    BINDINGS = [
        Binding("escape,enter", "close", "Close"),
        Binding("c", "copy", "Copy"),
    ]

    def __init__(self, expression: str, issues: Sequence[str]) -> None:
        super().__init__()
        self.expression = expression
        self.issues = list(issues)

    def compose(self) -> ComposeResult:
        yield Vertical(
            Static(f"{len(self.issues)} issue(s)", classes="dialog-title"),
            Static(issue_report(self.expression, self.issues), classes="dialog-item", markup=False),
            Static("Enter/Esc = Close • c = Copy", classes="dialog-help"),
            id="issues-dialog",
        )

    def action_close(self) -> None:
        self.dismiss(None)

    def action_copy(self) -> None:
        message = copy_text(issue_report(self.expression, self.issues), label="issues")
        self.notify(message)
