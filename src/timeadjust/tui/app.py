from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, tzinfo

from textual.app import App, ComposeResult  # type: ignore[import]
from textual.binding import Binding  # type: ignore[import]
from textual.containers import Vertical  # type: ignore[import]
from textual.widgets import DataTable, Footer, Header, Input, Static  # type: ignore[import]

from ..applier import adjust
from ..config import ConfigManager, TimeAdjustConfig
from ..models import TimeAdjustment
from ..parser import explain, format_adjustment, parse
from ..timeutils import format_moment, parse_moment, resolve_timezone
from .clipboard import copy_text
from .screens import IssuesScreen, PresetChoice, PresetPickerScreen


@dataclass(slots=True)
class Preview:
    base: datetime | None
    result: datetime | None
    adjustments: list[TimeAdjustment] = field(default_factory=list)
    issues: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.result is not None and not self.issues

    def rows(self) -> list[tuple[str, str, str]]:
        rows = []
        for adjustment in self.adjustments:
            fields = ", ".join(f"{unit.value}={amount}" for unit, amount in adjustment.values.items())
            rows.append((format_adjustment(adjustment), adjustment.type.name.lower(), fields or "-"))
        return rows


def build_preview(
    expression: str,
    base_text: str,
    *,
    tz: tzinfo | None = None,
    now: datetime | None = None,
) -> Preview:
    try:
        base = parse_moment(base_text or "now", tz=tz, now=now)
    except ValueError as exc:
        return Preview(base=None, result=None, issues=[str(exc)])
    if not expression.strip():
        return Preview(base=base, result=base)
    adjustments = parse(expression)
    if adjustments is None:
        return Preview(base=base, result=None, issues=explain(expression))
    return Preview(base=base, result=adjust(base, adjustments), adjustments=adjustments)


class StatusLine(Static):
    pass


class TimeAdjustApp(App):
    CSS = """
    Screen {
        background: $surface;
    }

    .panel {
        border: round $accent;
        padding: 1 2;
        background: $boost;
        layout: vertical;
    }

    .panel-title {
        text-style: bold;
        color: $text;
        margin-bottom: 1;
    }

    #adjustment-table {
        height: 1fr;
    }

    #result-line {
        text-style: bold;
        margin-top: 1;
    }
    """
    TITLE = "timeadjust"

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit"),
        Binding("f2", "pick_preset", "Presets"),
        Binding("f3", "copy_result", "Copy Result"),
        Binding("f4", "show_issues", "Show Issues"),
    ]

    def __init__(self, config: TimeAdjustConfig | None = None) -> None:
        super().__init__()
        if config is None:
            config = ConfigManager().load()
        self.config = config
        self.tz = resolve_timezone(config.display.timezone)
        self.status_line = StatusLine(id="status-line")
        self.preview = build_preview("", "now", tz=self.tz)

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield Vertical(
            Static("Expression", classes="panel-title"),
            Input(placeholder="+30m1d @0s0m0h", id="expression-input"),
            Input(value="now", placeholder="now, today or ISO 8601", id="base-input"),
            DataTable(zebra_stripes=True, id="adjustment-table"),
            Static("", id="result-line"),
            self.status_line,
            classes="panel",
        )
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one("#adjustment-table", DataTable)
        table.cursor_type = "row"
        table.add_columns("Token", "Kind", "Fields")
        self.query_one("#expression-input", Input).focus()
        self.refresh_preview()

    def on_input_changed(self, event: Input.Changed) -> None:
        self.refresh_preview()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if self.preview.issues:
            self.action_show_issues()

    def refresh_preview(self) -> None:
        expression = self.query_one("#expression-input", Input).value
        base_text = self.query_one("#base-input", Input).value
        self.preview = build_preview(expression, base_text, tz=self.tz)

        table = self.query_one("#adjustment-table", DataTable)
        table.clear()
        for row in self.preview.rows():
            table.add_row(*row)

        result_line = self.query_one("#result-line", Static)
        if self.preview.ok:
            result_line.update(format_moment(self.preview.result, self.config.display.output_format))
            self.status_line.update("")
        else:
            result_line.update("[red]invalid[/red]")
            self.status_line.update(f"[red]{len(self.preview.issues)} issue(s) (F4 to view)[/red]")

    def preset_choices(self) -> list[PresetChoice]:
        return [
            PresetChoice(name=name, expression=self.config.presets[name])
            for name in self.config.preset_names()
        ]

    def action_pick_preset(self) -> None:
        choices = self.preset_choices()
        if not choices:
            self.status_line.update("No presets configured")
            return
        self.push_screen(PresetPickerScreen(choices), self._on_preset_selected)

    def _on_preset_selected(self, expression: str | None) -> None:
        if not expression:
            return
        self.query_one("#expression-input", Input).value = expression

    def action_show_issues(self) -> None:
        if not self.preview.issues:
            return
        expression = self.query_one("#expression-input", Input).value
        self.push_screen(IssuesScreen(expression, self.preview.issues))

    def action_copy_result(self) -> None:
        if not self.preview.ok:
            self.status_line.update("[red]Nothing to copy[/red]")
            return
        text = format_moment(self.preview.result, self.config.display.output_format)
        self.status_line.update(copy_text(text, label="result"))
