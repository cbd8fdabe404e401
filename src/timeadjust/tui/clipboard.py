from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pyperclip


def _state_dir() -> Path:
    return Path.home() / ".local" / "state" / "timeadjust"


def copy_text(payload: str, *, label: str = "text", state_dir: Path | None = None) -> str:
    """Copy ``payload`` to the clipboard, or save it under the state dir.

    Returns a short status message describing where the text went.
    """
    try:
        pyperclip.copy(payload)
        return f"Copied {label} to clipboard"
    except pyperclip.PyperclipException:
        pass

    target_dir = state_dir or _state_dir()
    target_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    target = target_dir / f"{label}-{stamp}.txt"
    target.write_text(payload, encoding="utf-8")
    return f"Clipboard not available; saved {label} to {target}"
