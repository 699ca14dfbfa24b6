from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, TextIO

from rich.prompt import Confirm, Prompt

from .console import StatusConsole
from .pipeline import CANONICAL_ORDER, Selection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MenuChoice:
    key: str
    label: str
    # None for the two entries that are not a fixed selection.
    selection: Optional[Selection]


CUSTOM = "8"
EXIT = "9"

MAIN_MENU = [
    MenuChoice("1", "📦 Install All (Recommended)", Selection.all()),
    MenuChoice("2", "⚙️ System Configuration Only", Selection.single("configuration")),
    MenuChoice("3", "📊 Monitoring Stack (Grafana + InfluxDB)", Selection.single("monitoring")),
    MenuChoice("4", "🔒 Network Security Tools", Selection.single("network_tools")),
    MenuChoice("5", "🗄️ Database (PostgreSQL)", Selection.single("database")),
    MenuChoice("6", "🌐 GPS Tools", Selection.single("gps")),
    MenuChoice("7", "🛠️ Essential Packages Only", Selection.single("essentials")),
    MenuChoice(CUSTOM, "Custom Selection", None),
    MenuChoice(EXIT, "Exit", None),
]

CUSTOM_LABELS = {
    "update": "System Update",
    "essentials": "Essential Packages",
    "configuration": "System Configuration",
    "monitoring": "Monitoring Stack",
    "network_tools": "Network Tools",
    "database": "Database",
    "gps": "GPS Tools",
}
CUSTOM_DEFAULTS = ("update", "essentials", "configuration")


def parse_custom_choice(text: str) -> List[str]:
    """Turn "1, 3 5" style input into group ids, numbered as in CANONICAL_ORDER."""

    picked: List[str] = []
    for token in text.replace(",", " ").split():
        if not token.isdigit() or not 1 <= int(token) <= len(CANONICAL_ORDER):
            raise ValueError(f"Invalid component number: {token}")
        group_id = CANONICAL_ORDER[int(token) - 1]
        if group_id not in picked:
            picked.append(group_id)
    return picked


def prompt_custom_selection(console: StatusConsole, stream: Optional[TextIO] = None) -> Selection:
    console.header("Custom Selection")
    for i, group_id in enumerate(CANONICAL_ORDER, start=1):
        mark = "x" if group_id in CUSTOM_DEFAULTS else " "
        console.console.print(f"  [{mark}] {i}) {CUSTOM_LABELS[group_id]}", markup=False)

    default = " ".join(str(CANONICAL_ORDER.index(g) + 1) for g in CUSTOM_DEFAULTS)
    while True:
        answer = Prompt.ask(
            "Select components to install (numbers, space or comma separated; '-' for none)",
            default=default,
            console=console.console,
            stream=stream,
        )
        if answer.strip() == "-":
            return Selection.subset(())
        try:
            picked = parse_custom_choice(answer)
        except ValueError as e:
            console.error(str(e))
            continue
        logger.info("Custom selection: %s", ",".join(picked))
        return Selection.subset(picked)


def prompt_main_menu(console: StatusConsole, stream: Optional[TextIO] = None) -> Optional[Selection]:
    """Show the main menu; return the chosen Selection or None to exit."""

    console.header("Raspberry Pi 5 Automated Setup")
    console.console.print("Select installation options:", style="label")
    for item in MAIN_MENU:
        console.console.print(f"{item.key}) {item.label}", markup=False)

    choice = Prompt.ask(
        "Enter your choice [1-9]",
        choices=[item.key for item in MAIN_MENU],
        show_choices=False,
        console=console.console,
        stream=stream,
    )
    logger.info("Menu choice: %s", choice)
    if choice == EXIT:
        return None
    if choice == CUSTOM:
        return prompt_custom_selection(console, stream=stream)
    return next(item.selection for item in MAIN_MENU if item.key == choice)


def confirm(console: StatusConsole, question: str, *, default: bool = False, stream: Optional[TextIO] = None) -> bool:
    return Confirm.ask(question, default=default, console=console.console, stream=stream)
