from typing import Any, Optional

from rich.console import Console
from rich.markup import escape
from rich.pretty import Pretty
from rich.table import Table

from kvcache.domain.interfaces.user_interface import UserInterface
from kvcache.domain.models.common import ValueMap


class ConsoleDisplay(UserInterface):
    """Concrete implementation of UserInterface using the rich library for console output."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def display_value(self, value: Any) -> None:
        self.console.print(Pretty(value))

    def display_values(self, values: ValueMap) -> None:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Key")
        table.add_column("Value")
        for key, value in values.items():
            table.add_row(str(key), Pretty(value))
        self.console.print(table)

    def display_info(self, message: str) -> None:
        self.console.print(f"[blue]Info:[/blue] {escape(message)}")

    def display_error(self, message: str) -> None:
        self.console.print(f"[bold red]Error:[/bold red] {escape(message)}")
