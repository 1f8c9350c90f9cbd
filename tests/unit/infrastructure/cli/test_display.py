import pytest
from unittest.mock import MagicMock

from rich.console import Console
from rich.pretty import Pretty
from rich.table import Table

from kvcache.infrastructure.cli.display import ConsoleDisplay


@pytest.fixture
def mock_console():
    """Fixture to create a mock rich Console object."""
    return MagicMock(spec=Console)


@pytest.fixture
def console_display(mock_console: MagicMock):
    return ConsoleDisplay(console=mock_console)


def test_display_value_prints_pretty(console_display: ConsoleDisplay, mock_console: MagicMock):
    console_display.display_value({"a": 1})

    args, _ = mock_console.print.call_args
    assert isinstance(args[0], Pretty)


def test_display_values_prints_table(console_display: ConsoleDisplay, mock_console: MagicMock):
    console_display.display_values({"a": 1, "b": 2})

    args, _ = mock_console.print.call_args
    assert isinstance(args[0], Table)
    assert args[0].row_count == 2


def test_display_error_escapes_markup(console_display: ConsoleDisplay, mock_console: MagicMock):
    console_display.display_error("The key '[x]' does not exist.")
    mock_console.print.assert_called_once_with("[bold red]Error:[/bold red] The key '\\[x]' does not exist.")


def test_display_info(console_display: ConsoleDisplay, mock_console: MagicMock):
    console_display.display_info("Process completed")
    mock_console.print.assert_called_once_with("[blue]Info:[/blue] Process completed")


def test_renders_to_real_console():
    console = Console(record=True, width=80)
    display = ConsoleDisplay(console=console)

    display.display_values({"greeting": "hello"})

    output = console.export_text()
    assert "greeting" in output
    assert "'hello'" in output
