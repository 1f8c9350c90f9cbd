"""Main entry point for the kvcache command line tool.

Sets up the Typer CLI application, performs dependency injection (Composition
Root), defines CLI commands, and delegates execution to the CommandHandler.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from typing_extensions import Annotated

# --- Core Layer ---
from kvcache.core.caching_store import CachingStore
from kvcache.core.command_handler import CommandHandler

# --- Domain Layer ---
from kvcache.domain.exceptions import KeyValueStoreError

# --- Infrastructure Layer ---
from kvcache.infrastructure.cache.disk_cache import DiskCacheAdapter
from kvcache.infrastructure.cache.memory_cache import MemoryCache
from kvcache.infrastructure.cli.display import ConsoleDisplay
from kvcache.infrastructure.config.settings import (
    get_cache_backend, get_cache_dir, get_cache_max_items, get_cache_ttl,
    get_config, get_store_dir, load_configuration, set_config,
)
from kvcache.infrastructure.monitoring.logger_setup import parse_log_level, setup_logging
from kvcache.infrastructure.stores.disk_store import DiskStore

logger = logging.getLogger(__name__)


# --- Dependency Injection Container (Manual) ---

def create_dependencies() -> Dict[str, Any]:
    """Creates and wires up all dependencies for the application.

    This acts as the Composition Root. Configuration must already be loaded.
    """
    setup_logging(
        log_level=parse_log_level(get_config('logging.level', 'WARNING')),
        log_format=get_config('logging.format', '%(asctime)s - %(name)s - %(levelname)s - %(message)s'),
        log_file=get_config('logging.file'),
    )

    # Validate settings before opening anything on disk
    backend = get_cache_backend()
    ttl = get_cache_ttl()
    max_items = get_cache_max_items()

    dependencies: Dict[str, Any] = {}
    dependencies['ui'] = ConsoleDisplay()
    dependencies['store'] = DiskStore(get_store_dir())

    if backend == 'memory':
        dependencies['cache'] = MemoryCache(max_items=max_items)
    else:
        dependencies['cache'] = DiskCacheAdapter(get_cache_dir())

    dependencies['caching_store'] = CachingStore(dependencies['store'], dependencies['cache'], ttl=ttl)
    dependencies['command_handler'] = CommandHandler(
        store=dependencies['caching_store'],
        ui=dependencies['ui'],
    )
    logger.info("All dependencies initialized successfully.")
    return dependencies


def close_dependencies(dependencies: Dict[str, Any]) -> None:
    for name in ('store', 'cache'):
        close = getattr(dependencies.get(name), 'close', None)
        if close is not None:
            close()


def parse_value(raw: Optional[str]) -> Any:
    """Parses a command line value as JSON, falling back to the raw string."""
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return raw


# --- Typer App Definition ---
app = typer.Typer(
    name="kvcache",
    help="Key-value store with a transparent cache layer.",
    add_completion=False,
)

DefaultOption = Annotated[
    Optional[str],
    typer.Option("--default", "-d", help="Value returned for missing keys (parsed as JSON).")
]

FailOption = Annotated[
    bool,
    typer.Option("--fail", help="Fail instead of returning the default for missing keys.")
]


def _handler(ctx: typer.Context) -> CommandHandler:
    return ctx.obj['command_handler']


def _exit_unless(success: bool) -> None:
    if not success:
        raise typer.Exit(code=1)


@app.callback()
def main_callback(
    ctx: typer.Context,
    store_dir: Annotated[Optional[Path], typer.Option("--store-dir", help="Directory of the durable store.")] = None,
    cache_dir: Annotated[Optional[Path], typer.Option("--cache-dir", help="Directory of the disk cache.")] = None,
    ttl: Annotated[Optional[int], typer.Option("--ttl", min=0, help="Cache time-to-live in seconds (0 = never expires).")] = None,
):
    """Loads configuration and wires the caching store before any command runs."""
    load_configuration()
    if store_dir is not None:
        set_config('store.directory', str(store_dir))
    if cache_dir is not None:
        set_config('cache.directory', str(cache_dir))
    if ttl is not None:
        set_config('cache.ttl_seconds', ttl)

    try:
        dependencies = create_dependencies()
    except KeyValueStoreError as e:
        logger.error(f"Fatal error during initialization: {e}", exc_info=True)
        ConsoleDisplay().display_error(f"Initialization failed: {e}")
        raise typer.Exit(code=1)

    ctx.obj = dependencies
    ctx.call_on_close(lambda: close_dependencies(dependencies))


@app.command(name="set")
def set_command(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Key to write.")],
    value: Annotated[str, typer.Argument(help="Value to store (parsed as JSON).")],
):
    """Store a value under a key."""
    _exit_unless(_handler(ctx).handle_set(key, parse_value(value)))


@app.command(name="get")
def get_command(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Key to read.")],
    default: DefaultOption = None,
    fail: FailOption = False,
):
    """Read the value of a key."""
    _exit_unless(_handler(ctx).handle_get(key, parse_value(default), fail=fail))


@app.command(name="get-many")
def get_many_command(
    ctx: typer.Context,
    keys: Annotated[List[str], typer.Argument(help="Keys to read.")],
    default: DefaultOption = None,
    fail: FailOption = False,
):
    """Read the values of several keys."""
    _exit_unless(_handler(ctx).handle_get_many(keys, parse_value(default), fail=fail))


@app.command(name="remove")
def remove_command(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Key to remove.")],
):
    """Remove a key from the store and the cache."""
    _exit_unless(_handler(ctx).handle_remove(key))


@app.command(name="exists")
def exists_command(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Key to look up.")],
):
    """Check whether a key exists. Exits with 1 if it does not."""
    _exit_unless(_handler(ctx).handle_exists(key))


@app.command(name="keys")
def keys_command(ctx: typer.Context):
    """List all keys of the store."""
    _exit_unless(_handler(ctx).handle_keys())


@app.command(name="clear")
def clear_command(ctx: typer.Context):
    """Remove every key from the store and the cache."""
    _exit_unless(_handler(ctx).handle_clear())


# --- Main Execution Guard ---

def cli_entry_point():
    """Function to be called by the script entry point in pyproject.toml."""
    app()


if __name__ == "__main__":
    cli_entry_point()
