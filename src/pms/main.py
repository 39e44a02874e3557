"""
pms - Main entry point and interactive loop
"""

from typing import Optional, Tuple

from loguru import logger

from pms import router
from pms.context import AppContext
from pms.core import config
from pms.core.console import get_console
from pms.core.output import log, setup_loguru
from pms.domain.daemon import MpdClient, QueueWatcher, refresh_queue
from pms.errors import DaemonError


def connect(cfg: config.Config, ctx: AppContext) -> Tuple[AppContext, Optional[QueueWatcher]]:
    """Connect to MPD, load the queue and start the background watcher.

    A failed connection is reported and leaves the client unset, so
    commands fail with "not connected" instead of crashing.
    """
    client = MpdClient(
        host=cfg.mpd.host,
        port=cfg.mpd.port,
        password=cfg.mpd.password,
        timeout=cfg.mpd.timeout,
    )
    try:
        client.connect()
    except DaemonError as e:
        log(str(e), level="warning")
        return ctx, None

    ctx = ctx.with_client(client)
    queue = ctx.songlists[0]
    watcher = QueueWatcher(client, queue, interval=cfg.mpd.poll_interval)
    try:
        refresh_queue(queue, client)
        watcher.version = client.status().get("playlist")
    except (DaemonError, ValueError) as e:
        log(f"Cannot load queue: {e}", level="error")

    if cfg.mpd.poll_interval > 0:
        watcher.start()
    log(f"Connected to MPD {client.server_version}, {len(queue)} songs in queue", level="success")
    return ctx, watcher


def interactive_mode(
    cfg: Optional[config.Config] = None, command: Optional[str] = None
) -> int:
    """Run the interactive command loop, or a single command line.

    Args:
        cfg: Configuration (loaded from disk if None)
        command: Command line to run instead of prompting

    Returns:
        Exit code
    """
    cfg = cfg or config.load_config()
    config.ensure_directories()
    setup_loguru(config.get_log_file_path(cfg), level=cfg.logging.level)

    ctx = AppContext.create(cfg)
    ctx, watcher = connect(cfg, ctx)
    console = get_console()

    try:
        if command is not None:
            router.handle_line(ctx, command)
            return 0

        console.print("[bold green]Welcome to pms![/bold green]")
        console.print("Type 'help' for available commands, or 'quit' to exit.")

        should_continue = True
        while should_continue:
            try:
                user_input = input("pms> ").strip()
                ctx, should_continue = router.handle_line(ctx, user_input)
            except KeyboardInterrupt:
                console.print("\n[yellow]Use 'quit' or 'exit' to leave gracefully.[/yellow]")
            except EOFError:
                console.print()
                break

        console.print("[green]Goodbye![/green]")
        return 0
    finally:
        if watcher is not None:
            watcher.stop()
        if isinstance(ctx.client, MpdClient):
            ctx.client.close()
        logger.info("Session ended")
