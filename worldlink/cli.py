#!filepath: worldlink/cli.py
import asyncio
from typing import Optional

import typer
from rich import print
from rich.markup import escape

from worldlink import __version__
from worldlink.config.app_config import AppConfig
from worldlink.session import run_session
from worldlink.utils.errors import ConnectionFailedError, TransportError
from worldlink.utils.logger import init_logging
from worldlink.world.world_state import WorldState

app = typer.Typer(help="worldlink simulation client CLI")


@app.command()
def version():
    print(f"v{__version__}")


@app.command()
def connect(
    url: Optional[str] = typer.Option(None, "--url", help="ws:// address, overrides config"),
    nickname: Optional[str] = typer.Option(None, "--nickname", help="send Login after connect"),
    config: Optional[str] = typer.Option(None, "--config", help="YAML config path"),
    poll: bool = typer.Option(False, "--poll", help="tick-driven loop instead of event-driven"),
):
    """
    连接服务器并同步世界状态，直到服务端关闭或 Ctrl-C
    """
    cfg = AppConfig.load(config)
    init_logging(cfg.log)

    world = WorldState(scale=cfg.world.scale)
    target = url or cfg.connection.url
    print(f"[green]Connecting to {target}[/green]")

    try:
        asyncio.run(run_session(cfg, world, url=target, nickname=nickname, poll=poll))
    except ConnectionFailedError as e:
        print(f"[red]Connection failed: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)
    except TransportError as e:
        print(f"[red]Connection lost: {escape(str(e))}[/red]")
        raise typer.Exit(code=2)
    except KeyboardInterrupt:
        print("[yellow]Interrupted[/yellow]")

    print(world.summary())


if __name__ == "__main__":
    app()

# python -m worldlink.cli connect --url ws://localhost:2567 --nickname killer
