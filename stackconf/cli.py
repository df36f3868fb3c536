"""Typer CLI entrypoint."""

from __future__ import annotations

from pathlib import Path

import typer

from stackconf.core.errors import StackconfError
from stackconf.core.service import ConfigService, read_instance_values
from stackconf.core.validation import channel_mask_c_hex_str_arr

app = typer.Typer(help="Wireless stack configuration modules: board capabilities and value checks")


def _build_service() -> ConfigService:
    service = ConfigService()
    for warning in getattr(service, "load_warnings", ()):
        typer.echo(f"Warning: {warning}", err=True)
    return service


@app.command("modules")
def list_modules() -> None:
    """List configuration modules and their configurables."""
    try:
        service = _build_service()
        modules = service.list_modules()
        if not modules:
            typer.echo("No modules loaded")
            raise typer.Exit(code=1)

        for module in modules:
            typer.echo(f"{module.name}: {module.display_name}")
            for name, default in service.default_instance(module.name).items():
                typer.echo(f"  {name} (default: {default!r})")
    except StackconfError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("board")
def show_board(
    device: str = typer.Option(..., "--device", help="Device identifier, e.g. CC2652RB"),
    board: str | None = typer.Option(None, "--board", help="Board source path"),
) -> None:
    """Show the resolved board and its radio capabilities."""
    try:
        service = _build_service()
        session, flags = service.board_capabilities(device, board)
        typer.echo(f"Board: {session.board}")
        for capability, supported in flags.items():
            typer.echo(f"  {capability.value}: {'yes' if supported else 'no'}")
    except StackconfError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("defaults")
def show_defaults(module: str) -> None:
    """Print the default values of MODULE."""
    try:
        service = _build_service()
        for name, default in service.default_instance(module).items():
            typer.echo(f"{name}: {default!r}")
    except StackconfError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("validate")
def validate(
    module: str,
    values: Path | None = typer.Argument(None, help="YAML mapping of configurable values"),
    device: str | None = typer.Option(None, "--device", help="Device identifier, e.g. CC2652RB"),
    board: str | None = typer.Option(None, "--board", help="Board source path"),
) -> None:
    """Validate values for MODULE and print every issue found.

    Without VALUES the module defaults are validated. With --device the
    values are also checked against the resolved board.
    """
    if board is not None and device is None:
        typer.echo("Error: --board requires --device", err=True)
        raise typer.Exit(code=1)

    try:
        service = _build_service()
        supplied = read_instance_values(values) if values is not None else {}
        session = service.open_session(device, board) if device is not None else None
        report = service.validate(module, supplied, session)
        if report.board is not None:
            typer.echo(f"Board: {report.board}")
        for record in report.result.records:
            typer.echo(f"{record.severity.value}: {record.field}: {record.message}")
        if report.result.has_errors:
            raise typer.Exit(code=1)
        typer.echo(f"{module}: OK")
    except StackconfError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("channel-mask")
def channel_mask(channels: list[int] = typer.Argument(..., help="Selected channel numbers")) -> None:
    """Print the 17-byte channel mask for CHANNELS as C hex bytes."""
    try:
        typer.echo(", ".join(channel_mask_c_hex_str_arr(channels)))
    except StackconfError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


def run() -> None:
    app()


if __name__ == "__main__":
    run()
