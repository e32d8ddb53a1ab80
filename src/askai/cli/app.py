"""Command-line entry point using Typer."""

import typer
from rich.console import Console
from rich.table import Table

from ..auth import TokenIssuer
from ..config import ServiceConfig, configure_logging
from ..errors import AskAIError

app = typer.Typer(
    name="askai",
    help="Workflow assistant backend: chat, code answers and suggestions",
    no_args_is_help=True,
    add_completion=True,
)

console = Console()


def _load_config() -> ServiceConfig:
    try:
        return ServiceConfig.from_env()
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address (default: $HOST or 0.0.0.0)"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port (default: $PORT or 8080)"),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level (default: $LOG_LEVEL)"),
):
    """Run the HTTP service."""
    import uvicorn

    from ..api import create_app_from_config

    config = _load_config()
    level = log_level or config.log_level
    configure_logging(level)

    if not config.llm_api_key:
        console.print(
            f"[yellow]Warning: no {config.llm_provider} key set, "
            f"/ask-ai and /chat will return 500[/yellow]"
        )

    console.print(f"[green]askai-service running on :{port or config.port}[/green]")
    uvicorn.run(
        create_app_from_config(config),
        host=host or config.host,
        port=port or config.port,
        log_level=level.lower(),
    )


@app.command()
def token(license_cert: str = typer.Argument(..., help="License certificate to embed")):
    """Issue an access token signed with $JWT_SECRET."""
    config = _load_config()
    issuer = TokenIssuer(config.jwt_secret, ttl_seconds=config.token_ttl_seconds)
    try:
        console.print(issuer.issue(license_cert), soft_wrap=True)
    except AskAIError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(code=1)


@app.command()
def config():
    """Show the effective configuration (secrets masked)."""
    cfg = _load_config()
    table = Table(title="askai-service configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    masked = {"jwt_secret", "llm_api_key"}
    for name, value in cfg.model_dump().items():
        if name in masked:
            value = "****" if value else "[dim]not set[/dim]"
        table.add_row(name, str(value))
    console.print(table)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
