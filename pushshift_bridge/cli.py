"""Command-line interface for the Pushshift bridge."""

import logging
import sys
from typing import Optional
from urllib.parse import urlsplit

import typer
from typing_extensions import Annotated

from pushshift_bridge.config.settings import get_settings

app = typer.Typer(help="Pushshift Bridge - authenticated search endpoint")
logger = logging.getLogger(__name__)


@app.command("serve")
def serve(
    host: Annotated[Optional[str], typer.Option("--host", help="Interface to bind")] = None,
    port: Annotated[Optional[int], typer.Option("--port", "-p", help="Port to listen on")] = None,
    reload: Annotated[bool, typer.Option("--reload", help="Reload on code changes")] = False,
) -> None:
    """Run the API server with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "pushshift_bridge.api.main:app",
        host=host or settings.API_HOST,
        port=port or settings.API_PORT,
        reload=reload,
    )


@app.command("check-config")
def check_config() -> None:
    """Report whether the required secrets are configured."""
    settings = get_settings()
    missing = settings.missing_secrets()
    if missing:
        for name in missing:
            typer.echo(f"✗ {name} is not set", err=True)
        sys.exit(1)
    # The URL may embed credentials or a token; only the host is shown
    host = urlsplit(settings.PUSHSHIFT_BRIDGE_URL).hostname or "<unparsed>"
    typer.echo(f"✓ Bridge URL is set (host: {host})")
    typer.echo("✓ API key is set")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
