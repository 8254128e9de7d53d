# CLI entrypoint - prints the startup banner and runs the probe service under uvicorn

import logging
import signal
from typing import Optional

import typer
import uvicorn
from rich.console import Console

from elbprobe.core.config import Settings, get_settings
from elbprobe.core.log_config import configure_logging
from elbprobe.main import create_app
from elbprobe.services.system_service import server_address

app = typer.Typer(help="ELB Probe: health, ping and diagnostic endpoints for load balancers")
console = Console()
logger = logging.getLogger(__name__)


def handle_shutdown_signal(signum, frame):
    """Exit with code 0 on SIGINT/SIGTERM once uvicorn hands the signal back."""
    logger.info(f"{signal.Signals(signum).name} received, shutting down gracefully")
    raise typer.Exit(code=0)


def install_signal_handlers() -> None:
    signal.signal(signal.SIGTERM, handle_shutdown_signal)
    signal.signal(signal.SIGINT, handle_shutdown_signal)


def print_banner(settings: Settings) -> None:
    base_url = f"http://localhost:{settings.port}"
    console.print(f"[bold green]🚀 Server running on port {settings.port}[/bold green]")
    console.print(f"📍 Server IP: {server_address()}")
    console.print(f"🌐 Health check: {base_url}/health")
    console.print(f"🏓 Ping endpoint: {base_url}/ping")
    console.print(f"📊 Detailed ping: {base_url}/ping/detailed")
    console.print(f"📝 Logs will be saved to: {settings.log_dir.resolve()}")


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Interface to bind (defaults to HOST or 0.0.0.0)"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port to bind (defaults to PORT or 3000)"),
):
    """
    Run the probe service until interrupted.
    """
    settings = get_settings()
    if host is not None:
        settings.host = host
    if port is not None:
        settings.port = port

    configure_logging(settings.log_level)
    service = create_app(settings)

    print_banner(settings)
    install_signal_handlers()
    uvicorn.run(service, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    app()
