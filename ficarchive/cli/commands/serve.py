"""Run the web application."""

import uvicorn

from ficarchive.cli.console import get_console


def serve(host: str = "127.0.0.1", port: int = 8000, reload: bool = False) -> None:
    """Start the archive web server.

    Configuration comes from ARCHIVE_* environment variables and the YAML
    file named by ARCHIVE_CONFIG_FILE.

    Args:
        host: Host to bind to.
        port: Port to listen on.
        reload: Restart on code changes (development only).
    """
    get_console().info(f"Serving on http://{host}:{port}")
    uvicorn.run(
        "ficarchive.application.api.rest.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )
