"""Application factory and server runner for ``pocketdrop``.

``create_app`` wires the core services onto ``app.state`` and mounts the
routers. ``run_server`` finds a free port, prints the LAN URL with a QR code
for phones to scan, then hands over to uvicorn.
"""

from __future__ import annotations

import logging
import socket

from pocketdrop import __version__
from pocketdrop.config import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None):
    """Build the FastAPI application.

    Raises:
        DirectoryUnavailableError: the upload directory cannot be created.
    """
    from fastapi import FastAPI
    from fastapi.staticfiles import StaticFiles

    from pocketdrop.api.v1 import mount_routers
    from pocketdrop.core.listing import DirectoryLister
    from pocketdrop.core.shared_text import SharedTextStore
    from pocketdrop.core.transfer import TransferService

    settings = settings or get_settings()

    app = FastAPI(
        title="PocketDrop API",
        description="Browse, download and drop files on this computer from your LAN.",
        version=__version__,
        docs_url="/api/v1/docs",
        redoc_url="/api/v1/redoc",
        openapi_url="/api/v1/openapi.json",
    )

    app.state.settings = settings
    app.state.transfer = TransferService(settings.upload_dir, chunk_size=settings.chunk_size)
    app.state.lister = DirectoryLister()
    app.state.text_store = SharedTextStore()
    logger.info(f"Uploads will be saved to {app.state.transfer.upload_dir}")

    mount_routers(app)

    # Mounted last so the API routes win over same-named static files
    if settings.static_dir is not None:
        if settings.static_dir.is_dir():
            app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")
        else:
            logger.warning(f"Static directory {settings.static_dir} not found; not serving it")

    return app


def get_local_ip() -> str:
    """Best-effort LAN address of this machine (no packets are sent)."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as s:
            s.connect(("8.8.8.8", 80))
            return s.getsockname()[0]
    except OSError:
        return "127.0.0.1"


def find_available_port(start_port: int, host: str = "0.0.0.0", max_attempts: int = 10) -> int:
    """Find an available port starting from start_port.

    Tries start_port first, then increments until finding an available one.
    """
    for offset in range(max_attempts):
        port = start_port + offset
        try:
            with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
                s.bind((host, port))
                return port
        except OSError:
            continue
    raise OSError(
        f"Could not find available port in range {start_port}-{start_port + max_attempts}"
    )


def render_qr(url: str) -> str:
    """Render *url* as a terminal QR code."""
    import io

    import qrcode

    qr = qrcode.QRCode(border=1)
    qr.add_data(url)
    qr.make(fit=True)
    buf = io.StringIO()
    qr.print_ascii(out=buf, invert=True)
    return buf.getvalue()


def print_banner(url: str, settings: Settings) -> None:
    print("\n" + "=" * 50)
    print("\U0001f4e5 POCKETDROP")
    print("=" * 50)
    print(f"\n\U0001f310 Server running at {url}")
    print(f"   Browsing from: {settings.browse_root}")
    print(f"   Uploads go to: {settings.upload_dir}\n")
    if settings.show_qr:
        try:
            print(render_qr(url))
        except Exception:
            logger.warning("Could not render QR code", exc_info=True)
    print("Press Ctrl+C to stop the server.\n")


def run_server(settings: Settings | None = None) -> None:
    """Start the server and block until it exits."""
    import uvicorn

    settings = settings or get_settings()
    app = create_app(settings)

    port = find_available_port(settings.port, settings.host)
    if port != settings.port:
        logger.warning(f"Port {settings.port} is busy, using {port}")

    host_for_url = get_local_ip() if settings.host == "0.0.0.0" else settings.host
    print_banner(f"http://{host_for_url}:{port}", settings)

    # log_config=None keeps the Rich handler installed by setup_logging()
    uvicorn.run(
        app,
        host=settings.host,
        port=port,
        log_config=None,
        log_level=settings.log_level.lower(),
    )
