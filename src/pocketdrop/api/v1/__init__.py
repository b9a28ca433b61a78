# API v1 router aggregation.
# Created: 2026-10-12
#
# mount_routers(app) registers every domain router at the root (used by the
# bundled front-end) and at /api/v1/ (canonical, versioned).

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fastapi import FastAPI

logger = logging.getLogger(__name__)

# Domain routers - imported lazily inside mount_routers().
_V1_ROUTERS: list[tuple[str, str, str]] = [
    # (module_path, attr_name, tag)
    ("pocketdrop.api.v1.files", "router", "Files"),
    ("pocketdrop.api.v1.transfer", "router", "Transfer"),
    ("pocketdrop.api.v1.text", "router", "Text"),
    ("pocketdrop.api.v1.health", "router", "Health"),
]

MOUNT_PREFIXES: tuple[str, ...] = ("", "/api/v1")


def mount_routers(app: FastAPI, prefixes: tuple[str, ...] = MOUNT_PREFIXES) -> None:
    """Mount all v1 domain routers on *app* under each of *prefixes*."""
    import importlib

    from fastapi import APIRouter

    for module_path, attr_name, tag in _V1_ROUTERS:
        try:
            mod = importlib.import_module(module_path)
            router: APIRouter = getattr(mod, attr_name)
        except Exception:
            logger.warning("Failed to import router %s", module_path, exc_info=True)
            continue

        for prefix in prefixes:
            # The root mount is what the front-end uses; keep it out of the docs
            app.include_router(router, prefix=prefix, include_in_schema=bool(prefix))
        logger.debug("Mounted router: %s (%s)", module_path, tag)
