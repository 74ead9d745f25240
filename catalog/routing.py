import pkgutil
from importlib import import_module
from pathlib import Path

from fastapi import APIRouter

from catalog.logging import logger

HTTP_API_PACKAGE = "catalog.api.http"
_HTTP_API_DIR = Path(__file__).parent / "api" / "http"

# Modules already announced in the log
_announced: set[str] = set()


def collect_subrouters() -> APIRouter:
    """
    Build one router from every `catalog.api.http` module.

    Each module must expose a module-level `router`; modules are included
    in name order so route precedence does not depend on the filesystem.
    """
    main_router = APIRouter()

    names = sorted(info.name for info in pkgutil.iter_modules([str(_HTTP_API_DIR)]))
    for name in names:
        module = import_module(f"{HTTP_API_PACKAGE}.{name}")
        main_router.include_router(module.router)

        if name not in _announced:
            logger.info(f'Register "{name}" api')
            _announced.add(name)

    return main_router
