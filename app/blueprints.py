"""Blueprint registration helpers."""

from __future__ import annotations

import importlib
import pkgutil
from pathlib import Path
from typing import List

from flask import Blueprint, Flask

from common.logging import get_logger

logger = get_logger("omniconvert.app")


def _iter_blueprints(package: str = "plugins") -> List[Blueprint]:
    """Collect the blueprints exported by each plugin's ``api`` package."""

    module_path = Path(__file__).resolve().parent.parent / package
    if not module_path.exists():
        return []
    blueprints: List[Blueprint] = []
    for module_info in pkgutil.iter_modules([str(module_path)]):
        if not module_info.ispkg:
            continue
        module = importlib.import_module(f"{package}.{module_info.name}.api")
        module_blueprints = getattr(module, "blueprints", None)
        if module_blueprints:
            blueprints.extend(module_blueprints)
        else:
            logger.warning("Plugin %s exports no blueprints", module_info.name)
    return blueprints


def register_plugin_blueprints(app: Flask) -> List[str]:
    registered: List[str] = []
    for bp in _iter_blueprints():
        app.register_blueprint(bp)
        registered.append(bp.name)
    logger.debug("Registered blueprints: %s", ", ".join(registered))
    return registered


__all__ = ["register_plugin_blueprints"]
