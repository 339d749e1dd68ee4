"""
Plugin Loader — Turns an external module reference into an engine plugin.

A plugin module exposes a callable ``create_engine_plugin()``. References
are dotted module names or paths to ``.py`` files.
"""

from __future__ import annotations

import importlib
import importlib.util
import logging
import os
from types import ModuleType
from typing import Protocol

from codeanalyzer.core.engine_api import EnginePlugin
from codeanalyzer.core.errors import PluginLoadError
from codeanalyzer.core.messages import get_message
from codeanalyzer.core.utils import to_absolute_path

logger = logging.getLogger("codeanalyzer.plugin_loader")

PLUGIN_FACTORY_NAME = "create_engine_plugin"


class PluginLoader(Protocol):
    def load(self, module_ref: str) -> EnginePlugin: ...


class ImportlibPluginLoader:
    """Default loader backed by importlib."""

    def load(self, module_ref: str) -> EnginePlugin:
        module = self._import(module_ref)
        factory = getattr(module, PLUGIN_FACTORY_NAME, None)
        if not callable(factory):
            raise PluginLoadError(get_message("FailedToDynamicallyAddEnginePlugin", module_ref))
        logger.debug(f"Loaded engine plugin module '{module_ref}'")
        return factory()

    def _import(self, module_ref: str) -> ModuleType:
        try:
            if module_ref.endswith(".py") or os.sep in module_ref:
                return _import_from_path(to_absolute_path(module_ref))
            return importlib.import_module(module_ref)
        except Exception as e:
            raise PluginLoadError(
                get_message("FailedToDynamicallyLoadModule", module_ref, str(e))
            ) from e


def _import_from_path(path: str) -> ModuleType:
    if not os.path.isfile(path):
        raise FileNotFoundError(f"No such file: {path}")
    module_name = f"codeanalyzer_plugin_{os.path.splitext(os.path.basename(path))[0]}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot create a module spec for {path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module
