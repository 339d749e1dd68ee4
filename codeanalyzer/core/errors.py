"""
Error taxonomy for the analyzer core.
"""

from __future__ import annotations


class CodeAnalyzerError(Exception):
    """Base class for all analyzer errors."""


class InvalidInputError(CodeAnalyzerError, ValueError):
    """Bad workspace, empty run scope, or malformed path start point."""


class EngineContractError(CodeAnalyzerError):
    """An engine returned data that breaks the engine API contract."""


class PluginError(CodeAnalyzerError):
    """A plugin failed while being enumerated."""


class PluginLoadError(PluginError):
    """A plugin module could not be resolved or does not expose a factory."""
