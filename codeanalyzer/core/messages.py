"""
Message Templates — Every user-facing diagnostic of the core.

Templates use positional ``str.format`` fields so callers pass engine,
rule, file and numeric context in order.
"""

from __future__ import annotations

MESSAGE_CATALOG: dict[str, str] = {
    "EngineFromFutureApiDetected": (
        "The following engines use API version {0} which is newer than the supported "
        "version {2}: {1}. They may not behave as expected."
    ),
    "PluginErrorFromGetAvailableEngineNames": (
        "Failed to get the available engine names from an engine plugin. Error: {0}"
    ),
    "PluginErrorFromCreateEngine": (
        "Failed to create engine with name '{0}' due to the following error:\n{1}"
    ),
    "DuplicateEngine": (
        "Failed to add engine with name '{0}' because an engine with this name has "
        "already been added. Skipping."
    ),
    "EngineNameContradiction": (
        "Failed to add engine with name '{0}' because the engine reported its own "
        "name as '{1}'. Skipping."
    ),
    "EngineAdded": "Engine with name '{0}' was added to Code Analyzer.",
    "FailedToDynamicallyLoadModule": "Failed to load engine plugin module '{0}'. Error: {1}",
    "FailedToDynamicallyAddEnginePlugin": (
        "Failed to add engine plugin from module '{0}' because it does not expose a "
        "callable 'create_engine_plugin'."
    ),
    "EngineReturnedMultipleRulesWithSameName": (
        "Engine '{0}' returned more than one rule with the name '{1}'."
    ),
    "EngineReturnedMalformedRuleDescriptions": (
        "Engine '{0}' returned rule descriptions that do not match the engine API: {1}"
    ),
    "RulePropertyOverridden": (
        "The {0} of rule '{1}' of engine '{2}' was overridden: {3} -> {4}"
    ),
    "RuleDoesNotExistInSelection": (
        "No rule with name '{1}' and engine '{0}' exists among the selected rules."
    ),
    "FileOrFolderDoesNotExist": "The file or folder '{0}' does not exist.",
    "AtLeastOneFileOrFolderMustBeIncluded": (
        "At least one file or folder must be included in the workspace."
    ),
    "InvalidPathStartPoint": (
        "The path start point '{0}' is invalid. Expected a file or folder, optionally "
        "followed by '#' and a semicolon separated list of method names."
    ),
    "PathStartPointFileDoesNotExist": (
        "The file '{1}' of path start point '{0}' does not exist."
    ),
    "PathStartPointWithMethodMustNotBeFolder": (
        "The path start point '{0}' names methods but '{1}' is a folder, not a file."
    ),
    "PathStartPointMustBeInsideWorkspace": (
        "The path start point file '{0}' is not inside the workspace: {1}"
    ),
    "RunningWithRunOptions": "Running with the following run options: {0}",
    "RunningEngineWithRules": "Running engine '{0}' with the following rules: {1}",
    "EngineRunFailed": "Engine '{0}' failed unexpectedly while running rules: {1}",
    "EngineReturnedMalformedResults": (
        "Engine '{0}' returned results that do not match the engine API: {1}"
    ),
    "EngineReturnedViolationForUnselectedRule": (
        "Engine '{0}' returned a violation for rule '{1}' which was not selected."
    ),
    "EngineReturnedViolationWithInvalidPrimaryLocationIndex": (
        "Engine '{0}' returned a violation for rule '{1}' with primary location index "
        "{2}, but it must be an integer between 0 and {3} (one less than the number of "
        "code locations)."
    ),
    "EngineReturnedViolationWithCodeLocationFileThatDoesNotExist": (
        "Engine '{0}' returned a violation for rule '{1}' with a code location file "
        "that does not exist: {2}"
    ),
    "EngineReturnedViolationWithCodeLocationFileAsFolder": (
        "Engine '{0}' returned a violation for rule '{1}' with a code location file "
        "that is a folder: {2}"
    ),
    "EngineReturnedViolationWithCodeLocationWithInvalidLineOrColumn": (
        "Engine '{0}' returned a violation for rule '{1}' with a code location whose "
        "{2} is {3}, but it must be a positive integer."
    ),
    "EngineReturnedViolationWithCodeLocationWithEndLineBeforeStartLine": (
        "Engine '{0}' returned a violation for rule '{1}' with a code location whose "
        "endLine {2} is before its startLine {3}."
    ),
    "EngineReturnedViolationWithCodeLocationWithEndColumnBeforeStartColumnOnSameLine": (
        "Engine '{0}' returned a violation for rule '{1}' with a code location whose "
        "endColumn {2} is before its startColumn {3} on the same line."
    ),
}


def get_message(key: str, *args: object) -> str:
    """Render the template registered under ``key``."""
    return MESSAGE_CATALOG[key].format(*args)
