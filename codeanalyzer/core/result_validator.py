"""
Result Validator — Structural checks on untrusted engine output.

Rejects engine results that:
- Report violations for rules the engine was not asked to run
- Point the primary location index outside the code location list
- Reference files that do not exist or are folders
- Carry non-positive or inverted line/column ranges

Validation is all-or-nothing for an engine's batch: the first bad
violation raises and the whole batch is discarded.
"""

from __future__ import annotations

import os

from codeanalyzer.core.errors import EngineContractError
from codeanalyzer.core.messages import get_message
from codeanalyzer.core.rule_selector import RuleSelection
from codeanalyzer.core.utils import to_absolute_path
from codeanalyzer.models.engine_models import CodeLocation, EngineRunResults, Violation


def validate_engine_run_results(
    engine_name: str,
    engine_run_results: EngineRunResults,
    rule_selection: RuleSelection,
) -> None:
    """Raise EngineContractError on the first violation that breaks the contract."""
    for violation in engine_run_results.violations:
        _validate_rule_name(engine_name, violation, rule_selection)
        _validate_primary_location_index(engine_name, violation)
        for code_location in violation.code_locations:
            _validate_code_location(engine_name, violation.rule_name, code_location)


def _validate_rule_name(engine_name: str, violation: Violation, rule_selection: RuleSelection) -> None:
    try:
        rule_selection.get_rule(engine_name, violation.rule_name)
    except LookupError as e:
        raise EngineContractError(
            get_message("EngineReturnedViolationForUnselectedRule", engine_name, violation.rule_name)
        ) from e


def _validate_primary_location_index(engine_name: str, violation: Violation) -> None:
    upper = len(violation.code_locations) - 1
    if not _is_integer_between(violation.primary_location_index, 0, upper):
        raise EngineContractError(
            get_message(
                "EngineReturnedViolationWithInvalidPrimaryLocationIndex",
                engine_name,
                violation.rule_name,
                violation.primary_location_index,
                upper,
            )
        )


def _validate_code_location(engine_name: str, rule_name: str, location: CodeLocation) -> None:
    abs_file = to_absolute_path(location.file)
    if not os.path.exists(abs_file):
        raise EngineContractError(
            get_message(
                "EngineReturnedViolationWithCodeLocationFileThatDoesNotExist",
                engine_name,
                rule_name,
                abs_file,
            )
        )
    if not os.path.isfile(abs_file):
        raise EngineContractError(
            get_message(
                "EngineReturnedViolationWithCodeLocationFileAsFolder", engine_name, rule_name, abs_file
            )
        )

    for field in ("start_line", "start_column"):
        _require_line_or_column(engine_name, rule_name, field, getattr(location, field))

    if location.end_line is not None:
        _require_line_or_column(engine_name, rule_name, "end_line", location.end_line)
        if location.end_line < location.start_line:
            raise EngineContractError(
                get_message(
                    "EngineReturnedViolationWithCodeLocationWithEndLineBeforeStartLine",
                    engine_name,
                    rule_name,
                    location.end_line,
                    location.start_line,
                )
            )

    if location.end_column is not None:
        _require_line_or_column(engine_name, rule_name, "end_column", location.end_column)
        if location.end_line == location.start_line and location.end_column < location.start_column:
            raise EngineContractError(
                get_message(
                    "EngineReturnedViolationWithCodeLocationWithEndColumnBeforeStartColumnOnSameLine",
                    engine_name,
                    rule_name,
                    location.end_column,
                    location.start_column,
                )
            )


def _require_line_or_column(engine_name: str, rule_name: str, field: str, value: object) -> None:
    if not _is_integer_between(value, 1, None):
        raise EngineContractError(
            get_message(
                "EngineReturnedViolationWithCodeLocationWithInvalidLineOrColumn",
                engine_name,
                rule_name,
                field,
                value,
            )
        )


def _is_integer_between(value: object, lower: int, upper: int | None) -> bool:
    if not isinstance(value, int) or isinstance(value, bool):
        return False
    return value >= lower and (upper is None or value <= upper)
