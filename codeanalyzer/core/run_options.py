"""
Run Options — Validation of a run's workspace and path start points.

A path start point is ``<file or folder>`` or ``<file>#<method>[;<method>...]``.
Every resulting file must lie inside the workspace.
"""

from __future__ import annotations

import json
import os
import re
from dataclasses import dataclass, field

from codeanalyzer.core.engine_api import EngineRunOptions
from codeanalyzer.core.errors import InvalidInputError
from codeanalyzer.core.messages import get_message
from codeanalyzer.core.utils import to_absolute_path
from codeanalyzer.core.workspace import Workspace
from codeanalyzer.models.engine_models import PathPoint

VALID_METHOD_NAME = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")
TRAILING_SPACES_AND_SEMICOLONS = re.compile(r"[\s;]+$")


@dataclass
class RunOptions:
    """What the caller asks to run against."""

    workspace: Workspace
    path_start_points: list[str] = field(default_factory=list)


def extract_engine_run_options(run_options: RunOptions) -> EngineRunOptions:
    """Validate ``run_options`` and convert them into the engine-facing form."""
    workspace = run_options.workspace
    if not workspace.get_files_and_folders():
        raise InvalidInputError(get_message("AtLeastOneFileOrFolderMustBeIncluded"))

    path_start_points: list[PathPoint] | None = None
    if run_options.path_start_points:
        path_start_points = [
            point
            for point_str in run_options.path_start_points
            for point in parse_path_start_point(point_str)
        ]
        validate_path_start_points_are_inside_workspace(path_start_points, workspace)

    return EngineRunOptions(workspace=workspace, path_start_points=path_start_points)


def validate_file_or_folder(file_or_folder: str) -> str:
    abs_path = to_absolute_path(file_or_folder)
    if not os.path.exists(abs_path):
        raise InvalidInputError(get_message("FileOrFolderDoesNotExist", abs_path))
    return abs_path


def parse_path_start_point(path_start_point: str) -> list[PathPoint]:
    """Split one start point string into one PathPoint per method name."""
    parts = path_start_point.split("#")
    if len(parts) == 1:
        return [PathPoint(file=validate_file_or_folder(path_start_point))]
    if len(parts) > 2:
        raise InvalidInputError(get_message("InvalidPathStartPoint", path_start_point))

    file = _validate_path_start_point_file(parts[0], path_start_point)
    method_names = TRAILING_SPACES_AND_SEMICOLONS.sub("", parts[1]).split(";")
    points: list[PathPoint] = []
    for method_name in method_names:
        if not VALID_METHOD_NAME.match(method_name):
            raise InvalidInputError(get_message("InvalidPathStartPoint", path_start_point))
        points.append(PathPoint(file=file, method_name=method_name))
    return points


def _validate_path_start_point_file(file: str, path_start_point: str) -> str:
    abs_file = to_absolute_path(file)
    if not os.path.exists(abs_file):
        raise InvalidInputError(
            get_message("PathStartPointFileDoesNotExist", path_start_point, abs_file)
        )
    if os.path.isdir(abs_file):
        raise InvalidInputError(
            get_message("PathStartPointWithMethodMustNotBeFolder", path_start_point, abs_file)
        )
    return abs_file


def validate_path_start_points_are_inside_workspace(
    path_start_points: list[PathPoint], workspace: Workspace
) -> None:
    files_and_folders = workspace.get_files_and_folders()
    for point in path_start_points:
        if not _file_is_underneath(point.file, files_and_folders):
            raise InvalidInputError(
                get_message(
                    "PathStartPointMustBeInsideWorkspace", point.file, json.dumps(files_and_folders)
                )
            )


def _file_is_underneath(file: str, files_and_folders: list[str]) -> bool:
    for file_or_folder in files_and_folders:
        if file == file_or_folder:
            return True
        if os.path.isdir(file_or_folder) and file.startswith(file_or_folder.rstrip(os.sep) + os.sep):
            return True
    return False
