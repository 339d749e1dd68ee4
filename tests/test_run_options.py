"""
Tests for run option validation — workspace scope and path start points.
"""

import json

import pytest

from codeanalyzer.core.errors import InvalidInputError
from codeanalyzer.core.run_options import (
    RunOptions,
    extract_engine_run_options,
    parse_path_start_point,
)
from codeanalyzer.core.workspace import Workspace
from codeanalyzer.models.engine_models import PathPoint


@pytest.fixture
def in_sample_dir(sample_workspace_dir, monkeypatch):
    monkeypatch.chdir(sample_workspace_dir)
    return sample_workspace_dir


def test_empty_workspace_is_rejected():
    with pytest.raises(InvalidInputError, match="At least one file or folder"):
        extract_engine_run_options(RunOptions(workspace=Workspace("w", [])))


def test_no_start_points_gives_none(in_sample_dir):
    workspace = Workspace("w", [str(in_sample_dir)])
    options = extract_engine_run_options(RunOptions(workspace=workspace))
    assert options.workspace is workspace
    assert options.path_start_points is None


def test_method_list_splits_into_points(in_sample_dir):
    foo = str(in_sample_dir / "src" / "Foo.cls")
    assert parse_path_start_point("src/Foo.cls#bar;baz") == [
        PathPoint(file=foo, method_name="bar"),
        PathPoint(file=foo, method_name="baz"),
    ]


def test_trailing_semicolon_and_spaces_are_trimmed(in_sample_dir):
    assert parse_path_start_point("src/Foo.cls#bar;baz;   ") == parse_path_start_point(
        "src/Foo.cls#bar;baz"
    )


def test_file_or_folder_without_method(in_sample_dir):
    assert parse_path_start_point("src") == [PathPoint(file=str(in_sample_dir / "src"))]
    assert parse_path_start_point("src/Bar.cls") == [
        PathPoint(file=str(in_sample_dir / "src" / "Bar.cls"))
    ]


@pytest.mark.parametrize(
    "point",
    [
        "src/Foo.cls#bar#baz",
        "src/Foo.cls#",
        "src/Foo.cls#;",
        "src/Foo.cls#1bar",
        "src/Foo.cls#bar;;baz",
        "src/Foo.cls#ba-r",
        "src/Foo.cls#bar baz",
    ],
)
def test_malformed_start_points_are_rejected(in_sample_dir, point):
    with pytest.raises(InvalidInputError, match="is invalid"):
        parse_path_start_point(point)


def test_missing_start_point_file(in_sample_dir):
    with pytest.raises(InvalidInputError, match="does not exist"):
        parse_path_start_point("src/Missing.cls#bar")
    with pytest.raises(InvalidInputError, match="does not exist"):
        parse_path_start_point("src/Missing.cls")


def test_folder_with_method_is_rejected(in_sample_dir):
    with pytest.raises(InvalidInputError, match="is a folder"):
        parse_path_start_point("src#bar")


def test_start_points_inside_workspace_are_accepted(in_sample_dir):
    workspace = Workspace("w", [str(in_sample_dir / "src")])
    options = extract_engine_run_options(
        RunOptions(workspace=workspace, path_start_points=["src/Foo.cls#bar", "src/sub"])
    )
    assert [p.file for p in options.path_start_points] == [
        str(in_sample_dir / "src" / "Foo.cls"),
        str(in_sample_dir / "src" / "sub"),
    ]


def test_start_point_equal_to_a_workspace_file(in_sample_dir):
    foo = str(in_sample_dir / "src" / "Foo.cls")
    workspace = Workspace("w", [foo])
    options = extract_engine_run_options(RunOptions(workspace=workspace, path_start_points=[foo]))
    assert options.path_start_points == [PathPoint(file=foo)]


def test_start_point_outside_workspace_names_file_and_inputs(in_sample_dir):
    inputs = [str(in_sample_dir / "src" / "sub")]
    workspace = Workspace("w", inputs)
    with pytest.raises(InvalidInputError) as exc_info:
        extract_engine_run_options(
            RunOptions(workspace=workspace, path_start_points=["src/Foo.cls#bar"])
        )
    message = str(exc_info.value)
    assert str(in_sample_dir / "src" / "Foo.cls") in message
    assert json.dumps(inputs) in message


def test_sibling_folder_with_shared_prefix_is_outside(tmp_path, monkeypatch):
    (tmp_path / "app").mkdir()
    (tmp_path / "apple").mkdir()
    (tmp_path / "apple" / "A.cls").write_text("class A {}\n")
    monkeypatch.chdir(tmp_path)
    workspace = Workspace("w", [str(tmp_path / "app")])
    with pytest.raises(InvalidInputError, match="not inside the workspace"):
        extract_engine_run_options(
            RunOptions(workspace=workspace, path_start_points=["apple/A.cls"])
        )
