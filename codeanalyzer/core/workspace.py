"""
Workspace — Immutable handle over the files and folders being analyzed.

The recursive expansion of folders into files is computed on first use and
cached for the lifetime of the workspace.
"""

from __future__ import annotations

import asyncio
import logging
import os

logger = logging.getLogger("codeanalyzer.workspace")


class Workspace:
    """A uniquely identified set of absolute file/folder paths."""

    def __init__(self, workspace_id: str, files_and_folders: list[str]) -> None:
        self._workspace_id = workspace_id
        self._files_and_folders = tuple(files_and_folders)
        self._expanded_files: tuple[str, ...] | None = None
        self._expansion_lock = asyncio.Lock()

    @property
    def workspace_id(self) -> str:
        return self._workspace_id

    def get_files_and_folders(self) -> list[str]:
        return list(self._files_and_folders)

    def get_workspace_root(self) -> str | None:
        """Deepest folder that contains every file and folder of the workspace."""
        if not self._files_and_folders:
            return None
        folders = [
            p if os.path.isdir(p) else os.path.dirname(p) for p in self._files_and_folders
        ]
        return os.path.commonpath(folders)

    async def get_expanded_files(self) -> list[str]:
        """Sorted list of every file, with folders recursively flattened."""
        if self._expanded_files is None:
            async with self._expansion_lock:
                if self._expanded_files is None:
                    files = await asyncio.to_thread(_expand, self._files_and_folders)
                    self._expanded_files = tuple(files)
                    logger.debug(
                        f"[{self._workspace_id}] Expanded {len(self._files_and_folders)} "
                        f"inputs into {len(files)} files"
                    )
        return list(self._expanded_files)

    def __repr__(self) -> str:
        return f"Workspace(id={self._workspace_id!r}, files_and_folders={list(self._files_and_folders)!r})"


def _expand(files_and_folders: tuple[str, ...]) -> list[str]:
    files: set[str] = set()
    for file_or_folder in files_and_folders:
        if os.path.isdir(file_or_folder):
            for dirpath, _dirnames, filenames in os.walk(file_or_folder):
                for filename in filenames:
                    files.add(os.path.join(dirpath, filename))
        elif os.path.isfile(file_or_folder):
            files.add(file_or_folder)
    return sorted(files)
