"""7-Zip command construction.

Paths handed to 7z always use ``/`` separators so the same archive entries
are produced on every runner OS.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import List, Sequence, Union

PathLike = Union[str, Path]


def to_posix(path: PathLike) -> str:
    """Return a path string with ``/`` separators."""
    return str(path).replace(os.sep, "/")


def build_create_cmd(binary: str, archive_path: PathLike, list_file: PathLike) -> List[str]:
    """Build the 7z command that adds every path from a list file.

    Args:
        binary: 7z executable
        archive_path: Archive to create
        list_file: UTF-8 file holding one source path per line

    Returns:
        ``[binary, "a", "-spf", "-scsUTF-8", "-y", <archive>, "@<list_file>"]``
        where ``-spf`` keeps the given (workspace-relative) paths as entry
        names and ``-y`` answers every prompt.
    """
    return [binary, "a", "-spf", "-scsUTF-8", "-y", to_posix(archive_path), f"@{to_posix(list_file)}"]


def build_extract_cmd(binary: str, archive_path: PathLike) -> List[str]:
    """Build the 7z command that extracts into the working directory.

    ``-y`` overwrites existing files instead of prompting.
    """
    return [binary, "x", "-spf", "-y", to_posix(archive_path)]


def build_list_cmd(binary: str, archive_path: PathLike) -> List[str]:
    """Build the 7z command that lists archive entries."""
    return [binary, "l", to_posix(archive_path)]


def write_list_file(list_file: Path, source_paths: Sequence[str]) -> Path:
    """Write source paths to a 7z list file, one per line.

    A list file keeps long path sets off the command line.
    """
    list_file.write_text("".join(f"{to_posix(path)}\n" for path in source_paths), encoding="utf-8")
    return list_file
