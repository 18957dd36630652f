"""
Path resolution for directive targets.

`# import` targets are relative to the directory of the file that contains
them, `source` targets are relative to the root file's directory. No
existence check happens here; reading the file reports missing targets.
"""
import os

from bundling.errors import PathResolutionError
from bundling.scanner import DirectiveMode


def canonical_path(path):
    """Absolute, normalized form of path (symlinks are not followed)."""
    return os.path.normpath(os.path.abspath(path))


def normalize(path):
    """
    Collapse '.' and '..' components of an absolute path.

    Unlike os.path.normpath, a '..' that would climb above the filesystem
    root is an error instead of being dropped.
    """
    if os.altsep:
        path = path.replace(os.altsep, os.sep)
    drive, rest = os.path.splitdrive(path)

    parts = []
    for part in rest.split(os.sep):
        if part in ('', '.'):
            continue
        if part == '..':
            if not parts:
                raise PathResolutionError(path, "'..' escapes the filesystem root")
            parts.pop()
        else:
            parts.append(part)

    return drive + os.sep + os.sep.join(parts)


def resolve_target(raw_target, mode, current_file_dir, root_dir):
    """
    Compute the file a directive points at.

    Args:
        raw_target: Path text taken from the directive line
        mode: DirectiveMode of the directive
        current_file_dir: Directory of the file containing the directive
        root_dir: Directory of the root file

    Returns:
        Canonical absolute path of the target

    Raises:
        PathResolutionError: If the target is empty or escapes the root
    """
    if not raw_target or not raw_target.strip():
        raise PathResolutionError(raw_target, "empty path")

    if mode is DirectiveMode.IMPORT:
        base_dir = current_file_dir
    elif mode is DirectiveMode.SOURCE:
        base_dir = root_dir
    else:
        raise PathResolutionError(raw_target, f"unknown directive mode {mode!r}")

    joined = os.path.join(os.path.abspath(base_dir), raw_target)
    try:
        return normalize(joined)
    except PathResolutionError as e:
        raise PathResolutionError(raw_target, e.reason) from None
