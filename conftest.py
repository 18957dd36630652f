"""
Shared pytest fixtures.
"""
import pytest


@pytest.fixture
def script_tree(tmp_path):
    """
    Write a tree of scripts under a temporary directory.

    Call it with {relative_path: contents}; returns the tree's root Path.
    """
    def write(files):
        for name, contents in files.items():
            path = tmp_path / name
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8', newline='') as f:
                f.write(contents)
        return tmp_path
    return write
