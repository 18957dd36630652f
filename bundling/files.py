"""
File access used by the bundler.
"""
import sys


def read_script(path):
    """Read a script as text, keeping its line endings exactly."""
    with open(path, 'r', encoding='utf-8', newline='') as f:
        return f.read()


def write_output(text, output_path=None):
    """
    Write the bundled script to output_path, or to stdout when it is None.

    Output always ends with a newline.
    """
    if not text.endswith('\n'):
        text += '\n'
    if output_path is None:
        sys.stdout.write(text)
        sys.stdout.flush()
        return
    with open(output_path, 'w', encoding='utf-8', newline='') as f:
        f.write(text)
