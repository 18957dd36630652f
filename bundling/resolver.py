"""
Directive expansion.

Walks the inclusion graph depth first, replacing each enabled directive line
with the expanded text of its target. The chain of files currently being
expanded is kept as a stack; meeting one of them again is a cycle. The same
file reached through separate branches is expanded once per reference.
"""
import os

from pydantic import BaseModel, ConfigDict

from bundling.config import BundlerConfig
from bundling.errors import (
    BundlerError,
    CyclicImportError,
    MissingFileError,
    NestingDepthError,
)
from bundling.files import read_script
from bundling.log import debug_log
from bundling.paths import canonical_path, resolve_target
from bundling.scanner import DirectiveMode, scan, split_lines


class RootContext(BaseModel):
    """Read-only settings shared by every level of one bundling pass."""
    model_config = ConfigDict(frozen=True)

    root_path: str
    root_dir: str
    config: BundlerConfig

    @classmethod
    def for_root(cls, root_path, config=None):
        """Build the context for bundling root_path."""
        path = canonical_path(root_path)
        return cls(
            root_path=path,
            root_dir=os.path.dirname(path),
            config=config if config is not None else BundlerConfig(),
        )

    @property
    def enabled_modes(self):
        modes = []
        if self.config.replace_comment:
            modes.append(DirectiveMode.IMPORT)
        if self.config.replace_source:
            modes.append(DirectiveMode.SOURCE)
        return tuple(modes)


def _line_ending(line):
    if not line.endswith('\n'):
        return ''
    return '\r\n' if line.endswith('\r\n') else '\n'


class BundleResolver:
    """
    Expands one root file into a single text.

    Args:
        context: RootContext for this pass
        reader: Callable returning a file's text; OSError means unreadable
    """

    def __init__(self, context, reader=read_script):
        self.context = context
        self.reader = reader
        self._stack = []  # canonical paths on the current inclusion chain
        self._keys = set()  # symlink-resolved form of the same paths

    @property
    def visiting(self):
        """Paths currently open, root first."""
        return list(self._stack)

    def expand(self, path=None):
        """Expand path (the root file by default) and return its text."""
        if path is None:
            path = self.context.root_path
        return self._expand(canonical_path(path))

    def _expand(self, path):
        # Depth-first walk over an explicit list of open frames, so nesting
        # depth is limited by max_depth rather than the interpreter stack.
        frames = [self._open(path)]
        expanded = None
        try:
            while frames:
                frame = frames[-1]
                if expanded is not None:
                    frame.substitute(expanded)
                    expanded = None

                directive = next(frame.directives, None)
                if directive is None:
                    frames.pop()
                    self._close(frame)
                    expanded = "".join(frame.lines)
                    continue

                frame.pending = directive
                try:
                    target = resolve_target(
                        directive.raw_target,
                        directive.mode,
                        frame.directory,
                        self.context.root_dir,
                    )
                    debug_log(f"  line {directive.line_index + 1}: {directive.mode.value} -> {target}")
                    frames.append(self._open(target))
                except BundlerError as e:
                    line = frame.lines[directive.line_index]
                    raise e.attach(self._stack, directive.line_index + 1, line.strip())
            return expanded
        finally:
            while frames:
                self._close(frames.pop())

    def _open(self, path):
        """Enter path: cycle and depth checks, read, push onto the chain."""
        key = os.path.realpath(path)
        if key in self._keys:
            raise CyclicImportError(self._stack + [path])
        if len(self._stack) > self.context.config.max_depth:
            raise NestingDepthError(self.context.config.max_depth, chain=self._stack + [path])

        try:
            text = self.reader(path)
        except (OSError, UnicodeDecodeError) as e:
            reason = getattr(e, 'strerror', None) or str(e)
            raise MissingFileError(path, chain=self._stack + [path], reason=reason) from e

        debug_log(f"Expanding {path} (depth {len(self._stack)})")
        self._stack.append(path)
        self._keys.add(key)
        return _Frame(path, key, text, iter(scan(text, self.context.enabled_modes)))

    def _close(self, frame):
        self._stack.pop()
        self._keys.discard(frame.key)


class _Frame:
    """One file being expanded: its lines and the directives still to visit."""

    def __init__(self, path, key, text, directives):
        self.path = path
        self.key = key
        self.directory = os.path.dirname(path)
        self.lines = split_lines(text)
        self.directives = directives
        self.pending = None

    def substitute(self, expanded):
        """Replace the pending directive line with its target's expanded text."""
        index = self.pending.line_index
        ending = _line_ending(self.lines[index])
        if ending and not expanded.endswith('\n'):
            expanded += ending
        self.lines[index] = expanded
        self.pending = None


def expand(path, context, reader=read_script):
    """Expand path under context with a fresh resolver."""
    return BundleResolver(context, reader=reader).expand(path)
