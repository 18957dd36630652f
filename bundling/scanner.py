"""
Directive scanning - finds inclusion directives in a script's text.

Scanning is line oriented: a line is a candidate only when it starts with
one of the two directive prefixes, and candidates are then parsed with the
directive grammar to pull out the target path.
"""

from enum import Enum

from lark import Lark, Transformer
from lark.exceptions import UnexpectedInput
from pydantic import BaseModel, ConfigDict

from bundling.grammar import COMMENT_IMPORT_PREFIX, SOURCE_PREFIX, directive_grammar
from bundling.log import debug_log


class DirectiveMode(str, Enum):
    """How a directive's target path is resolved."""
    IMPORT = "import"  # relative to the file containing the directive
    SOURCE = "source"  # relative to the root file's directory


PREFIXES = {
    DirectiveMode.IMPORT: COMMENT_IMPORT_PREFIX,
    DirectiveMode.SOURCE: SOURCE_PREFIX,
}


class Directive(BaseModel):
    """One directive line found in a file."""
    model_config = ConfigDict(frozen=True)

    line_index: int
    mode: DirectiveMode
    raw_target: str


def split_lines(text):
    """Split text after each newline, keeping endings. Form feeds and bare CRs stay inside lines."""
    lines = [line + '\n' for line in text.split('\n')]
    lines[-1] = lines[-1][:-1]
    if not lines[-1]:
        lines.pop()
    return lines


class DirectiveTransformer(Transformer):
    """Turns a parsed directive line into a (mode, raw_target) pair."""

    def start(self, items):
        return items[0]

    def comment_import(self, items):
        return DirectiveMode.IMPORT, items[0]

    def source_statement(self, items):
        return DirectiveMode.SOURCE, items[0]

    def target(self, items):
        return str(items[0]) if items else ""

    def QUOTED_PATH(self, token):
        return token[1:-1]


class DirectiveScan:
    """
    Lazy view over the directives of one text.

    Iterating starts a fresh scan from the first line, so the same object
    can be walked any number of times.
    """

    def __init__(self, scanner, text, modes):
        self._scanner = scanner
        self._text = text
        self._modes = modes

    def __iter__(self):
        prefixes = tuple(PREFIXES[mode] for mode in self._modes)
        if not prefixes:
            return
        for index, line in enumerate(split_lines(self._text)):
            line = line.rstrip('\n').removesuffix('\r')
            if not line.startswith(prefixes):
                continue
            directive = self._scanner.parse_line(line, index)
            if directive is not None and directive.mode in self._modes:
                yield directive


class DirectiveScanner:
    """Parses directive lines with the directive grammar."""

    def __init__(self):
        self._parser = Lark(directive_grammar, parser='lalr')
        self._transformer = DirectiveTransformer()

    def scan(self, text, modes=None):
        """
        Scan text for directives.

        Args:
            text: Full contents of one file
            modes: Directive modes to recognise (default: both)

        Returns:
            A restartable iterable of Directive, in line order
        """
        if modes is None:
            modes = tuple(DirectiveMode)
        return DirectiveScan(self, text, frozenset(modes))

    def parse_line(self, line, line_index):
        """Parse one candidate line; returns None when it is not a well-formed directive."""
        try:
            tree = self._parser.parse(line)
        except UnexpectedInput as e:
            debug_log(f"Line {line_index + 1} looks like a directive but is not one: {e}")
            return None
        mode, raw_target = self._transformer.transform(tree)
        return Directive(line_index=line_index, mode=mode, raw_target=raw_target)


_default_scanner = None


def scan(text, modes=None):
    """Scan text with a shared DirectiveScanner."""
    global _default_scanner
    if _default_scanner is None:
        _default_scanner = DirectiveScanner()
    return _default_scanner.scan(text, modes)
