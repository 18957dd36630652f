"""
Directive line grammar.

This module contains the Lark grammar for a single inclusion directive line.
Only lines that already start with one of the directive prefixes are parsed.
"""

COMMENT_IMPORT_PREFIX = "# import "
SOURCE_PREFIX = "source "

directive_grammar = r"""
    start: comment_import | source_statement

    comment_import: _COMMENT_IMPORT target
    source_statement: _SOURCE target

    // The target may be missing; the path resolver rejects empty targets.
    target: (PATH | QUOTED_PATH)? _TRAILER?

    _COMMENT_IMPORT: "# import "
    _SOURCE: "source "

    PATH: /[^\s"'][^\s]*/
    QUOTED_PATH: /"[^"]*"/ | /'[^']*'/

    // Anything after the target (usually a comment) is ignored.
    _TRAILER: /\s.*/
"""
