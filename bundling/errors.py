"""
Error types raised while bundling scripts.

Every failure aborts the whole bundling pass, so each error carries the
inclusion chain (root first) that led to it for diagnostics.
"""


class BundlerError(Exception):
    """Base error with file chain, line number and an optional hint."""
    title = "Bundling Error"

    def __init__(self, message, chain=None, line_number=None, context=None, suggestion=None):
        self.message = message
        self.chain = list(chain or [])
        self.line_number = line_number
        self.context = context  # The offending line
        self.suggestion = suggestion  # How to fix it
        super().__init__(message)

    def attach(self, chain, line_number=None, context=None):
        """Record where the error happened, keeping the deepest location already set."""
        if not self.chain:
            self.chain = list(chain)
        if self.line_number is None and line_number is not None:
            self.line_number = line_number
            self.context = context
        return self

    def __str__(self):
        return self._format_error()

    def _format_error(self):
        """Format the error message with chain, context and suggestion."""
        lines = [f"\n❌ {self.title}"]
        if self.line_number:
            lines.append(f" at line {self.line_number}")
        lines.append(":\n")

        lines.append(f"   {self.message}\n")

        if self.context:
            lines.append(f"   > {self.context}\n")

        if self.chain:
            lines.append("   Inclusion chain:\n")
            for depth, path in enumerate(self.chain):
                lines.append(f"   {'  ' * depth}-> {path}\n")

        if self.suggestion:
            lines.append(f"   💡 {self.suggestion}\n")

        return "".join(lines)


class MissingFileError(BundlerError):
    """A resolved path could not be read."""
    def __init__(self, path, chain=None, reason=None):
        self.path = path
        message = f"Cannot read file: {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(
            message,
            chain=chain,
            suggestion="Check that the directive path exists relative to the right directory",
        )


class PathResolutionError(BundlerError):
    """A directive target is empty or climbs above the filesystem root."""
    def __init__(self, raw_target, reason, chain=None):
        self.raw_target = raw_target
        self.reason = reason
        super().__init__(f"Cannot resolve '{raw_target}': {reason}", chain=chain)


class CyclicImportError(BundlerError):
    """A file appears again on its own inclusion chain."""
    title = "Circular import found"

    def __init__(self, cycle_path):
        self.cycle_path = list(cycle_path)
        cycle = " -> ".join(self.cycle_path)
        super().__init__(
            f"Cycle: {cycle}",
            chain=self.cycle_path,
            suggestion="Remove one of the directives that closes the cycle",
        )


class NestingDepthError(BundlerError):
    """Inclusion went deeper than the configured ceiling."""
    def __init__(self, limit, chain=None):
        self.limit = limit
        super().__init__(
            f"Nesting deeper than {limit} levels",
            chain=chain,
            suggestion="Raise max_depth or flatten the include tree",
        )


class ConfigurationError(BundlerError):
    """Invalid command-line flags or configuration file."""
    title = "Configuration Error"

    def __init__(self, message, source=None):
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)
