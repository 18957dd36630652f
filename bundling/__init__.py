# Bash Bundler - Core Components
"""
Core modules for the bundler:
- errors: Error types for every way a bundling pass can fail
- grammar: Lark grammar for directive lines
- scanner: Finds `# import` and `source` directives in a file
- paths: Resolves directive targets to files
- resolver: Depth-first expansion with cycle detection
- renderer: Final assembly of the bundle
- config: TOML and flag configuration
- bundler: One-call entry point
"""

__version__ = "0.2.0"

from .errors import (
    BundlerError,
    ConfigurationError,
    CyclicImportError,
    MissingFileError,
    NestingDepthError,
    PathResolutionError,
)
from .config import BundlerConfig, load_config, merge_config
from .scanner import Directive, DirectiveMode, DirectiveScanner, scan
from .paths import resolve_target
from .resolver import BundleResolver, RootContext, expand
from .renderer import render
from .bundler import bundle

__all__ = [
    'BundlerError',
    'ConfigurationError',
    'CyclicImportError',
    'MissingFileError',
    'NestingDepthError',
    'PathResolutionError',
    'BundlerConfig',
    'load_config',
    'merge_config',
    'Directive',
    'DirectiveMode',
    'DirectiveScanner',
    'scan',
    'resolve_target',
    'BundleResolver',
    'RootContext',
    'expand',
    'render',
    'bundle',
]
