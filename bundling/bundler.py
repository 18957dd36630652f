"""
Bundler for shell scripts.

Resolves `# import ./file.sh` (and, when enabled,
`source ./file.sh`) directives by inlining file contents.
"""
from bundling.files import read_script
from bundling.renderer import render
from bundling.resolver import BundleResolver, RootContext


def bundle(root_path, config=None, reader=read_script):
    """
    Merge root_path and everything it includes into one script.

    Args:
        root_path: Path to the root (`main`) script
        config: BundlerConfig; defaults expand `# import` only
        reader: Callable used to read each file

    Returns:
        Bundled script text

    Raises:
        MissingFileError: If a referenced file cannot be read
        PathResolutionError: If a directive path is empty or escapes the root
        CyclicImportError: If a file includes itself, directly or not
        NestingDepthError: If includes nest deeper than config.max_depth
    """
    context = RootContext.for_root(root_path, config)
    return render(BundleResolver(context, reader=reader).expand())
