"""
Collects/bundles bash files into one file.

By default uses the safer `# import ./filename.sh` syntax to include other
bash files, but can also expand the existing `source ./filename.sh` syntax.

`# import` paths are relative to the file containing them; `source` paths
are relative to the root file, so sourcing scripts keep working unbundled:

    cd src
    ./my_project.sh

Configs can be used to save arguments:

    [bundler]
    replace_source = true
    replace_comment = false
    root_path = "./src/my_project.sh"
"""
import argparse
import sys

from bundling import __version__
from bundling.bundler import bundle
from bundling.config import load_config, merge_config
from bundling.errors import BundlerError, ConfigurationError
from bundling.files import write_output
from bundling.log import debug_log, error, log, set_verbose


def build_parser():
    parser = argparse.ArgumentParser(
        prog="bash_bundler",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("root_path", nargs="?", help="starting or `main` bash file")
    parser.add_argument("-c", "--config", help="path to your toml config")
    parser.add_argument("--enable-source", dest="replace_source", action="store_const", const=True,
                        help="enable the `source ./file.sh` syntax")
    parser.add_argument("--disable-comment", dest="replace_comment", action="store_const", const=False,
                        help="disable the `# import ./file.sh` syntax")
    parser.add_argument("--max-depth", type=int, help="maximum include nesting (default: 512)")
    parser.add_argument("-o", "--output", help="write the bundle to this file instead of stdout")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose output (sent to stderr)")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_config(args):
    """Merge command-line flags over the config file, if one was given."""
    base = load_config(args.config) if args.config else None
    config = merge_config(
        base,
        root_path=args.root_path,
        replace_source=args.replace_source,
        replace_comment=args.replace_comment,
        max_depth=args.max_depth,
    )
    if not config.root_path:
        raise ConfigurationError("no root_path given", source=args.config)
    return config


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.root_path is None and args.config is None:
        parser.error("the root path is required unless --config is given")

    set_verbose(args.verbose)

    try:
        config = resolve_config(args)
    except ConfigurationError as e:
        error(f"Invalid configuration:{e}")
        return 2

    debug_log(f"Config: {config.model_dump()}")
    try:
        output = bundle(config.root_path, config)
    except BundlerError as e:
        error(f"Bundling failed:{e}")
        return 1

    write_output(output, args.output)
    if args.output:
        log(f"Bundle written to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
