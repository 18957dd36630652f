"""
Bundler configuration.

Settings come from an optional TOML file and from command-line flags;
flags win over file values. The TOML file looks like:

    [bundler]
    replace_source = true
    replace_comment = false
    root_path = "./src/main.sh"
"""
import tomllib
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from bundling.errors import ConfigurationError

CONFIG_TABLE = "bundler"
LEGACY_CONFIG_TABLE = "builder"
DEFAULT_MAX_DEPTH = 512


class BundlerConfig(BaseModel):
    """Which directive kinds are expanded, and where bundling starts."""
    model_config = ConfigDict(frozen=True, extra='forbid')

    replace_comment: bool = True
    replace_source: bool = False
    root_path: Optional[str] = None
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1)


def _describe(err):
    """Flatten a pydantic ValidationError into one line per field."""
    problems = []
    for item in err.errors():
        field = ".".join(str(part) for part in item['loc']) or "config"
        problems.append(f"{field}: {item['msg']}")
    return "; ".join(problems)


def load_config(path):
    """
    Load a BundlerConfig from a TOML file.

    The `[bundler]` table is used; the older `[builder]` table is accepted
    when `[bundler]` is absent. A file with neither table gives defaults.

    Raises:
        ConfigurationError: If the file cannot be read, is not valid TOML,
            or holds unknown keys or values of the wrong type
    """
    try:
        with open(path, 'rb') as f:
            data = tomllib.load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file ({e.strerror or e})", source=str(path)) from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML: {e}", source=str(path)) from e

    table = data.get(CONFIG_TABLE, data.get(LEGACY_CONFIG_TABLE, {}))
    if not isinstance(table, dict):
        raise ConfigurationError(f"[{CONFIG_TABLE}] must be a table", source=str(path))

    try:
        return BundlerConfig(**table)
    except ValidationError as e:
        raise ConfigurationError(_describe(e), source=str(path)) from e


def merge_config(base=None, **overrides):
    """Return base with every non-None override applied."""
    values = base.model_dump() if base is not None else {}
    values.update({key: value for key, value in overrides.items() if value is not None})
    try:
        return BundlerConfig(**values)
    except ValidationError as e:
        raise ConfigurationError(_describe(e)) from e
