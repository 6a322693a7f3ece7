"""
Serialization settings: immutable configuration, the process-wide default, and
loading from TOML files.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, TypeAlias

import tomlkit
from tomlkit.exceptions import TOMLKitError

from .exceptions import ConfigurationError, InvalidNestingLevelError
from .type_systems import BUILTIN, AnnotatedTypeSystem, TypeSystem

__all__ = [
    "DEFAULT_NESTING_LEVEL",
    "TypeSystemSpec",
    "Configuration",
    "DEFAULT_CONFIG",
    "get_config",
    "configure",
    "reset_config",
    "load_config",
]

logger = logging.getLogger(__name__)

DEFAULT_NESTING_LEVEL = 666
"""
Namespace nesting level meaning "all namespaces".
"""

TypeSystemSpec: TypeAlias = TypeSystem | Literal["builtin", "annotated"] | None
"""
Type system object, or name of a type system provided by this package.
"""

BOOLEAN_OPTIONS = ("camelize", "include_root", "include_namespaces")

PYPROJECT_TABLE = ("tool", "jsonshape")
"""
Location of settings within `pyproject.toml`.
"""

ANNOTATED = AnnotatedTypeSystem()
"""
Strict annotated type system selected by name.
"""


def _get_type_system(type_system: Any) -> TypeSystem:
    """
    Resolve type system by name, ensuring it implements the contract.
    """
    if type_system is None or type_system == "builtin":
        return BUILTIN
    if type_system == "annotated":
        return ANNOTATED
    if isinstance(type_system, str) or not isinstance(type_system, TypeSystem):
        raise ConfigurationError(
            "Expected `type_system` to be 'builtin', 'annotated', or an object with "
            f"`check_type()` and `coerce()` methods, got: {type_system!r}"
        )
    return type_system


def _check_option_names(options: Mapping[str, Any]):
    names = {f.name for f in dataclasses.fields(Configuration)}
    if unknown := [k for k in options if k not in names]:
        raise ConfigurationError(
            "Unknown option{} {}; expected one of: {}".format(
                "s" if len(unknown) > 1 else "",
                ", ".join(f"`{k}`" for k in unknown),
                ", ".join(f"`{n}`" for n in sorted(names)),
            )
        )


@dataclass(frozen=True, kw_only=True)
class Configuration:
    """
    Settings for a serialization call. Instances are validated on creation and never
    modified; use `with_overrides()` to derive new ones.
    """

    camelize: bool = False
    """
    Convert keys to lowerCamelCase.
    """

    include_root: bool = False
    """
    Wrap result in a key derived from the instance's class name.
    """

    include_namespaces: bool = False
    """
    Wrap result in nested keys derived from the instance's qualified class name.
    """

    root: str | None = None
    """
    Wrap result in this key.
    """

    namespace_nesting_level: int = DEFAULT_NESTING_LEVEL
    """
    Number of namespace segments to wrap result in, counting from the class itself.
    """

    type_system: TypeSystem = BUILTIN
    """
    Type system used to check and coerce values. May be passed by name.
    """

    def __post_init__(self):
        for name in BOOLEAN_OPTIONS:
            value = getattr(self, name)
            if value is None:
                object.__setattr__(self, name, False)
            elif value is not True and value is not False:
                raise ConfigurationError(
                    f"Expected `{name}` to be either True, False or None, got {value!r}"
                )

        level = self.namespace_nesting_level
        if level is None:
            object.__setattr__(self, "namespace_nesting_level", DEFAULT_NESTING_LEVEL)
        elif type(level) is int and level == 0:
            raise InvalidNestingLevelError()
        elif isinstance(level, bool) or not isinstance(level, int) or level < 0:
            raise ConfigurationError(
                "Expected `namespace_nesting_level` to be a positive integer, "
                f"got: {level!r}"
            )

        root = self.root
        if isinstance(root, str):
            root = root.strip()
        if root is not None and not (isinstance(root, str) and root):
            raise ConfigurationError(
                f"Expected `root` to be None or a non-empty string, got: {self.root!r}"
            )
        object.__setattr__(self, "root", root)

        object.__setattr__(self, "type_system", _get_type_system(self.type_system))

    @property
    def wraps(self) -> bool:
        """
        Whether any root or namespace wrapping is requested.
        """
        return (
            self.root is not None
            or self.include_root
            or self.include_namespaces
            or self.namespace_nesting_level != DEFAULT_NESTING_LEVEL
        )

    @property
    def wraps_namespaces(self) -> bool:
        return (
            self.include_namespaces
            or self.namespace_nesting_level != DEFAULT_NESTING_LEVEL
        )

    @property
    def is_default(self) -> bool:
        return self == DEFAULT_CONFIG

    @property
    def settings(self) -> dict[str, Any]:
        """
        Get all settings as a mapping.
        """
        return {f.name: getattr(self, f.name) for f in dataclasses.fields(self)}

    def with_overrides(self, **overrides: Any) -> Configuration:
        """
        Create a configuration with the given settings replaced.

        :raises ConfigurationError: If a setting is unknown or invalid
        :raises InvalidNestingLevelError: If `namespace_nesting_level` is 0
        """
        if not overrides:
            return self
        _check_option_names(overrides)
        return dataclasses.replace(self, **overrides)


DEFAULT_CONFIG = Configuration()
"""
Configuration with all settings at their defaults.
"""

_config: Configuration = DEFAULT_CONFIG
"""
Process-wide default configuration, read at the API boundary only.
"""


def get_config() -> Configuration:
    """
    Get the process-wide default configuration.
    """
    return _config


def configure(
    config: (
        Configuration
        | Mapping[str, Any]
        | Callable[[Configuration], Configuration]
        | None
    ),
    /,
) -> Configuration:
    """
    Set the process-wide default configuration:

    - `None`: Reset to defaults
    - `Configuration`: Use as-is
    - Mapping: Create from defaults with the given settings
    - Callable: Invoke with the current configuration and use the one returned

    :raises ConfigurationError: If the argument or any setting is invalid
    :return: The new default configuration
    """
    global _config

    if config is None:
        new_config = DEFAULT_CONFIG
    elif isinstance(config, Configuration):
        new_config = config
    elif isinstance(config, Mapping):
        new_config = DEFAULT_CONFIG.with_overrides(**config)
    elif callable(config):
        new_config = config(_config)
        if not isinstance(new_config, Configuration):
            raise ConfigurationError(
                f"Expected configuration function to return a Configuration, got: {new_config!r}"
            )
    else:
        raise ConfigurationError(
            "Expected `config` to be a mapping, None, a callable, or an instance of "
            f"Configuration, but got: {config!r}"
        )

    _config = new_config
    if new_config.is_default:
        logger.debug("Reset configuration to defaults")
    else:
        logger.debug("Configured defaults: %s", new_config.settings)
    return new_config


def reset_config() -> Configuration:
    """
    Reset the process-wide default configuration.
    """
    return configure(None)


def load_config(path: Path | str, /) -> Configuration:
    """
    Load configuration from a TOML file. Settings are read from the
    `[tool.jsonshape]` table if present (as in `pyproject.toml`), otherwise from
    the top level of the document.

    :raises ConfigurationError: If the file can't be read or settings are invalid
    """
    path_ = Path(path)
    if not path_.is_file():
        raise ConfigurationError(f"Configuration file not found: {path_}")

    try:
        document = tomlkit.parse(path_.read_text(encoding="utf-8"))
    except TOMLKitError as e:
        raise ConfigurationError(f"Failed to parse configuration file {path_}: {e}") from e

    settings: Any = document.unwrap()
    tool_table, own_table = PYPROJECT_TABLE
    if isinstance(tool := settings.get(tool_table), dict) and own_table in tool:
        settings = tool[own_table]

    if not isinstance(settings, dict):
        raise ConfigurationError(f"Configuration in {path_} must be a table")

    return DEFAULT_CONFIG.with_overrides(**settings)
