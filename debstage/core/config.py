"""Typed configuration loading.

debstage reads an optional `debstage.toml` from the working directory. Every
field has a default, so a missing file yields the stock opennic-up package.

Example:
    [package]
    name = "opennic-up"
    architecture = "amd64"
    maintainer = "kewlfft"
    description = "OpenNIC auto DNS updater"
    long_description = ["First line.", "Second line."]

    [dependencies.packages]
    "dpkg-deb" = "dpkg-dev"
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from .package import DEFAULT_LONG_DESCRIPTION, PackageDescriptor, build_version
from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_str_list, get_table

__all__ = [
    "CONFIG_FILENAME",
    "Config",
    "ConfigError",
    "DependenciesConfig",
    "PackageConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = "debstage.toml"

DEFAULT_NAME = "opennic-up"
DEFAULT_ARCHITECTURE = "amd64"
DEFAULT_MAINTAINER = "kewlfft"
DEFAULT_DESCRIPTION = "OpenNIC auto DNS updater"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class PackageConfig:
    """Package identity settings."""

    name: str = DEFAULT_NAME
    architecture: str = DEFAULT_ARCHITECTURE
    maintainer: str = DEFAULT_MAINTAINER
    description: str = DEFAULT_DESCRIPTION
    long_description: tuple[str, ...] = DEFAULT_LONG_DESCRIPTION
    version: str | None = None


def _single_line(value: str | None, key: str) -> str | None:
    """Reject values that would add lines to the control record."""
    if value is not None and ("\n" in value or "\r" in value):
        raise ValueError(f"'{key}' must be a single line")
    return value


def _empty_packages() -> dict[str, str]:
    return {}


@dataclass(frozen=True, slots=True)
class DependenciesConfig:
    """Extra command -> distribution package mappings."""

    packages: dict[str, str] = field(default_factory=_empty_packages)


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    package: PackageConfig = field(default_factory=PackageConfig)
    dependencies: DependenciesConfig = field(default_factory=DependenciesConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        package: StrDict = get_table(data, "package") or {}
        dependencies: StrDict = get_table(data, "dependencies") or {}
        packages: StrDict = get_table(dependencies, "packages") or {}

        long_description = get_str_list(package, "long_description")
        for line in long_description or ():
            _single_line(line, "long_description")
            # A lone "." is the control-file marker for a blank line.
            if line.strip() == ".":
                raise ValueError("'long_description' lines must not be a lone '.'")
        mapping: dict[str, str] = {}
        for tool, pkg in packages.items():
            if not isinstance(pkg, str) or not pkg.strip():
                raise TypeError(f"package for '{tool}' must be a non-empty string")
            mapping[tool] = pkg.strip()

        return cls(
            package=PackageConfig(
                name=_single_line(get_str(package, "name"), "name") or DEFAULT_NAME,
                architecture=(
                    _single_line(get_str(package, "architecture"), "architecture")
                    or DEFAULT_ARCHITECTURE
                ),
                maintainer=(
                    _single_line(get_str(package, "maintainer"), "maintainer")
                    or DEFAULT_MAINTAINER
                ),
                description=(
                    _single_line(get_str(package, "description"), "description")
                    or DEFAULT_DESCRIPTION
                ),
                long_description=(
                    tuple(long_description)
                    if long_description is not None
                    else DEFAULT_LONG_DESCRIPTION
                ),
                version=_single_line(get_str(package, "version"), "version"),
            ),
            dependencies=DependenciesConfig(packages=mapping),
        )

    def descriptor(self, now: datetime) -> PackageDescriptor:
        """Build the descriptor for an invocation started at `now`."""
        pkg = self.package
        return PackageDescriptor(
            name=pkg.name,
            version=pkg.version or build_version(now),
            architecture=pkg.architecture,
            maintainer=pkg.maintainer,
            description=pkg.description,
            long_description=pkg.long_description,
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to debstage.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Load config if the file exists, else return the defaults.

    A present but broken file is still an error.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)
