"""Core domain types and logic."""

from .config import Config, ConfigError, load_config, load_config_or_default
from .errors import ErrorCode
from .package import (
    BuildArtifact,
    FileManifestEntry,
    PackageDescriptor,
    StagedTree,
    build_version,
    default_manifest,
)
from .result import Err, Ok, Result, is_err, is_ok

__all__ = [
    # config
    "Config",
    "ConfigError",
    "load_config",
    "load_config_or_default",
    # errors
    "ErrorCode",
    # package
    "BuildArtifact",
    "FileManifestEntry",
    "PackageDescriptor",
    "StagedTree",
    "build_version",
    "default_manifest",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
]
