"""Package identity, file manifest and staged tree types."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path, PurePosixPath

__all__ = [
    "DEFAULT_LONG_DESCRIPTION",
    "BuildArtifact",
    "FileManifestEntry",
    "PackageDescriptor",
    "StagedTree",
    "build_version",
    "default_manifest",
]

EXECUTABLE_MODE = 0o755
DATA_MODE = 0o644

METADATA_DIR = "DEBIAN"

DEFAULT_LONG_DESCRIPTION: tuple[str, ...] = (
    "This package provides the OpenNIC DNS updater service with systemd integration.",
    "It includes a timer for automatic updates.",
)


def build_version(now: datetime) -> str:
    """Return the development version string for a build started at `now`.

    Example:
        build_version(datetime(2025, 10, 3, 20, 5, 5)) -> "dev-20251003-200505"
    """
    return f"dev-{now:%Y%m%d-%H%M%S}"


@dataclass(frozen=True, slots=True)
class PackageDescriptor:
    """Immutable package identity shared by every stage.

    Attributes:
        name: Package name, also the daemon/unit base name.
        version: Version string, fixed for the whole invocation.
        architecture: Debian architecture (e.g. "amd64").
        maintainer: Maintainer identity.
        description: One-line synopsis.
        long_description: Continuation lines of the Description field.
    """

    name: str
    version: str
    architecture: str
    maintainer: str
    description: str
    long_description: tuple[str, ...] = DEFAULT_LONG_DESCRIPTION

    @property
    def tree_name(self) -> str:
        return f"{self.name}_{self.version}_{self.architecture}"


@dataclass(frozen=True, slots=True)
class FileManifestEntry:
    """One file to stage: working-directory source, package-root destination, mode."""

    source: Path
    destination: PurePosixPath
    mode: int


def default_manifest(name: str) -> list[FileManifestEntry]:
    """Return the fixed, ordered manifest for a timer-driven daemon.

    Order: binary, configuration file, service unit, timer unit.
    """
    units = PurePosixPath("lib/systemd/system")
    return [
        FileManifestEntry(
            source=Path(name),
            destination=PurePosixPath("usr/local/bin") / name,
            mode=EXECUTABLE_MODE,
        ),
        FileManifestEntry(
            source=Path(f"{name}.conf"),
            destination=PurePosixPath("etc") / name / f"{name}.conf",
            mode=DATA_MODE,
        ),
        FileManifestEntry(
            source=Path(f"{name}.service"),
            destination=units / f"{name}.service",
            mode=DATA_MODE,
        ),
        FileManifestEntry(
            source=Path(f"{name}.timer"),
            destination=units / f"{name}.timer",
            mode=DATA_MODE,
        ),
    ]


@dataclass(frozen=True, slots=True)
class StagedTree:
    """A directory mirroring the target filesystem, ready for the backend."""

    root: Path
    descriptor: PackageDescriptor

    @property
    def metadata_dir(self) -> Path:
        return self.root / METADATA_DIR

    def path_for(self, destination: PurePosixPath) -> Path:
        return self.root.joinpath(*destination.parts)


@dataclass(frozen=True, slots=True)
class BuildArtifact:
    """The archive produced by the backend, with its reported metadata."""

    path: Path
    info: str
