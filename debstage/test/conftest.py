from __future__ import annotations

from pathlib import Path

import pytest

from debstage.core.package import FileManifestEntry, PackageDescriptor, default_manifest


@pytest.fixture
def descriptor() -> PackageDescriptor:
    return PackageDescriptor(
        name="opennic-up",
        version="dev-20251003-200505",
        architecture="amd64",
        maintainer="kewlfft",
        description="OpenNIC auto DNS updater",
    )


@pytest.fixture
def manifest(descriptor: PackageDescriptor) -> list[FileManifestEntry]:
    return default_manifest(descriptor.name)


@pytest.fixture
def sources(tmp_path: Path, manifest: list[FileManifestEntry]) -> Path:
    """Working directory holding every manifest source, all mode 0600."""
    for entry in manifest:
        path = tmp_path / entry.source
        path.write_text(f"content of {entry.source}\n", encoding="utf-8")
        path.chmod(0o600)
    return tmp_path
