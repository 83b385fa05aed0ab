# SPDX-License-Identifier: MIT
"""Packaging stages and the pipeline that runs them.

Services implement the packaging workflow, coordinating between the domain
layer (core/) and the host (platform/).
"""

from debstage.services.backend import DPKG_DEB, Backend, BackendDriver
from debstage.services.dependencies import AptToolProbe, DependencyResolver, ToolProbe
from debstage.services.errors import PackagingError
from debstage.services.pipeline import PackagingPipeline, PipelineState
from debstage.services.sources import SourceValidator
from debstage.services.staging import PackageTreeBuilder

__all__ = [
    # Errors
    "PackagingError",
    # Stages
    "AptToolProbe",
    "DependencyResolver",
    "ToolProbe",
    "SourceValidator",
    "PackageTreeBuilder",
    "Backend",
    "BackendDriver",
    "DPKG_DEB",
    # Orchestration
    "PackagingPipeline",
    "PipelineState",
]
