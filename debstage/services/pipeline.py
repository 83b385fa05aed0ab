"""Run the packaging stages in order, stopping at the first failure.

    INIT -> DEPS_CHECKED -> SOURCES_VERIFIED -> TREE_STAGED -> BUILT

Any non-terminal state moves to ABORTED on failure; no state is entered
twice. Each handler performs one stage and returns the next state. Components print
their own diagnostics; the pipeline only records the outcome and halts.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum, auto

from debstage.core.package import (
    BuildArtifact,
    FileManifestEntry,
    PackageDescriptor,
    StagedTree,
)
from debstage.core.result import Err, Ok, Result
from debstage.output.console import ConsoleProtocol
from debstage.services.backend import BackendDriver
from debstage.services.dependencies import DependencyResolver
from debstage.services.errors import PackagingError
from debstage.services.sources import SourceValidator
from debstage.services.staging import PackageTreeBuilder

__all__ = ["PackagingPipeline", "PipelineState"]


class PipelineState(Enum):
    INIT = auto()
    DEPS_CHECKED = auto()
    SOURCES_VERIFIED = auto()
    TREE_STAGED = auto()
    BUILT = auto()
    ABORTED = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (PipelineState.BUILT, PipelineState.ABORTED)


StageHandler = Callable[[], Result[PipelineState, PackagingError]]


def _empty_history() -> list[PipelineState]:
    return []


@dataclass
class _RunState:
    tree: StagedTree | None = None
    artifact: BuildArtifact | None = None
    history: list[PipelineState] = field(default_factory=_empty_history)


class PackagingPipeline:
    def __init__(
        self,
        *,
        descriptor: PackageDescriptor,
        manifest: list[FileManifestEntry],
        resolver: DependencyResolver,
        validator: SourceValidator,
        builder: PackageTreeBuilder,
        driver: BackendDriver,
        console: ConsoleProtocol,
        required_tools: set[str] | None = None,
    ) -> None:
        self._descriptor = descriptor
        self._manifest = list(manifest)
        self._resolver = resolver
        self._validator = validator
        self._builder = builder
        self._driver = driver
        self._console = console
        self._required = (
            required_tools if required_tools is not None else {driver.backend.tool}
        )
        self._run = _RunState()
        self.state = PipelineState.INIT

    @property
    def history(self) -> list[PipelineState]:
        """States visited so far, in order, starting with INIT."""
        return list(self._run.history)

    @property
    def tree(self) -> StagedTree | None:
        return self._run.tree

    def run(self) -> Result[BuildArtifact, PackagingError]:
        if self.state is not PipelineState.INIT:
            raise RuntimeError(f"pipeline already ran (state: {self.state.name})")

        self._console.info(f"Starting .deb package creation for {self._descriptor.name}...")
        self._console.newline()

        handlers: Mapping[PipelineState, StageHandler] = {
            PipelineState.INIT: self._check_dependencies,
            PipelineState.DEPS_CHECKED: self._verify_sources,
            PipelineState.SOURCES_VERIFIED: self._stage_tree,
            PipelineState.TREE_STAGED: self._build,
        }

        self._enter(PipelineState.INIT)
        while not self.state.is_terminal:
            outcome = handlers[self.state]()
            if isinstance(outcome, Err):
                self._enter(PipelineState.ABORTED)
                return outcome
            self._enter(outcome.value)

        artifact = self._run.artifact
        assert artifact is not None
        self._console.success("Build process completed!")
        return Ok(artifact)

    def _enter(self, state: PipelineState) -> None:
        if state in self._run.history:
            raise RuntimeError(f"pipeline state re-entered: {state.name}")
        self._run.history.append(state)
        self.state = state

    def _check_dependencies(self) -> Result[PipelineState, PackagingError]:
        result = self._resolver.ensure(self._required)
        if isinstance(result, Err):
            return result
        self._console.newline()
        return Ok(PipelineState.DEPS_CHECKED)

    def _verify_sources(self) -> Result[PipelineState, PackagingError]:
        result = self._validator.verify(self._manifest)
        if isinstance(result, Err):
            return result
        self._console.info("All source files found.")
        self._console.newline()
        return Ok(PipelineState.SOURCES_VERIFIED)

    def _stage_tree(self) -> Result[PipelineState, PackagingError]:
        result = self._builder.stage(self._descriptor, self._manifest)
        if isinstance(result, Err):
            return result
        self._run.tree = result.value
        self._console.newline()
        return Ok(PipelineState.TREE_STAGED)

    def _build(self) -> Result[PipelineState, PackagingError]:
        tree = self._run.tree
        assert tree is not None
        result = self._driver.build(tree)
        if isinstance(result, Err):
            return result
        self._run.artifact = result.value
        return Ok(PipelineState.BUILT)
