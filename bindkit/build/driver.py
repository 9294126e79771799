"""
Build driver.

Sequences one build invocation:

    parse target -> classify -> derive flags -> bindgen -> cc -> ar -> directives

Every step raises on failure; the driver does not recover from anything
except what the classifier already degrades (a missing Apple SDK root).
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional

from bindkit.build.directives import DirectiveEmitter
from bindkit.build.tools import (
    archive_command,
    compile_command,
    generator_command,
    object_name,
    static_library_name,
    wrapper_header,
)
from bindkit.config.environment import BuildEnvironment
from bindkit.config.parser import ProjectConfig
from bindkit.core.platform import detect_host_tag
from bindkit.core.process import run_tool
from bindkit.cross.apple import try_resolve_sdk_path
from bindkit.cross.classifier import ApplePlatform, Platform, classify
from bindkit.cross.flags import derive_compiler_flags, derive_generator_flags
from bindkit.cross.targets import parse_target

logger = logging.getLogger(__name__)

BINDINGS_FILE_NAME = "bindings.rs"
WRAPPER_HEADER_NAME = "bindkit_wrapper.h"
BUILD_SCRIPT_NAME = "build.rs"
EXTRA_CLANG_ARGS_VAR = "BINDGEN_EXTRA_CLANG_ARGS"


@dataclass
class BuildResult:
    """
    Outcome of a build invocation.

    Attributes:
        bindings_path: Generated bindings file (empty when nothing was enabled)
        library_path: Static library, or None when nothing was compiled
        platform: Platform classification, or None when nothing was enabled
        commands: External commands run, in order
    """

    bindings_path: Path
    library_path: Optional[Path] = None
    platform: Optional[Platform] = None
    commands: List[List[str]] = field(default_factory=list)

    @property
    def tools_invoked(self) -> int:
        return len(self.commands)


class BuildDriver:
    """Run the generator and compiler for one target."""

    def __init__(
        self,
        environment: BuildEnvironment,
        project: ProjectConfig,
        *,
        runner: Callable = run_tool,
        emitter: DirectiveEmitter = None,
        sdk_resolver: Callable[[str], Optional[str]] = None,
        host_tag_detector: Callable[[], str] = detect_host_tag,
    ):
        """
        Initialize the driver.

        Args:
            environment: Build environment
            project: Project configuration
            runner: Process runner for every external tool
            emitter: Directive emitter (stdout by default)
            sdk_resolver: Apple SDK root lookup; defaults to xcrun through runner
            host_tag_detector: Build host tag lookup
        """
        self.environment = environment
        self.project = project
        self.runner = runner
        self.emitter = emitter or DirectiveEmitter()
        self.sdk_resolver = sdk_resolver or (
            lambda target: try_resolve_sdk_path(target, runner=runner)
        )
        self.host_tag_detector = host_tag_detector
        self._commands: List[List[str]] = []

    def run(self) -> BuildResult:
        """
        Run the build.

        Returns:
            BuildResult

        Raises:
            BindKitError: On any configuration, discovery or tool failure
        """
        self._commands = []
        out_dir = self.environment.require_out_dir()
        descriptor = parse_target(self.environment.target)
        logger.info(f"Building {self.project.library} for {descriptor}")

        self.emitter.rerun_if_changed(BUILD_SCRIPT_NAME)
        if self.project.config_path is not None:
            self.emitter.rerun_if_changed(self.project.config_path)

        out_dir.mkdir(parents=True, exist_ok=True)
        bindings_path = out_dir / BINDINGS_FILE_NAME

        capabilities = self.project.capability_set(self.environment.features)
        if capabilities.is_empty():
            # Consumers include bindings.rs unconditionally
            logger.info("No capabilities enabled, writing empty bindings")
            bindings_path.write_text("", encoding="utf-8")
            return BuildResult(bindings_path=bindings_path)

        sources = capabilities.sources()
        platform = classify(
            descriptor,
            self.environment,
            sdk_resolver=self.sdk_resolver,
            host_tag_detector=self.host_tag_detector,
        )
        if isinstance(platform, ApplePlatform) and platform.sdk_root is None:
            self.emitter.warning(f"Building {descriptor} without an Apple SDK root")

        self._generate_bindings(platform, sources, out_dir, bindings_path)
        library_path = self._compile_library(platform, capabilities, sources, out_dir)

        self.emitter.link_lib(self.project.library)
        self.emitter.link_search(out_dir)

        return BuildResult(
            bindings_path=bindings_path,
            library_path=library_path,
            platform=platform,
            commands=list(self._commands),
        )

    def _run(self, command: List[str]):
        self._commands.append(command)
        return self.runner(command)

    def _generate_bindings(
        self, platform: Platform, sources: List[Path], out_dir: Path, output: Path
    ):
        """Write the wrapper header and run the interface generator."""
        flags = derive_generator_flags(platform, self.project.allowlist)

        header = out_dir / WRAPPER_HEADER_NAME
        header.write_text(wrapper_header(sources), encoding="utf-8")

        self.emitter.rerun_if_env_changed(EXTRA_CLANG_ARGS_VAR)
        command = generator_command(self.environment.generator, header, output, flags)
        logger.info(f"Generating bindings: {output}")
        self._run(command)

    def _compile_library(
        self, platform: Platform, capabilities, sources: List[Path], out_dir: Path
    ) -> Path:
        """Compile every source and archive the objects."""
        flags = derive_compiler_flags(platform, capabilities)

        objects = []
        for source in sources:
            obj = out_dir / object_name(source)
            logger.debug(f"Compiling {source}")
            self._run(compile_command(self.environment.compiler, source, obj, flags))
            objects.append(obj)

        library = out_dir / static_library_name(self.project.library)
        if library.exists():
            library.unlink()
        logger.info(f"Archiving {len(objects)} object(s) into {library}")
        self._run(archive_command(self.environment.archiver, library, objects))
        return library


__all__ = ["BuildDriver", "BuildResult", "BINDINGS_FILE_NAME"]
