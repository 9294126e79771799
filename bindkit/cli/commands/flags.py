"""
Flags command implementation.

Classifies a target and prints both argument sets without running the
interface generator or the compiler. The Apple SDK lookup still runs xcrun.
"""

import json
import logging
import os
from pathlib import Path

from bindkit.cli.utils import format_flags, load_project, print_error
from bindkit.config.capabilities import CapabilitySet, features_from_environment
from bindkit.config.environment import NDK_VAR, TARGET_VAR, BuildEnvironment
from bindkit.core.exceptions import BindKitError
from bindkit.cross.classifier import classify
from bindkit.cross.flags import derive_compiler_flags, derive_generator_flags
from bindkit.cross.targets import parse_target

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the flags command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    target = args.target or os.environ.get(TARGET_VAR)
    if not target:
        print_error("No target given", f"Pass --target or set {TARGET_VAR}")
        return 1

    ndk_root = args.ndk or os.environ.get(NDK_VAR)
    if ndk_root:
        ndk_root = Path(ndk_root)
    environment = BuildEnvironment(
        target=target,
        ndk_root=ndk_root,
        features=features_from_environment(os.environ),
    )

    try:
        project = load_project(args)
        capabilities = project.capability_set(environment.features)
        if args.feature:
            capabilities = CapabilitySet(
                project.catalog,
                capabilities.enabled | set(args.feature),
                sources_root=project.sources_root,
            )

        platform = classify(parse_target(target), environment)
        generator = derive_generator_flags(platform, project.allowlist)
        compiler = derive_compiler_flags(platform, capabilities)
        generator_args = generator.allowlist_args() + generator.clang_args.to_list()
    except BindKitError as e:
        print_error("Could not resolve flags", str(e))
        return 1

    if args.format == "json":
        print(
            json.dumps(
                {
                    "target": target,
                    "platform": platform.family.value,
                    "sources": [str(s) for s in capabilities.sources()],
                    "generator": generator_args,
                    "compiler": compiler.to_args(),
                },
                indent=2,
            )
        )
    else:
        print(f"Target: {target} ({platform.family.value})")
        print(format_flags("Generator", generator_args))
        print(format_flags("Compiler", compiler.to_args()))
    return 0
