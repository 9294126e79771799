"""
Command lines for the external build tools.

These functions only build argument lists; running them is the driver's job.
"""

from pathlib import Path
from typing import Iterable, List

from bindkit.cross.flags import CompilerFlags, GeneratorFlags


def generator_command(
    generator: str, header: Path, output: Path, flags: GeneratorFlags
) -> List[str]:
    """
    Build the bindgen command line.

    Args:
        generator: bindgen executable
        header: Header to parse
        output: File to write the generated bindings to
        flags: Generator flags

    Returns:
        Argument list; clang arguments follow the '--' separator

    Example:
        >>> generator_command("bindgen", Path("wrapper.h"), Path("bindings.rs"), flags)
        ['bindgen', 'wrapper.h', '--allowlist-function', 'stb.*', ..., '-o', 'bindings.rs', '--']
    """
    return (
        [generator, str(header)]
        + flags.allowlist_args()
        + ["-o", str(output), "--"]
        + flags.clang_args.to_list()
    )


def compile_command(
    compiler: str, source: Path, obj: Path, flags: CompilerFlags
) -> List[str]:
    """Build the command that compiles one C source to an object file."""
    return [compiler] + flags.to_args() + ["-c", str(source), "-o", str(obj)]


def archive_command(archiver: str, library: Path, objects: Iterable[Path]) -> List[str]:
    """Build the command that archives object files into a static library."""
    return [archiver, "crs", str(library)] + [str(obj) for obj in objects]


def wrapper_header(sources: Iterable[Path]) -> str:
    """
    Render a header that includes every source.

    bindgen accepts a single input header, so multiple translation units are
    combined through a generated wrapper.
    """
    lines = [f'#include "{Path(source).resolve().as_posix()}"' for source in sources]
    return "\n".join(lines) + "\n"


def object_name(source: Path) -> str:
    """Object file name for a source (e.g., 'stb_image.o')."""
    return f"{Path(source).stem}.o"


def static_library_name(library: str) -> str:
    return f"lib{library}.a"


__all__ = [
    "generator_command",
    "compile_command",
    "archive_command",
    "wrapper_header",
    "object_name",
    "static_library_name",
]
