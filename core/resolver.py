"""
Frame resolver for the stackerr system.

Turns raw program counters into stack frames (file, line, function and
package) through a symbol table, and renders frames as callstack lines.
Resolution is the expensive half of stack handling and is only done when
a stack is actually printed.
"""

import inspect
import logging
from types import CodeType
from typing import Optional, Protocol, Tuple

from ..helper.configuration import SOURCE_ROOT, get_configuration
from ..model.stack_frame import ProgramCounter, StackFrame


logger = logging.getLogger(__name__)


class Symbol(Protocol):
    """Function metadata for one program counter."""

    @property
    def name(self) -> str:
        """Qualified function name, e.g. ``pkg/sub/module.Class.method``."""
        ...

    def file_line(self, offset: int) -> Tuple[str, int]:
        """Source file and line number for a bytecode offset."""
        ...


class SymbolTable(Protocol):
    """Looks up function metadata for program counters."""

    def lookup(self, caller: ProgramCounter) -> Optional[Symbol]: ...


class CodeSymbol:
    """Symbol backed by a live code object."""

    def __init__(self, code: CodeType, module: str):
        self.code = code
        self.module = module

    @property
    def name(self) -> str:
        qualname = getattr(self.code, "co_qualname", self.code.co_name)
        return f"{self.module.replace('.', '/')}.{qualname}"

    def file_line(self, offset: int) -> Tuple[str, int]:
        for start, end, line in self.code.co_lines():
            if start <= offset < end:
                return self.code.co_filename, line or 0
        return self.code.co_filename, 0


class RuntimeSymbolTable:
    """
    Symbol table over the running interpreter.

    Qualified names are the owning module's import path written with
    slashes, a dot, then the function's qualname.
    """

    def lookup(self, caller: ProgramCounter) -> Optional[Symbol]:
        if caller.code is None:
            return None
        return CodeSymbol(caller.code, self.module_name(caller.code))

    @staticmethod
    def module_name(code: CodeType) -> str:
        """
        Get the import name of the module that defines a code object.

        :param code: The code object to look up.
        :returns: The module name, or "<unknown>" when it cannot be found.
        """
        module = inspect.getmodule(code)
        if module is not None:
            return module.__name__
        return inspect.getmodulename(code.co_filename) or "<unknown>"


def package_and_name(name: str) -> Tuple[str, str]:
    """
    Split a qualified function name into package and function name.

    The package path is cut at the last slash, the package itself ends at
    the first dot after it. Middle dots and ``<locals>`` markers in the
    remaining name are folded into plain dots, so
    ``example.com/pkg/sub.Type·method`` gives
    ``("example.com/pkg/sub", "Type.method")``.

    :param name: The qualified function name.
    :returns: Tuple of package and function name.
    """
    package = ""

    last_slash = name.rfind("/")
    if last_slash >= 0:
        package += name[: last_slash + 1]
        name = name[last_slash + 1 :]

    period = name.find(".")
    if period >= 0:
        package += name[:period]
        name = name[period + 1 :]

    name = name.replace("·", ".").replace(".<locals>.", ".")
    return package, name


def relative_file_path(file: str, marker: str = SOURCE_ROOT) -> str:
    """
    Remove everything up to and including the sources root directory.

    :param file: Absolute file path.
    :param marker: Name of the sources root directory.
    :returns: The path below the marker, or the unchanged path without one.
    """
    folders = file.split("/")
    if marker not in folders:
        return file

    index = folders.index(marker)
    return "".join(f"/{folder}" for folder in folders[index + 1 :])


class FrameResolver:
    """Resolves program counters into stack frames."""

    def __init__(
        self,
        symbol_table: Optional[SymbolTable] = None,
        source_root: str = SOURCE_ROOT,
    ):
        """
        Initialize the frame resolver.

        :param symbol_table: Symbol lookup to use (defaults to the running interpreter).
        :param source_root: Directory name stripped from rendered file paths.
        """
        self.symbol_table: SymbolTable = symbol_table or RuntimeSymbolTable()
        self.source_root = source_root

    def resolve(self, caller: ProgramCounter) -> StackFrame:
        """
        Resolve one program counter into a stack frame.

        The null caller and program counters without symbol information
        give a frame with empty fields.

        :param caller: The program counter to resolve.
        :returns: The resolved stack frame.
        """
        if caller.is_null():
            return StackFrame(caller=caller)

        symbol = self.symbol_table.lookup(caller)
        if symbol is None:
            logger.debug(f"No symbol information for {caller}")
            return StackFrame(caller=caller)

        package, function_name = package_and_name(symbol.name)
        # The offset points after the call, step back into it.
        file, line_number = symbol.file_line(caller.offset - 1)
        return StackFrame(
            caller=caller,
            file=file,
            line_number=line_number,
            function_name=function_name,
            package=package,
        )

    def render(self, frame: StackFrame) -> str:
        """
        Format a frame as one callstack line.

        :param frame: The frame to render.
        :returns: A line like ``/pkg/file.py: function: line 12``.
        """
        return (
            f"{self.relative_file_path(frame.file)}: "
            f"{frame.function_name}: line {frame.line_number}"
        )

    def relative_file_path(self, file: str) -> str:
        """Strip the configured sources root from a file path."""
        return relative_file_path(file, self.source_root)


def default_resolver() -> FrameResolver:
    """
    Create a resolver over the running interpreter.

    :returns: FrameResolver using the configured sources root.
    """
    return FrameResolver(source_root=get_configuration().source_root)
