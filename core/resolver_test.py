"""
Test cases for the frame resolver.
"""

import inspect
import logging
from typing import Dict, List, Optional, Tuple

import pytest

from .callers import callers
from .resolver import (
    CodeSymbol,
    FrameResolver,
    RuntimeSymbolTable,
    package_and_name,
    relative_file_path,
)
from ..model.stack_frame import NULL_CALLER, ProgramCounter, StackFrame


def sample_function() -> None:
    pass


class FakeSymbol:
    def __init__(self, name: str, file: str, lines: Dict[int, int]):
        self.name = name
        self.file = file
        self.lines = lines
        self.requested: List[int] = []

    def file_line(self, offset: int) -> Tuple[str, int]:
        self.requested.append(offset)
        return self.file, self.lines.get(offset, 0)


class FakeSymbolTable:
    def __init__(self, symbol: Optional[FakeSymbol] = None):
        self.symbol = symbol
        self.lookups: List[ProgramCounter] = []

    def lookup(self, caller: ProgramCounter) -> Optional[FakeSymbol]:
        self.lookups.append(caller)
        return self.symbol


class TestPackageAndName:
    """Test cases for package_and_name."""

    @pytest.mark.parametrize(
        "qualified, package, name",
        [
            ("example.com/pkg/sub.Type·method", "example.com/pkg/sub", "Type.method"),
            ("runtime/debug.*T·ptrmethod", "runtime/debug", "*T.ptrmethod"),
            ("main.main", "main", "main"),
            ("app/service.Worker.run", "app/service", "Worker.run"),
            (
                "app/service.handler.<locals>.inner",
                "app/service",
                "handler.inner",
            ),
            ("plain", "", "plain"),
            ("pkg/plain", "pkg/", "plain"),
        ],
    )
    def test_split(self, qualified: str, package: str, name: str):
        """Test splitting qualified names into package and function."""
        assert package_and_name(qualified) == (package, name)


class TestRelativeFilePath:
    """Test cases for relative_file_path."""

    def test_strips_sources_root(self):
        """Test that everything up to the sources root is removed."""
        assert relative_file_path("/home/build/src/pkg/file.go") == "/pkg/file.go"

    def test_first_marker_wins(self):
        """Test that the first sources root segment is used."""
        assert relative_file_path("/a/src/b/src/c.py") == "/b/src/c.py"

    def test_without_marker(self):
        """Test that paths without the marker are unchanged."""
        assert relative_file_path("/home/build/pkg/file.py") == "/home/build/pkg/file.py"

    def test_marker_must_be_whole_segment(self):
        """Test that partial segment matches are ignored."""
        assert relative_file_path("/home/srcs/pkg/file.py") == "/home/srcs/pkg/file.py"

    def test_custom_marker(self):
        """Test stripping with a different sources root name."""
        path = "/usr/lib/python3/site-packages/lib/mod.py"
        assert relative_file_path(path, "site-packages") == "/lib/mod.py"


class TestFrameResolver:
    """Test cases for FrameResolver with a fake symbol table."""

    def test_null_caller(self):
        """Test that the null caller resolves to an empty frame without lookup."""
        table = FakeSymbolTable(FakeSymbol("main.main", "/src/main.py", {}))
        frame = FrameResolver(table).resolve(NULL_CALLER)

        assert frame == StackFrame(caller=NULL_CALLER)
        assert frame.file == ""
        assert frame.function_name == ""
        assert frame.line_number == 0
        assert table.lookups == []

    def test_unknown_symbol(self, caplog: pytest.LogCaptureFixture):
        """Test that missing symbol information gives an empty frame."""
        caller = ProgramCounter(sample_function.__code__, 8)
        table = FakeSymbolTable(None)

        with caplog.at_level(logging.DEBUG):
            frame = FrameResolver(table).resolve(caller)

        assert frame.caller == caller
        assert not frame.is_resolved()
        assert frame.line_number == 0
        assert table.lookups == [caller]
        assert "No symbol information" in caplog.text

    def test_resolve_steps_back_into_call(self):
        """Test that line lookup uses the offset before the return offset."""
        symbol = FakeSymbol("example.com/app.Server·serve", "/build/src/app/server.py", {9: 42})
        caller = ProgramCounter(sample_function.__code__, 10)

        frame = FrameResolver(FakeSymbolTable(symbol)).resolve(caller)

        assert symbol.requested == [9]
        assert frame == StackFrame(
            caller=caller,
            file="/build/src/app/server.py",
            line_number=42,
            function_name="Server.serve",
            package="example.com/app",
        )

    def test_render(self):
        """Test the rendered callstack line."""
        frame = StackFrame(
            file="/home/build/src/app/server.py",
            line_number=42,
            function_name="Server.serve",
            package="app/server",
        )

        assert FrameResolver(FakeSymbolTable()).render(frame) == (
            "/app/server.py: Server.serve: line 42"
        )

    def test_render_with_custom_source_root(self):
        """Test rendering with a different sources root name."""
        frame = StackFrame(file="/opt/app/lib/tool.py", line_number=3, function_name="run")
        resolver = FrameResolver(FakeSymbolTable(), source_root="lib")

        assert resolver.render(frame) == "/tool.py: run: line 3"

    def test_render_unresolved_frame(self):
        """Test that unresolved frames render with blank fields."""
        assert FrameResolver(FakeSymbolTable()).render(StackFrame()) == ": : line 0"


class TestRuntimeSymbolTable:
    """Test cases for resolving against the running interpreter."""

    def test_resolve_live_caller(self):
        """Test that a captured program counter resolves to this test."""
        line = inspect.currentframe().f_lineno + 1  # type: ignore[union-attr]
        caller = callers(1, 1)[0]

        frame = FrameResolver().resolve(caller)

        assert frame.file.endswith("resolver_test.py")
        assert frame.line_number == line
        assert frame.function_name == "TestRuntimeSymbolTable.test_resolve_live_caller"
        assert frame.package == __name__.replace(".", "/")

    def test_lookup_null_caller(self):
        """Test that the null caller has no symbol."""
        assert RuntimeSymbolTable().lookup(NULL_CALLER) is None

    def test_module_name(self):
        """Test finding the module that defines a code object."""
        assert RuntimeSymbolTable.module_name(sample_function.__code__) == __name__

    def test_module_name_unknown(self):
        """Test the fallback for code that belongs to no module."""
        code = compile("pass", "<generated>", "exec")
        assert RuntimeSymbolTable.module_name(code) == "<unknown>"

    def test_code_symbol_name(self):
        """Test the qualified name of a code symbol."""
        symbol = CodeSymbol(sample_function.__code__, "app.jobs.runner")
        assert symbol.name == "app/jobs/runner.sample_function"

    def test_code_symbol_offset_outside_code(self):
        """Test that offsets outside the code object give line 0."""
        symbol = CodeSymbol(sample_function.__code__, "app")
        assert symbol.file_line(100000) == (sample_function.__code__.co_filename, 0)
