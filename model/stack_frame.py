"""
Stack frame model for Python stackerr implementation.
Holds raw program counters and the frames resolved from them.
"""

from dataclasses import dataclass
from types import CodeType
from typing import NamedTuple, Optional


class ProgramCounter(NamedTuple):
    """
    Raw address of one call-stack position.

    The offset points at the instruction after the call in progress,
    the same way a native return address does.
    """

    code: Optional[CodeType]
    offset: int

    def is_null(self) -> bool:
        """Return True for the sentinel meaning "no caller"."""
        return self.code is None


NULL_CALLER = ProgramCounter(None, 0)


@dataclass(frozen=True)
class StackFrame:
    """
    StackFrame contains everything needed to render one line of a callstack.
    Empty fields mean the caller could not be resolved.
    """

    caller: ProgramCounter = NULL_CALLER
    file: str = ""
    line_number: int = 0
    function_name: str = ""
    package: str = ""

    def is_resolved(self) -> bool:
        """
        Check if symbol information was found for this frame.

        :return: True if the frame has a function name, False otherwise.
        """
        return self.function_name != ""
