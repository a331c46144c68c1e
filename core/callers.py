"""
Stack capture for the stackerr system.

Walks the live frame chain and keeps only the code object and bytecode
offset of each frame, so capturing is cheap and no frame (or its locals)
is kept alive by an error.
"""

import inspect
from types import FrameType
from typing import List, Optional

from ..model.stack_frame import ProgramCounter

# Width of one bytecode instruction in bytes.
INSTRUCTION_SIZE = 2


def callers(skip: int, limit: int) -> List[ProgramCounter]:
    """
    Capture up to `limit` program counters of the current call stack.

    A skip of 0 starts at the frame of `callers` itself, 1 at its caller,
    and so on. Fewer entries are returned when the stack is shallower.

    :param skip: Number of frames to skip before recording.
    :param limit: Maximum number of program counters to record.
    :returns: Program counters ordered innermost first.
    """
    if limit <= 0 or skip < 0:
        return []

    frame: Optional[FrameType] = inspect.currentframe()
    try:
        for _ in range(skip):
            if frame is None:
                break
            frame = frame.f_back

        stack: List[ProgramCounter] = []
        while frame is not None and len(stack) < limit:
            stack.append(ProgramCounter(frame.f_code, frame.f_lasti + INSTRUCTION_SIZE))
            frame = frame.f_back
        return stack
    finally:
        del frame
