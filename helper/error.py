"""
Error handling utilities for Python stackerr implementation.

StackableError wraps an exception together with the call stack captured
where it was wrapped. Capturing only records program counters; frames are
resolved the first time they are requested.
"""

import threading
from typing import Any, List, Optional, Protocol, Tuple, cast, runtime_checkable

from ..core.callers import callers
from ..core.resolver import FrameResolver, default_resolver
from ..model.stack_frame import ProgramCounter, StackFrame
from .configuration import get_configuration

# Upper bound on unwrap steps in same_error.
MAX_CHAIN_DEPTH = 100


@runtime_checkable
class Stackable(Protocol):
    """An error that already carries a captured call stack."""

    def callers(self) -> List[ProgramCounter]: ...

    def add_prefix(self, prefix: str) -> None: ...

    def unwrap(self) -> Any: ...


class StackableError(Exception):
    """
    Error with an attached stacktrace.
    Can be raised and caught like any other exception.
    """

    def __init__(self, err: BaseException, stack: List[ProgramCounter]):
        """
        Initialize StackableError with the cause and the captured stack.

        :param err: The underlying exception.
        :param stack: Program counters captured at the failure site.
        """
        super().__init__(str(err))
        self.err = err
        self.__cause__ = err
        self.prefixes: List[str] = []
        self._stack = list(stack)
        self._frames: Optional[List[StackFrame]] = None
        self._frames_lock = threading.Lock()

    def __str__(self) -> str:
        return self.message()

    def __repr__(self) -> str:
        return f"StackableError({self.message()!r})"

    def __reduce__(self) -> Tuple[Any, ...]:
        state = {"prefixes": list(self.prefixes), "_frames": self._frames}
        return (self.__class__, (self.err, self._stack), state)

    def message(self) -> str:
        """
        Return the prefixed error message.
        The most recently added prefix comes first.
        """
        msg = str(self.err)
        for prefix in self.prefixes:
            msg = f"{prefix}: {msg}"
        return msg

    def add_prefix(self, prefix: str) -> None:
        """Add context to the error message."""
        self.prefixes.append(prefix)

    def unwrap(self) -> BaseException:
        """Return the underlying exception."""
        return self.err

    def callers(self) -> List[ProgramCounter]:
        """Return the program counters captured at wrap time."""
        return list(self._stack)

    def frames(self, resolver: Optional[FrameResolver] = None) -> List[StackFrame]:
        """
        Return the resolved stack frames, innermost first.

        Frames are resolved once; later calls return the same list even
        when another resolver is passed.

        :param resolver: Resolver used on first resolution (defaults to the runtime).
        :returns: The resolved stack frames.
        """
        if self._frames is None:
            with self._frames_lock:
                if self._frames is None:
                    resolver = resolver or default_resolver()
                    self._frames = [resolver.resolve(pc) for pc in self._stack]
        return self._frames

    def stack(self, resolver: Optional[FrameResolver] = None) -> str:
        """
        Return the callstack with one rendered frame per line.

        :param resolver: Resolver used for resolving and rendering.
        :returns: The formatted callstack.
        """
        resolver = resolver or default_resolver()
        return "".join(
            f"{resolver.render(frame)}\n" for frame in self.frames(resolver)
        )

    def full_report(self, resolver: Optional[FrameResolver] = None) -> str:
        """
        Return the message followed by the callstack::

            ERROR: (prefixed message)
            (stack returned by stack())
        """
        return f"ERROR: {self.message()}\n{self.stack(resolver)}"


def is_stackable(e: Any) -> bool:
    """
    Check if a value is an exception that already carries a stack.

    :param e: The value to check.
    :returns: True for exceptions implementing Stackable.
    """
    return isinstance(e, BaseException) and isinstance(e, Stackable)


def _wrap(e: Any, skip: int) -> StackableError:
    if is_stackable(e):
        # Keep the original capture site.
        return cast(StackableError, e)

    if isinstance(e, BaseException):
        err = e
    else:
        err = Exception(f"{e}")

    return new_stackable_error(err, skip + 1)


def wrap(e: Any) -> StackableError:
    """
    Make a StackableError from any value.
    Returns the value itself if it already carries a stack.

    :param e: An exception, or any value to turn into one.
    :returns: The wrapping StackableError.
    """
    return _wrap(e, 1)


def wrap_prefix(e: Any, prefix: str) -> StackableError:
    """
    Make a StackableError from the given value and add a message prefix.
    Exceptions are used directly, other values are converted with str().

    :param e: An exception, or any value to turn into one.
    :param prefix: Context prepended to the message.
    :returns: The wrapping StackableError.
    """
    err = _wrap(e, 1)
    err.add_prefix(prefix)
    return err


def new_stackable_error(e: BaseException, skip: int = 0) -> StackableError:
    """
    Create a StackableError capturing the stack of the caller.

    :param e: The underlying exception.
    :param skip: Additional frames to skip above the caller.
    :returns: The new StackableError.
    """
    # Skip callers and this function.
    stack = callers(2 + skip, get_configuration().max_stack_depth)
    return StackableError(e, stack)


def same_error(e: Any, original: Any) -> bool:
    """
    Detect whether two errors are equal.
    Errors are equal if they are the same object, or if one wraps the other
    or both wrap the same exception.

    :param e: The error to check.
    :param original: The error to compare against.
    :returns: True if both are the same error.
    """
    for _ in range(MAX_CHAIN_DEPTH):
        if e is original:
            return True

        if is_stackable(e):
            e = e.unwrap()
        elif is_stackable(original):
            original = original.unwrap()
        else:
            return False

    return False
