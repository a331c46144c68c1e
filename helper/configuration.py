"""
Process-wide configuration for the stackerr system.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

# Default maximum number of stack frames captured on any error.
# Only read when building a configuration; change the active limit
# with set_max_stack_depth.
MAX_STACK_DEPTH = 50

# Directory name cut from rendered file paths.
SOURCE_ROOT = "src"


logger = logging.getLogger(__name__)


@dataclass
class StackConfiguration:
    """
    Stack capture configuration.
    """

    max_stack_depth: int = MAX_STACK_DEPTH
    source_root: str = SOURCE_ROOT

    def validate(self) -> None:
        """
        Validate the configuration.

        :raises ValueError: If a value is out of range.
        """
        if self.max_stack_depth < 1:
            raise ValueError("max stack depth must be at least 1")
        if not self.source_root or "/" in self.source_root:
            raise ValueError("source root must be a single directory name")

    @classmethod
    def from_env(cls) -> "StackConfiguration":
        """Create configuration from environment variables."""
        depth = os.getenv("STACKERR_MAX_STACK_DEPTH", str(MAX_STACK_DEPTH))
        try:
            max_stack_depth = int(depth)
        except ValueError:
            raise ValueError(
                f"STACKERR_MAX_STACK_DEPTH must be an integer, got {depth!r}"
            )

        configuration = cls(
            max_stack_depth=max_stack_depth,
            source_root=os.getenv("STACKERR_SOURCE_ROOT", SOURCE_ROOT),
        )
        configuration.validate()
        return configuration


_configuration: Optional[StackConfiguration] = None


def get_configuration() -> StackConfiguration:
    """
    Get the process-wide configuration, loading it from the environment
    on first use. Invalid environment values fall back to the defaults.

    :returns: The active StackConfiguration.
    """
    global _configuration
    if _configuration is None:
        try:
            _configuration = StackConfiguration.from_env()
        except ValueError as e:
            logger.warning(f"Invalid stack configuration, using defaults: {e}")
            _configuration = StackConfiguration()
    return _configuration


def configure(configuration: StackConfiguration) -> StackConfiguration:
    """
    Replace the process-wide configuration.
    Errors that were already wrapped keep what they captured.

    :param configuration: The new configuration.
    :returns: The configuration that was active before.
    :raises ValueError: If the configuration is invalid.
    """
    global _configuration
    configuration.validate()
    previous = get_configuration()
    _configuration = configuration
    return previous


def set_max_stack_depth(depth: int) -> None:
    """
    Set the maximum number of captured stack frames.

    :param depth: New maximum depth.
    :raises ValueError: If the depth is smaller than 1.
    """
    current = get_configuration()
    configure(StackConfiguration(max_stack_depth=depth, source_root=current.source_root))
