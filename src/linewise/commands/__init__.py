"""Command system façade for linewise."""

from .context import Emit, ExecutionContext
from .general import GENERAL_COMMANDS, register_general_commands
from .parsing import parse_command, tokenize
from .processor import CommandProcessor, ProcessorMode
from .registry import Collision, CommandRegistry, RegistrationResult
from .types import (
    DONE,
    CommandCategory,
    CommandDescriptor,
    Continuation,
    Done,
    Handler,
    NextStep,
    Step,
    to_step,
)

__all__ = [
    "DONE",
    "Collision",
    "CommandCategory",
    "CommandDescriptor",
    "CommandProcessor",
    "CommandRegistry",
    "Continuation",
    "Done",
    "Emit",
    "ExecutionContext",
    "GENERAL_COMMANDS",
    "Handler",
    "NextStep",
    "ProcessorMode",
    "RegistrationResult",
    "Step",
    "parse_command",
    "register_general_commands",
    "to_step",
    "tokenize",
]
