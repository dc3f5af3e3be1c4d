"""Command interpretation."""

from .interpreter import CommandInterpreter, Response

__all__ = [
    "CommandInterpreter",
    "Response",
]
