"""Line parsing: shortcut expansion, tokenization, normalization, validation."""

from .tokenizer import ParsedCommand, tokenize
from .normalize import normalize_command, normalize_entity, normalize_verb
from .shortcuts import expand_shortcut
from .validator import ValidationResult, validate_command, requires_parent

__all__ = [
    "ParsedCommand",
    "tokenize",
    "normalize_command",
    "normalize_entity",
    "normalize_verb",
    "expand_shortcut",
    "ValidationResult",
    "validate_command",
    "requires_parent",
]
