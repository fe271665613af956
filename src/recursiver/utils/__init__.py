"""Generic utility functions."""

from .config import DEFAULT_GEN_LEN, GeneratorConfig, parse_args

__all__ = [
    "DEFAULT_GEN_LEN",
    "GeneratorConfig",
    "parse_args",
]
