"""Configuration management utilities."""

from dataclasses import dataclass
import argparse
import logging
import os
from typing import Optional, List

DEFAULT_GEN_LEN = 10_000


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line style arguments or provided list."""
    parser = argparse.ArgumentParser(description="recursiver configuration")
    parser.add_argument(
        "--gen-len",
        type=int,
        default=int(os.getenv("RECURSIVER_GEN_LEN", str(DEFAULT_GEN_LEN))),
        help="Number of values a generator yields before it is exhausted",
    )
    parser.add_argument(
        "--dtype",
        default=os.getenv("RECURSIVER_DTYPE", "float64"),
        help="numpy dtype used for the window buffers",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("LOG_LEVEL", "INFO"),
        help="Logging level",
    )
    ns = parser.parse_args(args)
    if ns.gen_len < 0:
        parser.error("--gen-len must be non-negative")
    return ns


@dataclass
class GeneratorConfig:
    gen_len: int = DEFAULT_GEN_LEN
    dtype: Optional[str] = None
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.gen_len < 0:
            raise ValueError(f"gen_len must be non-negative, got {self.gen_len}")

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "GeneratorConfig":
        return cls(
            gen_len=args.gen_len,
            dtype=args.dtype,
            log_level=args.log_level,
        )

    def configure_logging(self) -> None:
        """Apply ``log_level`` to the root logger for embedding applications."""
        logging.basicConfig(level=getattr(logging, self.log_level.upper(), logging.INFO))

    @classmethod
    def from_env(cls) -> "GeneratorConfig":
        return cls.from_args(parse_args([]))
