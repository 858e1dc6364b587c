"""
Resolver configuration.

Runner flags and process-wide settings, built directly or from parsed
command-line arguments.
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

logger = logging.getLogger(__name__)


@dataclass
class ResolverConfig:
    """Configuration for a resolution pass."""

    # Runner flags
    allow_random: bool = False  # Sample Random actions instead of blocking on them
    debug: bool = False  # Keep a before/after trace of every applied action

    # Process-wide settings
    seed: Optional[int] = None  # Seeds numpy's global generator when set
    log_level: str = "INFO"

    def __post_init__(self):
        self.log_level = self.log_level.upper()

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> ResolverConfig:
        return cls(
            allow_random=getattr(args, "allow_random", False),
            debug=getattr(args, "debug", False),
            seed=getattr(args, "seed", None),
            log_level="DEBUG" if getattr(args, "verbose", False) else "INFO",
        )

    def seed_random(self) -> None:
        """Seed the random source every Random action samples from."""
        if self.seed is not None:
            logger.debug("Seeding numpy random with %d", self.seed)
            np.random.seed(self.seed)
