import os
from dataclasses import dataclass, field
from typing import Optional

from .errors import InvalidArgumentError
from .moves import MoveMode


@dataclass
class AnnealingParams:
    initial_temp: float = 500.0
    cooling_rate: float = 0.995
    max_iterations: int = 100_000
    recolor_count: int = 1
    time_limit: Optional[float] = None  # seconds of wall-clock time per run
    min_temp: float = 1e-9  # temperature floor, never zero
    cooling_interval: int = 1  # iterations between two cooling steps
    move_mode: MoveMode = MoveMode.CONFLICTED
    stop_on_zero: bool = True
    record_history: bool = False

    def validate(self) -> "AnnealingParams":
        if not self.initial_temp > 0:
            raise InvalidArgumentError(f"initial_temp must be positive, got {self.initial_temp}")
        if not 0 < self.cooling_rate < 1:
            raise InvalidArgumentError(f"cooling_rate must be in (0, 1), got {self.cooling_rate}")
        if self.max_iterations < 0:
            raise InvalidArgumentError(f"max_iterations must be non-negative, got {self.max_iterations}")
        if self.recolor_count < 0:
            raise InvalidArgumentError(f"recolor_count must be non-negative, got {self.recolor_count}")
        if self.time_limit is not None and self.time_limit < 0:
            raise InvalidArgumentError(f"time_limit must be non-negative, got {self.time_limit}")
        if not self.min_temp > 0:
            raise InvalidArgumentError(f"min_temp must be positive, got {self.min_temp}")
        if self.cooling_interval < 1:
            raise InvalidArgumentError(f"cooling_interval must be at least 1, got {self.cooling_interval}")
        return self


@dataclass
class SolverConfig:
    """Everything the pipeline needs besides the graph and k."""

    threads: int = field(default_factory=lambda: os.cpu_count() or 1)
    annealing: AnnealingParams = field(default_factory=AnnealingParams)
    descent_iterations: int = 0
    seed: Optional[int] = None

    def validate(self) -> "SolverConfig":
        if self.threads < 1:
            raise InvalidArgumentError(f"threads must be at least 1, got {self.threads}")
        if self.descent_iterations < 0:
            raise InvalidArgumentError(
                f"descent_iterations must be non-negative, got {self.descent_iterations}"
            )
        self.annealing.validate()
        return self

    @classmethod
    def from_args(cls, args) -> "SolverConfig":
        """Build from an argparse namespace produced by ``runner.build_parser``."""
        annealing = AnnealingParams(
            initial_temp=args.initial_temp,
            cooling_rate=args.cooling_rate,
            max_iterations=args.sa_iters,
            recolor_count=args.recolor_count,
            time_limit=args.time_limit,
            min_temp=args.min_temp,
            cooling_interval=args.cooling_interval,
            move_mode=MoveMode(args.move_mode),
        )
        return cls(
            threads=args.threads if args.threads is not None else (os.cpu_count() or 1),
            annealing=annealing,
            descent_iterations=args.descent_iters,
            seed=args.seed,
        ).validate()
