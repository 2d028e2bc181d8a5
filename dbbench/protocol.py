from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from pydantic import BaseModel, ConfigDict, Field


class BenchType(str, Enum):
    """
    Determines if a benchmark runs its statement once or repeatedly.
    """

    ONCE = "once"
    LOOP = "loop"


class Benchmark(BaseModel):
    """
    A named statement template together with the way it should be executed.

    Instances are immutable. The executor that owns the benchmark suite
    creates them, the scheduler only reads them for the duration of a run.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Benchmark name.")
    type: BenchType = Field(
        BenchType.LOOP,
        description="Whether the statement is executed once or in a loop.",
    )
    parallel: bool = Field(
        False,
        description="Launch the benchmark as a detached task instead of "
        "waiting for it to finish.",
    )
    stmt: str = Field(..., description="Statement template source text.")


@dataclass(frozen=True)
class WorkRange:
    """
    An inclusive range of iteration indices assigned to one worker.

    A range whose start is greater than its stop is empty: the worker
    owning it performs no iterations.
    """

    start: int
    stop: int

    def __post_init__(self):
        if self.start < 1:
            raise ValueError(f"Iteration indices are 1-based, got start={self.start}")

    @property
    def is_empty(self) -> bool:
        return self.start > self.stop

    def __len__(self) -> int:
        return max(0, self.stop - self.start + 1)

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.start, self.stop + 1))

    def __str__(self) -> str:
        return f"[{self.start},{self.stop}]"
