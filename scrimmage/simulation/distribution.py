"""Bucketed yardage distributions shifted by matchup advantage.

A table partitions a uniform roll in [0, 100) into ordered buckets. Each
bucket has a cumulative threshold (the roll must be below it) and an
inclusive yardage range. Advantage moves both:

- thresholds move by ``-shift * advantage``, so a positive advantage lowers
  them and pushes probability mass toward the later, bigger-gain buckets;
- ranges grow by ``widen * advantage`` yards. Gain ranges keep their low end
  and stretch the high end; loss ranges keep their high end and stretch
  the low end (use a negative ``widen`` so losses deepen when the offense
  is outmatched).

Every adjusted value is rounded and clamped to the bucket's floor/ceiling,
then the thresholds are forced strictly ascending, so no bucket can be
inverted or squeezed out entirely.
"""

import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Optional

ROLL_CEILING = 100


class BucketKind(Enum):
    """What a bucket represents."""

    LOSS = auto()
    NO_GAIN = auto()
    INCOMPLETE = auto()
    SHORT = auto()
    MEDIUM = auto()
    LONG = auto()
    BREAKAWAY = auto()
    SCORE = auto()


@dataclass(frozen=True)
class Bucket:
    """One slice of an outcome table."""

    kind: BucketKind
    threshold: int  # Cumulative, exclusive upper bound of the roll
    low: int
    high: int
    shift: float = 0.0
    threshold_floor: int = 0
    threshold_ceiling: int = ROLL_CEILING
    widen: float = 0.0
    span_floor: int = 1
    span_ceiling: int = ROLL_CEILING

    @property
    def span(self) -> int:
        """Number of distinct yardage values in the nominal range."""
        return self.high - self.low + 1

    @property
    def is_loss(self) -> bool:
        """Check if every yardage in this bucket loses ground."""
        return self.high < 0

    def adjusted_threshold(self, advantage: float) -> int:
        """Threshold after the advantage shift, clamped to its bounds."""
        moved = round(self.threshold - self.shift * advantage)
        return max(self.threshold_floor, min(self.threshold_ceiling, moved))

    def adjusted_range(self, advantage: float) -> tuple[int, int]:
        """Yardage range after widening/narrowing, clamped to its span bounds."""
        span = round(self.span + self.widen * advantage)
        span = max(self.span_floor, min(self.span_ceiling, span))
        if self.is_loss:
            return self.high - span + 1, self.high
        return self.low, self.low + span - 1

    def validate(self, table_name: str) -> None:
        """Raise ``ValueError`` if the nominal constants are inconsistent."""
        where = f"{table_name}/{self.kind.name}"
        if self.low > self.high:
            raise ValueError(f"{where}: range {self.low}..{self.high} is inverted")
        if not self.threshold_floor <= self.threshold <= self.threshold_ceiling:
            raise ValueError(f"{where}: threshold {self.threshold} outside its floor/ceiling")
        if not 1 <= self.span_floor <= self.span <= self.span_ceiling:
            raise ValueError(f"{where}: span {self.span} outside its floor/ceiling")


@dataclass(frozen=True)
class Draw:
    """A sampled outcome."""

    yards: int
    kind: BucketKind
    roll: int
    low: int
    high: int


@dataclass(frozen=True)
class OutcomeTable:
    """An ordered set of buckets for one play subtype."""

    name: str
    buckets: tuple[Bucket, ...]

    def __post_init__(self) -> None:
        if not self.buckets:
            raise ValueError(f"{self.name}: table has no buckets")
        previous = 0
        for bucket in self.buckets:
            bucket.validate(self.name)
            if bucket.threshold <= previous:
                raise ValueError(f"{self.name}: thresholds must be strictly ascending")
            previous = bucket.threshold
        if previous != ROLL_CEILING:
            raise ValueError(f"{self.name}: last threshold must be {ROLL_CEILING}")

    @classmethod
    def of(cls, name: str, buckets: Iterable[Bucket]) -> "OutcomeTable":
        """Build a table from any iterable of buckets."""
        return cls(name, tuple(buckets))

    def thresholds(self, advantage: float = 0.0) -> list[int]:
        """Adjusted cumulative thresholds, strictly ascending and ending at 100."""
        count = len(self.buckets)
        result = []
        previous = 0
        for index, bucket in enumerate(self.buckets):
            remaining = count - index - 1
            if remaining == 0:
                value = ROLL_CEILING
            else:
                value = bucket.adjusted_threshold(advantage)
                value = max(previous + 1, min(ROLL_CEILING - remaining, value))
            result.append(value)
            previous = value
        return result

    def ranges(self, advantage: float = 0.0) -> list[tuple[int, int]]:
        """Adjusted yardage range per bucket."""
        return [bucket.adjusted_range(advantage) for bucket in self.buckets]

    def probabilities(self, advantage: float = 0.0) -> dict[BucketKind, float]:
        """Chance of landing in each bucket kind at this advantage."""
        probabilities: dict[BucketKind, float] = {}
        previous = 0
        for bucket, threshold in zip(self.buckets, self.thresholds(advantage)):
            share = (threshold - previous) / ROLL_CEILING
            probabilities[bucket.kind] = probabilities.get(bucket.kind, 0.0) + share
            previous = threshold
        return probabilities

    def sample(self, roll: int, rng: random.Random, advantage: float = 0.0) -> Draw:
        """
        Map a roll to a bucket and draw yards from its range.

        Args:
            roll: Uniform integer in [0, 100)
            rng: Generator used for the yardage draw
            advantage: Matchup modifier; 0 keeps the nominal table

        Returns:
            The drawn yards with the bucket that produced them
        """
        if not 0 <= roll < ROLL_CEILING:
            raise ValueError(f"roll must be in [0, {ROLL_CEILING}), got {roll}")
        for index, threshold in enumerate(self.thresholds(advantage)):
            if roll < threshold:
                low, high = self.buckets[index].adjusted_range(advantage)
                return Draw(rng.randint(low, high), self.buckets[index].kind, roll, low, high)
        raise AssertionError(f"{self.name}: roll {roll} fell past the last bucket")

    def draw(self, rng: random.Random, advantage: float = 0.0) -> Draw:
        """Roll and sample in one step."""
        return self.sample(rng.randrange(ROLL_CEILING), rng, advantage)

    def with_overrides(
        self,
        thresholds: Optional[list[int]] = None,
        ranges: Optional[list[tuple[int, int]]] = None,
    ) -> "OutcomeTable":
        """
        Copy with replacement nominal thresholds and/or ranges.

        Floors, ceilings and span bounds are widened as needed so the new
        nominal values stay inside them.
        """
        buckets = list(self.buckets)
        if thresholds is not None:
            if len(thresholds) != len(buckets):
                raise ValueError(f"{self.name}: expected {len(buckets)} thresholds")
            buckets = [
                _replace_threshold(bucket, threshold)
                for bucket, threshold in zip(buckets, thresholds)
            ]
        if ranges is not None:
            if len(ranges) != len(buckets):
                raise ValueError(f"{self.name}: expected {len(buckets)} ranges")
            buckets = [
                _replace_range(bucket, low, high)
                for bucket, (low, high) in zip(buckets, ranges)
            ]
        return OutcomeTable(self.name, tuple(buckets))


def _replace_threshold(bucket: Bucket, threshold: int) -> Bucket:
    return Bucket(
        bucket.kind, threshold, bucket.low, bucket.high,
        shift=bucket.shift,
        threshold_floor=min(bucket.threshold_floor, threshold),
        threshold_ceiling=max(bucket.threshold_ceiling, threshold),
        widen=bucket.widen,
        span_floor=bucket.span_floor,
        span_ceiling=bucket.span_ceiling,
    )


def _replace_range(bucket: Bucket, low: int, high: int) -> Bucket:
    span = high - low + 1
    return Bucket(
        bucket.kind, bucket.threshold, low, high,
        shift=bucket.shift,
        threshold_floor=bucket.threshold_floor,
        threshold_ceiling=bucket.threshold_ceiling,
        widen=bucket.widen,
        span_floor=max(1, min(bucket.span_floor, span)),
        span_ceiling=max(bucket.span_ceiling, span),
    )
