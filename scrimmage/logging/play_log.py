"""In-memory play log fed by the event bus."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from scrimmage.core.enums import PlayOutcome, PlayType
from scrimmage.core.models.game import Side
from scrimmage.events import (
    EventBus,
    GameEndEvent,
    PlayCompletedEvent,
    QuarterEndEvent,
    ScoringEvent,
    TurnoverEvent,
)


@dataclass
class LogEntry:
    """Single entry in the play log."""

    timestamp: datetime
    quarter: int
    time_remaining: str
    event_type: str  # "PLAY", "SCORE", "TURNOVER", "QUARTER_END", "FINAL"
    description: str
    home_score: int
    away_score: int

    # Play details
    down: Optional[int] = None
    yards_to_go: Optional[int] = None
    field_position: Optional[str] = None
    yards_gained: Optional[int] = None
    offense: Optional[Side] = None


@dataclass
class ScoringPlay:
    """Record of a scoring play."""

    quarter: int
    time_remaining: str
    side: Side
    scoring_type: str  # "TD", "FG", "Safety"
    points: int
    description: str
    home_score_after: int
    away_score_after: int


@dataclass
class TeamStats:
    """Accumulated statistics for one side."""

    plays: int = 0

    pass_attempts: int = 0
    pass_completions: int = 0
    pass_yards: int = 0
    interceptions: int = 0
    sacks: int = 0
    sack_yards: int = 0

    rush_attempts: int = 0
    rush_yards: int = 0
    fumbles_lost: int = 0

    touchdowns: int = 0
    first_downs: int = 0
    field_goals_made: int = 0
    field_goals_attempted: int = 0
    punts: int = 0

    @property
    def total_yards(self) -> int:
        return self.pass_yards + self.rush_yards - self.sack_yards

    @property
    def turnovers(self) -> int:
        return self.interceptions + self.fumbles_lost

    @property
    def completion_pct(self) -> float:
        if self.pass_attempts == 0:
            return 0.0
        return (self.pass_completions / self.pass_attempts) * 100

    @property
    def yards_per_rush(self) -> float:
        if self.rush_attempts == 0:
            return 0.0
        return self.rush_yards / self.rush_attempts


class PlayLog:
    """
    In-memory accumulator for play-by-play events.

    Connect it to the engine's EventBus and it keeps an entry per play,
    the scoring summary and per-side team stats.
    """

    def __init__(self) -> None:
        self.entries: list[LogEntry] = []
        self.scoring_plays: list[ScoringPlay] = []
        self.stats: dict[Side, TeamStats] = {Side.HOME: TeamStats(), Side.AWAY: TeamStats()}

    def connect_to_event_bus(self, event_bus: EventBus) -> None:
        """Subscribe to events from an event bus."""
        event_bus.subscribe(PlayCompletedEvent, self._handle_play_completed)
        event_bus.subscribe(ScoringEvent, self._handle_scoring)
        event_bus.subscribe(TurnoverEvent, self._handle_turnover)
        event_bus.subscribe(QuarterEndEvent, self._handle_quarter_end)
        event_bus.subscribe(GameEndEvent, self._handle_game_end)

    def _add(self, event, event_type: str, description: str, **details) -> None:
        self.entries.append(LogEntry(
            timestamp=event.timestamp,
            quarter=event.quarter,
            time_remaining=event.time_remaining,
            event_type=event_type,
            description=description,
            home_score=event.home_score,
            away_score=event.away_score,
            **details,
        ))

    def _handle_play_completed(self, event: PlayCompletedEvent) -> None:
        result = event.result
        stats = self.stats[event.offense]
        stats.plays += 1

        if result.play_type == PlayType.PASS:
            if result.is_sack:
                stats.sacks += 1
                stats.sack_yards += -result.yards_gained
            else:
                stats.pass_attempts += 1
                if result.outcome == PlayOutcome.INTERCEPTION:
                    stats.interceptions += 1
                elif not result.is_incomplete and not result.is_turnover:
                    stats.pass_completions += 1
                    stats.pass_yards += result.yards_gained
        elif result.play_type == PlayType.RUSH:
            stats.rush_attempts += 1
            stats.rush_yards += result.yards_gained
        elif result.play_type == PlayType.FIELD_GOAL:
            stats.field_goals_attempted += 1
            if result.outcome == PlayOutcome.FIELD_GOAL_GOOD:
                stats.field_goals_made += 1
        elif result.play_type == PlayType.PUNT:
            stats.punts += 1

        if result.outcome == PlayOutcome.FUMBLE_LOST:
            stats.fumbles_lost += 1
        if result.outcome == PlayOutcome.TOUCHDOWN:
            stats.touchdowns += 1
        if result.is_first_down:
            stats.first_downs += 1

        self._add(
            event, "PLAY", result.display,
            down=event.down,
            yards_to_go=event.yards_to_go,
            field_position=event.field_position,
            yards_gained=result.yards_gained,
            offense=event.offense,
        )

    def _handle_scoring(self, event: ScoringEvent) -> None:
        self.scoring_plays.append(ScoringPlay(
            quarter=event.quarter,
            time_remaining=event.time_remaining,
            side=event.side,
            scoring_type=event.scoring_type,
            points=event.points,
            description=event.description,
            home_score_after=event.home_score,
            away_score_after=event.away_score,
        ))
        self._add(event, "SCORE", f"{event.side.name.title()} {event.scoring_type}: {event.description}")

    def _handle_turnover(self, event: TurnoverEvent) -> None:
        self._add(event, "TURNOVER", f"TURNOVER: {event.turnover_type}")

    def _handle_quarter_end(self, event: QuarterEndEvent) -> None:
        self._add(event, "QUARTER_END", f"End of period {event.quarter_ended}")

    def _handle_game_end(self, event: GameEndEvent) -> None:
        winner = event.winner.name.title() if event.winner else "Nobody"
        self._add(event, "FINAL", f"Final: {winner} wins")

    def get_plays_by_quarter(self) -> dict[int, list[LogEntry]]:
        """Group play entries by quarter."""
        by_quarter: dict[int, list[LogEntry]] = {}
        for entry in self.entries:
            if entry.event_type == "PLAY":
                by_quarter.setdefault(entry.quarter, []).append(entry)
        return by_quarter

    def get_scoring_summary(self) -> list[ScoringPlay]:
        """Get all scoring plays."""
        return self.scoring_plays.copy()

    @property
    def play_count(self) -> int:
        """Total number of plays logged."""
        return sum(1 for e in self.entries if e.event_type == "PLAY")
