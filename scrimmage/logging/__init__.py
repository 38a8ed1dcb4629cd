"""Play-by-play logging from simulation events."""

from scrimmage.logging.play_log import LogEntry, PlayLog, ScoringPlay, TeamStats

__all__ = ["LogEntry", "PlayLog", "ScoringPlay", "TeamStats"]
