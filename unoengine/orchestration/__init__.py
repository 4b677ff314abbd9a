"""Match orchestration."""

from unoengine.orchestration.match_runner import MatchResult, MatchRunner
from unoengine.orchestration.tournament import run_tournament

__all__ = ["MatchResult", "MatchRunner", "run_tournament"]
