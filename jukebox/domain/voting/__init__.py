"""Skip voting for the currently playing track."""

from .aggregator import VoteAggregator, VoteOutcome, VoteSnapshot

__all__ = ["VoteAggregator", "VoteOutcome", "VoteSnapshot"]
