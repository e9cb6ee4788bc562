"""League stats hub: leaderboards, standings and playoff brackets from league sheets."""

__version__ = "0.1.0"
