from pickleflow.standings.leaderboard import LeaderboardCalculator, compute_leaderboard

__all__ = ["LeaderboardCalculator", "compute_leaderboard"]
