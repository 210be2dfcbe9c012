from typing import Dict, List, Optional
import json
import logging
from datetime import datetime
from pathlib import Path

import pandas as pd

from .categories import get_category
from .game_logic import CLASSIC, MODES, SPEEDRUN

logger = logging.getLogger(__name__)


def _rank_key(entry: Dict):
    # Speedrun ranks by words guessed, classic by how fast the word was found
    if entry["mode"] == SPEEDRUN:
        primary = (-entry["score"], entry["time_seconds"])
    else:
        primary = (entry["time_seconds"], -entry["score"])
    return (MODES.index(entry["mode"]),) + primary + (entry.get("timestamp", ""),)


class LeaderboardStore:
    """Finished games kept in a JSON file."""

    def __init__(self, path: str = None):
        if path is None:
            from .config import get_settings
            path = get_settings().leaderboard_file
        self.path = Path(path)
        self._load()

    def _load(self) -> None:
        """Load entries from file, starting empty if missing or unreadable."""
        self.entries: List[Dict] = []
        if not self.path.exists():
            return
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            self.entries = list(data.get("entries", []))
        except (OSError, ValueError, AttributeError) as e:
            logger.warning(f"Leaderboard file {self.path} is unreadable ({e}); starting empty")
            self.entries = []

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump({"entries": self.entries}, f, indent=2)

    def record(self, entry: Dict) -> Dict:
        """
        Store a finished game.

        `entry` is the dict produced by GameSession.to_leaderboard_entry():
        category_id, mode, score, time_seconds and an optional user_id.
        """
        if not entry:
            raise ValueError("Nothing to record")
        mode = str(entry.get("mode", "")).strip().lower()
        if mode not in MODES:
            raise ValueError(f"Unknown game mode: {mode!r}")
        category = get_category(entry.get("category_id"))
        score = int(entry.get("score", 0))
        time_seconds = int(entry.get("time_seconds", 0))
        if score < 0 or time_seconds < 0:
            raise ValueError("Score and time must not be negative")

        stored = {
            "category_id": category.id,
            "mode": mode,
            "score": score,
            "time_seconds": time_seconds,
            "user_id": entry.get("user_id"),
            "timestamp": datetime.now().isoformat(),
        }
        self.entries.append(stored)
        self._save()
        logger.info(f"Recorded {mode} result in '{category.id}': score={score}, time={time_seconds}s")
        return stored

    def get_leaderboard(self, category_id: Optional[str] = None, mode: Optional[str] = None,
                        limit: int = 10) -> List[Dict]:
        """Best entries first: speedrun by score, classic by time."""
        filtered = self.entries
        if category_id:
            filtered = [e for e in filtered if e["category_id"] == category_id]
        if mode:
            filtered = [e for e in filtered if e["mode"] == mode]
        return sorted(filtered, key=_rank_key)[:limit]

    def get_player_stats(self, user_id: str) -> Dict:
        """Per-category totals for one player; {} if they have no games."""
        games = [e for e in self.entries if e.get("user_id") == user_id]
        if not games:
            return {}
        df = pd.DataFrame(games)
        per_category = df.groupby("category_id").agg(
            games_played=("score", "size"),
            best_score=("score", "max"),
            avg_score=("score", "mean"),
            total_time=("time_seconds", "sum"),
        )
        classic_wins = df[df["mode"] == CLASSIC]
        speedrun = df[df["mode"] == SPEEDRUN]
        return {
            "total_games": len(df),
            "classic_wins": len(classic_wins),
            "fastest_classic": int(classic_wins["time_seconds"].min()) if len(classic_wins) else None,
            "best_speedrun": int(speedrun["score"].max()) if len(speedrun) else None,
            "favorite_category": per_category["games_played"].idxmax(),
            "total_time": int(df["time_seconds"].sum()),
            "categories": {
                cat: {
                    "games_played": int(row["games_played"]),
                    "best_score": int(row["best_score"]),
                    "avg_score": float(row["avg_score"]),
                    "total_time": int(row["total_time"]),
                }
                for cat, row in per_category.iterrows()
            },
        }
