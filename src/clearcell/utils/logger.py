"""
Logging utilities for simulation runs.

Every finished game is written as one JSON line; a summary with the
spread of each numeric statistic is written when the run ends.
"""
from typing import Dict, Any, List
from pathlib import Path
from collections import defaultdict, deque
import json
import time
from datetime import datetime
import numpy as np


def convert_to_serializable(obj):
    """Convert numpy types to Python types for JSON serialization."""
    if isinstance(obj, np.integer):
        return int(obj)
    elif isinstance(obj, np.floating):
        return float(obj)
    elif isinstance(obj, np.bool_):
        return bool(obj)
    elif isinstance(obj, np.ndarray):
        return obj.tolist()
    elif isinstance(obj, dict):
        return {k: convert_to_serializable(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [convert_to_serializable(i) for i in obj]
    return obj


def _numeric_items(stats: Dict[str, Any]):
    # bools are ints to isinstance; they are flags, not statistics
    for key, value in stats.items():
        if isinstance(value, (bool, np.bool_)):
            continue
        if isinstance(value, (int, float, np.integer, np.floating)):
            yield key, float(value)


class Logger:
    """
    Per-game JSON-lines log of a simulation run.
    """

    def __init__(self, log_dir: str, name: str = "simulation"):
        """
        Initialize logger.

        Args:
            log_dir: Directory to save logs
            name: Name of the run, used for the file names
        """
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.name = name
        self.start_time = time.time()

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.log_file = self.log_dir / f"{name}_{timestamp}.jsonl"

        self.games_logged = 0
        self.history: Dict[str, List[float]] = defaultdict(list)

    def log_game(self, game: int, stats: Dict[str, Any]) -> None:
        """
        Append the statistics of one finished game.

        Args:
            game: Game number within the run
            stats: Statistics as returned by ``play_random_game``
        """
        record = {
            'game': game,
            'elapsed': time.time() - self.start_time,
            **convert_to_serializable(stats),
        }
        with open(self.log_file, 'a') as f:
            f.write(json.dumps(record) + '\n')

        for key, value in _numeric_items(stats):
            self.history[key].append(value)
        self.games_logged += 1

    def summarize(self) -> Dict[str, Any]:
        """Spread of every numeric statistic over the logged games."""
        return {
            'name': self.name,
            'games': self.games_logged,
            'elapsed': time.time() - self.start_time,
            'metrics': {
                key: {
                    'mean': float(np.mean(values)),
                    'std': float(np.std(values)),
                    'min': float(np.min(values)),
                    'max': float(np.max(values)),
                }
                for key, values in self.history.items()
            },
        }

    def save_summary(self) -> Path:
        """Write the run summary next to the game log and return its path."""
        summary_file = self.log_dir / f"{self.name}_summary.json"
        with open(summary_file, 'w') as f:
            json.dump(self.summarize(), f, indent=2)
        return summary_file

    def print_metrics(self, metrics: Dict[str, Any]) -> None:
        """Print metrics to console with the elapsed run time."""
        elapsed = time.time() - self.start_time
        hours = int(elapsed // 3600)
        minutes = int((elapsed % 3600) // 60)
        seconds = int(elapsed % 60)

        print(f"\n[{self.games_logged:,} games] [{hours:02d}:{minutes:02d}:{seconds:02d}]")
        for key, value in metrics.items():
            if isinstance(value, float):
                print(f"  {key}: {value:.2f}")
            else:
                print(f"  {key}: {value}")


class MetricsTracker:
    """
    Rolling averages over the most recent games, for progress display.
    """

    def __init__(self, window_size: int = 100):
        """
        Args:
            window_size: Number of recent games averaged
        """
        self.window_size = window_size
        self.metrics: Dict[str, deque] = defaultdict(lambda: deque(maxlen=self.window_size))

    def add_game(self, stats: Dict[str, Any]) -> None:
        """Record the numeric statistics of one game."""
        for key, value in _numeric_items(stats):
            self.metrics[key].append(value)

    def get_mean(self, name: str) -> float:
        values = self.metrics.get(name)
        return float(np.mean(values)) if values else 0.0

    def postfix(self, *names: str) -> Dict[str, str]:
        """Rolling means formatted for ``tqdm.set_postfix``."""
        return {name: f"{self.get_mean(name):.1f}" for name in names}

    def reset(self) -> None:
        self.metrics.clear()
