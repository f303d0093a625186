"""
Simulation runner for Clear Cell.

Plays random-click games from a configuration and reports score
statistics. Installed as the ``clearcell-simulate`` command.
"""
import argparse
import os
from typing import Dict, Any
import numpy as np
from tqdm import tqdm

from .game.engine import play_random_game
from .utils.config import load_config
from .utils.logger import Logger, MetricsTracker


def run_simulation(config: Dict[str, Any], show_progress: bool = True) -> Dict[str, Any]:
    """
    Play ``simulation.num_games`` random games.

    Args:
        config: Run configuration
        show_progress: Whether to show a progress bar

    Returns:
        Dictionary of aggregate statistics

    Raises:
        ValueError: the configuration asks for fewer than one game
    """
    board_cfg = config['board']
    sim_cfg = config['simulation']
    log_cfg = config['logging']

    num_games = sim_cfg['num_games']
    if num_games < 1:
        raise ValueError(f"num_games must be at least 1, got {num_games}")

    logger = Logger(log_cfg['log_dir'], log_cfg['name'])
    tracker = MetricsTracker(window_size=sim_cfg.get('window_size', 100))

    scores = []
    steps = []
    collapses = []
    finished = 0

    progress = tqdm(range(num_games), desc="Simulating", disable=not show_progress)
    for game in progress:
        stats = play_random_game(
            rows=board_cfg['rows'],
            cols=board_cfg['cols'],
            seed=sim_cfg['seed'] + game,
            clicks_per_step=sim_cfg['clicks_per_step'],
            max_steps=sim_cfg['max_steps'],
        )
        logger.log_game(game + 1, stats)
        tracker.add_game(stats)
        progress.set_postfix(tracker.postfix('score', 'steps'))

        scores.append(stats['score'])
        steps.append(stats['steps'])
        collapses.append(stats['total_rows_collapsed'])
        finished += int(stats['game_over'])

    logger.print_metrics({
        f'recent_{name}': tracker.get_mean(name)
        for name in ('score', 'steps', 'total_rows_collapsed')
    })
    summary_file = logger.save_summary()

    return {
        'num_games': num_games,
        'games_finished': finished,
        'mean_score': float(np.mean(scores)),
        'std_score': float(np.std(scores)),
        'min_score': int(np.min(scores)),
        'max_score': int(np.max(scores)),
        'mean_steps': float(np.mean(steps)),
        'mean_rows_collapsed': float(np.mean(collapses)),
        'recent_mean_score': tracker.get_mean('score'),
        'log_file': str(logger.log_file),
        'summary_file': str(summary_file),
    }


def print_results(results: Dict[str, Any]) -> None:
    """Print simulation results."""
    print("\n" + "=" * 60)
    print("RANDOM CLICKER STATISTICS")
    print("=" * 60)
    print(f"Games: {results['num_games']} ({results['games_finished']} reached game over)")
    print(f"Mean Score: {results['mean_score']:.1f} ± {results['std_score']:.1f}")
    print(f"Min/Max Score: {results['min_score']} / {results['max_score']}")
    print(f"Recent Mean Score: {results['recent_mean_score']:.1f}")
    print(f"Mean Steps: {results['mean_steps']:.1f}")
    print(f"Mean Rows Collapsed: {results['mean_rows_collapsed']:.1f}")
    print(f"Log: {results['log_file']}")
    print("=" * 60)


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Simulate Clear Cell games")
    parser.add_argument(
        "--config",
        type=str,
        default="config/default.yaml",
        help="Path to configuration file"
    )
    parser.add_argument("--games", type=_positive_int, default=None, help="Override number of games")
    parser.add_argument("--seed", type=int, default=None, help="Override base random seed")
    parser.add_argument("--no-progress", action="store_true", help="Hide the progress bar")

    args = parser.parse_args(argv)

    if os.path.exists(args.config):
        config = load_config(args.config)
    else:
        print(f"Config file not found: {args.config}")
        print("Using default configuration")
        config = load_config()

    if args.games is not None:
        config['simulation']['num_games'] = args.games
    if args.seed is not None:
        config['simulation']['seed'] = args.seed

    try:
        results = run_simulation(config, show_progress=not args.no_progress)
    except ValueError as e:
        parser.error(str(e))
    print_results(results)


if __name__ == "__main__":
    main()
