"""
Tests for configuration and logging utilities.
"""
import json
import pytest
import numpy as np
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from clearcell.utils.config import DEFAULT_CONFIG, load_config, merge_config
from clearcell.utils.logger import Logger, MetricsTracker, convert_to_serializable


class TestConfig:
    """Test YAML configuration loading."""

    def test_defaults(self):
        config = load_config()

        assert config == DEFAULT_CONFIG
        config['board']['rows'] = 99
        assert DEFAULT_CONFIG['board']['rows'] == 10

    def test_load_overrides(self, tmp_path):
        path = tmp_path / "run.yaml"
        path.write_text("board:\n  rows: 6\nsimulation:\n  num_games: 3\n")

        config = load_config(path)

        assert config['board']['rows'] == 6
        assert config['board']['cols'] == DEFAULT_CONFIG['board']['cols']
        assert config['simulation']['num_games'] == 3
        assert config['simulation']['seed'] == DEFAULT_CONFIG['simulation']['seed']

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert load_config(path) == DEFAULT_CONFIG

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("- 1\n- 2\n")

        with pytest.raises(ValueError):
            load_config(path)

    def test_shipped_default_matches(self):
        shipped = Path(__file__).parent.parent / "config" / "default.yaml"

        assert load_config(shipped) == DEFAULT_CONFIG

    def test_merge_config(self):
        merged = merge_config({'a': {'x': 1, 'y': 2}, 'b': 3}, {'a': {'y': 5}, 'c': 4})

        assert merged == {'a': {'x': 1, 'y': 5}, 'b': 3, 'c': 4}


class TestLogger:
    """Test the per-game JSON-lines logger."""

    def test_log_game_writes_lines(self, tmp_path):
        logger = Logger(str(tmp_path), "test")

        logger.log_game(1, {'score': np.int64(5), 'game_over': True})
        logger.log_game(2, {'score': 7, 'game_over': False})

        lines = logger.log_file.read_text().strip().split("\n")
        records = [json.loads(line) for line in lines]

        assert [r['score'] for r in records] == [5, 7]
        assert [r['game'] for r in records] == [1, 2]
        assert records[0]['game_over'] is True
        assert logger.games_logged == 2
        assert logger.history['score'] == [5.0, 7.0]
        assert 'game_over' not in logger.history

    def test_summary(self, tmp_path):
        logger = Logger(str(tmp_path), "test")
        for game, score in enumerate([2, 4, 6], start=1):
            logger.log_game(game, {'score': score})

        summary_file = logger.save_summary()
        summary = json.loads(summary_file.read_text())

        assert summary['games'] == 3
        assert summary['metrics']['score']['mean'] == pytest.approx(4.0)
        assert summary['metrics']['score']['min'] == 2.0
        assert summary['metrics']['score']['max'] == 6.0

    def test_print_metrics(self, tmp_path, capsys):
        logger = Logger(str(tmp_path), "test")
        logger.log_game(1, {'score': 3})

        logger.print_metrics({'mean_score': 3.0, 'games': 1})

        out = capsys.readouterr().out
        assert "[1 games]" in out
        assert "mean_score: 3.00" in out
        assert "games: 1" in out

    def test_convert_to_serializable(self):
        data = {'a': np.float32(1.5), 'b': [np.int8(2)], 'c': np.array([1, 2])}

        assert convert_to_serializable(data) == {'a': 1.5, 'b': [2], 'c': [1, 2]}


class TestMetricsTracker:
    """Test rolling averages over recent games."""

    def test_window(self):
        tracker = MetricsTracker(window_size=3)
        for score in [1, 2, 3, 4]:
            tracker.add_game({'score': score, 'game_over': True})

        assert list(tracker.metrics['score']) == [2.0, 3.0, 4.0]
        assert tracker.get_mean('score') == pytest.approx(3.0)
        assert 'game_over' not in tracker.metrics

    def test_postfix(self):
        tracker = MetricsTracker()
        tracker.add_game({'score': 4, 'steps': 10})
        tracker.add_game({'score': 5, 'steps': 11})

        assert tracker.postfix('score', 'steps') == {'score': '4.5', 'steps': '10.5'}

    def test_unknown_metric(self):
        tracker = MetricsTracker()

        assert tracker.get_mean('missing') == 0.0
        assert 'missing' not in tracker.metrics

    def test_reset(self):
        tracker = MetricsTracker()
        tracker.add_game({'score': 1})
        tracker.reset()

        assert tracker.get_mean('score') == 0.0
