"""Tests for configuration loading and the training script."""

import importlib.util
import itertools
import json
from pathlib import Path

import yaml

from agents import Hyperparameters
from training import TrainConfig, load_config
from training.config import DEFAULT_CONFIG

REPO_ROOT = Path(__file__).resolve().parents[1]


def load_script(name):
    spec = importlib.util.spec_from_file_location(f"script_{name}", REPO_ROOT / "scripts" / f"{name}.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestLoadConfig:
    """Test suite for load_config."""

    def test_missing_file_uses_defaults(self, tmp_path, capsys):
        """Test fallback when the file does not exist."""
        config = load_config(tmp_path / "absent.yaml")

        assert config == DEFAULT_CONFIG
        assert "not found" in capsys.readouterr().out

    def test_file_overrides_defaults(self, tmp_path):
        """Test section-wise merge of a YAML file."""
        path = tmp_path / "train.yaml"
        path.write_text(yaml.safe_dump({"agent": {"learning_rate": 0.3}, "training": {"episodes": 10}}))

        config = load_config(path)

        assert config["agent"]["learning_rate"] == 0.3
        assert config["agent"]["discount_factor"] == DEFAULT_CONFIG["agent"]["discount_factor"]
        assert config["training"]["episodes"] == 10

    def test_broken_file_falls_back(self, tmp_path, capsys):
        """Test that unparsable YAML is reported and ignored."""
        path = tmp_path / "train.yaml"
        path.write_text("agent: [unclosed")

        config = load_config(path)

        assert config == DEFAULT_CONFIG
        assert "Warning" in capsys.readouterr().out

    def test_defaults_are_not_mutated(self, tmp_path):
        """Test that merging works on a copy of the defaults."""
        path = tmp_path / "train.yaml"
        path.write_text(yaml.safe_dump({"agent": {"epsilon": 0.5}}))

        load_config(path)

        assert DEFAULT_CONFIG["agent"]["epsilon"] == 1.0

    def test_repository_config(self):
        """Test the shipped configs/train.yaml."""
        config = load_config(REPO_ROOT / "configs" / "train.yaml")
        hp = Hyperparameters.from_dict(config["agent"])

        assert hp.learning_rate == 0.5
        assert hp.epsilon_min == 0.05
        assert TrainConfig.from_dict(config["training"]).episodes == 2000


class TestDataclasses:
    """Test suite for configuration value types."""

    def test_train_config_ignores_unknown_keys(self):
        """Test that extra keys do not break construction."""
        config = TrainConfig.from_dict({"episodes": 3, "unknown": True})

        assert config.episodes == 3
        assert config.eval_interval == 100

    def test_hyperparameters_defaults(self):
        """Test the documented defaults."""
        hp = Hyperparameters()

        assert hp.to_dict() == {
            "state_size": 9,
            "action_size": 9,
            "learning_rate": 0.1,
            "discount_factor": 0.95,
            "epsilon": 1.0,
            "epsilon_decay": 0.995,
            "epsilon_min": 0.01,
        }


class TestTrainScript:
    """Test the training command line end to end."""

    def test_train_and_resume(self, tmp_path, capsys):
        """Test that the script trains, saves and resumes a model."""
        train = load_script("train")
        config_path = tmp_path / "train.yaml"
        config_path.write_text(yaml.safe_dump({
            "training": {
                "episodes": 30,
                "eval_interval": 10,
                "eval_games": 10,
                "seed": 1,
                "log_path": str(tmp_path / "log.jsonl"),
                "model_dir": str(tmp_path / "models"),
            },
        }))

        assert train.main(["--config", str(config_path), "--no-progress"]) == 0

        model_file = tmp_path / "models" / "qlearning_model.json"
        assert json.loads(model_file.read_text())["trainingStats"]["episodes"] == 30

        assert train.main(["--config", str(config_path), "--no-progress",
                           "--resume", "--episodes", "5"]) == 0

        out = capsys.readouterr().out
        assert "Resumed from" in out
        assert json.loads(model_file.read_text())["trainingStats"]["episodes"] == 35


class TestPlayScript:
    """Test the interactive play command line."""

    def test_no_model(self, tmp_path, capsys):
        """Test the message when nothing has been trained yet."""
        play = load_script("play")

        assert play.main(["--model-dir", str(tmp_path)]) == 1
        assert "No trained model found" in capsys.readouterr().out

    def test_full_game(self, tmp_path, monkeypatch, capsys):
        """Test a complete game with scripted keyboard input."""
        from agents import FileBlobStore, TabularQAgent

        TabularQAgent(seed=0).save_model(FileBlobStore(tmp_path))
        keys = itertools.cycle([str(i) for i in range(9)])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(keys))
        play = load_script("play")

        assert play.main(["--model-dir", str(tmp_path)]) == 0

        out = capsys.readouterr().out
        assert any(msg in out for msg in ("You win!", "Agent wins!", "It's a draw!"))
