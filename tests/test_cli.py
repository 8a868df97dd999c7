import argparse

import numpy as np
import soundfile as sf

from sea_tuner.cli.main import build_parser, main, resolve_settings
from sea_tuner.core.config import ConfigManager
from tones import sine_samples


def test_settings_merge_config_and_overrides(tmp_path):
    manager = ConfigManager(str(tmp_path))
    args = argparse.Namespace(device=3, sample_rate=None, window=2400, delay=None)
    settings = resolve_settings(manager, args)
    assert settings["device_id"] == 3
    assert settings["sample_rate"] == 44100
    assert settings["window_size"] == 2400
    assert settings["cycle_delay"] == 0.01
    assert settings["half_range"] == 128


def test_parser_defaults():
    args = build_parser().parse_args(["listen"])
    assert args.command == "listen"
    assert args.ui == "console"
    assert args.device is None


def test_analyze_wav(tmp_path, capsys):
    path = tmp_path / "a.wav"
    samples = np.concatenate([sine_samples(110.0, 1200), np.zeros(1200, dtype=np.int16)])
    sf.write(str(path), samples, 44100, subtype="PCM_16")

    code = main(["analyze", str(path), "--config-dir", str(tmp_path / "config")])

    assert code == 0
    output = capsys.readouterr().out
    assert "Last note: A (109.98hz)" in output
    assert output.count(" A  | 109.98hz") == 2


def test_analyze_missing_file(tmp_path):
    code = main(["analyze", str(tmp_path / "missing.wav"), "--config-dir", str(tmp_path)])
    assert code == 1


def test_no_command_prints_help(capsys):
    assert main([]) == 1
    assert "sea-tuner" in capsys.readouterr().out
