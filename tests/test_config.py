import json
import logging
import sys
from pathlib import Path

import pytest

# Add repo root to path
ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from mandelgrid.__main__ import build_settings, parse_args
from mandelgrid.config import DEFAULT_SETTINGS, SETTINGS_PATH, load_settings, validate_settings
from mandelgrid.errors import InvalidArgument


def write_json(path, data):
    path.write_text(json.dumps(data))
    return str(path)


def test_packaged_settings_match_defaults():
    assert Path(SETTINGS_PATH).exists()
    assert load_settings() == DEFAULT_SETTINGS


def test_missing_file_falls_back_to_defaults(tmp_path, caplog):
    with caplog.at_level(logging.WARNING):
        settings = load_settings(str(tmp_path / "missing.json"))
    assert settings == DEFAULT_SETTINGS
    assert "Could not load" in caplog.text


def test_broken_json_falls_back_to_defaults(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    assert load_settings(str(path)) == DEFAULT_SETTINGS


def test_file_values_override_defaults(tmp_path):
    path = write_json(tmp_path / "s.json", {"width": 320, "palette": "Hot"})
    settings = load_settings(path)
    assert settings["width"] == 320
    assert settings["palette"] == "Hot"
    assert settings["height"] == DEFAULT_SETTINGS["height"]


def test_unknown_keys_ignored(tmp_path, caplog):
    path = write_json(tmp_path / "s.json", {"colour": "red"})
    with caplog.at_level(logging.WARNING):
        settings = load_settings(path)
    assert "colour" not in settings
    assert "unknown setting" in caplog.text


def test_non_object_ignored(tmp_path):
    path = write_json(tmp_path / "s.json", [1, 2, 3])
    assert load_settings(path) == DEFAULT_SETTINGS


@pytest.mark.parametrize("key, value", [
    ("width", 0),
    ("height", "400"),
    ("max_iterations", -1),
    ("periodicity_cutoff", 1.5),
    ("worker_count", -2),
    ("zoom_factor", 1.5),
    ("zoom_factor", True),
    ("palette", 3),
])
def test_validate_rejects_bad_values(key, value):
    settings = dict(DEFAULT_SETTINGS)
    settings[key] = value
    with pytest.raises(InvalidArgument):
        validate_settings(settings)


def test_validate_accepts_defaults():
    assert validate_settings(dict(DEFAULT_SETTINGS)) == DEFAULT_SETTINGS


def test_command_line_overrides_file(tmp_path):
    path = write_json(tmp_path / "s.json", {"width": 320, "worker_count": 4})
    args = parse_args(["--settings", path, "--workers", "0", "--max-iterations", "64"])
    settings = build_settings(args)
    assert settings["width"] == 320
    assert settings["worker_count"] == 0
    assert settings["max_iterations"] == 64
    assert settings["periodicity_cutoff"] == DEFAULT_SETTINGS["periodicity_cutoff"]
