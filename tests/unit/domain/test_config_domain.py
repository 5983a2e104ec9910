from __future__ import annotations

"""
Unit tests for configuration defaults and persistence.
"""

import json
import os

from astviz.domain.config import get_config_path, get_default_config, load_config, save_config
from astviz.domain.constants import CURRENT_CONFIG_VERSION


def test_config_path_lives_in_data_dir(isolated_home):
    assert get_config_path() == os.path.join(str(isolated_home), "config.json")


def test_missing_file_gives_defaults():
    assert load_config() == get_default_config()


def test_save_then_load(isolated_home):
    conf = get_default_config()
    conf["color"] = True
    conf["expansion_policy"] = "nonempty"

    assert save_config(conf) is True
    assert load_config() == conf

    with open(get_config_path(), encoding="utf-8") as f:
        data = json.load(f)
    assert data["version"] == CURRENT_CONFIG_VERSION
    assert data["settings"]["color"] is True


def test_save_drops_unknown_keys(tmp_path):
    path = str(tmp_path / "c.json")
    save_config({"color": True, "junk": 1}, path)

    with open(path, encoding="utf-8") as f:
        assert json.load(f)["settings"] == {"color": True}


def test_corrupted_file_falls_back(tmp_path):
    path = tmp_path / "c.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_config(str(path)) == get_default_config()


def test_bad_settings_section(tmp_path):
    path = tmp_path / "c.json"
    path.write_text(json.dumps({"version": "1.0.0", "settings": [1]}), encoding="utf-8")
    assert load_config(str(path)) == get_default_config()


def test_unknown_keys_ignored_on_load(tmp_path):
    path = tmp_path / "c.json"
    path.write_text(json.dumps({"settings": {"with_meta": True, "legacy": 1}}), encoding="utf-8")

    conf = load_config(str(path))
    assert conf["with_meta"] is True
    assert "legacy" not in conf


def test_undecodable_file_falls_back(tmp_path):
    path = tmp_path / "config.json"
    path.write_bytes(b'{"settings": {"color": "\xff\xfe"}}')

    assert load_config(str(path)) == get_default_config()
