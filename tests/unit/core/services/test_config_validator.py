from __future__ import annotations

"""
Unit tests for the Configuration Validation Service.
"""

import pytest

from astviz.core.analysis.classifier import ExpansionPolicy
from astviz.core.services.validator import POLICY_NAMES, policy_from_config, validate_config
from astviz.domain.config import get_default_config


def test_defaults_are_valid():
    conf, warnings = validate_config(get_default_config())
    assert conf == get_default_config()
    assert warnings == []


def test_non_dict_falls_back():
    conf, warnings = validate_config(["bad"])
    assert conf == get_default_config()
    assert len(warnings) == 1


def test_non_dict_strict():
    with pytest.raises(TypeError):
        validate_config("bad", strict=True)


def test_unknown_keys_dropped():
    conf, _ = validate_config({"mystery": 1})
    assert "mystery" not in conf


def test_bool_coercion():
    conf, warnings = validate_config({"color": "yes", "show_stats": 0, "with_meta": "maybe"})

    assert conf["color"] is True
    assert conf["show_stats"] is False
    assert conf["with_meta"] is False
    assert len(warnings) == 3


def test_bool_strict_rejects_strings():
    with pytest.raises(TypeError):
        validate_config({"color": "yes"}, strict=True)


def test_choices_are_case_insensitive():
    conf, warnings = validate_config({"expansion_policy": "NonEmpty", "log_level": "debug"})

    assert conf["expansion_policy"] == "nonempty"
    assert conf["log_level"] == "DEBUG"
    assert warnings == []


def test_invalid_choice_falls_back():
    conf, warnings = validate_config({"stats_style": "fancy"})
    assert conf["stats_style"] == "compact"
    assert "fancy" in warnings[0]


def test_invalid_choice_strict():
    with pytest.raises(ValueError):
        validate_config({"expansion_policy": "greedy"}, strict=True)


def test_log_file_must_be_text():
    conf, warnings = validate_config({"log_file": 5})
    assert conf["log_file"] == ""
    assert warnings


def test_policy_from_config():
    assert POLICY_NAMES == ("selective", "nonempty", "any-composite")
    conf, _ = validate_config({"expansion_policy": "any-composite"})
    assert policy_from_config(conf) is ExpansionPolicy.ANY_COMPOSITE
