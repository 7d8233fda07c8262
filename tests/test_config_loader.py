import json

import pytest

from nexusdfs.config import DEFAULT_VALUATION_CONFIG, ProbabilityCaps
from nexusdfs.config_loader import (
    CONFIG_PATH_ENV,
    apply_overrides,
    config_from_env,
    load_valuation_config,
    save_valuation_config,
)


def test_apply_overrides_replaces_scalars_and_tuples():
    config = apply_overrides(
        DEFAULT_VALUATION_CONFIG,
        {"strength_base": 25.0, "projection_anchors": [300, 360, 400, 440]},
    )
    assert config.strength_base == 25.0
    assert config.projection_anchors == (300, 360, 400, 440)
    assert DEFAULT_VALUATION_CONFIG.strength_base == 30.0


def test_apply_overrides_merges_nested_values():
    config = apply_overrides(
        DEFAULT_VALUATION_CONFIG,
        {
            "large_field_caps": {"top1": 0.02},
            "stack_scores": {"4": 0.95},
            "volatility_by_position": {"TEAM": 0.1},
        },
    )
    assert config.large_field_caps == ProbabilityCaps(0.02, 0.035, 0.070, 0.150)
    assert dict(config.stack_scores)[4] == 0.95
    assert dict(config.stack_scores)[2] == 0.4
    assert dict(config.volatility_by_position)["TEAM"] == 0.1
    assert dict(config.volatility_by_position)["MID"] == 0.7


def test_default_tables_are_immutable():
    with pytest.raises(TypeError):
        DEFAULT_VALUATION_CONFIG.stack_scores[0] = (4, 0.1)  # type: ignore[index]
    with pytest.raises(TypeError):
        DEFAULT_VALUATION_CONFIG.volatility_by_position[0] = ("MID", 0.1)  # type: ignore[index]
    assert hash(DEFAULT_VALUATION_CONFIG) == hash(apply_overrides(DEFAULT_VALUATION_CONFIG, {}))


def test_apply_overrides_rejects_unknown_keys():
    with pytest.raises(ValueError, match="not_a_setting"):
        apply_overrides(DEFAULT_VALUATION_CONFIG, {"not_a_setting": 1})


def test_apply_overrides_rejects_shape_mismatch():
    with pytest.raises(ValueError):
        apply_overrides(DEFAULT_VALUATION_CONFIG, {"gpp_large": 0.2})
    with pytest.raises(ValueError):
        apply_overrides(DEFAULT_VALUATION_CONFIG, {"leverage_bands": 5})
    with pytest.raises(ValueError, match="top2"):
        apply_overrides(DEFAULT_VALUATION_CONFIG, {"large_field_caps": {"top2": 0.1}})
    with pytest.raises(ValueError, match="large_field_caps"):
        apply_overrides(DEFAULT_VALUATION_CONFIG, {"large_field_caps": {"top1": 0.02, "first": 0.2}})


def test_load_valuation_config(tmp_path):
    path = tmp_path / "profile.json"
    path.write_text(json.dumps({"nexus_bounds": [20, 70], "satellite_ticket_multiplier": 8}))

    config = load_valuation_config(path)

    assert config.nexus_bounds == (20, 70)
    assert config.satellite_ticket_multiplier == 8
    assert config.captain_multiplier == DEFAULT_VALUATION_CONFIG.captain_multiplier


def test_load_valuation_config_rejects_bad_documents(tmp_path):
    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    with pytest.raises(ValueError):
        load_valuation_config(broken)

    listed = tmp_path / "list.json"
    listed.write_text("[1, 2]")
    with pytest.raises(ValueError):
        load_valuation_config(listed)


def test_save_and_load_preserves_defaults(tmp_path):
    path = tmp_path / "defaults.json"
    save_valuation_config(DEFAULT_VALUATION_CONFIG, path)
    assert load_valuation_config(path) == DEFAULT_VALUATION_CONFIG


def test_config_from_env(tmp_path, monkeypatch):
    monkeypatch.delenv(CONFIG_PATH_ENV, raising=False)
    assert config_from_env() is DEFAULT_VALUATION_CONFIG

    monkeypatch.setenv(CONFIG_PATH_ENV, str(tmp_path / "missing.json"))
    assert config_from_env() is DEFAULT_VALUATION_CONFIG

    path = tmp_path / "env.json"
    path.write_text(json.dumps({"strength_base": 35.0}))
    monkeypatch.setenv(CONFIG_PATH_ENV, str(path))
    assert config_from_env().strength_base == 35.0
