"""Shared fixtures: keep every test away from the real config and data dirs."""

import pytest


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point config and data paths at a temp directory."""
    config_dir = tmp_path / "config"
    data_dir = tmp_path / "data"
    config_dir.mkdir()
    data_dir.mkdir()

    monkeypatch.setenv("AU_PAY_CALC_CONFIG_PATH", str(config_dir))
    monkeypatch.setenv("XDG_DATA_HOME", str(data_dir))
    monkeypatch.delenv("AU_PAY_CALC_TAX_RULES_PATH", raising=False)

    return {
        "config_dir": config_dir,
        "data_dir": data_dir,
    }
