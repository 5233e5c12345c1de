import pytest
from pydantic import ValidationError

from heatbuilder.settings import Settings


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("HEATBUILDER_LANES", raising=False)
    monkeypatch.delenv("HEATBUILDER_OUTPUT_DIR", raising=False)

    settings = Settings()
    assert settings.lanes_per_heat == 8
    assert settings.output_dir.name == "protocols"


def test_settings_read_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("HEATBUILDER_LANES", "10")
    monkeypatch.setenv("HEATBUILDER_OUTPUT_DIR", str(tmp_path))

    settings = Settings()
    assert settings.lanes_per_heat == 10
    assert settings.output_dir == tmp_path


def test_settings_reject_non_positive_lanes(monkeypatch):
    monkeypatch.setenv("HEATBUILDER_LANES", "0")

    with pytest.raises(ValidationError):
        Settings()
