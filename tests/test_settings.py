import json

from ev_dash.config.settings import Settings


def test_missing_file_gives_defaults(tmp_path):
    settings = Settings.load(tmp_path / "absent.json")
    assert settings == Settings()
    assert settings.telemetry_interval_ms == 2000
    assert settings.motion_interval_ms == 1000
    assert settings.cycle_limit is None


def test_saved_values_are_loaded(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(
        json.dumps({"telemetry_interval_ms": 500, "cycle_limit": 1000, "water_floor": 3.0}),
        encoding="utf-8",
    )

    assert Settings.load(path) == Settings(
        telemetry_interval_ms=500, cycle_limit=1000, water_floor=3.0
    )


def test_unknown_keys_are_ignored(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"motion_interval_ms": 250, "obsolete": True}), encoding="utf-8")

    settings = Settings.load(path)
    assert settings.motion_interval_ms == 250


def test_malformed_file_gives_defaults(tmp_path, caplog):
    path = tmp_path / "settings.json"
    path.write_text("{ nope", encoding="utf-8")

    assert Settings.load(path) == Settings()
    assert "Failed to load settings" in caplog.text
