"""
Tests for JSON-backed settings.
"""

from golftrack.utils.config import Config


class TestConfig:
    """Tests for Config."""

    def test_defaults(self, tmp_path):
        config = Config(app_dir=tmp_path)
        assert config.get("location_timeout_ms") == 15000
        assert config.get("max_shot_distance") == 400
        assert config.get("mapbox_token") == ""
        assert config.get("missing", "fallback") == "fallback"

    def test_set_persists(self, tmp_path):
        Config(app_dir=tmp_path).set("mapbox_token", "pk.test")
        assert Config(app_dir=tmp_path).get("mapbox_token") == "pk.test"

    def test_clear_reverts_to_default(self, tmp_path):
        config = Config(app_dir=tmp_path)
        config.set("google_maps_api_key", "secret")
        config.set("custom", 1)
        config.clear("google_maps_api_key")
        config.clear("custom")

        reloaded = Config(app_dir=tmp_path)
        assert reloaded.get("google_maps_api_key") == ""
        assert reloaded.get("custom") is None

    def test_corrupt_file_falls_back(self, tmp_path):
        (tmp_path / "config.json").write_text("{broken")
        config = Config(app_dir=tmp_path)
        assert config.get("trend_window") == "week"

    def test_env_home(self, tmp_path, monkeypatch):
        monkeypatch.setenv("GOLFTRACK_HOME", str(tmp_path / "home"))
        config = Config()
        assert config.get_app_dir() == tmp_path / "home"
        assert config.get_db_path() == tmp_path / "home" / "golftrack.db"

    def test_shared_instance(self, tmp_path, monkeypatch):
        monkeypatch.setenv("GOLFTRACK_HOME", str(tmp_path))
        monkeypatch.setattr(Config, "_instance", None)
        assert Config.instance() is Config.instance()
