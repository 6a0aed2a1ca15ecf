"""
Server configuration tests: environment loading and validation.

Run:
----
    pytest tests/test_server_config.py -v
"""

from pathlib import Path

from server.config import ServerConfig


class TestServerConfig:
    def test_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("PORT", "9001")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("DATA_DIR", str(tmp_path))
        monkeypatch.setenv("FEED_PRESET", "multi_source")
        monkeypatch.setenv("CONTENT_SOURCES", "TheCatAPI, shibe")
        monkeypatch.setenv("EMBEDDINGS_ENABLED", "off")
        monkeypatch.setenv("VIEWPORT_WIDTH", "800")
        monkeypatch.setenv("RANDOM_SEED", "42")
        config = ServerConfig.from_env()
        assert config.port == 9001
        assert config.log_level == "DEBUG"
        assert config.data_dir == tmp_path
        assert config.content_sources == ["thecatapi", "shibe"]
        assert config.embeddings_enabled is False
        assert config.random_seed == 42

        feed = config.feed_config()
        assert feed.ingest_cap == 90
        assert feed.viewport_width == 800

    def test_defaults(self, monkeypatch):
        for key in ("CONTENT_SOURCES", "FEED_PRESET", "EMBEDDINGS_ENABLED", "RANDOM_SEED", "DATA_DIR"):
            monkeypatch.delenv(key, raising=False)
        config = ServerConfig.from_env()
        assert config.content_sources == ["thecatapi", "cataas"]
        assert config.embeddings_enabled is True
        assert config.random_seed is None
        assert config.validate() == (True, [])

    def test_validate_reports_problems(self, tmp_path):
        config = ServerConfig(
            data_dir=tmp_path,
            feed_preset="huge",
            content_sources=["json", "flickr"],
            content_json_path=Path(tmp_path / "missing.json"),
        )
        ok, errors = config.validate()
        assert not ok
        assert any("FEED_PRESET" in e for e in errors)
        assert any("flickr" in e for e in errors)
        assert any("not found" in e for e in errors)

    def test_json_source_requires_path(self, tmp_path):
        ok, errors = ServerConfig(data_dir=tmp_path, content_sources=["json"]).validate()
        assert not ok
        assert "CONTENT_JSON_PATH" in errors[0]
