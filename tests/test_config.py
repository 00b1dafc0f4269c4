"""Tests for hub configuration."""

from apkhub.config import HubConfig


class TestHubConfig:

    def test_defaults(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        config = HubConfig()
        assert config.metadata_path == "metadata.json"
        assert config.port == 1234
        assert config.metadata_file.name == "metadata.json"

    def test_env_overrides(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("METADATA_PATH", "/data/meta.json")
        monkeypatch.setenv("DELETE_SECRET", "hunter2")
        monkeypatch.setenv("PORT", "8080")
        config = HubConfig()
        assert config.metadata_path == "/data/meta.json"
        assert config.delete_secret == "hunter2"
        assert config.port == 8080

    def test_env_file(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".env").write_text("UPLOADS_DIR=/srv/apks\n", encoding="utf-8")
        config = HubConfig()
        assert config.uploads_dir == "/srv/apks"
