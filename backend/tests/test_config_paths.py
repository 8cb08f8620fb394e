"""Tests for config loading and path resolution behavior."""

from pathlib import Path

from siteadmin.config import AppConfig, load_config


def test_defaults_when_settings_file_missing(tmp_path, monkeypatch):
    """A missing settings file yields defaults rooted at the working directory."""
    monkeypatch.chdir(tmp_path)
    for var in ("SITEADMIN_HOST", "SITEADMIN_PORT", "SITEADMIN_STORAGE_ROOT"):
        monkeypatch.delenv(var, raising=False)

    cfg = load_config(settings_path=tmp_path / "absent.yaml")

    assert cfg.server.host == "127.0.0.1"
    assert cfg.server.port == 3000
    assert Path(cfg.storage.root).resolve() == tmp_path.resolve()
    assert cfg.storage.config_file.resolve() == tmp_path.resolve() / "assets" / "site-content.json"
    assert cfg.storage.creds_file.resolve() == tmp_path.resolve() / "server-data" / "admins.json"
    assert cfg.storage.max_config_bytes == 5 * 1024 * 1024


def test_storage_root_relative_to_settings_dir(tmp_path):
    """Relative storage.root resolves from the settings file directory."""
    settings_file = tmp_path / "siteadmin.settings.yaml"
    settings_file.write_text(
        "storage:\n"
        "  root: site\n",
        encoding="utf-8",
    )

    cfg = load_config(settings_path=settings_file)
    assert Path(cfg.storage.root) == tmp_path.resolve() / "site"


def test_storage_root_absolute_remains_unchanged(tmp_path):
    """Absolute storage.root is preserved exactly as configured."""
    absolute_root = tmp_path / "absolute" / "site"
    settings_file = tmp_path / "siteadmin.settings.yaml"
    settings_file.write_text(
        "storage:\n"
        f"  root: {absolute_root}\n",
        encoding="utf-8",
    )

    cfg = load_config(settings_path=settings_file)
    assert Path(cfg.storage.root) == absolute_root


def test_settings_file_values(tmp_path):
    settings_file = tmp_path / "siteadmin.settings.yaml"
    settings_file.write_text(
        "server:\n"
        "  port: 8080\n"
        "  allowed_origins: ['http://localhost:5173']\n"
        "logging:\n"
        "  level: debug\n"
        "storage:\n"
        "  config_path: data/content.json\n"
        "  max_config_bytes: 1024\n",
        encoding="utf-8",
    )

    cfg = load_config(settings_path=settings_file)
    assert cfg.server.port == 8080
    assert cfg.server.allowed_origins == ["http://localhost:5173"]
    assert cfg.logging.level == "debug"
    assert cfg.storage.config_file == tmp_path.resolve() / "data" / "content.json"
    assert cfg.storage.max_config_bytes == 1024


def test_env_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("SITEADMIN_HOST", "0.0.0.0")
    monkeypatch.setenv("SITEADMIN_PORT", "9000")
    monkeypatch.setenv("SITEADMIN_STORAGE_ROOT", str(tmp_path / "www"))

    cfg = load_config(settings_path=tmp_path / "absent.yaml")
    assert cfg.server.host == "0.0.0.0"
    assert cfg.server.port == 9000
    assert Path(cfg.storage.root) == tmp_path / "www"


def test_invalid_port_env_ignored(tmp_path, monkeypatch):
    monkeypatch.setenv("SITEADMIN_PORT", "not-a-port")

    cfg = load_config(settings_path=tmp_path / "absent.yaml")
    assert cfg.server.port == AppConfig().server.port


def test_settings_path_from_env(tmp_path, monkeypatch):
    settings_file = tmp_path / "custom.yaml"
    settings_file.write_text("server:\n  port: 4000\n", encoding="utf-8")
    monkeypatch.setenv("SITEADMIN_SETTINGS", str(settings_file))
    monkeypatch.delenv("SITEADMIN_PORT", raising=False)

    cfg = load_config()
    assert cfg.server.port == 4000
