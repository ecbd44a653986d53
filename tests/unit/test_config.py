from placeholder.config import Settings


def test_settings_defaults() -> None:
    settings = Settings(_env_file=None)
    assert settings.port == 8080
    assert settings.max_dimension == 2000
    assert settings.stats_top_limit == 10
    assert settings.hit_retention_ms is None


def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("PORT", "9090")
    monkeypatch.setenv("MAX_DIMENSION", "500")
    monkeypatch.setenv("HIT_RETENTION_MS", "15000")

    settings = Settings(_env_file=None)
    assert settings.port == 9090
    assert settings.max_dimension == 500
    assert settings.hit_retention_ms == 15000
