from note_gen.config import Settings


def _settings(**values) -> Settings:
    return Settings(_env_file=None, **values)


def test_generation_config_defaults(monkeypatch) -> None:
    for name in ["CLAUDE_API_KEY", "LLM_MODEL", "LLM_MAX_OUTPUT_TOKENS", "LLM_NUM_RETRIES", "PORT"]:
        monkeypatch.delenv(name, raising=False)

    settings = _settings()
    config = settings.generation_config()

    assert config.api_key == ""
    assert config.model == "claude-sonnet-4-20250514"
    assert config.max_output_tokens == 1024
    assert config.max_retries == 0
    assert settings.port == 3001


def test_generation_config_from_env(monkeypatch) -> None:
    monkeypatch.setenv("CLAUDE_API_KEY", "  secret  ")
    monkeypatch.setenv("LLM_MAX_OUTPUT_TOKENS", "2048")
    monkeypatch.setenv("LLM_NUM_RETRIES", "-3")
    monkeypatch.setenv("PORT", "8080")

    settings = _settings()
    config = settings.generation_config()

    assert config.api_key == "secret"
    assert config.max_output_tokens == 2048
    assert config.max_retries == 0
    assert settings.port == 8080
    assert "secret" not in repr(config)


def test_cors_origins_parsing() -> None:
    assert _settings(CORS_ALLOW_ORIGINS="http://a.test, http://b.test,").cors_origins() == [
        "http://a.test",
        "http://b.test",
    ]
    assert _settings(CORS_ALLOW_ORIGINS=" , ").cors_origins() == ["*"]
