from core_config import Settings, get_settings
from core_config.constants import JWT_ISSUER, SERVER_PORT


def test_defaults(monkeypatch):
    for var in ("ENVIRONMENT", "SERVER_PORT", "REDIS_URL"):
        monkeypatch.delenv(var, raising=False)
    s = get_settings()
    assert s.environment == "production"
    assert not s.is_development
    assert s.server_port == SERVER_PORT
    assert s.jwt_issuer == JWT_ISSUER
    assert s.sqs_max_messages == 10
    assert s.sqs_wait_time_s == 20


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.setenv("SERVER_PORT", "9000")
    monkeypatch.setenv("REDIS_URL", "redis://cache:6379/1")
    s = Settings()
    assert s.is_development
    assert s.server_port == 9000
    assert s.redis_url == "redis://cache:6379/1"
