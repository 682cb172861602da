import logging

import pytest
from pydantic import ValidationError

from weather_relay import main as main_module
from weather_relay.core.config import Settings, load_settings
from weather_relay.core.errors import StartupConfigurationError


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    # 不受本机环境变量和 .env 影响
    for name in (
        "OPENWEATHER_API_KEY",
        "OPENWEATHER_BASE_URL",
        "OPENWEATHER_TIMEOUT",
        "OPENWEATHER_UNITS",
        "PORT",
        "HOST",
        "STATIC_DIR",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_defaults(clean_env, monkeypatch):
    monkeypatch.setenv("OPENWEATHER_API_KEY", "k")

    s = load_settings()

    assert s.port == 3000
    assert s.openweather_api_key == "k"
    assert s.openweather_timeout == 5.0
    assert s.openweather_units == "metric"
    assert s.current_weather_url == "https://api.openweathermap.org/data/2.5/weather"


def test_port_from_env(clean_env, monkeypatch):
    monkeypatch.setenv("OPENWEATHER_API_KEY", "k")
    monkeypatch.setenv("PORT", "8080")

    assert load_settings().port == 8080


def test_reads_dotenv_file(clean_env):
    (clean_env / ".env").write_text("OPENWEATHER_API_KEY=from-dotenv\n", encoding="utf-8")

    assert load_settings().openweather_api_key == "from-dotenv"


@pytest.mark.parametrize("value", [None, ""])
def test_missing_api_key(clean_env, monkeypatch, value):
    if value is not None:
        monkeypatch.setenv("OPENWEATHER_API_KEY", value)

    with pytest.raises(StartupConfigurationError) as excinfo:
        load_settings()

    assert "OPENWEATHER_API_KEY" in excinfo.value.fields


def test_settings_are_immutable(clean_env):
    s = Settings(_env_file=None, OPENWEATHER_API_KEY="k")

    with pytest.raises(ValidationError):
        s.port = 1234


def test_main_exits_without_api_key(clean_env, monkeypatch, caplog):
    started = []
    monkeypatch.setattr(main_module.uvicorn, "run", lambda *a, **kw: started.append(kw))

    with caplog.at_level(logging.ERROR):
        with pytest.raises(SystemExit) as excinfo:
            main_module.main()

    assert excinfo.value.code == 1
    assert started == []
    assert "OPENWEATHER_API_KEY not found" in caplog.text


def test_main_starts_server(clean_env, monkeypatch):
    monkeypatch.setenv("OPENWEATHER_API_KEY", "k")
    monkeypatch.setenv("PORT", "4000")
    started = []
    monkeypatch.setattr(main_module.uvicorn, "run", lambda app, **kw: started.append((app, kw)))

    main_module.main()

    assert len(started) == 1
    app, kw = started[0]
    assert kw["port"] == 4000
    assert app.state.settings.openweather_api_key == "k"
