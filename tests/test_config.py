import pytest

from gitlab_runners.config import DEFAULT_URL, Settings, load_settings
from gitlab_runners.errors import ConfigError


def test_defaults():
    s = load_settings({})
    assert s == Settings(url=DEFAULT_URL, token="", timeout_s=30.0, log_level="INFO")


def test_env_overrides():
    s = load_settings(
        {
            "GITLAB_URL": "https://git.internal/api/v4/",
            "GITLAB_TOKEN": "tok",
            "GITLAB_HTTP_TIMEOUT_S": "2.5",
            "GITLAB_LOG_LEVEL": "debug",
        }
    )
    assert s.url == "https://git.internal/api/v4"
    assert s.token == "tok"
    assert s.timeout_s == 2.5
    assert s.log_level == "DEBUG"


@pytest.mark.parametrize("raw", ["soon", "", "0", "-3"])
def test_bad_timeout(raw):
    with pytest.raises(ConfigError):
        load_settings({"GITLAB_HTTP_TIMEOUT_S": raw})


def test_bad_log_level():
    with pytest.raises(ConfigError):
        load_settings({"GITLAB_LOG_LEVEL": "verbose"})
