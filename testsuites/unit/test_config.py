import pytest
import yaml

from uiready.framework.config import Browser, ConfigLoader, SessionConfig
from uiready.framework.exceptions import ConfigurationError


@pytest.fixture
def write_config(tmp_path, monkeypatch):
    for name in ("DRIVER_BROWSER", "DRIVER_HEADLESS", "DRIVER_HOST", "DRIVER_PORT", "PROXY_SERVER"):
        monkeypatch.delenv(name, raising=False)

    def _write(data):
        config_path = tmp_path / "config.yaml"
        config_path.write_text(yaml.dump(data), encoding="utf-8")
        ConfigLoader.reset()
        return ConfigLoader(config_path=config_path)

    yield _write
    ConfigLoader.reset()


def test_env_override_and_defaults(write_config, monkeypatch):
    loader = write_config({"driver": {"browser": "chrome", "headless": True}})
    assert loader.get("driver.browser") == "chrome"
    assert loader.get("driver.port", 9222) == 9222

    monkeypatch.setenv("DRIVER_HEADLESS", "false")
    assert loader.get("driver.headless", True) is False
    monkeypatch.setenv("DRIVER_BROWSER", "firefox")
    assert loader.get("driver.browser") == "firefox"


def test_get_property_defaults_to_empty_string(write_config):
    loader = write_config({"proxy": {"server": "proxy.local:3128"}})

    assert loader.get_property("proxy.server") == "proxy.local:3128"
    assert loader.get_property("driver.binary_path") == ""


def test_browser_identify():
    assert Browser.identify("Chrome") is Browser.CHROME
    assert Browser.identify("remotechrome") is Browser.REMOTE_CHROME
    with pytest.raises(ValueError):
        Browser.identify("netscape")


def test_session_config_from_loader(write_config):
    loader = write_config(
        {
            "driver": {"browser": "firefox", "headless": False, "binary_path": ""},
            "proxy": {"server": "proxy.local:3128"},
        }
    )

    config = SessionConfig.from_loader(loader)
    assert config.browser is Browser.FIREFOX
    assert config.headless is False
    assert config.proxy_server == "proxy.local:3128"
    assert config.driver_binary_path is None


def test_remote_browser_needs_host_and_port(write_config):
    with pytest.raises(ConfigurationError):
        SessionConfig.from_loader(write_config({"driver": {"browser": "remotechrome", "host": "grid"}}))

    config = SessionConfig.from_loader(
        write_config({"driver": {"browser": "remotechrome", "host": "grid", "port": 9222}})
    )
    assert (config.remote_host, config.remote_port) == ("grid", "9222")


@pytest.mark.parametrize("browser", [None, "", "netscape"])
def test_missing_or_unknown_browser_is_a_configuration_error(write_config, browser):
    loader = write_config({"driver": {"browser": browser}})
    with pytest.raises(ConfigurationError):
        SessionConfig.from_loader(loader)
