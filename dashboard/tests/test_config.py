import pytest

from dashboard.config import AppConfig, get_config, set_config_for_test
from dashboard.logging import get_logger


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    for var in [
        "LOG_LEVEL", "DATA_DIR", "ORDER_FETCH_LIMIT", "DEFAULT_GRANULARITY",
        "WEEK_SCHEME", "SAMPLE_DATA_ON_FAILURE",
    ]:
        monkeypatch.delenv(var, raising=False)
    yield
    set_config_for_test()


def test_defaults():
    """Test the defaults used when nothing is configured."""
    config = AppConfig()
    assert config.data_dir == "sample_data"
    assert config.order_fetch_limit == 1000
    assert config.default_page_size == 20
    assert config.default_granularity == "hourly"
    assert config.week_scheme == "iso"
    assert config.sample_data_on_failure is True
    assert config.display_timezone is None


def test_environment_overrides(monkeypatch):
    """Test values read from environment variables."""
    monkeypatch.setenv("ORDER_FETCH_LIMIT", "50")
    monkeypatch.setenv("WEEK_SCHEME", "sunday")
    monkeypatch.setenv("SAMPLE_DATA_ON_FAILURE", "false")
    config = AppConfig()
    assert config.order_fetch_limit == 50
    assert config.week_scheme == "sunday"
    assert config.sample_data_on_failure is False


def test_set_config_for_test_replaces_singleton():
    """Test the singleton override used by other tests."""
    set_config_for_test(data_dir="/tmp/orders", log_level="DEBUG")
    assert get_config().data_dir == "/tmp/orders"
    assert get_config() is get_config()


def test_logger_follows_config_level():
    """Test that a logger can be obtained after the level changes."""
    set_config_for_test(log_level="WARNING")
    log = get_logger("dashboard.tests")
    log.warning("configured")
    set_config_for_test(log_level="DEBUG")
    get_logger().debug("reconfigured")
