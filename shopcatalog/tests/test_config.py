import pytest
from shopcatalog.config import AppConfig, get_config, set_config_for_test


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    for var in [
        "APP_ENV", "LOG_LEVEL", "DATA_DIR", "CATALOG_FILE",
        "DEFAULT_PAGE_SIZE", "MAX_PAGE_SIZE", "DEFAULT_SEED_COUNT", "DEFAULT_SEED_VALUE",
    ]:
        monkeypatch.delenv(var, raising=False)
    yield
    set_config_for_test()


def test_defaults():
    config = AppConfig()
    assert config.data_dir == "sample_data"
    assert config.catalog_file == "products.csv"
    assert config.default_page_size == 20
    assert config.max_page_size == 100


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("MAX_PAGE_SIZE", "50")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    config = AppConfig()
    assert config.max_page_size == 50
    assert config.log_level == "debug"


def test_singleton_and_test_override():
    set_config_for_test(default_page_size=7)
    assert get_config() is get_config()
    assert get_config().default_page_size == 7
