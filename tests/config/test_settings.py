import json

import pytest

import crec_speeches.config.settings as config_settings
from crec_speeches.config import (
    AppConfig,
    CrawlConfig,
    GovInfoConfig,
    StorageConfig,
    load_config,
    resolve_config_path,
    save_config,
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.setattr(
        config_settings,
        "_DEFAULT_CONFIG_LOCATIONS",
        (tmp_path / "crec_speeches.json", tmp_path / "config.json"),
    )


def test_environment_values_are_coerced(monkeypatch):
    monkeypatch.setenv("CREC_GOVINFO_SEARCH_PAGE_SIZE", "25")
    monkeypatch.setenv("CREC_GOVINFO_TIMEOUT", "15.5")
    monkeypatch.setenv("CREC_CRAWL_MAX_RESULTS", "10")
    monkeypatch.setenv("CREC_CRAWL_CONGRESS_SESSION", "116")
    monkeypatch.setenv("CREC_CRAWL_KEEP_EMPTY_SPEECHES", "no")
    monkeypatch.setenv("CREC_STORAGE_ECHO_SQL", "true")

    config = load_config()

    assert config.govinfo.search_page_size == 25 and isinstance(config.govinfo.search_page_size, int)
    assert config.govinfo.timeout == pytest.approx(15.5)
    assert config.crawl.max_results == 10
    assert config.crawl.congress_session == 116
    assert config.crawl.keep_empty_speeches is False
    assert config.storage.echo_sql is True


def test_defaults_match_session_117():
    config = load_config()

    assert config.crawl.congress_session == 117
    assert config.crawl.max_results is None
    assert config.govinfo.base_url == "https://api.govinfo.gov"


def test_invalid_boolean_environment_value_raises(monkeypatch):
    monkeypatch.setenv("CREC_STORAGE_ECHO_SQL", "definitely")

    with pytest.raises(ValueError):
        load_config()


def test_resolve_config_path_prefers_existing_file(tmp_path):
    first = tmp_path / "crec_speeches.json"
    second = tmp_path / "config.json"

    assert resolve_config_path(None) == second

    second.write_text("{}", encoding="utf8")
    assert resolve_config_path(None) == second
    assert resolve_config_path(first) == first


def test_save_config_round_trips_through_load(tmp_path):
    target = tmp_path / "settings" / "crec.json"
    config = AppConfig(
        govinfo=GovInfoConfig(api_key="ABC123", granule_page_size=200),
        crawl=CrawlConfig(date_from="2022-01-01", date_to="2022-01-31"),
        storage=StorageConfig(database_url="sqlite:///demo.db"),
    )

    saved_path = save_config(config, target)
    data = json.loads(target.read_text(encoding="utf8"))
    loaded = load_config(saved_path)

    assert saved_path == target
    assert data["govinfo"]["api_key"] == "ABC123"
    assert loaded.govinfo.granule_page_size == 200
    assert loaded.crawl.date_from == "2022-01-01"
    assert loaded.storage.database_url == "sqlite:///demo.db"
