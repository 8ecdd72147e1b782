import dataclasses

import pytest


def test_api_base_url(test_settings):
    assert test_settings.api_base_url == "https://shop.example/wp-json/wc/v2"

    trailing = dataclasses.replace(test_settings, woocommerce_site_url="https://shop.example/")
    assert trailing.api_base_url == "https://shop.example/wp-json/wc/v2"


@pytest.mark.parametrize(
    "overrides",
    [
        {"cache_ttl": 0},
        {"upstream_timeout": -1.0},
        {"cache_backend": "memcached"},
        {"environment": "staging"},
    ],
)
def test_invalid_settings_rejected(test_settings, overrides):
    with pytest.raises(ValueError):
        dataclasses.replace(test_settings, **overrides)


def test_development_flag(test_settings):
    assert test_settings.is_development is False
    assert dataclasses.replace(test_settings, environment="development").is_development is True
