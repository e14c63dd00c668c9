"""Unit tests for pico_cart config module."""
from dataclasses import asdict

from fastapi import FastAPI
from pico_cart.config import DEFAULT_STORAGE_KEY, CartApiSettings, CartSettings


class TestCartSettings:
    """Tests for CartSettings dataclass."""

    def test_default_values(self):
        settings = CartSettings()

        assert settings.storage_key == DEFAULT_STORAGE_KEY == "@GoMarketplace:products"
        assert settings.storage_path == ""
        assert settings.serialize_writes is False
        assert settings.reset_on_corrupt is True
        assert settings.route_prefix == "/cart"

    def test_custom_values(self):
        settings = CartSettings(storage_key="k", storage_path="/tmp/c.json", serialize_writes=True)

        assert settings.storage_key == "k"
        assert settings.storage_path == "/tmp/c.json"
        assert settings.serialize_writes is True

    def test_has_configured_decorator(self):
        assert getattr(CartSettings, "_pico_infra", None) == "configured"
        meta = getattr(CartSettings, "_pico_meta", {})
        assert "configured" in meta


class TestCartApiSettings:
    """Tests for CartApiSettings dataclass."""

    def test_is_dataclass(self):
        assert asdict(CartApiSettings()) == {
            "title": "Pico-Cart API",
            "version": "1.0.0",
            "debug": False,
        }

    def test_can_create_fastapi_app(self):
        app = FastAPI(**asdict(CartApiSettings(title="Shop", version="2.0.0", debug=True)))

        assert app.title == "Shop"
        assert app.version == "2.0.0"
        assert app.debug is True

    def test_has_configured_decorator(self):
        assert getattr(CartApiSettings, "_pico_infra", None) == "configured"
