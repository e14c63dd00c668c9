import dataclasses
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from pico_ioc import component, configure, factory, provides

from .api import build_cart_router
from .config import CartApiSettings, CartSettings
from .context import CartProvider
from .storage import JsonFileStorage, KeyValueStorage, MemoryStorage
from .store import CartStore

logger = logging.getLogger(__name__)

def create_storage(settings: CartSettings) -> KeyValueStorage:
    if settings.storage_path:
        logger.info("Persisting cart to %s", settings.storage_path)
        return JsonFileStorage(settings.storage_path)
    logger.info("No cart.storage_path configured; cart is kept in memory only")
    return MemoryStorage()

@factory
class CartStorageFactory:
    @provides(KeyValueStorage, scope="singleton")
    def create_key_value_storage(self, settings: CartSettings) -> KeyValueStorage:
        return create_storage(settings)

@factory
class CartAppFactory:
    @provides(FastAPI, scope="singleton")
    def create_fastapi_app(self, settings: CartApiSettings) -> FastAPI:
        return FastAPI(**dataclasses.asdict(settings))

@component
class CartApiConfigurer:
    @configure
    def setup_cart_api(self, app: FastAPI, store: CartStore, settings: CartSettings) -> None:
        app.include_router(build_cart_router(store, settings.route_prefix))

        @asynccontextmanager
        async def lifespan_manager(app_instance):
            async with CartProvider(store):
                yield
            await store.aclose()

        app.router.lifespan_context = lifespan_manager
