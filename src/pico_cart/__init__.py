from .config import CartSettings, CartApiSettings
from .models import LineItem, Product
from .storage import KeyValueStorage, MemoryStorage, JsonFileStorage
from .store import CartStore, dump_cart, load_cart
from .context import CartProvider, use_cart
from .api import build_cart_router
from .factory import CartStorageFactory, CartAppFactory
from .exceptions import PicoCartError, CartNotInitializedError, ItemNotFoundError, CorruptCartDataError

__all__ = [
    "CartSettings",
    "CartApiSettings",
    "LineItem",
    "Product",
    "KeyValueStorage",
    "MemoryStorage",
    "JsonFileStorage",
    "CartStore",
    "dump_cart",
    "load_cart",
    "CartProvider",
    "use_cart",
    "build_cart_router",
    "CartStorageFactory",
    "CartAppFactory",
    "PicoCartError",
    "CartNotInitializedError",
    "ItemNotFoundError",
    "CorruptCartDataError",
]
