from dataclasses import dataclass
from pico_ioc import configured

DEFAULT_STORAGE_KEY = "@GoMarketplace:products"

@configured(target="self", prefix="cart", mapping="tree")
@dataclass
class CartSettings:
    storage_key: str = DEFAULT_STORAGE_KEY
    storage_path: str = ""
    serialize_writes: bool = False
    reset_on_corrupt: bool = True
    route_prefix: str = "/cart"

@configured(target="self", prefix="cart_api", mapping="tree")
@dataclass
class CartApiSettings:
    title: str = "Pico-Cart API"
    version: str = "1.0.0"
    debug: bool = False
