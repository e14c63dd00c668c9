from contextvars import ContextVar, Token
from typing import Optional

from .exceptions import CartNotInitializedError
from .store import CartStore

_current_cart: ContextVar[Optional[CartStore]] = ContextVar("pico_cart_current", default=None)

class CartProvider:
    """
    Hydrates a store and makes it the current cart for the enclosed block.

        async with CartProvider(store):
            use_cart().add_to_cart(product)
    """

    def __init__(self, store: CartStore):
        self.store = store
        self._token: Optional[Token] = None

    async def __aenter__(self) -> CartStore:
        await self.store.hydrate()
        self._token = _current_cart.set(self.store)
        return self.store

    async def __aexit__(self, exc_type, exc, tb) -> None:
        try:
            await self.store.flush()
        finally:
            if self._token is not None:
                _current_cart.reset(self._token)
                self._token = None

def use_cart() -> CartStore:
    store = _current_cart.get()
    if store is None:
        raise CartNotInitializedError("use_cart")
    return store
