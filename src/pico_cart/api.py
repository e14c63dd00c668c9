from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException

from .exceptions import CartNotInitializedError, ItemNotFoundError
from .models import Product
from .store import Cart, CartStore

def cart_payload(products: Cart) -> Dict[str, Any]:
    return {"products": [item.to_dict() for item in products]}

def build_cart_router(store: CartStore, prefix: str = "/cart") -> APIRouter:
    router = APIRouter(prefix=prefix, tags=["Cart"])

    def hydrated_store() -> CartStore:
        if not store.hydrated:
            raise HTTPException(status_code=503, detail=str(CartNotInitializedError("The cart API")))
        return store

    @router.get("")
    async def get_cart(cart: CartStore = Depends(hydrated_store)):
        return cart_payload(cart.products)

    @router.post("/items", status_code=201)
    async def add_to_cart(data: Dict[str, Any] = Body(...), cart: CartStore = Depends(hydrated_store)):
        try:
            product = Product.from_dict(data)
        except (TypeError, ValueError) as e:
            raise HTTPException(status_code=422, detail=str(e)) from e
        return cart_payload(cart.add_to_cart(product))

    @router.post("/items/{item_id}/increment")
    async def increment(item_id: str, cart: CartStore = Depends(hydrated_store)):
        return cart_payload(cart.increment(item_id))

    @router.post("/items/{item_id}/decrement")
    async def decrement(item_id: str, cart: CartStore = Depends(hydrated_store)):
        try:
            return cart_payload(cart.decrement(item_id))
        except ItemNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e)) from e

    return router
