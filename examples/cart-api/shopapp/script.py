"""Drive the cart without HTTP: hydrate, mutate, and persist to disk."""
import asyncio
import logging

from pico_cart import CartProvider, CartSettings, CartStore, JsonFileStorage, Product, use_cart

CATALOG = [
    Product(id="p1", title="Shirt", image_url="https://example.com/shirt.png", price=20),
    Product(id="p2", title="Hat", image_url="https://example.com/hat.png", price=7.5),
]


async def main() -> None:
    store = CartStore(CartSettings(serialize_writes=True), JsonFileStorage("./data/cart.json"))

    async with CartProvider(store):
        cart = use_cart()
        for product in CATALOG:
            cart.add_to_cart(product)
        cart.increment("p1")
        cart.decrement("p2")
        for item in cart.products:
            print(f"{item.quantity} x {item.title} @ {item.price}")

    await store.aclose()


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    asyncio.run(main())
