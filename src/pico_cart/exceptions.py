class PicoCartError(Exception):
    pass

class CartNotInitializedError(PicoCartError):
    def __init__(self, accessor: str = "use_cart"):
        super().__init__(f"{accessor} must be used within a CartProvider. Hydrate the cart store before using it.")

class ItemNotFoundError(PicoCartError):
    def __init__(self, item_id: str):
        self.item_id = item_id
        super().__init__(f"No cart item with id {item_id!r}")

class CorruptCartDataError(PicoCartError):
    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Persisted cart under {key!r} could not be parsed: {reason}")
