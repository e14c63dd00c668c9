import asyncio
import json
import logging
from contextlib import suppress
from typing import Any, Iterable, Iterator, Mapping, Optional, Set, Tuple, Union

from pico_ioc import component

from .config import CartSettings
from .exceptions import CorruptCartDataError, ItemNotFoundError
from .models import LineItem, Product
from .storage import KeyValueStorage

logger = logging.getLogger(__name__)

Cart = Tuple[LineItem, ...]

def dump_cart(items: Iterable[LineItem]) -> str:
    return json.dumps([item.to_dict() for item in items])

def load_cart(raw: str, key: str) -> Cart:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CorruptCartDataError(key, f"invalid JSON ({e.msg})") from e
    if not isinstance(data, list):
        raise CorruptCartDataError(key, f"expected a list of items, got {type(data).__name__}")

    items = []
    seen: Set[str] = set()
    for entry in data:
        try:
            item = LineItem.from_dict(entry)
        except (TypeError, ValueError) as e:
            raise CorruptCartDataError(key, str(e)) from e
        if item.id in seen:
            raise CorruptCartDataError(key, f"duplicate item id {item.id!r}")
        seen.add(item.id)
        items.append(item)
    return tuple(items)

@component
class CartStore:
    """
    Owns the cart held in memory and writes it through to storage.

    Every mutation publishes a new tuple, so a snapshot handed out earlier is
    never changed underneath its reader. Memory is authoritative: the write
    that follows each mutation runs in the background and a failed write is
    only logged. Unless ``serialize_writes`` is set, writes may complete out of
    order and storage may briefly hold an older cart than memory.
    """

    def __init__(self, settings: CartSettings, storage: KeyValueStorage):
        self.settings = settings
        self.storage = storage
        self._products: Cart = ()
        self._hydrated = False
        self._pending: Set[asyncio.Task] = set()
        self._queue: Optional[asyncio.Queue] = None
        self._writer: Optional[asyncio.Task] = None

    @property
    def key(self) -> str:
        return self.settings.storage_key

    @property
    def products(self) -> Cart:
        return self._products

    @property
    def hydrated(self) -> bool:
        return self._hydrated

    def __len__(self) -> int:
        return len(self._products)

    def __iter__(self) -> Iterator[LineItem]:
        return iter(self._products)

    async def hydrate(self) -> Cart:
        products: Cart = ()
        try:
            raw = await self.storage.get_item(self.key)
            if raw:
                products = load_cart(raw, self.key)
        except CorruptCartDataError:
            if not self.settings.reset_on_corrupt:
                raise
            logger.warning("Discarding unreadable cart stored under %r", self.key, exc_info=True)
            products = ()
        self._products = products
        self._hydrated = True
        logger.info("Hydrated cart from %r with %d item(s)", self.key, len(products))
        return products

    def add_to_cart(self, product: Union[Product, Mapping[str, Any]]) -> Cart:
        if not isinstance(product, Product):
            product = Product.from_dict(product)
        current = self._products
        for index, item in enumerate(current):
            if item.id == product.id:
                merged = LineItem.from_product(product, item.quantity + 1)
                updated = current[:index] + (merged,) + current[index + 1:]
                break
        else:
            updated = current + (LineItem.from_product(product),)
        return self._publish(updated, "add_to_cart", product.id)

    def increment(self, item_id: str) -> Cart:
        updated = tuple(
            item.with_quantity(item.quantity + 1) if item.id == item_id else item
            for item in self._products
        )
        return self._publish(updated, "increment", item_id)

    def decrement(self, item_id: str) -> Cart:
        current = self._products
        index = next((i for i, item in enumerate(current) if item.id == item_id), None)
        if index is None:
            raise ItemNotFoundError(item_id)
        item = current[index]
        if item.quantity - 1 <= 0:
            updated = current[:index] + current[index + 1:]
        else:
            updated = current[:index] + (item.with_quantity(item.quantity - 1),) + current[index + 1:]
        return self._publish(updated, "decrement", item_id)

    def _publish(self, products: Cart, operation: str, item_id: str) -> Cart:
        self._products = products
        logger.debug("%s(%r) -> %d item(s)", operation, item_id, len(products))
        self._persist(products)
        return products

    def _persist(self, products: Cart) -> None:
        payload = dump_cart(products)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No event loop to hand the write to.
            asyncio.run(self._write(payload))
            return

        if self.settings.serialize_writes:
            self._ensure_writer(loop).put_nowait(payload)
            return

        task = loop.create_task(self._write(payload))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _write(self, payload: str) -> None:
        try:
            await self.storage.set_item(self.key, payload)
        except Exception:
            logger.warning("Failed to persist cart under %r", self.key, exc_info=True)
        else:
            logger.debug("Persisted cart under %r", self.key)

    def _ensure_writer(self, loop: asyncio.AbstractEventLoop) -> asyncio.Queue:
        if self._queue is None or self._writer is None or self._writer.done():
            self._queue = asyncio.Queue()
            self._writer = loop.create_task(self._drain(self._queue))
        return self._queue

    async def _drain(self, queue: asyncio.Queue) -> None:
        while True:
            payload = await queue.get()
            try:
                await self._write(payload)
            finally:
                queue.task_done()

    async def flush(self) -> None:
        if self._queue is not None and self._writer is not None and not self._writer.done():
            await self._queue.join()
        while self._pending:
            await asyncio.gather(*list(self._pending))

    async def aclose(self) -> None:
        await self.flush()
        writer, self._writer, self._queue = self._writer, None, None
        if writer is not None and not writer.done():
            writer.cancel()
            with suppress(asyncio.CancelledError):
                await writer
