import asyncio
from typing import Dict, List, Optional

import pytest
from fastapi import FastAPI
from pico_ioc import init, configuration, YamlTreeSource
from pico_cart import CartSettings, CartStore, MemoryStorage

class RecordingStorage(MemoryStorage):
    """MemoryStorage that records every write and can delay chosen ones."""

    def __init__(self, delays: Optional[List[float]] = None, initial: Optional[Dict[str, str]] = None):
        super().__init__(initial)
        self.delays = list(delays or [])
        self.writes: List[str] = []
        self.gets = 0

    async def get_item(self, key: str) -> Optional[str]:
        self.gets += 1
        return await super().get_item(key)

    async def set_item(self, key: str, value: str) -> None:
        delay = self.delays.pop(0) if self.delays else 0
        if delay:
            await asyncio.sleep(delay)
        self.writes.append(value)
        await super().set_item(key, value)

@pytest.fixture
def settings():
    return CartSettings()

@pytest.fixture
def storage():
    return RecordingStorage()

@pytest.fixture
def store(settings, storage):
    return CartStore(settings, storage)

@pytest.fixture
def config_file(tmp_path):
    cfg = tmp_path / "config.yml"
    cfg.write_text(
        "cart:\n"
        f"  storage_path: '{tmp_path / 'data' / 'cart.json'}'\n"
        "  storage_key: 'test:cart'\n"
        "  serialize_writes: true\n"
        "cart_api:\n"
        "  title: 'Cart Test API'\n"
        "  version: '9.9.9'\n"
        "  debug: true\n",
        encoding="utf-8",
    )
    return cfg

@pytest.fixture
def container(config_file):
    cfg = configuration(YamlTreeSource(str(config_file)))
    return init(
        modules=[
            "pico_cart.config",
            "pico_cart.store",
            "pico_cart.factory",
        ],
        config=cfg,
    )

@pytest.fixture
def app(container):
    return container.get(FastAPI)

@pytest.fixture
def make_storage():
    return RecordingStorage
