from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from jsonstore import AsyncJsonStore, JsonStore, NotFoundError, PydanticCodec


def test_async_store_basic_flow(store_file: Path):
    async def _run():
        s = await AsyncJsonStore.open(store_file, PydanticCodec(int))

        await s.set("a", 1)
        await s.set("b", 2)
        assert sorted(await s.keys()) == ["a", "b"]

        await s.delete("a")
        with pytest.raises(NotFoundError):
            await s.get("a")
        assert await s.get("b") == 2

    asyncio.run(_run())

    assert JsonStore(store_file, PydanticCodec(int)).get("b") == 2


def test_async_store_concurrent_sets(store_file: Path):
    async def _run():
        s = AsyncJsonStore(JsonStore(store_file, PydanticCodec(str)))
        await asyncio.gather(*(s.set(f"k{i}", str(i)) for i in range(50)))
        return s

    s = asyncio.run(_run())
    assert len(s.store.keys()) == 50
    assert s.store.get("k42") == "42"
