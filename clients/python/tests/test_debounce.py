from __future__ import annotations

import asyncio

import pytest

from tablekit_client_sdk.debounce import Debouncer


@pytest.mark.asyncio
async def test_only_last_value_in_a_burst_is_delivered() -> None:
    delivered: list[str] = []
    debouncer = Debouncer(60, delivered.append, initial="")

    for value in ("a", "an", "ana"):
        debouncer.push(value)
        await asyncio.sleep(0.005)
    assert delivered == []
    assert debouncer.pending

    await debouncer.wait()
    assert delivered == ["ana"]
    assert debouncer.value == "ana"
    assert not debouncer.pending


@pytest.mark.asyncio
async def test_spaced_pushes_each_fire() -> None:
    delivered: list[str] = []
    debouncer = Debouncer(10, delivered.append)

    debouncer.push("first")
    await debouncer.wait()
    debouncer.push("second")
    await debouncer.wait()

    assert delivered == ["first", "second"]


@pytest.mark.asyncio
async def test_zero_delay_still_defers_to_next_iteration() -> None:
    delivered: list[str] = []
    debouncer = Debouncer(0, delivered.append)

    debouncer.push("x")
    assert delivered == []
    await debouncer.wait()
    assert delivered == ["x"]


@pytest.mark.asyncio
async def test_cancel_drops_pending_value() -> None:
    delivered: list[str] = []
    debouncer = Debouncer(10, delivered.append, initial="start")

    debouncer.push("never")
    debouncer.cancel()
    await debouncer.wait()
    await asyncio.sleep(0.03)

    assert delivered == []
    assert debouncer.value == "start"


def test_negative_delay_is_clamped() -> None:
    assert Debouncer(-5, lambda value: None).delay_ms == 0
