import asyncio

from utils.debounce import Debouncer


async def test_only_last_call_runs():
    calls = []

    async def search(query):
        calls.append(query)
        return query

    debounced = Debouncer(search, wait_ms=20)
    first = debounced("j")
    second = debounced("ja")
    last = debounced("jap")

    assert await last == "jap"
    assert calls == ["jap"]
    assert first.cancelled() and second.cancelled()


async def test_calls_outside_window_all_run():
    calls = []

    async def search(query):
        calls.append(query)

    debounced = Debouncer(search, wait_ms=5)
    await debounced("a")
    await debounced("b")
    assert calls == ["a", "b"]


async def test_running_call_is_not_cancelled():
    started = asyncio.Event()
    release = asyncio.Event()
    calls = []

    async def search(query):
        calls.append(query)
        started.set()
        await release.wait()

    debounced = Debouncer(search, wait_ms=0)
    first = debounced("slow")
    await started.wait()
    second = debounced("next")
    release.set()

    await first
    await second
    assert calls == ["slow", "next"]
    assert not first.cancelled()
