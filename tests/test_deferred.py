"""Tests for perch.loading.deferred: DeferredElement lifecycle."""

import anyio
import pytest

from perch.errors import LoadError
from perch.loading.deferred import DeferredElement, LoadState, wrap


class _Page:
    pass


class TestInitialState:
    def test_pending(self) -> None:
        element = wrap(lambda: _Page)
        assert element.state is LoadState.PENDING
        assert element.component is None
        assert element.error is None
        assert element.loading is False

    def test_wrap_does_not_load(self) -> None:
        calls = []
        wrap(lambda: calls.append(1))
        assert calls == []

    def test_render_default_placeholder(self) -> None:
        assert wrap(lambda: _Page).render() is None

    def test_render_custom_placeholder(self) -> None:
        assert wrap(lambda: _Page, placeholder="loading").render() == "loading"

    def test_repr(self) -> None:
        element = wrap(lambda: _Page, source="/pages/$index.py")
        assert "/pages/$index.py" in repr(element)
        assert "pending" in repr(element)


class TestActivation:
    @pytest.mark.anyio
    async def test_async_loader(self) -> None:
        async def load() -> type[_Page]:
            await anyio.sleep(0)
            return _Page

        element = wrap(load)
        assert await element.activate() is _Page
        assert element.state is LoadState.READY
        assert element.render() is _Page

    @pytest.mark.anyio
    async def test_sync_loader(self) -> None:
        element = wrap(lambda: _Page)
        assert await element.activate() is _Page
        assert element.state is LoadState.READY

    @pytest.mark.anyio
    async def test_ready_is_cached(self) -> None:
        calls = 0

        def load() -> type[_Page]:
            nonlocal calls
            calls += 1
            return _Page

        element = wrap(load)
        await element.activate()
        await element.activate()
        assert calls == 1
        assert element.load_attempts == 1


class TestSingleFlight:
    @pytest.mark.anyio
    async def test_concurrent_activations_share_one_load(self) -> None:
        calls = 0
        release = anyio.Event()

        async def load() -> type[_Page]:
            nonlocal calls
            calls += 1
            await release.wait()
            return _Page

        element = wrap(load)
        results: list[object] = []

        async def activate() -> None:
            results.append(await element.activate())

        async with anyio.create_task_group() as tg:
            tg.start_soon(activate)
            tg.start_soon(activate)
            tg.start_soon(activate)
            await anyio.wait_all_tasks_blocked()
            assert element.loading is True
            release.set()

        assert calls == 1
        assert results == [_Page, _Page, _Page]


class TestFailure:
    @pytest.mark.anyio
    async def test_failure_raises_load_error(self) -> None:
        async def load() -> None:
            raise RuntimeError("boom")

        element = wrap(load, source="/pages/$broken.py")
        with pytest.raises(LoadError) as exc_info:
            await element.activate()

        err = exc_info.value
        assert err.source == "/pages/$broken.py"
        assert isinstance(err.cause, RuntimeError)
        assert err.__cause__ is err.cause
        assert "boom" in str(err)
        assert element.state is LoadState.FAILED
        assert element.error is err

    @pytest.mark.anyio
    async def test_failure_is_terminal(self) -> None:
        calls = 0

        def load() -> None:
            nonlocal calls
            calls += 1
            raise ValueError("nope")

        element = wrap(load)
        for _ in range(3):
            with pytest.raises(LoadError):
                await element.activate()
        assert calls == 1
        assert element.state is LoadState.FAILED

    @pytest.mark.anyio
    async def test_render_raises_after_failure(self) -> None:
        def load() -> None:
            raise ValueError("nope")

        element = wrap(load)
        with pytest.raises(LoadError):
            await element.activate()
        with pytest.raises(LoadError):
            element.render()

    @pytest.mark.anyio
    async def test_concurrent_waiters_all_see_failure(self) -> None:
        release = anyio.Event()

        async def load() -> None:
            await release.wait()
            raise RuntimeError("boom")

        element = wrap(load)
        errors: list[LoadError] = []

        async def activate() -> None:
            try:
                await element.activate()
            except LoadError as exc:
                errors.append(exc)

        async with anyio.create_task_group() as tg:
            tg.start_soon(activate)
            tg.start_soon(activate)
            await anyio.wait_all_tasks_blocked()
            release.set()

        assert len(errors) == 2
        assert errors[0] is errors[1]
        assert element.load_attempts == 1


class TestSubscription:
    @pytest.mark.anyio
    async def test_notified_on_ready(self) -> None:
        seen: list[DeferredElement] = []
        element = wrap(lambda: _Page)
        element.subscribe(seen.append)
        await element.activate()
        assert seen == [element]

    @pytest.mark.anyio
    async def test_notified_on_failure(self) -> None:
        states: list[LoadState] = []

        def load() -> None:
            raise RuntimeError("boom")

        element = wrap(load)
        element.subscribe(lambda el: states.append(el.state))
        with pytest.raises(LoadError):
            await element.activate()
        assert states == [LoadState.FAILED]

    @pytest.mark.anyio
    async def test_unsubscribe(self) -> None:
        seen: list[DeferredElement] = []
        element = wrap(lambda: _Page)
        unsubscribe = element.subscribe(seen.append)
        unsubscribe()
        unsubscribe()
        await element.activate()
        assert seen == []

    @pytest.mark.anyio
    async def test_raising_subscriber_does_not_break_activation(self) -> None:
        seen: list[DeferredElement] = []

        def broken(_element: DeferredElement) -> None:
            raise ValueError("subscriber")

        element = wrap(lambda: _Page)
        element.subscribe(broken)
        element.subscribe(seen.append)

        assert await element.activate() is _Page
        assert element.state is LoadState.READY
        assert seen == [element]

    @pytest.mark.anyio
    async def test_raising_subscriber_keeps_load_error(self) -> None:
        seen: list[LoadState] = []

        def load() -> None:
            raise RuntimeError("boom")

        def broken(_element: DeferredElement) -> None:
            raise ValueError("subscriber")

        element = wrap(load)
        element.subscribe(broken)
        element.subscribe(lambda el: seen.append(el.state))

        with pytest.raises(LoadError) as exc_info:
            await element.activate()
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert seen == [LoadState.FAILED]
        with pytest.raises(LoadError):
            element.render()


class TestCancellation:
    @pytest.mark.anyio
    async def test_late_result_is_discarded(self) -> None:
        started = anyio.Event()
        release = anyio.Event()
        seen: list[DeferredElement] = []

        async def load() -> type[_Page]:
            started.set()
            # Finishes even though the activation is cancelled meanwhile
            with anyio.CancelScope(shield=True):
                await release.wait()
            return _Page

        element = wrap(load)
        element.subscribe(seen.append)
        scope = anyio.CancelScope()

        async def activate() -> None:
            with scope:
                await element.activate()

        async with anyio.create_task_group() as tg:
            tg.start_soon(activate)
            await started.wait()
            scope.cancel()
            release.set()

        assert element.state is LoadState.PENDING
        assert element.component is None
        assert element.error is None
        assert element.loading is False
        assert seen == []

    @pytest.mark.anyio
    async def test_cancelled_load_is_not_an_error(self) -> None:
        started = anyio.Event()

        async def load() -> type[_Page]:
            started.set()
            await anyio.sleep_forever()
            return _Page

        element = wrap(load)

        async with anyio.create_task_group() as tg:
            tg.start_soon(element.activate)
            await started.wait()
            tg.cancel_scope.cancel()

        assert element.state is LoadState.PENDING
        assert element.error is None

    @pytest.mark.anyio
    async def test_reactivation_after_cancel_loads_again(self) -> None:
        attempts = 0

        async def load() -> type[_Page]:
            nonlocal attempts
            attempts += 1
            if attempts == 1:
                await anyio.sleep_forever()
            return _Page

        element = wrap(load)
        with anyio.move_on_after(0.01):
            await element.activate()
        assert element.state is LoadState.PENDING

        assert await element.activate() is _Page
        assert attempts == 2
        assert element.state is LoadState.READY

    @pytest.mark.anyio
    async def test_waiter_takes_over_when_owner_cancelled(self) -> None:
        attempts = 0
        first_started = anyio.Event()

        async def load() -> type[_Page]:
            nonlocal attempts
            attempts += 1
            if attempts == 1:
                first_started.set()
                await anyio.sleep_forever()
            return _Page

        element = wrap(load)
        owner_scope = anyio.CancelScope()
        results: list[object] = []

        async def owner() -> None:
            with owner_scope:
                await element.activate()

        async def waiter() -> None:
            results.append(await element.activate())

        async with anyio.create_task_group() as tg:
            tg.start_soon(owner)
            await first_started.wait()
            tg.start_soon(waiter)
            await anyio.wait_all_tasks_blocked()
            owner_scope.cancel()

        assert results == [_Page]
        assert attempts == 2
