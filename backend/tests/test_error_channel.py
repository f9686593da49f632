import asyncio

from reviewflow.workflow.error_channel import ErrorChannel


def test_set_current_and_clear() -> None:
    channel = ErrorChannel()
    assert channel.current() is None

    channel.set("Upload failed")
    assert channel.current() == "Upload failed"

    channel.clear()
    assert channel.current() is None


def test_auto_clear_fires_after_delay() -> None:
    channel = ErrorChannel()

    async def main() -> None:
        channel.set_with_auto_clear("boom", 0.01)
        assert channel.current() == "boom"
        assert channel.auto_clear_pending
        await asyncio.sleep(0.05)

    asyncio.run(main())

    assert channel.current() is None
    assert not channel.auto_clear_pending


def test_cancel_auto_clear_keeps_message() -> None:
    channel = ErrorChannel()

    async def main() -> bool:
        channel.set_with_auto_clear("boom", 0.01)
        cancelled = channel.cancel_auto_clear()
        await asyncio.sleep(0.05)
        return cancelled

    assert asyncio.run(main()) is True
    assert channel.current() == "boom"
    assert channel.cancel_auto_clear() is False


def test_plain_set_drops_pending_auto_clear() -> None:
    channel = ErrorChannel()

    async def main() -> None:
        channel.set_with_auto_clear("first", 0.01)
        channel.set("second")
        await asyncio.sleep(0.05)

    asyncio.run(main())

    assert channel.current() == "second"


def test_close_cancels_timer() -> None:
    channel = ErrorChannel()

    async def main() -> None:
        channel.set_with_auto_clear("boom", 0.01)
        channel.close()
        await asyncio.sleep(0.05)

    asyncio.run(main())

    assert channel.current() == "boom"
    assert not channel.auto_clear_pending
