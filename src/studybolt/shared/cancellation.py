"""Cooperative cancellation for long-lived upstream streams."""

from collections.abc import Awaitable, Callable

from studybolt.shared.exceptions import StreamCancelled


class CancellationToken:
    """Cooperative cancellation token for completion streams.

    Create a token, pass it to ``stream_completion(cancel_token=token)``,
    and call ``token.cancel()`` to stop the stream. An optional async
    ``probe`` (e.g. ``request.is_disconnected``) is consulted at every
    check, so a dropped HTTP client cancels the stream without anyone
    calling ``cancel()`` explicitly.

    The stream checks ``raise_if_cancelled()`` before each fragment is
    handed to the consumer and raises ``StreamCancelled``.
    """

    def __init__(self, probe: Callable[[], Awaitable[bool]] | None = None) -> None:
        self._cancelled = False
        self._probe = probe

    def cancel(self) -> None:
        """Request cancellation."""
        self._cancelled = True

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    async def check(self) -> bool:
        """Return True once cancellation was requested or the probe fired."""
        if not self._cancelled and self._probe is not None and await self._probe():
            self._cancelled = True
        return self._cancelled

    async def raise_if_cancelled(self) -> None:
        """Raise ``StreamCancelled`` if cancellation was requested."""
        if await self.check():
            raise StreamCancelled()
