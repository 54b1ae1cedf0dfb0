"""Stdio transport — feeds newline-delimited input to the dispatcher.

The loop owns no protocol logic: it reads lines, schedules one dispatcher run
per line and writes back whatever wire line each run produces.  Runs are
independent tasks, so a slow tool call does not hold up reading and responses
may be emitted out of input order.
"""

from __future__ import annotations

import asyncio
import contextlib
import functools
import json
import logging
import os
import signal
import sys
import threading
from collections.abc import Callable
from typing import IO, TYPE_CHECKING, Any, Protocol, runtime_checkable

from example_mcp.protocol import framer
from example_mcp.protocol.errors import InternalError, ParseError

if TYPE_CHECKING:
    from example_mcp.protocol.dispatcher import MessageDispatcher

logger = logging.getLogger(__name__)

DEFAULT_MAX_LINE_BYTES = 16 * 1024 * 1024
DEFAULT_SHUTDOWN_GRACE = 5.0

_READ_CHUNK = 64 * 1024


@runtime_checkable
class LineReader(Protocol):
    """Anything with an awaitable ``readline`` returning ``b""`` at end of input."""

    async def readline(self) -> bytes: ...


def open_stdin_reader(
    stream: IO[bytes] | None = None,
    *,
    limit: int = DEFAULT_MAX_LINE_BYTES,
) -> asyncio.StreamReader:
    """Return a :class:`asyncio.StreamReader` fed from *stream* (default stdin).

    A daemon thread performs the blocking reads, which works for pipes,
    terminals and redirected files alike and never keeps the process alive
    after the loop exits.  Standard input is read straight from its file
    descriptor so the thread never holds the buffered reader's lock at
    interpreter shutdown.
    """
    loop = asyncio.get_running_loop()
    reader = asyncio.StreamReader(limit=limit)
    read_chunk: Callable[[], bytes]
    if stream is None:
        read_chunk = functools.partial(os.read, sys.stdin.fileno(), _READ_CHUNK)
    else:
        read_chunk = stream.readline

    def _post(callback: Callable[..., object], *args: object) -> bool:
        try:
            loop.call_soon_threadsafe(callback, *args)
        except RuntimeError:
            # Event loop already closed; nobody is listening any more.
            return False
        return True

    def _pump() -> None:
        try:
            for chunk in iter(read_chunk, b""):
                if not _post(reader.feed_data, chunk):
                    return
        except (OSError, ValueError):
            logger.exception("Reading from input stream failed")
        _post(reader.feed_eof)

    threading.Thread(target=_pump, name="stdin-reader", daemon=True).start()
    return reader


def _response_id(line: str) -> Any:
    try:
        return json.loads(line).get("id")
    except (ValueError, AttributeError):
        return None


class StdioServer:
    """Reads requests from a :class:`LineReader` and writes responses to a text stream.

    Usage::

        server = StdioServer(dispatcher)
        await server.serve()        # until EOF or SIGINT/SIGTERM

    Writes are whole lines followed by a flush, issued from the event loop
    thread only, so emitted lines never interleave.

    End of input waits for every in-flight request.  After :meth:`stop`
    (or a signal) in-flight requests get *shutdown_grace* seconds to finish
    and are then cancelled; a second stop cancels them at once.
    """

    def __init__(
        self,
        dispatcher: MessageDispatcher,
        *,
        reader: LineReader | None = None,
        writer: IO[str] | None = None,
        max_line_bytes: int = DEFAULT_MAX_LINE_BYTES,
        shutdown_grace: float = DEFAULT_SHUTDOWN_GRACE,
    ) -> None:
        self._dispatcher = dispatcher
        self._reader = reader
        self._writer = writer
        self._max_line_bytes = max_line_bytes
        self._shutdown_grace = shutdown_grace
        self._pending: set[asyncio.Task[None]] = set()
        self._stopping = asyncio.Event()
        self._fatal: BaseException | None = None

    @property
    def pending(self) -> int:
        """Number of dispatcher runs still in flight."""
        return len(self._pending)

    def stop(self) -> None:
        """Stop reading input.

        The first call lets in-flight requests finish within the shutdown
        grace period; any further call cancels them immediately.
        """
        if self._stopping.is_set():
            self._cancel_pending()
            return
        logger.info("Stop requested, no longer reading input")
        self._stopping.set()

    async def serve(self, *, install_signal_handlers: bool = False) -> None:
        """Run until end of input or :meth:`stop`, then drain in-flight requests.

        Raises:
            BaseException: The first failure that escaped a dispatcher run.
        """
        reader = self._reader or open_stdin_reader(limit=self._max_line_bytes)
        if install_signal_handlers:
            self._install_signal_handlers()

        logger.info("Server started, waiting for input")
        try:
            await self._read_loop(reader)
            await self._drain()
        finally:
            if install_signal_handlers:
                self._remove_signal_handlers()

        if self._fatal is not None:
            raise self._fatal
        logger.info("Server stopped")

    async def _read_loop(self, reader: LineReader) -> None:
        stop_waiter = asyncio.ensure_future(self._stopping.wait())
        try:
            while not self._stopping.is_set():
                read = asyncio.ensure_future(reader.readline())
                done, _ = await asyncio.wait(
                    {read, stop_waiter}, return_when=asyncio.FIRST_COMPLETED
                )
                if read not in done:
                    read.cancel()
                    with contextlib.suppress(asyncio.CancelledError):
                        await read
                    break

                try:
                    line = read.result()
                except ValueError:
                    # StreamReader discards an over-long line and raises.
                    logger.warning("Input line exceeds %d bytes", self._max_line_bytes)
                    self.emit(framer.error(None, ParseError.code, ParseError().message))
                    continue

                if not line:
                    logger.info("End of input stream")
                    break
                self._schedule(line)
        finally:
            stop_waiter.cancel()

    async def _drain(self) -> None:
        # End of input: wait for everything unless a stop arrives meanwhile.
        while self._pending and not self._stopping.is_set():
            stop_waiter = asyncio.ensure_future(self._stopping.wait())
            try:
                await asyncio.wait(
                    {*self._pending, stop_waiter}, return_when=asyncio.FIRST_COMPLETED
                )
            finally:
                stop_waiter.cancel()

        if not self._pending:
            return
        _, late = await asyncio.wait(set(self._pending), timeout=self._shutdown_grace)
        if late:
            logger.warning(
                "Cancelling %d request(s) still running after %.1fs",
                len(late),
                self._shutdown_grace,
            )
            for task in late:
                task.cancel()
            await asyncio.gather(*late, return_exceptions=True)

    def _cancel_pending(self) -> None:
        if self._pending:
            logger.warning("Cancelling %d in-flight request(s)", len(self._pending))
        for task in list(self._pending):
            task.cancel()

    def _schedule(self, line: bytes) -> None:
        task = asyncio.ensure_future(self._run(line))
        self._pending.add(task)
        task.add_done_callback(self._on_done)

    async def _run(self, line: bytes) -> None:
        response = await self._dispatcher.handle_line(line)
        if response is None:
            return
        try:
            self.emit(response)
        except ValueError as exc:
            # UnicodeEncodeError from a writer with a narrower encoding.
            logger.error("Could not write response: %s", exc)
            self.emit(
                framer.error(
                    _response_id(response), InternalError.code, InternalError(str(exc)).message
                )
            )

    def _on_done(self, task: asyncio.Task[None]) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None and self._fatal is None:
            logger.critical("Unhandled failure in request task", exc_info=exc)
            self._fatal = exc
            self.stop()

    def emit(self, line: str) -> None:
        """Write one complete wire line and flush it."""
        out = self._writer if self._writer is not None else sys.stdout
        out.write(line)
        out.flush()

    def _install_signal_handlers(self) -> None:
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            # add_signal_handler is unavailable on Windows event loops.
            with contextlib.suppress(NotImplementedError, RuntimeError):
                loop.add_signal_handler(sig, self.stop)

    def _remove_signal_handlers(self) -> None:
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            with contextlib.suppress(NotImplementedError, RuntimeError):
                loop.remove_signal_handler(sig)
