"""Typed in-process message streams and the sequential dispatch loop.

A :class:`MessageHub` fans published payloads out to per-type
:class:`MessageStream` subscriptions. :func:`handle_messages` drains one
such stream (or any async iterable) in a detached asyncio task, invoking a
handler for each message strictly one at a time and in arrival order.
Handler failures are logged and never stop the loop; the loop ends when
the source is exhausted or an optional shutdown event is set.
"""

import asyncio
import inspect
import logging
from dataclasses import dataclass
from typing import Any, AsyncIterable, Awaitable, Callable, Dict, Generic, List, Optional, Protocol, Set, Type, TypeVar, Union, runtime_checkable

from ..core.ordering import Counter, post_inc


logger = logging.getLogger(__name__)

M = TypeVar("M")

_CLOSED = object()

# Strong references to running dispatch loops so they are not collected mid-flight.
_background_tasks: Set[asyncio.Task] = set()


@dataclass(frozen=True)
class Envelope(Generic[M]):
    payload: M
    sender_id: int
    message_id: int
    original_sender_id: Optional[int] = None

    @property
    def payload_type(self) -> type:
        return type(self.payload)


class MessageStream(Generic[M]):
    """Receiving end of a subscription; an async iterator of envelopes."""

    def __init__(self, payload_type: Type[M]):
        self.payload_type = payload_type
        self._queue: asyncio.Queue = asyncio.Queue()
        self._closing = False
        self._exhausted = False

    @property
    def closed(self) -> bool:
        return self._closing

    def push(self, envelope: Envelope[M]) -> None:
        if self._closing:
            raise RuntimeError(f"Stream for {self.payload_type.__name__} is closed")
        self._queue.put_nowait(envelope)

    def close(self) -> None:
        """Stop accepting messages; already queued ones are still delivered."""
        if not self._closing:
            self._closing = True
            self._queue.put_nowait(_CLOSED)

    async def recv(self) -> Optional[Envelope[M]]:
        """Wait for the next envelope, or return None once exhausted."""
        if self._exhausted:
            return None
        item = await self._queue.get()
        if item is _CLOSED:
            self._exhausted = True
            return None
        return item

    def __aiter__(self):
        return self

    async def __anext__(self) -> Envelope[M]:
        envelope = await self.recv()
        if envelope is None:
            raise StopAsyncIteration
        return envelope


class MessageHub:
    """Routes published payloads to every open stream subscribed to their type."""

    def __init__(self, sender_id: int = 0):
        self.sender_id = sender_id
        self._next_message_id = Counter()
        self._streams: Dict[type, List[MessageStream]] = {}
        self._closed = False

    def subscribe(self, payload_type: Type[M]) -> MessageStream[M]:
        if self._closed:
            raise RuntimeError("Message hub is closed")
        stream: MessageStream[M] = MessageStream(payload_type)
        self._streams.setdefault(payload_type, []).append(stream)
        return stream

    def publish(self, payload: Any, *, sender_id: Optional[int] = None, original_sender_id: Optional[int] = None) -> Envelope:
        if self._closed:
            raise RuntimeError("Message hub is closed")
        envelope = Envelope(
            payload=payload,
            sender_id=self.sender_id if sender_id is None else sender_id,
            message_id=post_inc(self._next_message_id),
            original_sender_id=original_sender_id,
        )
        streams = [s for s in self._streams.get(type(payload), []) if not s.closed]
        self._streams[type(payload)] = streams
        if not streams:
            logger.debug(f"No subscribers for {type(payload).__name__}, dropping message {envelope.message_id}")
        for stream in streams:
            stream.push(envelope)
        return envelope

    def close(self) -> None:
        """Exhaust every subscribed stream."""
        self._closed = True
        for streams in self._streams.values():
            for stream in streams:
                stream.close()
        self._streams.clear()


@runtime_checkable
class MessageHandler(Protocol):
    def handle(self, message: Any, context: Any) -> Awaitable[None]:
        ...


class FunctionHandler:
    """Adapts a plain ``fn(message, context)`` callable to :class:`MessageHandler`."""

    def __init__(self, fn: Callable[[Any, Any], Any]):
        self.fn = fn

    async def handle(self, message: Any, context: Any) -> None:
        result = self.fn(message, context)
        if inspect.isawaitable(result):
            await result


HandlerLike = Union[MessageHandler, Callable[[Any, Any], Any]]


def _as_handler(handler: HandlerLike) -> MessageHandler:
    if isinstance(handler, MessageHandler):
        return handler
    if callable(handler):
        return FunctionHandler(handler)
    raise TypeError(f"Expected a MessageHandler or callable, got {type(handler).__name__}")


async def _receive(iterator) -> Any:
    try:
        return await anext(iterator)
    except StopAsyncIteration:
        return _CLOSED


async def _next_message(iterator, shutdown: Optional[asyncio.Event]) -> Any:
    """Wait for the next message, or return ``_CLOSED`` on exhaustion or shutdown."""
    if shutdown is None:
        return await _receive(iterator)
    receive = asyncio.ensure_future(_receive(iterator))
    stop = asyncio.ensure_future(shutdown.wait())
    try:
        await asyncio.wait({receive, stop}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        stop.cancel()
        if not receive.done():
            receive.cancel()
            await asyncio.gather(receive, return_exceptions=True)
    if receive.cancelled():
        return _CLOSED
    return receive.result()


async def _dispatch_loop(
    handler: MessageHandler,
    messages: AsyncIterable,
    context: Any,
    shutdown: Optional[asyncio.Event],
) -> None:
    iterator = aiter(messages)
    handled = 0
    try:
        while shutdown is None or not shutdown.is_set():
            message = await _next_message(iterator, shutdown)
            if message is _CLOSED or (shutdown is not None and shutdown.is_set()):
                break
            try:
                result = handler.handle(message, context)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error(f"Error handling message {message!r}: {e}", exc_info=True)
            handled += 1
    finally:
        close = getattr(messages, "close", None)
        if callable(close):
            close()
    logger.debug(f"Dispatch loop finished after {handled} message(s)")


def handle_messages(
    handler: HandlerLike,
    message_source: AsyncIterable,
    context: Any = None,
    *,
    shutdown: Optional[asyncio.Event] = None,
) -> asyncio.Task:
    """Spawn a detached loop feeding each message from ``message_source`` to ``handler``.

    Must be called from a running event loop. Returns immediately; the
    returned task may be ignored or awaited. Setting ``shutdown`` ends the
    loop even while it is waiting for a message; a message that arrives
    after shutdown is requested is not handled. The source is closed on
    exit if it has a ``close()`` method.
    """
    task = asyncio.get_running_loop().create_task(
        _dispatch_loop(_as_handler(handler), message_source, context, shutdown),
        name=f"handle_messages[{getattr(message_source, 'payload_type', type(message_source)).__name__}]",
    )
    _background_tasks.add(task)
    task.add_done_callback(_background_tasks.discard)
    return task
