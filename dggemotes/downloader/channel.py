"""
Unbuffered hand-off channel between one producer and N worker threads.

send() does not return until a receiver has taken the item, so the producer
never runs ahead of the workers and nothing is buffered. close() is called
once by the producer after the last send; receivers drain and then see the
channel as closed.
"""

from __future__ import annotations

import threading
from typing import Generic, Iterator, Optional, TypeVar

T = TypeVar("T")

_EMPTY = object()


class ChannelClosed(RuntimeError):
    pass


class HandoffChannel(Generic[T]):
    """
    Thread-safe rendezvous channel.

    Usage:
        channel = HandoffChannel()

        # Consumer thread
        for item in channel:
            handle(item)

        # Producer
        for item in items:
            channel.send(item)
        channel.close()
    """

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._slot: object = _EMPTY
        self._closed = False
        self._sent = 0
        self._taken = 0

    def send(self, item: T) -> None:
        """
        Hand an item to a receiver, blocking until one has taken it.

        Raises:
            ChannelClosed: If the channel was closed.
        """
        with self._cond:
            while self._slot is not _EMPTY and not self._closed:
                self._cond.wait()
            if self._closed:
                raise ChannelClosed("send on closed channel")

            self._slot = item
            self._sent += 1
            ticket = self._sent
            self._cond.notify_all()

            while self._taken < ticket:
                self._cond.wait()

    def recv(self) -> tuple[Optional[T], bool]:
        """
        Take the next item, blocking until one is sent or the channel closes.

        Returns:
            (item, True) for a received item, (None, False) once the channel
            is closed and drained.
        """
        with self._cond:
            while self._slot is _EMPTY and not self._closed:
                self._cond.wait()
            if self._slot is _EMPTY:
                return None, False

            item = self._slot
            self._slot = _EMPTY
            self._taken += 1
            self._cond.notify_all()
            return item, True  # type: ignore[return-value]

    def close(self) -> None:
        """
        Signal that no more items will be sent.

        Raises:
            ChannelClosed: If the channel is already closed.
        """
        with self._cond:
            if self._closed:
                raise ChannelClosed("close of closed channel")
            self._closed = True
            self._cond.notify_all()

    def __iter__(self) -> Iterator[T]:
        while True:
            item, ok = self.recv()
            if not ok:
                return
            yield item  # type: ignore[misc]
