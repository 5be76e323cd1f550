from __future__ import annotations

import logging
from threading import RLock
from typing import Any, Callable, Dict, List, Optional, Set, Tuple

from .config import RegistryConfig
from .config.loader import DEFAULT_MAX_LISTENERS
from .exceptions import InvalidChannelError, InvalidListenerError

logger = logging.getLogger(__name__)

Listener = Callable[..., Any]


def _describe(listener: Listener) -> str:
    return getattr(listener, "__qualname__", None) or repr(listener)


class EventRegistry:
    """Named event channels with ordered listener lists.

    Listeners run synchronously on the caller's thread in registration
    order. Duplicates are kept and each copy fires. Exceptions raised by a
    listener propagate out of ``emit`` and stop the remaining listeners
    for that call.

    The channel mapping is guarded by a lock; listeners are invoked outside
    it, so a listener may register or emit on the same registry.
    """

    def __init__(self, *, max_listeners: int = DEFAULT_MAX_LISTENERS, log_emits: bool = False) -> None:
        self._channels: Dict[str, List[Listener]] = {}
        self._lock = RLock()
        self._warned: Set[str] = set()
        self.max_listeners = max_listeners
        self.log_emits = log_emits

    @classmethod
    def from_config(cls, config: RegistryConfig) -> "EventRegistry":
        return cls(max_listeners=config.max_listeners, log_emits=config.log_emits)

    # ------------------------ Registration ------------------------
    def on(self, channel: str, listener: Listener) -> "EventRegistry":
        """Append a listener to a channel, creating the channel if needed.

        Args:
            channel: Non-empty channel name.
            listener: Any callable accepting the arguments later emitted.

        Returns:
            The registry, so registrations can be chained.
        """
        if not isinstance(channel, str) or not channel:
            raise InvalidChannelError(f"channel name must be a non-empty string, got {channel!r}")
        if not callable(listener):
            raise InvalidListenerError(f"listener must be callable, got {type(listener).__name__}")
        with self._lock:
            listeners = self._channels.setdefault(channel, [])
            listeners.append(listener)
            count = len(listeners)
        logger.debug("Added listener %s to '%s' (%d total)", _describe(listener), channel, count)
        self._check_limit(channel, count)
        return self

    add_listener = on

    def _check_limit(self, channel: str, count: int) -> None:
        if self.max_listeners <= 0 or count <= self.max_listeners:
            return
        with self._lock:
            if channel in self._warned:
                return
            self._warned.add(channel)
        logger.warning(
            "Possible listener leak: %d listeners on '%s' exceed max_listeners=%d",
            count,
            channel,
            self.max_listeners,
        )

    def remove_listener(self, channel: str, listener: Listener) -> "EventRegistry":
        """Remove the most recently added occurrence of ``listener``.

        Unknown channels and listeners are ignored.
        """
        with self._lock:
            listeners = self._channels.get(channel)
            if not listeners:
                return self
            for i in range(len(listeners) - 1, -1, -1):
                if listeners[i] == listener:
                    del listeners[i]
                    logger.debug("Removed listener %s from '%s'", _describe(listener), channel)
                    break
            if not listeners:
                del self._channels[channel]
                self._warned.discard(channel)
        return self

    off = remove_listener

    def remove_all_listeners(self, channel: Optional[str] = None) -> "EventRegistry":
        """Drop every listener on ``channel``, or on all channels when omitted."""
        with self._lock:
            if channel is None:
                self._channels.clear()
                self._warned.clear()
                logger.debug("Removed all listeners from all channels")
            elif self._channels.pop(channel, None) is not None:
                self._warned.discard(channel)
                logger.debug("Removed all listeners from '%s'", channel)
        return self

    # ------------------------ Dispatch ------------------------
    def emit(self, channel: str, *args: Any, **kwargs: Any) -> bool:
        """Invoke every listener on ``channel`` in registration order.

        Listeners added while the emit is running are not called by it.

        Returns:
            True if at least one listener was invoked.
        """
        with self._lock:
            listeners = tuple(self._channels.get(channel, ()))
        if not listeners:
            logger.debug("Emitting '%s' with no listeners", channel)
            return False
        if self.log_emits:
            logger.debug(
                "Emitting '%s' to %d listeners. args=%r kwargs=%r", channel, len(listeners), args, kwargs
            )
        for listener in listeners:
            listener(*args, **kwargs)
        return True

    # ------------------------ Queries ------------------------
    def listener_count(self, channel: str) -> int:
        with self._lock:
            return len(self._channels.get(channel, ()))

    def listeners(self, channel: str) -> Tuple[Listener, ...]:
        with self._lock:
            return tuple(self._channels.get(channel, ()))

    def channel_names(self) -> Tuple[str, ...]:
        with self._lock:
            return tuple(self._channels)

    def __repr__(self) -> str:
        with self._lock:
            counts = {name: len(ls) for name, ls in self._channels.items()}
        return f"EventRegistry({counts!r})"


def listener_count(registry: EventRegistry, channel: str) -> int:
    """Module-level form of :meth:`EventRegistry.listener_count`."""
    return registry.listener_count(channel)
