"""Readiness notification for sockets and dispatch to their handlers."""

from __future__ import annotations

import abc
import selectors
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from .logger import get_logger
from .messages import ErrorMessages, SuccessMessages

EVENT_READ = selectors.EVENT_READ
EVENT_WRITE = selectors.EVENT_WRITE
MAX_EVENTS = 1024


class EventHandler(abc.ABC):
    """Something that reacts when a registered descriptor becomes ready."""

    @abc.abstractmethod
    def handle_event(self, event: "Event", flags: int) -> Any:
        """React to ``event`` being ready for the operations in ``flags``."""

    @abc.abstractmethod
    def handle_error(self) -> Any:
        """React to an error on the handled descriptor."""


@dataclass
class Event:
    """A descriptor (socket or file number) and the handler it belongs to."""

    fd: Any
    handler: Optional[EventHandler] = None


class EventManager:
    """Watches registered descriptors and reports which ones are ready."""

    def __init__(self) -> None:
        try:
            self._selector = selectors.DefaultSelector()
        except OSError as exc:
            get_logger().critical(f"{ErrorMessages.E_EPOLL_INIT}: {exc}")
            raise RuntimeError(ErrorMessages.E_EPOLL_INIT) from exc
        super().__init__()
        get_logger().debug("EventManager created")

    def register_event(self, flags: int, event: Event) -> None:
        """Watch ``event.fd`` for ``flags``; raise RuntimeError on failure."""
        try:
            self._selector.register(event.fd, flags, event)
        except (KeyError, ValueError, OSError) as exc:
            get_logger().critical(f"{ErrorMessages.E_EPOLL_CTL_ADD}: {exc}")
            raise RuntimeError(ErrorMessages.E_EPOLL_CTL_ADD) from exc
        get_logger().debug(SuccessMessages.S_EPOLL_CTL_ADD)

    def modify_event(self, flags: int, event: Event) -> None:
        """Change what ``event.fd`` is watched for; raise RuntimeError on failure."""
        try:
            self._selector.modify(event.fd, flags, event)
        except (KeyError, ValueError, OSError) as exc:
            get_logger().critical(f"{ErrorMessages.E_EPOLL_CTL_MOD}: {exc}")
            raise RuntimeError(ErrorMessages.E_EPOLL_CTL_MOD) from exc
        get_logger().debug(SuccessMessages.S_EPOLL_CTL_MOD)

    def unregister_event(self, fd) -> bool:
        """Stop watching ``fd``; return False, with a warning, if it was not watched."""
        try:
            self._selector.unregister(fd)
        except (KeyError, ValueError, OSError) as exc:
            get_logger().warning(f"{ErrorMessages.E_EPOLL_CTL_DEL}: {exc}")
            return False
        get_logger().debug(SuccessMessages.S_EPOLL_CTL_DEL)
        return True

    def add_tcp_event(self, sock, handler: EventHandler) -> Event:
        """Watch a listening socket for incoming connections handled by ``handler``."""
        event = Event(sock, handler)
        self.register_event(EVENT_READ, event)
        return event

    def poll(self, timeout: Optional[float] = 0) -> List[Tuple[Event, int]]:
        """Return up to MAX_EVENTS ready events with their readiness flags."""
        try:
            ready = self._selector.select(timeout)
        except (OSError, ValueError) as exc:
            get_logger().critical(f"{ErrorMessages.E_EPOLL_WAIT}: {exc}")
            raise RuntimeError(ErrorMessages.E_EPOLL_WAIT) from exc
        return [(key.data, mask) for key, mask in ready[:MAX_EVENTS]]

    def close(self) -> None:
        """Release the underlying selector."""
        self._selector.close()
        get_logger().debug("EventManager destroyed")

    def __enter__(self) -> "EventManager":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()