"""Observable state base for the board.

``State`` owns the subscriber registry and the synchronous fan-out. Concrete
stores provide ``_snapshot`` and call ``_notify`` after each mutation.

Each subscriber receives its own freshly built snapshot, so one subscriber
mutating what it was handed cannot affect another subscriber or the store.
"""

from __future__ import annotations

from typing import Callable, Generic, Protocol, TypeVar, Union, runtime_checkable

from taskboard.logging import get_logger

T = TypeVar("T")


@runtime_checkable
class SnapshotSubscriber(Protocol[T]):
    """Anything that wants the full item list after every mutation."""

    def receive_snapshot(self, snapshot: list[T]) -> None: ...


SubscriberLike = Union[SnapshotSubscriber[T], Callable[[list[T]], None]]


class Subscription:
    """Handle returned by ``State.subscribe``.

    Attributes:
        subscriber_id: Sequence number assigned at registration.
    """

    def __init__(self, state: State, subscriber_id: int) -> None:
        self._state = state
        self.subscriber_id = subscriber_id

    @property
    def active(self) -> bool:
        """True until ``unsubscribe`` is called."""
        return self.subscriber_id in self._state._subscribers

    def unsubscribe(self) -> None:
        """Stop receiving snapshots. Calling it twice is harmless."""
        self._state._unsubscribe(self.subscriber_id)


class State(Generic[T]):
    """Subscriber registry with ordered, synchronous fan-out."""

    def __init__(self) -> None:
        # dicts keep insertion order, which is registration order
        self._subscribers: dict[int, Callable[[list[T]], None]] = {}
        self._next_subscriber_id = 0
        self._notification_count = 0
        self.logger = get_logger(__name__).bind(component=type(self).__name__)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    @property
    def notification_count(self) -> int:
        """Number of fan-outs performed since construction."""
        return self._notification_count

    def subscribe(self, subscriber: SubscriberLike[T]) -> Subscription:
        """Register a subscriber for every future mutation.

        Args:
            subscriber: Object implementing ``receive_snapshot`` or a plain
                callable taking the snapshot list.

        Returns:
            Subscription handle that can later unsubscribe.

        Raises:
            TypeError: If ``subscriber`` is neither a SnapshotSubscriber nor callable.
        """
        if isinstance(subscriber, SnapshotSubscriber):
            callback = subscriber.receive_snapshot
        elif callable(subscriber):
            callback = subscriber
        else:
            raise TypeError(
                f"Subscriber must implement receive_snapshot or be callable, "
                f"got {type(subscriber).__name__}"
            )

        subscriber_id = self._next_subscriber_id
        self._next_subscriber_id += 1
        self._subscribers[subscriber_id] = callback

        self.logger.debug(
            "subscriber_registered",
            subscriber_id=subscriber_id,
            total_subscribers=len(self._subscribers),
        )
        return Subscription(self, subscriber_id)

    def _unsubscribe(self, subscriber_id: int) -> None:
        if self._subscribers.pop(subscriber_id, None) is not None:
            self.logger.debug(
                "subscriber_removed",
                subscriber_id=subscriber_id,
                total_subscribers=len(self._subscribers),
            )

    def _snapshot(self) -> list[T]:
        raise NotImplementedError

    def _notify(self) -> None:
        """Deliver a fresh snapshot to every current subscriber.

        The subscriber list is captured before delivery starts. A subscriber
        that raises is logged and skipped; delivery continues with the rest.
        """
        self._notification_count += 1
        targets = list(self._subscribers.items())

        for subscriber_id, callback in targets:
            try:
                callback(self._snapshot())
            except Exception:
                self.logger.exception(
                    "subscriber_failed",
                    subscriber_id=subscriber_id,
                    callback=getattr(callback, "__qualname__", repr(callback)),
                )

        self.logger.debug(
            "snapshot_fanned_out",
            notification=self._notification_count,
            subscriber_count=len(targets),
        )
