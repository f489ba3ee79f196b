from __future__ import annotations

import queue
import threading
import time
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, DefaultDict, Dict, List, Optional, Tuple, Type

from colr.event_types import EventType, as_event_type
from colr.events.payloads import ErrorPayload, InfoPayload, PickRequestPayload


@dataclass(frozen=True)
class Event:
    type: EventType
    payload: Any = None  # MUST NOT be dict
    ts: float = field(default_factory=time.time)
    thread_id: int = field(default_factory=threading.get_ident)


Handler = Callable[[Event], None]

_PAYLOAD_TYPES: Dict[EventType, Tuple[Type[Any], ...]] = {
    EventType.INFO: (InfoPayload,),
    EventType.ERROR: (ErrorPayload,),
    EventType.PICK_TOGGLE_REQUEST: (PickRequestPayload,),
    EventType.PICK_CONFIRM_REQUEST: (PickRequestPayload,),
    EventType.PICK_CANCEL_REQUEST: (PickRequestPayload,),
}


class EventBus:
    """
    Thread-safe queued bus with typed payloads.

    - post/post_payload may be called from any thread (pynput listener threads)
    - handlers only run inside dispatch_pending(), i.e. on the thread that pumps
    """

    def __init__(self) -> None:
        self._q: "queue.Queue[Event]" = queue.Queue()
        self._handlers: DefaultDict[EventType, List[Handler]] = defaultdict(list)
        self._lock = threading.RLock()

    # ---------- publish side ----------
    def publish(self, event: Event) -> None:
        if not isinstance(event, Event):
            raise TypeError("publish() expects an Event")
        allowed = _PAYLOAD_TYPES.get(event.type)
        if allowed is not None and not isinstance(event.payload, allowed):
            names = ", ".join(t.__name__ for t in allowed)
            raise TypeError(
                f"{event.type.value} payload type mismatch: expected [{names}], got {type(event.payload).__name__}"
            )
        self._q.put(event)

    def post_payload(self, event_type: EventType | str, payload: Any = None) -> None:
        et = as_event_type(event_type)
        if isinstance(payload, dict):
            raise TypeError(f"dict payload is not allowed for {et.value}")
        self.publish(Event(type=et, payload=payload))

    def post(self, event_type: EventType | str, **kwargs: Any) -> None:
        """
        kwargs convenience; converted to the typed payload of the event type.
        """
        et = as_event_type(event_type)

        if et is EventType.INFO:
            self.post_payload(et, InfoPayload(msg=str(kwargs.get("msg", ""))))
            return
        if et is EventType.ERROR:
            detail = str(kwargs.get("detail", "") or "")
            exc = kwargs.get("exc")
            if exc is not None and not detail:
                detail = f"{type(exc).__name__}: {exc}"
            self.post_payload(et, ErrorPayload(msg=str(kwargs.get("msg", "")), detail=detail))
            return
        if et in (EventType.PICK_TOGGLE_REQUEST, EventType.PICK_CONFIRM_REQUEST, EventType.PICK_CANCEL_REQUEST):
            self.post_payload(et, PickRequestPayload(source=str(kwargs.get("source", "") or "")))
            return

        raise TypeError(f"{et.value} does not support kwargs payload; use post_payload()")

    # ---------- subscribe side ----------
    def subscribe(self, event_type: EventType | str, handler: Handler) -> None:
        et = as_event_type(event_type)
        if handler is None:
            raise ValueError("handler cannot be None")
        with self._lock:
            self._handlers[et].append(handler)

    def unsubscribe(self, event_type: EventType | str, handler: Handler) -> None:
        et = as_event_type(event_type)
        with self._lock:
            if et not in self._handlers:
                return
            self._handlers[et] = [h for h in self._handlers[et] if h != handler]

    # ---------- dispatch side ----------
    def dispatch_pending(
        self,
        *,
        max_events: int = 200,
        on_error: Optional[Callable[[Event, BaseException], None]] = None,
    ) -> int:
        dispatched = 0
        while dispatched < max_events:
            try:
                ev = self._q.get_nowait()
            except queue.Empty:
                break

            try:
                self._dispatch_one(ev)
            except Exception as e:
                if on_error is None:
                    raise
                on_error(ev, e)
            finally:
                self._q.task_done()

            dispatched += 1
        return dispatched

    def _dispatch_one(self, ev: Event) -> None:
        with self._lock:
            specific = list(self._handlers.get(ev.type, []))
            wildcard = list(self._handlers.get(EventType.ANY, []))

        for h in specific:
            h(ev)
        for h in wildcard:
            h(ev)

    def pending_count_approx(self) -> int:
        return int(self._q.qsize())
