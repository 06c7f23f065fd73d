"""Webhook event parsing and dispatch."""

import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from .errors import (
    SignatureAbsentError,
    SignatureInvalidError,
    WebhookError,
    WebhookPayloadError
)
from .types import Checkout, Logger
from .utils.signature import SIGNATURE_HEADER, SignatureCheck, check_signature


@dataclass
class WebhookEvent:
    """Webhook event from Chargily Pay."""
    id: str
    type: str
    data: Dict[str, Any]
    entity: str = "event"
    livemode: bool = False
    created_at: Optional[int] = None
    updated_at: Optional[int] = None
    raw: bytes = field(default=b"", repr=False)

    @property
    def checkout(self) -> Optional[Checkout]:
        """The event's checkout, when the event is about one."""
        if not isinstance(self.data, dict) or self.data.get("entity") != "checkout":
            return None
        return Checkout.from_dict(self.data)


def _flag(value: Any) -> bool:
    # livemode arrives as a JSON bool or as the string "true"/"false"
    if isinstance(value, str):
        return value.lower() == "true"
    return bool(value)


def parse_event(payload: bytes) -> WebhookEvent:
    """
    Parse a webhook body into a WebhookEvent.

    Does not verify the signature; use construct_event for untrusted input.
    """
    try:
        message = json.loads(bytes(payload))
    except ValueError as e:
        raise WebhookPayloadError(f"Webhook body is not valid JSON: {e}") from e

    if not isinstance(message, dict):
        raise WebhookPayloadError("Webhook body must be a JSON object")

    data = message.get("data") or {}
    if not isinstance(data, dict):
        raise WebhookPayloadError("Webhook event data must be a JSON object")

    try:
        return WebhookEvent(
            id=message["id"],
            type=message["type"],
            data=data,
            entity=message.get("entity", "event"),
            livemode=_flag(message.get("livemode", False)),
            created_at=message.get("created_at"),
            updated_at=message.get("updated_at"),
            raw=bytes(payload)
        )
    except KeyError as e:
        raise WebhookPayloadError(f"Webhook body is missing {e.args[0]!r}") from e


def construct_event(
    payload: bytes,
    signature: Optional[str],
    secret_key: str
) -> WebhookEvent:
    """
    Verify a webhook body and parse it.

    Args:
        payload: Raw request body bytes, exactly as received
        signature: Value of the ``signature`` header
        secret_key: Chargily API secret key

    Raises:
        SignatureAbsentError: No signature was given (respond 400)
        SignatureInvalidError: The signature does not match (respond 403)
        WebhookPayloadError: The signed body is not a valid event (respond 400)
    """
    result = check_signature(payload, signature, secret_key)
    if result is SignatureCheck.ABSENT:
        raise SignatureAbsentError()
    if result is SignatureCheck.MISMATCH:
        raise SignatureInvalidError()
    return parse_event(payload)


def get_signature_header(headers: Mapping[str, str]) -> Optional[str]:
    """Look up the signature header, ignoring case."""
    if SIGNATURE_HEADER in headers:
        return headers[SIGNATURE_HEADER]
    for name, value in headers.items():
        if name.lower() == SIGNATURE_HEADER:
            return value
    return None


class WebhookHandler:
    """
    Verify incoming webhooks and dispatch them to handlers.

    Example:
        >>> webhooks = WebhookHandler(secret_key="test_sk_...")
        >>>
        >>> @webhooks.on("checkout.paid")
        ... def handle_paid(event):
        ...     fulfil_order(event.checkout.metadata["order_id"])
        >>>
        >>> status = webhooks.handle(request.body, request.headers)
    """

    def __init__(self, secret_key: str, logger: Optional[Logger] = None):
        if not secret_key:
            raise ValueError("secret_key is required")

        self.secret_key = secret_key
        self.logger = logger or logging.getLogger(__name__)

        self._handlers: Dict[str, List[Callable[[WebhookEvent], Any]]] = {}
        self._fallback_handlers: List[Callable[[WebhookEvent], Any]] = []

    def on(self, event_type: str):
        """Register handler for one event type (decorator)."""
        def register(handler: Callable[[WebhookEvent], Any]):
            self._handlers.setdefault(event_type, []).append(handler)
            return handler
        return register

    def on_any(self, handler: Callable[[WebhookEvent], Any]):
        """Register handler for events with no type-specific handler (decorator)."""
        self._fallback_handlers.append(handler)
        return handler

    def dispatch(self, event: WebhookEvent) -> int:
        """
        Call the handlers registered for the event; returns how many ran.

        Coroutine handlers are run with asyncio.run, which cannot be called
        from a running event loop. Under ASGI frameworks use dispatch_async
        or handle_async instead.
        """
        handlers = self._handlers_for(event)
        for handler in handlers:
            try:
                result = handler(event)
                if asyncio.iscoroutine(result):
                    asyncio.run(result)
            except Exception as e:
                self.logger.error(f"Webhook handler error for {event.type} ({event.id}): {e}")
                raise
        return len(handlers)

    async def dispatch_async(self, event: WebhookEvent) -> int:
        """Like dispatch, awaiting coroutine handlers on the running loop."""
        handlers = self._handlers_for(event)
        for handler in handlers:
            try:
                result = handler(event)
                if asyncio.iscoroutine(result):
                    await result
            except Exception as e:
                self.logger.error(f"Webhook handler error for {event.type} ({event.id}): {e}")
                raise
        return len(handlers)

    def handle(self, payload: bytes, headers: Mapping[str, str]) -> int:
        """
        Handle an HTTP webhook delivery.

        Args:
            payload: Raw request body bytes
            headers: HTTP request headers

        Returns:
            HTTP status to respond with: 200 when verified and handled, 400
            when the signature header is missing or the body is malformed,
            403 when the signature is invalid

        Use handle_async from inside a running event loop (ASGI frameworks)
        when any handler is a coroutine function.
        """
        event = self._verify(payload, headers)
        if isinstance(event, int):
            return event
        self.dispatch(event)
        return 200

    async def handle_async(self, payload: bytes, headers: Mapping[str, str]) -> int:
        """Async variant of handle for ASGI frameworks."""
        event = self._verify(payload, headers)
        if isinstance(event, int):
            return event
        await self.dispatch_async(event)
        return 200

    def _handlers_for(self, event: WebhookEvent) -> List[Callable[[WebhookEvent], Any]]:
        handlers = self._handlers.get(event.type) or self._fallback_handlers
        if not handlers:
            self.logger.debug(f"No handler registered for {event.type}")
        return handlers

    def _verify(self, payload: bytes, headers: Mapping[str, str]) -> Union[WebhookEvent, int]:
        """Return the verified event, or the HTTP status to reject it with."""
        signature = get_signature_header(headers)

        try:
            event = construct_event(payload, signature, self.secret_key)
        except WebhookError as e:
            self.logger.warning(f"Rejected webhook: {e}")
            return e.http_status

        self.logger.debug(f"Received webhook: {event.id} ({event.type})")
        return event
