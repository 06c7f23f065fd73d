import json
import logging

import pytest

from chargily_pay import (
    SignatureAbsentError,
    SignatureInvalidError,
    SignatureVerificationError,
    WebhookEvent,
    WebhookHandler,
    WebhookPayloadError,
    compute_signature,
    construct_event,
    parse_event,
)


def _event_body(checkout_data, event_type="checkout.paid") -> bytes:
    return json.dumps({
        "id": "01hjjrgfhszbr3j08b2qz6xbjx",
        "entity": "event",
        "livemode": "false",
        "type": event_type,
        "data": checkout_data,
        "created_at": 1701947995,
        "updated_at": 1701947995,
    }, separators=(",", ":")).encode()


def test_construct_event_parses_verified_body(checkout_data, secret_key):
    body = _event_body(checkout_data)
    event = construct_event(body, compute_signature(body, secret_key), secret_key)

    assert event.type == "checkout.paid"
    assert event.id == "01hjjrgfhszbr3j08b2qz6xbjx"
    assert event.raw == body
    assert event.livemode is False
    assert event.checkout.id == checkout_data["id"]
    assert event.checkout.is_paid
    assert event.checkout.metadata["order_id"] == "A-1001"


@pytest.mark.parametrize("signature", [None, ""])
def test_construct_event_absent_signature(checkout_data, secret_key, signature):
    with pytest.raises(SignatureAbsentError) as exc_info:
        construct_event(_event_body(checkout_data), signature, secret_key)
    assert exc_info.value.http_status == 400
    assert isinstance(exc_info.value, SignatureVerificationError)


def test_construct_event_invalid_signature(checkout_data, secret_key):
    body = _event_body(checkout_data)
    with pytest.raises(SignatureInvalidError) as exc_info:
        construct_event(body, compute_signature(body, "other"), secret_key)
    assert exc_info.value.http_status == 403


def test_construct_event_signed_garbage(secret_key):
    body = b"not json"
    with pytest.raises(WebhookPayloadError):
        construct_event(body, compute_signature(body, secret_key), secret_key)


@pytest.mark.parametrize("body", [b"[]", b'{"id":"evt_1"}', b'{"type":"checkout.paid"}'])
def test_parse_event_rejects_non_events(body):
    with pytest.raises(WebhookPayloadError):
        parse_event(body)


def test_non_checkout_event_has_no_checkout():
    event = parse_event(b'{"id":"evt_1","type":"customer.created","data":{"entity":"customer","id":"cus_1"}}')
    assert event.checkout is None
    assert event.data["id"] == "cus_1"


def test_handler_dispatches_by_type(checkout_data, secret_key):
    webhooks = WebhookHandler(secret_key=secret_key)
    paid, failed = [], []

    @webhooks.on("checkout.paid")
    def on_paid(event):
        paid.append(event)

    @webhooks.on("checkout.failed")
    def on_failed(event):
        failed.append(event)

    body = _event_body(checkout_data)
    status = webhooks.handle(body, {"signature": compute_signature(body, secret_key)})

    assert status == 200
    assert len(paid) == 1
    assert failed == []
    assert on_paid is not None


def test_handler_header_lookup_ignores_case(checkout_data, secret_key):
    webhooks = WebhookHandler(secret_key=secret_key)
    seen = []
    webhooks.on_any(seen.append)

    body = _event_body(checkout_data)
    status = webhooks.handle(body, {"Signature": compute_signature(body, secret_key)})

    assert status == 200
    assert len(seen) == 1


def test_fallback_only_runs_without_specific_handler(checkout_data, secret_key):
    webhooks = WebhookHandler(secret_key=secret_key)
    specific, fallback = [], []
    webhooks.on("checkout.paid")(specific.append)
    webhooks.on_any(fallback.append)

    for event_type in ("checkout.paid", "checkout.canceled"):
        body = _event_body(checkout_data, event_type)
        webhooks.handle(body, {"signature": compute_signature(body, secret_key)})

    assert [e.type for e in specific] == ["checkout.paid"]
    assert [e.type for e in fallback] == ["checkout.canceled"]


def test_unhandled_event_is_still_acknowledged(checkout_data, secret_key):
    webhooks = WebhookHandler(secret_key=secret_key)
    body = _event_body(checkout_data)
    assert webhooks.handle(body, {"signature": compute_signature(body, secret_key)}) == 200


def test_missing_signature_is_400(checkout_data, secret_key, caplog):
    webhooks = WebhookHandler(secret_key=secret_key)
    called = []
    webhooks.on_any(called.append)

    with caplog.at_level(logging.WARNING, logger="chargily_pay.webhook"):
        status = webhooks.handle(_event_body(checkout_data), {})

    assert status == 400
    assert called == []
    assert any("Rejected webhook" in r.getMessage() for r in caplog.records)


def test_invalid_signature_is_403(checkout_data, secret_key):
    webhooks = WebhookHandler(secret_key=secret_key)
    called = []
    webhooks.on_any(called.append)

    body = _event_body(checkout_data)
    signature = compute_signature(body, secret_key)
    tampered = body.replace(b"2500", b"25")

    assert webhooks.handle(tampered, {"signature": signature}) == 403
    assert called == []


def test_handler_error_propagates(checkout_data, secret_key, caplog):
    webhooks = WebhookHandler(secret_key=secret_key)

    @webhooks.on("checkout.paid")
    def explode(event):
        raise RuntimeError("database down")

    body = _event_body(checkout_data)
    with caplog.at_level(logging.ERROR, logger="chargily_pay.webhook"):
        with pytest.raises(RuntimeError, match="database down"):
            webhooks.handle(body, {"signature": compute_signature(body, secret_key)})

    assert any("database down" in r.getMessage() for r in caplog.records)


def test_sync_handle_runs_coroutine_handlers(checkout_data, secret_key):
    webhooks = WebhookHandler(secret_key=secret_key)
    seen = []

    @webhooks.on("checkout.paid")
    async def on_paid(event):
        seen.append(event.id)

    body = _event_body(checkout_data)
    assert webhooks.handle(body, {"signature": compute_signature(body, secret_key)}) == 200
    assert seen == ["01hjjrgfhszbr3j08b2qz6xbjx"]


@pytest.mark.asyncio
async def test_handle_async_awaits_handlers(checkout_data, secret_key):
    webhooks = WebhookHandler(secret_key=secret_key)
    seen = []

    @webhooks.on("checkout.paid")
    async def on_paid(event):
        seen.append(event.checkout.amount)

    @webhooks.on("checkout.paid")
    def also_sync(event):
        seen.append("sync")

    body = _event_body(checkout_data)
    status = await webhooks.handle_async(body, {"signature": compute_signature(body, secret_key)})

    assert status == 200
    assert seen == [2500, "sync"]


@pytest.mark.asyncio
async def test_handle_async_rejects_bad_signature(checkout_data, secret_key):
    webhooks = WebhookHandler(secret_key=secret_key)
    assert await webhooks.handle_async(_event_body(checkout_data), {"signature": "00"}) == 403


def test_handler_requires_secret():
    with pytest.raises(ValueError):
        WebhookHandler(secret_key="")


def test_construct_event_accepts_memoryview_body(checkout_data, secret_key):
    body = _event_body(checkout_data)
    view = memoryview(body)
    event = construct_event(view, compute_signature(view, secret_key), secret_key)

    assert event.type == "checkout.paid"
    assert event.raw == body


def test_handle_accepts_memoryview_body(checkout_data, secret_key):
    webhooks = WebhookHandler(secret_key=secret_key)
    seen = []
    webhooks.on_any(seen.append)

    body = _event_body(checkout_data)
    status = webhooks.handle(memoryview(body), {"signature": compute_signature(body, secret_key)})

    assert status == 200
    assert len(seen) == 1


@pytest.mark.parametrize("data", ['"x"', "[1,2]", "42"])
def test_signed_event_with_non_object_data_is_rejected(secret_key, data):
    body = ('{"id":"evt_1","type":"checkout.paid","data":%s}' % data).encode()
    with pytest.raises(WebhookPayloadError):
        construct_event(body, compute_signature(body, secret_key), secret_key)

    webhooks = WebhookHandler(secret_key=secret_key)
    assert webhooks.handle(body, {"signature": compute_signature(body, secret_key)}) == 400


def test_checkout_is_none_for_non_dict_data():
    event = WebhookEvent(id="evt_1", type="checkout.paid", data="x")
    assert event.checkout is None


def test_handler_accepts_any_logger_like_object(checkout_data, secret_key):
    class RecordingLogger:
        def __init__(self):
            self.warnings = []

        def debug(self, msg, *args, **kwargs):
            pass

        def info(self, msg, *args, **kwargs):
            pass

        def warning(self, msg, *args, **kwargs):
            self.warnings.append(msg)

        def error(self, msg, *args, **kwargs):
            pass

    logger = RecordingLogger()
    webhooks = WebhookHandler(secret_key=secret_key, logger=logger)

    assert webhooks.handle(_event_body(checkout_data), {"signature": "00"}) == 403
    assert logger.warnings and "Rejected webhook" in logger.warnings[0]
