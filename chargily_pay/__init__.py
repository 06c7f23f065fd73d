"""Chargily Pay SDK for Python."""

from .client import ChargilyClient
from .consts import CHARGILY_LIVE_URL, CHARGILY_TEST_URL
from .errors import (
    ChargilyError,
    ChargilyAPIError,
    ChargilyRequestError,
    ChargilyValidationError,
    WebhookError,
    SignatureVerificationError,
    SignatureAbsentError,
    SignatureInvalidError,
    WebhookPayloadError
)
from .params import (
    CreateCustomerParams,
    UpdateCustomerParams,
    CreateProductParams,
    UpdateProductParams,
    CreatePriceParams,
    UpdatePriceParams,
    CheckoutItemParams,
    CreateCheckoutParams,
    PaymentLinkItemParams,
    CreatePaymentLinkParams,
    UpdatePaymentLinkItem,
    UpdatePaymentLinkParams
)
from .types import (
    Wallet,
    Balance,
    Address,
    Customer,
    Product,
    ProductPrice,
    Price,
    Checkout,
    CheckoutItem,
    PaymentLink,
    PaymentLinkItem,
    ListResponse,
    DeleteItemResponse
)
from .utils.signature import (
    SignatureCheck,
    check_signature,
    compute_signature,
    verify_signature
)
from .version import __version__
from .webhook import (
    WebhookEvent,
    WebhookHandler,
    construct_event,
    parse_event
)

__all__ = [
    "ChargilyClient",
    "CHARGILY_LIVE_URL",
    "CHARGILY_TEST_URL",
    "ChargilyError",
    "ChargilyAPIError",
    "ChargilyRequestError",
    "ChargilyValidationError",
    "WebhookError",
    "SignatureVerificationError",
    "SignatureAbsentError",
    "SignatureInvalidError",
    "WebhookPayloadError",
    "CreateCustomerParams",
    "UpdateCustomerParams",
    "CreateProductParams",
    "UpdateProductParams",
    "CreatePriceParams",
    "UpdatePriceParams",
    "CheckoutItemParams",
    "CreateCheckoutParams",
    "PaymentLinkItemParams",
    "CreatePaymentLinkParams",
    "UpdatePaymentLinkItem",
    "UpdatePaymentLinkParams",
    "Wallet",
    "Balance",
    "Address",
    "Customer",
    "Product",
    "ProductPrice",
    "Price",
    "Checkout",
    "CheckoutItem",
    "PaymentLink",
    "PaymentLinkItem",
    "ListResponse",
    "DeleteItemResponse",
    "SignatureCheck",
    "check_signature",
    "compute_signature",
    "verify_signature",
    "WebhookEvent",
    "WebhookHandler",
    "construct_event",
    "parse_event",
    "__version__"
]
