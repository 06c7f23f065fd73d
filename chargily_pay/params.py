"""Request parameter definitions for Chargily Pay API calls."""

from dataclasses import dataclass, fields, is_dataclass
from typing import Any, Dict, List, Mapping, Optional

from .types import Address


@dataclass
class CreateCustomerParams:
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[Address] = None
    metadata: Optional[Dict[str, Any]] = None


@dataclass
class UpdateCustomerParams:
    """Only the fields that are set are sent; address fields may be partial."""
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[Address] = None
    metadata: Optional[Dict[str, Any]] = None


@dataclass
class CreateProductParams:
    name: str
    description: Optional[str] = None
    images: Optional[List[str]] = None
    metadata: Optional[Dict[str, Any]] = None


@dataclass
class UpdateProductParams:
    name: Optional[str] = None
    description: Optional[str] = None
    images: Optional[List[str]] = None
    metadata: Optional[Dict[str, Any]] = None


@dataclass
class CreatePriceParams:
    """Amount in the currency's unit; currency is a lowercase ISO code ("dzd")."""
    amount: float
    currency: str
    product_id: str
    metadata: Optional[Dict[str, Any]] = None


@dataclass
class UpdatePriceParams:
    metadata: Dict[str, Any]


@dataclass
class CheckoutItemParams:
    price: str
    quantity: int


@dataclass
class CreateCheckoutParams:
    """
    Parameters for a new checkout.

    Either ``items`` or both ``amount`` and ``currency`` must be given.
    ``success_url`` must be an http(s) URL.
    """
    success_url: str
    items: Optional[List[CheckoutItemParams]] = None
    amount: Optional[float] = None
    currency: Optional[str] = None
    payment_method: Optional[str] = None
    failure_url: Optional[str] = None
    webhook_endpoint: Optional[str] = None
    description: Optional[str] = None
    locale: Optional[str] = None
    pass_fees_to_customer: Optional[bool] = None
    customer_id: Optional[str] = None
    shipping_address: Optional[str] = None
    collect_shipping_address: Optional[bool] = None
    metadata: Optional[Dict[str, Any]] = None


@dataclass
class PaymentLinkItemParams:
    price: str
    quantity: int
    adjustable_quantity: Optional[bool] = None


@dataclass
class CreatePaymentLinkParams:
    name: str
    items: List[PaymentLinkItemParams]
    after_completion_message: Optional[str] = None
    locale: Optional[str] = None
    pass_fees_to_customer: Optional[bool] = None
    collect_shipping_address: Optional[bool] = None
    metadata: Optional[Dict[str, Any]] = None


@dataclass
class UpdatePaymentLinkItem:
    price: str
    quantity: int
    adjustable_quantity: Optional[bool] = None


@dataclass
class UpdatePaymentLinkParams:
    name: Optional[str] = None
    items: Optional[List[UpdatePaymentLinkItem]] = None
    after_completion_message: Optional[str] = None
    locale: Optional[str] = None
    pass_fees_to_customer: Optional[bool] = None
    collect_shipping_address: Optional[bool] = None
    metadata: Optional[Dict[str, Any]] = None


# A params dataclass from this module, or a plain mapping.
Params = Any


def _plain(value: Any) -> Any:
    # Unset fields of params dataclasses are dropped; user data such as
    # metadata is passed through as given, None values included.
    if is_dataclass(value) and not isinstance(value, type):
        return {
            f.name: _plain(getattr(value, f.name))
            for f in fields(value)
            if getattr(value, f.name) is not None
        }
    if isinstance(value, Mapping):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def to_body(params: Params) -> Dict[str, Any]:
    """
    Serialize request params to a JSON-ready dict.

    Accepts a params dataclass or a plain mapping. Unset (None) fields of the
    params and of nested params dataclasses (items, addresses) are omitted;
    values inside metadata are sent unchanged.
    """
    if not isinstance(params, Mapping) and not (
        is_dataclass(params) and not isinstance(params, type)
    ):
        raise TypeError(f"params must be a dataclass or mapping, got {type(params).__name__}")
    return {k: v for k, v in _plain(params).items() if v is not None}
