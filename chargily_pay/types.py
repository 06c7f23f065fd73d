"""Type definitions for Chargily Pay API objects."""

from dataclasses import dataclass, field, fields
from typing import Any, Callable, Dict, Generic, List, Optional, Protocol, Type, TypeVar

T = TypeVar("T")
M = TypeVar("M", bound="Model")


class Model:
    """Base for API objects decoded from JSON."""

    @classmethod
    def from_dict(cls: Type[M], data: Dict[str, Any]) -> M:
        """Build from an API response, ignoring keys this version doesn't know."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


@dataclass
class Wallet(Model):
    """A wallet with its currency and balances."""
    currency: str = ""
    balance: float = 0
    ready_for_payout: float = 0
    on_hold: float = 0


@dataclass
class Balance(Model):
    """Account balance across wallets."""
    entity: str = "balance"
    livemode: bool = False
    wallets: List[Wallet] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Balance":
        return cls(
            entity=data.get("entity", "balance"),
            livemode=data.get("livemode", False),
            wallets=[Wallet.from_dict(w) for w in data.get("wallets") or []]
        )


@dataclass
class Address(Model):
    """Postal address (country is ISO 3166-1 alpha-2)."""
    country: Optional[str] = None
    state: Optional[str] = None
    address: Optional[str] = None


def _address(value: Any) -> Optional[Address]:
    if isinstance(value, dict):
        return Address.from_dict(value)
    return value


@dataclass
class Customer(Model):
    """A customer."""
    id: str
    entity: str = "customer"
    livemode: bool = False
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[Address] = None
    metadata: Optional[Dict[str, Any]] = None
    created_at: Optional[int] = None
    updated_at: Optional[int] = None

    def __post_init__(self):
        self.address = _address(self.address)


@dataclass
class Product(Model):
    """A product."""
    id: str
    entity: str = "product"
    livemode: bool = False
    name: Optional[str] = None
    description: Optional[str] = None
    images: List[str] = field(default_factory=list)
    metadata: Optional[Dict[str, Any]] = None
    created_at: Optional[int] = None
    updated_at: Optional[int] = None


@dataclass
class ProductPrice(Model):
    """A price as listed under its product."""
    id: str
    entity: str = "price"
    amount: float = 0
    currency: str = ""
    metadata: Optional[Dict[str, Any]] = None
    created_at: Optional[int] = None
    updated_at: Optional[int] = None
    product_id: Optional[str] = None


@dataclass
class Price(Model):
    """A price attached to a product."""
    id: str
    entity: str = "price"
    livemode: bool = False
    amount: float = 0
    currency: str = ""
    product_id: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    created_at: Optional[int] = None
    updated_at: Optional[int] = None


@dataclass
class Checkout(Model):
    """A checkout session."""
    id: str
    entity: str = "checkout"
    livemode: bool = False
    amount: float = 0
    currency: str = ""
    fees: float = 0
    pass_fees_to_customer: bool = False
    status: Optional[str] = None
    locale: Optional[str] = None
    description: Optional[str] = None
    success_url: Optional[str] = None
    failure_url: Optional[str] = None
    webhook_endpoint: Optional[str] = None
    payment_method: Optional[str] = None
    invoice_id: Optional[str] = None
    customer_id: Optional[str] = None
    payment_link_id: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    created_at: Optional[int] = None
    updated_at: Optional[int] = None
    shipping_address: Optional[Address] = None
    collect_shipping_address: bool = False
    checkout_url: Optional[str] = None

    def __post_init__(self):
        self.shipping_address = _address(self.shipping_address)

    @property
    def is_paid(self) -> bool:
        return self.status == "paid"


@dataclass
class CheckoutItem(Model):
    """An item within a checkout."""
    id: str
    entity: str = "price"
    amount: float = 0
    quantity: int = 0
    currency: str = ""
    metadata: Optional[Dict[str, Any]] = None
    created_at: Optional[int] = None
    updated_at: Optional[int] = None
    product_id: Optional[str] = None


@dataclass
class PaymentLink(Model):
    """A reusable payment link."""
    id: str
    entity: str = "payment_link"
    livemode: bool = False
    name: Optional[str] = None
    active: bool = True
    after_completion_message: Optional[str] = None
    locale: Optional[str] = None
    pass_fees_to_customer: bool = False
    metadata: Optional[Dict[str, Any]] = None
    created_at: Optional[int] = None
    updated_at: Optional[int] = None
    collect_shipping_address: bool = False
    url: Optional[str] = None


@dataclass
class PaymentLinkItem(Model):
    """An item offered by a payment link."""
    id: str
    entity: str = "price"
    amount: float = 0
    quantity: int = 0
    adjustable_quantity: bool = False
    currency: str = ""
    metadata: Optional[Dict[str, Any]] = None
    created_at: Optional[int] = None
    updated_at: Optional[int] = None
    product_id: Optional[str] = None


@dataclass
class ListResponse(Generic[T]):
    """One page of a paginated list."""
    livemode: bool
    current_page: int
    data: List[T]
    first_page_url: Optional[str]
    last_page: int
    last_page_url: Optional[str]
    next_page_url: Optional[str]
    path: Optional[str]
    per_page: int
    prev_page_url: Optional[str]
    total: int

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        item: Callable[[Dict[str, Any]], T]
    ) -> "ListResponse[T]":
        return cls(
            livemode=data.get("livemode", False),
            current_page=data.get("current_page", 1),
            data=[item(entry) for entry in data.get("data") or []],
            first_page_url=data.get("first_page_url"),
            last_page=data.get("last_page", 1),
            last_page_url=data.get("last_page_url"),
            next_page_url=data.get("next_page_url"),
            path=data.get("path"),
            per_page=data.get("per_page", 0),
            prev_page_url=data.get("prev_page_url"),
            total=data.get("total", 0)
        )

    @property
    def has_next(self) -> bool:
        return self.next_page_url is not None


@dataclass
class DeleteItemResponse(Model):
    """Result of deleting an object."""
    id: str
    entity: str = ""
    livemode: bool = False
    deleted: bool = False


class Logger(Protocol):
    """Logger protocol."""
    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None: ...
    def info(self, msg: str, *args: Any, **kwargs: Any) -> None: ...
    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None: ...
    def error(self, msg: str, *args: Any, **kwargs: Any) -> None: ...
