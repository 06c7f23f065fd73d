"""Chargily Pay API client."""

import json
import logging
import os
from typing import Any, Callable, Dict, Optional, TypeVar
from urllib.parse import quote

import httpx

from .consts import CHARGILY_LIVE_URL, CHARGILY_TEST_URL, DEFAULT_PER_PAGE, MODES
from .errors import ChargilyAPIError, ChargilyRequestError, ChargilyValidationError
from .params import (
    CreateCheckoutParams,
    CreateCustomerParams,
    CreatePaymentLinkParams,
    CreatePriceParams,
    CreateProductParams,
    Params,
    UpdateCustomerParams,
    UpdatePaymentLinkParams,
    UpdatePriceParams,
    UpdateProductParams,
    to_body
)
from .types import (
    Balance,
    Checkout,
    CheckoutItem,
    Customer,
    DeleteItemResponse,
    ListResponse,
    Logger,
    PaymentLink,
    PaymentLinkItem,
    Price,
    Product,
    ProductPrice
)
from .version import __version__

T = TypeVar("T")


class ChargilyClient:
    """
    Chargily Pay API client.

    Example:
        >>> async with ChargilyClient(api_key="test_sk_...", mode="test") as client:
        ...     customer = await client.create_customer(
        ...         CreateCustomerParams(name="Amine", email="amine@example.com")
        ...     )
        ...     checkout = await client.create_checkout(
        ...         CreateCheckoutParams(
        ...             amount=2500,
        ...             currency="dzd",
        ...             success_url="https://example.com/thanks",
        ...             customer_id=customer.id
        ...         )
        ...     )
        ...     print(checkout.checkout_url)
    """

    def __init__(
        self,
        api_key: str,
        mode: str = "test",
        timeout: float = 30.0,
        logger: Optional[Logger] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize ChargilyClient.

        Args:
            api_key: Chargily API secret key
            mode: "test" or "live" (default: "test")
            timeout: Request timeout in seconds (default: 30.0)
            logger: Custom logger instance
            transport: Optional httpx transport (mainly for tests)
        """
        if not api_key:
            raise ValueError("api_key is required")
        if mode not in MODES:
            raise ValueError(f"mode must be one of {MODES}, got {mode!r}")

        self.api_key = api_key
        self.mode = mode
        self.base_url = CHARGILY_TEST_URL if mode == "test" else CHARGILY_LIVE_URL
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)

        self._http = httpx.AsyncClient(
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
                "Accept": "application/json",
                "User-Agent": f"chargily-pay-python/{__version__}"
            },
            timeout=timeout,
            transport=transport
        )

    @classmethod
    def from_env(cls, **kwargs: Any) -> "ChargilyClient":
        """
        Build a client from CHARGILY_API_KEY and CHARGILY_MODE.

        Keyword arguments are passed through to the constructor.
        """
        return cls(
            api_key=os.environ.get("CHARGILY_API_KEY", ""),
            mode=os.environ.get("CHARGILY_MODE", "test"),
            **kwargs
        )

    async def close(self):
        """Close the underlying HTTP client."""
        await self._http.aclose()

    async def __aenter__(self) -> "ChargilyClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _request(
        self,
        endpoint: str,
        method: str = "GET",
        body: Optional[Params] = None,
        params: Optional[Dict[str, Any]] = None
    ) -> Any:
        """Send a request and return the decoded JSON response."""
        url = f"{self.base_url}/{endpoint}"
        content = None
        if body is not None:
            content = json.dumps(to_body(body)).encode("utf-8")

        self.logger.debug(f"{method} {url}")

        try:
            response = await self._http.request(method, url, content=content, params=params)
        except httpx.HTTPError as e:
            self.logger.error(f"Failed to make API request: {method} {url}: {e}")
            raise ChargilyRequestError(f"Failed to make API request: {e}") from e

        if not response.is_success:
            message = response.reason_phrase or "request failed"
            try:
                payload = response.json()
            except ValueError:
                payload = response.text
            if isinstance(payload, dict) and payload.get("message"):
                message = str(payload["message"])
            self.logger.error(
                f"API request failed: {method} {url} -> {response.status_code} {message}"
            )
            raise ChargilyAPIError(response.status_code, message, payload)

        try:
            return response.json()
        except ValueError as e:
            raise ChargilyAPIError(
                response.status_code, "Response body is not valid JSON", response.text
            ) from e

    async def _list(
        self,
        endpoint: str,
        item: Callable[[Dict[str, Any]], T],
        per_page: int
    ) -> ListResponse[T]:
        data = await self._request(endpoint, "GET", params={"per_page": per_page})
        return ListResponse.from_dict(data, item)

    # Balance

    async def get_balance(self) -> Balance:
        """Retrieve the current balance of every wallet."""
        return Balance.from_dict(await self._request("balance"))

    # Customers

    async def create_customer(self, customer_data: CreateCustomerParams) -> Customer:
        return Customer.from_dict(await self._request("customers", "POST", customer_data))

    async def get_customer(self, customer_id: str) -> Customer:
        return Customer.from_dict(await self._request(f"customers/{_id(customer_id)}"))

    async def update_customer(
        self,
        customer_id: str,
        update_data: UpdateCustomerParams
    ) -> Customer:
        data = await self._request(f"customers/{_id(customer_id)}", "PATCH", update_data)
        return Customer.from_dict(data)

    async def delete_customer(self, customer_id: str) -> DeleteItemResponse:
        data = await self._request(f"customers/{_id(customer_id)}", "DELETE")
        return DeleteItemResponse.from_dict(data)

    async def list_customers(self, per_page: int = DEFAULT_PER_PAGE) -> ListResponse[Customer]:
        return await self._list("customers", Customer.from_dict, per_page)

    # Products

    async def create_product(self, product_data: CreateProductParams) -> Product:
        return Product.from_dict(await self._request("products", "POST", product_data))

    async def update_product(
        self,
        product_id: str,
        update_data: UpdateProductParams
    ) -> Product:
        data = await self._request(f"products/{_id(product_id)}", "POST", update_data)
        return Product.from_dict(data)

    async def get_product(self, product_id: str) -> Product:
        return Product.from_dict(await self._request(f"products/{_id(product_id)}"))

    async def list_products(self, per_page: int = DEFAULT_PER_PAGE) -> ListResponse[Product]:
        return await self._list("products", Product.from_dict, per_page)

    async def delete_product(self, product_id: str) -> DeleteItemResponse:
        data = await self._request(f"products/{_id(product_id)}", "DELETE")
        return DeleteItemResponse.from_dict(data)

    async def get_product_prices(
        self,
        product_id: str,
        per_page: int = DEFAULT_PER_PAGE
    ) -> ListResponse[ProductPrice]:
        """List the prices attached to a product."""
        return await self._list(
            f"products/{_id(product_id)}/prices", ProductPrice.from_dict, per_page
        )

    # Prices

    async def create_price(self, price_data: CreatePriceParams) -> Price:
        return Price.from_dict(await self._request("prices", "POST", price_data))

    async def update_price(self, price_id: str, update_data: UpdatePriceParams) -> Price:
        """Update a price. Only metadata can change once a price exists."""
        data = await self._request(f"prices/{_id(price_id)}", "POST", update_data)
        return Price.from_dict(data)

    async def get_price(self, price_id: str) -> Price:
        return Price.from_dict(await self._request(f"prices/{_id(price_id)}"))

    async def list_prices(self, per_page: int = DEFAULT_PER_PAGE) -> ListResponse[Price]:
        return await self._list("prices", Price.from_dict, per_page)

    # Checkouts

    async def create_checkout(self, checkout_data: CreateCheckoutParams) -> Checkout:
        """
        Create a checkout session.

        Raises:
            ChargilyValidationError: success_url is not an http(s) URL, or
                neither items nor amount and currency were given
        """
        fields = to_body(checkout_data)

        success_url = fields.get("success_url") or ""
        if not success_url.startswith("http"):
            raise ChargilyValidationError(
                "Invalid success_url, it must begin with http or https."
            )
        if not fields.get("items") and (not fields.get("amount") or not fields.get("currency")):
            raise ChargilyValidationError(
                "The items field is required when amount and currency are not present."
            )

        return Checkout.from_dict(await self._request("checkouts", "POST", fields))

    async def get_checkout(self, checkout_id: str) -> Checkout:
        return Checkout.from_dict(await self._request(f"checkouts/{_id(checkout_id)}"))

    async def list_checkouts(self, per_page: int = DEFAULT_PER_PAGE) -> ListResponse[Checkout]:
        return await self._list("checkouts", Checkout.from_dict, per_page)

    async def get_checkout_items(
        self,
        checkout_id: str,
        per_page: int = DEFAULT_PER_PAGE
    ) -> ListResponse[CheckoutItem]:
        return await self._list(
            f"checkouts/{_id(checkout_id)}/items", CheckoutItem.from_dict, per_page
        )

    async def expire_checkout(self, checkout_id: str) -> Checkout:
        """Expire a checkout before its automatic expiration."""
        data = await self._request(f"checkouts/{_id(checkout_id)}/expire", "POST")
        return Checkout.from_dict(data)

    # Payment links

    async def create_payment_link(
        self,
        payment_link_data: CreatePaymentLinkParams
    ) -> PaymentLink:
        data = await self._request("payment-links", "POST", payment_link_data)
        return PaymentLink.from_dict(data)

    async def update_payment_link(
        self,
        payment_link_id: str,
        update_data: UpdatePaymentLinkParams
    ) -> PaymentLink:
        data = await self._request(
            f"payment-links/{_id(payment_link_id)}", "POST", update_data
        )
        return PaymentLink.from_dict(data)

    async def get_payment_link(self, payment_link_id: str) -> PaymentLink:
        data = await self._request(f"payment-links/{_id(payment_link_id)}")
        return PaymentLink.from_dict(data)

    async def list_payment_links(
        self,
        per_page: int = DEFAULT_PER_PAGE
    ) -> ListResponse[PaymentLink]:
        return await self._list("payment-links", PaymentLink.from_dict, per_page)

    async def get_payment_link_items(
        self,
        payment_link_id: str,
        per_page: int = DEFAULT_PER_PAGE
    ) -> ListResponse[PaymentLinkItem]:
        return await self._list(
            f"payment-links/{_id(payment_link_id)}/items", PaymentLinkItem.from_dict, per_page
        )


def _id(value: str) -> str:
    if not value:
        raise ValueError("id is required")
    return quote(str(value), safe="")
