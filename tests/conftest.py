import sys
from pathlib import Path

import pytest

# Ensure repo root is on sys.path so `import chargily_pay` works under all pytest import modes.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

SECRET = "whsec_test123"


@pytest.fixture
def secret_key() -> str:
    return SECRET


@pytest.fixture
def checkout_data():
    return {
        "id": "01hj5n7cqpaf0mt2d0xx85tgz8",
        "entity": "checkout",
        "livemode": False,
        "amount": 2500,
        "currency": "dzd",
        "fees": 0,
        "pass_fees_to_customer": False,
        "status": "paid",
        "locale": "ar",
        "description": None,
        "success_url": "https://example.com/thanks",
        "failure_url": None,
        "webhook_endpoint": None,
        "payment_method": "edahabia",
        "invoice_id": None,
        "customer_id": "01hj5n7ck5g1p6k6z3y8k4x2qv",
        "payment_link_id": None,
        "metadata": {"order_id": "A-1001"},
        "created_at": 1701947990,
        "updated_at": 1701948000,
        "shipping_address": {"country": "DZ", "state": "Alger", "address": "1 Rue Didouche"},
        "collect_shipping_address": True,
        "checkout_url": "https://pay.chargily.dz/test/checkouts/01hj5n7cqpaf0mt2d0xx85tgz8/pay",
    }
