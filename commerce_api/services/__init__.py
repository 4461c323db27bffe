"""Service Layer - per-domain services and the container that wires them.

Invariants:
    - ServiceContainer is built once per process and is read-only afterwards
    - Container services are unbound; handlers call with_transaction(db) per request
    - No string-keyed resolution: handlers read typed attributes

Design Decisions:
    - Explicit constructor wiring over a DI container: the whole graph is visible in
      build_services()
    - get_services() cached with lru_cache, same lifecycle as get_settings()
"""

from dataclasses import dataclass
from functools import lru_cache

from commerce_api.services.auth_service import AuthService
from commerce_api.services.currency_service import CurrencyService
from commerce_api.services.customer_service import CustomerService
from commerce_api.services.shipping_option_service import ShippingOptionService
from commerce_api.services.user_service import UserService


@dataclass(frozen=True)
class ServiceContainer:
    currency_service: CurrencyService
    shipping_option_service: ShippingOptionService
    customer_service: CustomerService
    user_service: UserService
    auth_service: AuthService


def build_services() -> ServiceContainer:
    customer_service = CustomerService()
    user_service = UserService()
    return ServiceContainer(
        currency_service=CurrencyService(),
        shipping_option_service=ShippingOptionService(),
        customer_service=customer_service,
        user_service=user_service,
        auth_service=AuthService(customer_service, user_service),
    )


@lru_cache
def get_services() -> ServiceContainer:
    return build_services()
