# app/shared/services/payment_gateway.py
"""Adaptadores del procesador de pagos.

StripeGateway habla con el procesador real; FakeGateway se usa en desarrollo
(sin clave configurada) y en pruebas. Ninguno reintenta.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from uuid import uuid4

import httpx
from fastapi import Request

from app.config.settings import settings
from app.core.errors import GatewayError, InvalidArgument

logger = logging.getLogger(__name__)


def _check_amount(amount_minor_units: int):
    if isinstance(amount_minor_units, bool) or not isinstance(amount_minor_units, int) or amount_minor_units <= 0:
        raise InvalidArgument("Amount must be a positive integer in minor units")


class PaymentGateway(ABC):
    """Contrato común de los adaptadores"""

    @abstractmethod
    async def create_intent(self, amount_minor_units: int) -> str:
        """Crear un payment intent y devolver su client secret"""
        ...


class StripeGateway(PaymentGateway):
    """Cliente HTTP para la API de payment intents"""

    def __init__(
        self,
        secret_key: str,
        api_base: str = "https://api.stripe.com",
        currency: str = "usd",
        timeout: int = 30,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.secret_key = secret_key
        self.api_base = api_base.rstrip("/")
        self.currency = currency
        self.timeout = timeout
        self.transport = transport

    def _get_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.secret_key}"}

    async def create_intent(self, amount_minor_units: int) -> str:
        _check_amount(amount_minor_units)
        data = {
            "amount": str(amount_minor_units),
            "currency": self.currency,
            "payment_method_types[]": "card",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    f"{self.api_base}/v1/payment_intents",
                    data=data,
                    headers=self._get_headers(),
                )
        except httpx.TimeoutException:
            logger.error(f"Timeout creating payment intent for {amount_minor_units}")
            raise GatewayError("Payment processor timed out")
        except httpx.HTTPError as e:
            logger.error(f"Error talking to payment processor: {e}")
            raise GatewayError("Payment processor unreachable")

        if response.status_code != 200:
            logger.error(f"Payment processor error: {response.status_code} - {response.text}")
            raise GatewayError(
                "Payment processor rejected the request",
                details={"status_code": response.status_code},
            )

        try:
            client_secret = response.json().get("client_secret")
        except ValueError:
            client_secret = None
        if not client_secret:
            logger.error("Payment processor response has no client_secret")
            raise GatewayError("Malformed payment processor response")

        return client_secret


class FakeGateway(PaymentGateway):
    """Gateway simulado y configurable"""

    def __init__(self):
        self.should_succeed: bool = True
        self.calls: List[Dict[str, Any]] = []

    def configure(self, should_succeed: bool):
        self.should_succeed = should_succeed

    async def create_intent(self, amount_minor_units: int) -> str:
        _check_amount(amount_minor_units)
        self.calls.append({"method": "create_intent", "amount": amount_minor_units})
        if not self.should_succeed:
            raise GatewayError("Card declined")
        return f"pi_fake_{uuid4().hex[:12]}_secret_{uuid4().hex[:8]}"


def build_payment_gateway() -> PaymentGateway:
    """Gateway real si hay clave configurada, simulado en caso contrario"""
    if settings.payment_secret_key:
        return StripeGateway(
            secret_key=settings.payment_secret_key,
            api_base=settings.payment_api_base,
            currency=settings.payment_currency,
            timeout=settings.payment_timeout,
        )
    logger.warning("PAYMENT_SECRET_KEY not set - using FakeGateway")
    return FakeGateway()


def get_payment_gateway(request: Request) -> PaymentGateway:
    return request.app.state.payment_gateway
