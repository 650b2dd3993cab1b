"""Postal code (CEP) lookup through ViaCEP."""

from __future__ import annotations

import logging

import httpx

from app.config import settings
from app.schemas.collection_point import AddressData
from app.utils.validation import clean_digits, format_cep, validate_cep

logger = logging.getLogger(__name__)


class LocationService:
    """Resolve Brazilian postal codes into street addresses."""

    def __init__(self, http: httpx.Client) -> None:
        self.http = http

    def get_address_by_cep(self, cep: str) -> AddressData | None:
        """Return the address for ``cep`` or None when invalid, unknown or unreachable."""
        if not validate_cep(cep):
            return None
        clean = clean_digits(cep)

        try:
            response = self.http.get(f"{settings.viacep_base_url}/{clean}/json/")
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("CEP lookup failed for %s: %s", clean, exc)
            return None

        if not isinstance(data, dict) or data.get("erro"):
            return None

        return AddressData(
            cep=format_cep(clean),
            street=data.get("logradouro") or "",
            neighborhood=data.get("bairro") or "",
            city=data.get("localidade") or "",
            state=data.get("uf") or "",
        )
