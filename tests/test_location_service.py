"""CEP lookup tests."""

from __future__ import annotations

import httpx

from app.services.location_service import LocationService


def _service(handler) -> LocationService:
    return LocationService(httpx.Client(transport=httpx.MockTransport(handler)))


def test_resolves_known_cep() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path.endswith("/01310100/json/")
        return httpx.Response(
            200,
            json={
                "cep": "01310-100",
                "logradouro": "Avenida Paulista",
                "bairro": "Bela Vista",
                "localidade": "São Paulo",
                "uf": "SP",
            },
        )

    address = _service(handler).get_address_by_cep("01310-100")
    assert address is not None
    assert address.cep == "01310-100"
    assert (address.street, address.city, address.state) == ("Avenida Paulista", "São Paulo", "SP")


def test_unknown_cep_returns_none() -> None:
    service = _service(lambda request: httpx.Response(200, json={"erro": True}))
    assert service.get_address_by_cep("00000000") is None


def test_malformed_cep_makes_no_call() -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={})

    assert _service(handler).get_address_by_cep("1234-56") is None
    assert calls == []


def test_network_failure_returns_none() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    assert _service(handler).get_address_by_cep("01310100") is None
