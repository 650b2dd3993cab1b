"""Generative assistant tests with a mocked Gemini client."""

from __future__ import annotations

import json
from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import pytest
from google.genai import errors as genai_errors

from app.config import settings
from app.schemas.collection_point import BinStatus, ChatTurn, CollectionPoint
from app.services.assistant_service import (
    ECOBOT_INSTRUCTION,
    FALLBACK_CHAT,
    FALLBACK_PREDICTION,
    FALLBACK_TIP,
    AssistantService,
)
from app.utils.genai_client import build_genai_client


def _gemini(text: str | None) -> SimpleNamespace:
    return SimpleNamespace(text=text)


def _client(result) -> MagicMock:
    """Gemini client answering every call with ``result`` (or raising it)."""
    client = MagicMock()
    if isinstance(result, Exception):
        client.models.generate_content.side_effect = result
    else:
        client.models.generate_content.return_value = result
    return client


def _service(result) -> AssistantService:
    return AssistantService(_client(result))


def _unavailable() -> genai_errors.ServerError:
    return genai_errors.ServerError(
        503, {"error": {"code": 503, "message": "unavailable", "status": "UNAVAILABLE"}}
    )


def _point(point_id: str, status: BinStatus) -> CollectionPoint:
    return CollectionPoint(id=point_id, address=f"Rua {point_id}", status=status, type="Vidro", region="Centro")


POINTS = [
    _point("1", BinStatus.FULL),
    _point("2", BinStatus.EMPTY),
    _point("3", BinStatus.OVERFLOWING),
    _point("4", BinStatus.HALF),
    _point("5", BinStatus.FULL),
]


def test_tip_strips_markdown_and_quotes() -> None:
    service = _service(_gemini('"**Reciclar** uma lata economiza energia."'))
    assert service.generate_tip() == "Reciclar uma lata economiza energia."


def test_tip_falls_back_on_api_error() -> None:
    assert _service(_unavailable()).generate_tip() == FALLBACK_TIP


def test_missing_api_key_skips_network(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "gemini_api_key", "")
    assert build_genai_client() is None
    assert AssistantService(None).generate_tip() == FALLBACK_TIP


def test_chat_sends_history_and_system_instruction() -> None:
    client = _client(_gemini("Separe o vidro! ♻️"))
    history = [ChatTurn(role="user", text="Oi"), ChatTurn(role="model", text="Olá!")]
    reply = AssistantService(client).chat(history, "Onde jogo vidro?")

    assert reply == "Separe o vidro! ♻️"
    call = client.models.generate_content.call_args
    assert call.kwargs["model"] == settings.gemini_model
    assert [turn["role"] for turn in call.kwargs["contents"]] == ["user", "model", "user"]
    assert call.kwargs["config"].system_instruction == ECOBOT_INSTRUCTION


def test_chat_falls_back_on_transport_error() -> None:
    assert _service(httpx.ConnectError("offline")).chat([], "Oi") == FALLBACK_CHAT


def test_empty_answer_counts_as_failure() -> None:
    assert _service(_gemini(None)).chat([], "Oi") == FALLBACK_CHAT


def test_route_keeps_model_order_and_drops_unknown_ids() -> None:
    payload = {
        "orderedIds": ["5", "ghost", "3"],
        "estimatedTime": "25 min",
        "distanceSaved": "1.2 km",
        "reasoning": "Comece pela Rua 5.",
    }
    client = _client(_gemini(json.dumps(payload)))
    route = AssistantService(client).optimize_route(POINTS)

    assert [point.id for point in route.points] == ["5", "3"]
    assert route.estimated_time == "25 min"
    assert client.models.generate_content.call_args.kwargs["config"].response_mime_type == "application/json"


@pytest.mark.parametrize(
    "result",
    [
        httpx.ConnectError("offline"),
        _gemini("not json"),
        _gemini(json.dumps({"orderedIds": ["ghost"]})),
    ],
)
def test_route_fallback_prioritises_overflowing(result) -> None:
    """Offline routes visit only critical points, overflowing first, otherwise stable."""
    route = _service(result).optimize_route(POINTS)
    assert [point.id for point in route.points] == ["3", "1", "5"]
    assert route.distance_saved == "N/A"
    assert "Offline" in route.estimated_time


def test_predictions_attach_per_point_values() -> None:
    text = json.dumps({"1": "Crítico em 4h", "3": "Tendência de alta"})
    points = _service(_gemini(text)).predict_zone_status(POINTS[:3])
    assert [point.predicted_level for point in points] == [
        "Crítico em 4h",
        "Análise indisponível",
        "Tendência de alta",
    ]


def test_predictions_fall_back_when_unreachable() -> None:
    points = _service(_unavailable()).predict_zone_status(POINTS)
    assert {point.predicted_level for point in points} == {FALLBACK_PREDICTION}
