"""Generative assistant: tips, EcoBot chat, route and fill-level suggestions.

Every call goes to Gemini once through the ``google-genai`` SDK. Any failure
(missing key, transport error, API error, unusable payload) is logged and
replaced with a deterministic local answer; callers never see the error.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from app.config import settings
from app.schemas.collection_point import BinStatus, ChatTurn, CollectionPoint, OptimizedRoute
from app.utils.errors import ExternalServiceError

logger = logging.getLogger(__name__)

FALLBACK_TIP = "A natureza não faz nada em vão. - Aristóteles"
DEFAULT_TIP = "Na natureza nada se cria, nada se perde, tudo se transforma. - Lavoisier"
FALLBACK_CHAT = "Desculpe, estou com dificuldade de conexão. Tente novamente mais tarde! 🌱"
FALLBACK_PREDICTION = "Estável (Sem dados)"
MISSING_PREDICTION = "Análise indisponível"

TIP_PROMPT = (
    "Gere uma citação curta e inspiradora sobre natureza/sustentabilidade de uma pessoa "
    "real famosa (cite o autor) OU um fato curioso sobre reciclagem. Máximo 25 palavras. "
    "Não use markdown (negrito/itálico)."
)

ECOBOT_INSTRUCTION = """Você é o EcoBot, um assistente virtual amigável do app reColeta.
Seu objetivo é ajudar moradores com:
1. Dúvidas sobre separação de lixo (reciclável vs orgânico).
2. Horários de coleta.
3. Reportar problemas.

Seja conciso, use emojis e mantenha um tom comunitário e encorajador.
Se perguntarem sobre pontos, diga que podem ver no mapa."""

ROUTE_PROMPT = """Atue como um sistema logístico inteligente de gestão de resíduos.
Tenho a seguinte lista de pontos de coleta com coordenadas (lat/lng) e status:
{points}

Tarefa:
1. Crie uma rota lógica priorizando pontos com status 'Cheio' e 'Transbordando'.
2. Pontos 'Vazio' devem ser ignorados.
3. Estime o tempo da rota e a economia de distância considerando a geografia.
4. Gere uma explicação ('reasoning').

Regras:
- Em 'orderedIds', retorne APENAS os IDs exatos dos pontos na ordem de visita.
- Em 'reasoning', refira-se aos pontos SEMPRE pelo endereço, nunca pelo ID.
- Responda estritamente no formato JSON definido."""

PREDICTION_PROMPT = """Analise estes pontos de coleta e forneça uma PREVISÃO de volume para as
próximas 24 horas. Considere: áreas residenciais geram mais lixo orgânico no fim de semana.

Dados atuais: {points}

Retorne um JSON onde as chaves são os IDs e os valores são strings curtas de previsão
(ex: "Tendência de alta", "Estável", "Crítico em 4h")."""

ROUTE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "orderedIds": {"type": "ARRAY", "items": {"type": "STRING"}},
        "estimatedTime": {"type": "STRING"},
        "distanceSaved": {"type": "STRING"},
        "reasoning": {"type": "STRING"},
    },
}

_MARKDOWN_EMPHASIS = re.compile(r"\*+")
_WRAPPING_QUOTES = re.compile(r'^"|"$')


class AssistantService:
    """Thin Gemini client with local fallbacks."""

    def __init__(self, client: genai.Client | None) -> None:
        self.client = client

    def _generate(
        self,
        contents: list[dict[str, Any]],
        system_instruction: str | None = None,
        response_mime_type: str | None = None,
        response_schema: dict[str, Any] | None = None,
    ) -> str:
        if self.client is None:
            raise ExternalServiceError("Gemini", "API key is not configured")

        config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            response_mime_type=response_mime_type,
            response_schema=response_schema,
        )
        try:
            response = self.client.models.generate_content(
                model=settings.gemini_model,
                contents=contents,
                config=config,
            )
        except (genai_errors.APIError, httpx.HTTPError) as exc:
            raise ExternalServiceError("Gemini", str(exc)) from exc

        text = getattr(response, "text", None)
        if not isinstance(text, str) or not text.strip():
            raise ExternalServiceError("Gemini", "empty response")
        return text

    @staticmethod
    def _user_turn(text: str) -> dict[str, Any]:
        return {"role": "user", "parts": [{"text": text}]}

    def generate_tip(self) -> str:
        """Return a short sustainability quote or recycling fact."""
        try:
            text = self._generate([self._user_turn(TIP_PROMPT)])
        except ExternalServiceError as exc:
            logger.warning("Tip generation failed: %s", exc.message)
            return FALLBACK_TIP
        cleaned = _WRAPPING_QUOTES.sub("", _MARKDOWN_EMPHASIS.sub("", text).strip()).strip()
        return cleaned or DEFAULT_TIP

    def chat(self, history: list[ChatTurn], message: str) -> str:
        """Answer ``message`` as EcoBot, given the prior role-tagged turns."""
        contents = [{"role": turn.role, "parts": [{"text": turn.text}]} for turn in history]
        contents.append(self._user_turn(message))
        try:
            return self._generate(contents, system_instruction=ECOBOT_INSTRUCTION).strip()
        except ExternalServiceError as exc:
            logger.warning("EcoBot chat failed: %s", exc.message)
            return FALLBACK_CHAT

    @staticmethod
    def fallback_route(points: list[CollectionPoint]) -> OptimizedRoute:
        """Visit only full or overflowing points, overflowing first."""
        urgent = [
            point
            for point in points
            if point.status in (BinStatus.FULL, BinStatus.OVERFLOWING)
        ]
        urgent.sort(key=lambda point: point.status != BinStatus.OVERFLOWING)
        return OptimizedRoute(
            points=urgent,
            estimated_time="Calculado localmente (Modo Offline)",
            distance_saved="N/A",
            reasoning=(
                "Sistema offline: Rota gerada priorizando apenas status crítico "
                "(Transbordando > Cheio)."
            ),
        )

    def optimize_route(self, points: list[CollectionPoint]) -> OptimizedRoute:
        """Ask the model for a visiting order; fall back to a status-priority list."""
        simplified = [
            {
                "id": point.id,
                "address": point.address,
                "status": point.status.value,
                "lat": point.lat,
                "lng": point.lng,
            }
            for point in points
        ]
        prompt = ROUTE_PROMPT.format(points=json.dumps(simplified, ensure_ascii=False))
        try:
            text = self._generate(
                [self._user_turn(prompt)],
                response_mime_type="application/json",
                response_schema=ROUTE_SCHEMA,
            )
            result = json.loads(text)
            if not isinstance(result, dict):
                raise ExternalServiceError("Gemini", "route payload is not an object")
        except (ExternalServiceError, ValueError) as exc:
            logger.warning("Route optimization failed: %s", exc)
            return self.fallback_route(points)

        by_id = {point.id: point for point in points}
        ordered = [by_id[pid] for pid in result.get("orderedIds") or [] if pid in by_id]
        if not ordered:
            logger.warning("Route optimization returned no known point ids")
            return self.fallback_route(points)

        return OptimizedRoute(
            points=ordered,
            estimated_time=result.get("estimatedTime") or "30 min",
            distance_saved=result.get("distanceSaved") or "2 km",
            reasoning=result.get("reasoning")
            or "Rota otimizada baseada na prioridade de volume e proximidade geográfica.",
        )

    def predict_zone_status(self, points: list[CollectionPoint]) -> list[CollectionPoint]:
        """Attach a 24h fill-level prediction to each point."""
        summary = [
            {"id": point.id, "type": point.type, "status": point.status.value, "region": point.region}
            for point in points
        ]
        prompt = PREDICTION_PROMPT.format(points=json.dumps(summary, ensure_ascii=False))
        try:
            text = self._generate(
                [self._user_turn(prompt)],
                response_mime_type="application/json",
            )
            predictions = json.loads(text)
            if not isinstance(predictions, dict):
                raise ExternalServiceError("Gemini", "prediction payload is not an object")
        except (ExternalServiceError, ValueError) as exc:
            logger.warning("Zone prediction failed: %s", exc)
            return [point.model_copy(update={"predicted_level": FALLBACK_PREDICTION}) for point in points]

        return [
            point.model_copy(
                update={"predicted_level": str(predictions.get(point.id) or MISSING_PREDICTION)}
            )
            for point in points
        ]
