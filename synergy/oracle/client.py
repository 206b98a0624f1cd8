# -*- coding: utf-8 -*-
"""Oracle — chat completion call against an OpenAI-compatible endpoint."""

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from ..config import settings
from ..errors import OracleFailure
from .parsing import extract_error, extract_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OracleSettings:
    base_url: str
    api_key: Optional[str]
    model: str
    timeout: float
    temperature: float


@dataclass(frozen=True)
class OracleImage:
    data: bytes
    mime: str = "image/jpeg"

    def data_url(self) -> str:
        b64 = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime};base64,{b64}"


def resolve_oracle_settings() -> OracleSettings:
    return OracleSettings(
        base_url=settings.oracle_base_url.rstrip("/"),
        api_key=(settings.oracle_api_key or "").strip() or None,
        model=settings.oracle_model,
        timeout=settings.oracle_timeout,
        temperature=settings.oracle_temperature,
    )


class OracleClient:
    """Sends one prompt (optionally with an image) and returns the reply text."""

    def complete(self, *, system: str, prompt: str, image: Optional[OracleImage] = None) -> str:
        raise NotImplementedError


class ChatCompletionsClient(OracleClient):
    def __init__(
        self,
        cfg: Optional[OracleSettings] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.cfg = cfg or resolve_oracle_settings()
        self._transport = transport

    def _payload(self, system: str, prompt: str, image: Optional[OracleImage]) -> Dict[str, Any]:
        user_content: Any = prompt
        if image is not None:
            parts: List[Dict[str, Any]] = [
                {"type": "text", "text": prompt},
                {"type": "image_url", "image_url": {"url": image.data_url()}},
            ]
            user_content = parts
        return {
            "model": self.cfg.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user_content},
            ],
            "temperature": self.cfg.temperature,
            "response_format": {"type": "json_object"},
        }

    def complete(self, *, system: str, prompt: str, image: Optional[OracleImage] = None) -> str:
        if not self.cfg.api_key:
            raise OracleFailure("SYNERGY_ORACLE_API_KEY is not set")

        url = f"{self.cfg.base_url}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self.cfg.api_key}",
            "Content-Type": "application/json",
        }
        payload = self._payload(system, prompt, image)

        with httpx.Client(
            timeout=self.cfg.timeout,
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            try:
                resp = client.post(url, headers=headers, json=payload)
            except httpx.HTTPError as exc:
                logger.warning("oracle request failed: %s", exc)
                raise OracleFailure(f"Oracle request failed: {exc}") from exc

            try:
                data = resp.json()
            except ValueError:
                data = None

            if resp.status_code >= 400:
                detail = extract_error(data) or resp.text.replace("\n", " ").strip()[:200]
                logger.warning("oracle returned HTTP %s: %s", resp.status_code, detail)
                raise OracleFailure(f"Oracle returned HTTP {resp.status_code}: {detail}")
            if data is None:
                snippet = (resp.text or "").replace("\n", " ").strip()[:200]
                raise OracleFailure(f"Oracle returned non-JSON response: {snippet}")

        error = extract_error(data)
        if error:
            raise OracleFailure(error)
        text = extract_text(data)
        if not text.strip():
            raise OracleFailure("Oracle returned no text")
        return text
