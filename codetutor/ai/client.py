import asyncio
import copy
import json
import logging
from typing import Any

import litellm
from pydantic import BaseModel

from codetutor.ai.errors import AIConfigurationError, AISchemaValidationError, classify_provider_error
from codetutor.config.settings import get_settings


class LLMClient:
    """Manages LLM completion requests through LiteLLM."""

    def __init__(self, model: str | None = None) -> None:
        """Initialize LLMClient.

        Args:
            model: Optional model override; defaults to PRIMARY_LLM_MODEL.
        """
        self._logger = logging.getLogger(__name__)
        self._model = model

    def _resolve_model(self, model: str | None) -> str:
        try:
            return model or self._model or get_settings().primary_llm_model
        except ValueError as e:
            raise AIConfigurationError(str(e)) from e

    async def complete(
        self,
        messages: list[dict[str, Any]],
        temperature: float | None = None,
        max_tokens: int | None = None,
        response_format: Any | None = None,
        model: str | None = None,
    ) -> Any:
        """Low-level completion method using LiteLLM directly."""
        settings = get_settings()
        kwargs: dict[str, Any] = {
            "model": self._resolve_model(model),
            "messages": messages,
            "temperature": temperature if temperature is not None else settings.AI_TEMPERATURE_DEFAULT,
            "timeout": settings.AI_REQUEST_TIMEOUT,
        }
        # Only add max_tokens if explicitly provided - let model decide otherwise
        if max_tokens is not None:
            kwargs["max_tokens"] = max_tokens
        if response_format is not None:
            kwargs["response_format"] = response_format

        try:
            return await asyncio.wait_for(litellm.acompletion(**kwargs), timeout=settings.AI_REQUEST_TIMEOUT)
        except Exception as e:
            self._logger.exception("Error in model completion")
            raise classify_provider_error(e) from e

    async def get_completion(
        self,
        messages: list[dict[str, Any]],
        response_model: type[BaseModel] | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        format_json: bool = False,
        model: str | None = None,
    ) -> Any:
        """Get completion text, parsed JSON, or a validated pydantic model."""
        if response_model is not None:
            return await self._complete_with_schema(
                messages=messages,
                schema_model=response_model,
                temperature=temperature,
                max_tokens=max_tokens,
                model=model,
            )

        response = await self.complete(
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
            response_format={"type": "json_object"} if format_json else None,
            model=model,
        )
        content = response.choices[0].message.content or ""
        return self._parse_json_content(content) if format_json else content

    async def _complete_with_schema(
        self,
        *,
        messages: list[dict[str, Any]],
        schema_model: type[BaseModel],
        temperature: float | None,
        max_tokens: int | None,
        model: str | None,
    ) -> BaseModel:
        last_error: Exception | None = None
        for attempt in range(1, 3):
            response = await self.complete(
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
                response_format=self._build_response_format(schema_model),
                model=model,
            )
            try:
                return self._coerce_response_model(response, schema_model)
            except TypeError as parse_error:
                last_error = parse_error
                self._logger.warning(
                    "Structured response validation failed on attempt %s: %s",
                    attempt,
                    parse_error,
                )
        msg = f"Structured response validation failed: {last_error}"
        raise AISchemaValidationError(msg)

    def _build_response_format(self, response_model: type[BaseModel]) -> dict[str, Any]:
        schema = copy.deepcopy(response_model.model_json_schema())
        self._normalize_json_schema(schema)
        return {
            "type": "json_schema",
            "json_schema": {
                "name": response_model.__name__,
                "schema": schema,
            },
        }

    def _normalize_json_schema(self, node: Any) -> None:
        """Make every object strict (all properties required, no extras)."""
        if not isinstance(node, dict):
            return

        for child in (node.get("$defs") or {}).values():
            self._normalize_json_schema(child)

        props = node.get("properties")
        if isinstance(props, dict) and props:
            node["required"] = list(props.keys())
            node.setdefault("additionalProperties", False)
            for child in props.values():
                self._normalize_json_schema(child)

        items = node.get("items")
        if isinstance(items, dict):
            self._normalize_json_schema(items)

        for key in ("allOf", "anyOf", "oneOf"):
            for child in node.get(key) or []:
                self._normalize_json_schema(child)

    def _coerce_response_model(self, raw_response: Any, response_model: type[BaseModel]) -> BaseModel:
        choices = getattr(raw_response, "choices", None)
        if choices:
            message = getattr(choices[0], "message", None)
            for candidate in (getattr(message, "parsed", None), getattr(message, "content", None)):
                converted = self._try_convert_payload(candidate, response_model)
                if converted is not None:
                    return converted

        msg = f"Unable to coerce structured response into {response_model.__name__}"
        raise TypeError(msg)

    def _try_convert_payload(self, payload: Any, response_model: type[BaseModel]) -> BaseModel | None:
        if payload is None:
            return None
        if isinstance(payload, response_model):
            return payload
        if isinstance(payload, BaseModel):
            payload = payload.model_dump()
        if isinstance(payload, str):
            payload = self._parse_json_content(payload)
        if not isinstance(payload, dict):
            return None
        try:
            return response_model.model_validate(payload)
        except ValueError:
            return None

    def _extract_json_block(self, content: str) -> str | None:
        marker = "```json"
        start = content.lower().find(marker)
        if start == -1:
            return None
        start += len(marker)
        end = content.find("```", start)
        if end == -1:
            return None
        return content[start:end].strip() or None

    def _parse_json_content(self, content: str) -> dict[str, Any] | list[Any] | str:
        """Parse JSON content from AI response, falling back to the raw text."""
        try:
            json_block = self._extract_json_block(content)
            if json_block is not None:
                return json.loads(json_block)

            content_stripped = content.strip()
            if content_stripped.startswith(("{", "[")):
                return json.loads(content_stripped)

            return content

        except json.JSONDecodeError:
            self._logger.warning("Failed to parse JSON content, returning as string")
            return content
