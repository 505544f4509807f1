"""Translate between the library's wire models and ``google.genai.types``."""

import json
from typing import Any, Dict, List, Optional, Tuple

from google.genai import types

from ..core.logger import get_logger
from ..core.types import Content, GenerateContentRequest, GenerateContentResponse, Tool
from ..core.types.content import payload_kinds

logger = get_logger(__name__)


class GenAIRequestAdapter:
    """Converts requests and responses through their camelCase JSON form.

    Going through JSON keeps base64 fields (inline data, thought signatures)
    intact in both directions.
    """

    @staticmethod
    def to_genai(request: GenerateContentRequest) -> Tuple[List[types.Content], types.GenerateContentConfig]:
        """Split a request into the ``contents`` and ``config`` arguments of ``generate_content``."""
        contents = [GenAIRequestAdapter._content_to_genai(content) for content in request.contents]

        generation: Dict[str, Any] = {}
        if request.generation_config is not None:
            generation = request.generation_config.model_dump(exclude_none=True)

        config = types.GenerateContentConfig(
            system_instruction=(
                GenAIRequestAdapter._content_to_genai(request.system_instruction)
                if request.system_instruction is not None
                else None
            ),
            tools=[GenAIRequestAdapter._tool_to_genai(tool) for tool in request.tools] if request.tools else None,
            tool_config=(
                types.ToolConfig.model_validate(request.tool_config.to_wire())
                if request.tool_config is not None
                else None
            ),
            **generation,
        )
        return contents, config

    @staticmethod
    def from_genai(response: types.GenerateContentResponse) -> GenerateContentResponse:
        """Convert an SDK response into a ``GenerateContentResponse``.

        Parts without any payload (e.g. a bare thought signature) are dropped.
        """
        payload = response.model_dump(mode="json", by_alias=True, exclude_none=True)
        for candidate in payload.get("candidates", []):
            content = candidate.get("content")
            if not content or "parts" not in content:
                continue
            parts = [part for part in content["parts"] if payload_kinds(part)]
            if len(parts) != len(content["parts"]):
                logger.debug(f"Dropped {len(content['parts']) - len(parts)} part(s) without payload.")
            content["parts"] = parts
        return GenerateContentResponse.model_validate(payload)

    @staticmethod
    def _content_to_genai(content: Content) -> types.Content:
        return types.Content.model_validate_json(content.model_dump_json(by_alias=True, exclude_none=True))

    @staticmethod
    def _tool_to_genai(tool: Tool) -> types.Tool:
        wire = tool.to_wire()
        for declaration in wire.get("functionDeclarations", []):
            parameters: Optional[Dict[str, Any]] = declaration.get("parameters")
            if parameters is not None:
                declaration["parameters"] = GenAIRequestAdapter._strip_additional_properties(parameters)
        return types.Tool.model_validate_json(json.dumps(wire))

    @staticmethod
    def _strip_additional_properties(schema: Any) -> Any:
        """Recursively removes 'additionalProperties', which Gemini schemas reject."""
        if isinstance(schema, list):
            return [GenAIRequestAdapter._strip_additional_properties(item) for item in schema]
        if not isinstance(schema, dict):
            return schema
        return {
            key: GenAIRequestAdapter._strip_additional_properties(value)
            for key, value in schema.items()
            if key != "additionalProperties"
        }
