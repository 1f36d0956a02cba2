"""
Template-driven document drafting.

Drafts come from the LLM and are wrapped in the CM/ECF caption. Unlike
classification there is no useful fallback draft, so generator failures
propagate as AIProviderError.
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any

from app.services.catalog import DocumentTemplate
from app.services.courts.compliance import format_for_cmecf
from app.services.openai_ai import OpenAIService

logger = logging.getLogger(__name__)

GENERATED_MIME_TYPE = "text/plain"

GENERATOR_SYSTEM_PROMPT = """You are a legal document generation specialist for Massachusetts Federal District Court.
Generate the body of a properly formatted legal document based on the template and user inputs provided.
Follow CM/ECF formatting requirements and the Massachusetts Federal District Court Local Rules.
Do not include the court caption or signature block; they are added separately."""


class DocumentGenerator(ABC):
    """Produces the body text of a document from a template."""

    @abstractmethod
    async def generate(self, template: DocumentTemplate, user_inputs: dict[str, Any]) -> str:
        ...


class LLMDocumentGenerator(DocumentGenerator):
    def __init__(self, service: OpenAIService):
        self.service = service

    async def generate(self, template: DocumentTemplate, user_inputs: dict[str, Any]) -> str:
        template_data = {
            "name": template.name,
            "sections": list(template.sections),
            "required_fields": list(template.required_fields),
        }
        return await self.service.complete_text(
            GENERATOR_SYSTEM_PROMPT,
            f"Generate a legal document using this template: {json.dumps(template_data)}\n"
            f"With these user inputs: {json.dumps(user_inputs, default=str)}",
        )


def _input(user_inputs: dict[str, Any], *keys: str) -> str | None:
    for key in keys:
        value = user_inputs.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


async def draft_from_template(
    generator: DocumentGenerator,
    template: DocumentTemplate,
    user_inputs: dict[str, Any],
) -> str:
    """Generate and CM/ECF-format a document body."""
    body = await generator.generate(template, user_inputs)
    logger.info(
        "Generated draft from template %s (%d chars)",
        template.id,
        len(body),
        extra={"template_id": template.id},
    )
    return format_for_cmecf(
        body,
        case_number=_input(user_inputs, "case_number", "caseNumber"),
        parties=_input(user_inputs, "parties"),
        document_type=template.name.upper(),
    )


def generated_filename(template: DocumentTemplate) -> str:
    return f"{template.name.replace(' ', '_')}_Generated.txt"
