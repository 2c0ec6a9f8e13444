"""
Assistant orchestration between the local store and Vapi.

Create goes to Vapi first and only then writes the local record, so a
failed remote call leaves nothing behind locally. Update and delete read the
local record first to find the Vapi id. Multi-step updates are not rolled
back when a later step fails.
"""

from typing import Any, Dict, List

import structlog

from vapi_sync.core.exceptions import NotFoundError
from vapi_sync.models.domain.assistant import Assistant, AssistantCreate, AssistantUpdate
from vapi_sync.repositories import AssistantRepository, PhoneNumberRepository
from vapi_sync.services.vapi_client import VapiClient

logger = structlog.get_logger(__name__)


def default_system_prompt(name: str) -> str:
    return (
        f"You are {name}, a real human personal assistant. Never call yourself an AI, "
        "bot, or virtual assistant. Speak casually, warmly, and with a sense of humor. "
        "Be curious and conversational: ask natural follow-up questions and react like "
        "a friend who genuinely cares. Keep answers practical and concise, but not terse; "
        "add a light joke or playful remark when it fits. Avoid canned phrases and "
        "corporate tone. If you do not know something, say so and think it through out "
        "loud. Your goal: help, collaborate, and make the conversation feel like it is "
        "with a real person."
    )


class AssistantService:
    def __init__(
        self,
        repository: AssistantRepository,
        phone_numbers: PhoneNumberRepository,
        vapi: VapiClient
    ):
        self.repository = repository
        self.phone_numbers = phone_numbers
        self.vapi = vapi

    async def list_assistants(self) -> List[Assistant]:
        return await self.repository.get_all()

    async def get_assistant(self, assistant_id: str) -> Dict[str, Any]:
        """Local record merged with the live Vapi assistant (not persisted)."""
        assistant = await self.repository.get_by_id(assistant_id)
        if assistant is None:
            raise NotFoundError("Assistant not found")

        vapi_assistant = None
        if assistant.vapiAssistantId:
            vapi_assistant = await self.vapi.get_assistant(assistant.vapiAssistantId)

        return {**assistant.model_dump(exclude_none=True), "vapiAssistant": vapi_assistant}

    async def create_assistant(self, data: AssistantCreate) -> Assistant:
        system_prompt = data.systemPrompt or default_system_prompt(data.name)

        vapi_assistant = await self.vapi.create_assistant(
            name=data.name,
            first_message=data.firstMessage,
            system_prompt=system_prompt
        )

        try:
            assistant = await self.repository.create({
                "name": data.name,
                "firstMessage": data.firstMessage,
                "systemPrompt": system_prompt,
                "vapiAssistantId": vapi_assistant["id"],
            })
        except Exception:
            logger.error(
                "remote_resource_orphaned",
                resource="assistant",
                vapi_assistant_id=vapi_assistant.get("id"),
                exc_info=True
            )
            raise

        logger.info(
            "assistant_created",
            assistant_id=assistant.id,
            vapi_assistant_id=assistant.vapiAssistantId
        )
        return assistant

    async def update_assistant(self, data: AssistantUpdate) -> Assistant:
        assistant = await self.repository.get_by_id(data.id)
        if assistant is None or not assistant.vapiAssistantId:
            raise NotFoundError("Assistant not found")

        await self.vapi.update_assistant(
            assistant.vapiAssistantId,
            name=data.name,
            first_message=data.firstMessage,
            system_prompt=data.systemPrompt,
            voice_provider=data.voiceProvider,
            voice_id=data.voiceId,
            end_call_message=data.endCallMessage,
            max_duration_seconds=data.maxDurationSeconds
        )

        if data.phoneNumberId:
            await self._link_phone_number(assistant, data.phoneNumberId)

        updated = await self.repository.update(assistant.id, data.changes())
        if updated is None:
            # Removed by another request after the lookup above
            raise NotFoundError("Assistant not found")

        logger.info("assistant_updated", assistant_id=updated.id, fields=sorted(data.changes()))
        return updated

    async def _link_phone_number(self, assistant: Assistant, phone_number_id: str) -> None:
        """
        Attach a phone number to the assistant, in Vapi and on the phone
        number's local record. Unknown or unsynced numbers are skipped; the
        assistant still records the link.
        """
        phone_number = await self.phone_numbers.get_by_id(phone_number_id)
        if phone_number is None or not phone_number.vapiPhoneNumberId:
            logger.warning(
                "phone_number_link_skipped",
                assistant_id=assistant.id,
                phone_number_id=phone_number_id,
                reason="not_found" if phone_number is None else "not_synced"
            )
            return

        await self.vapi.update_phone_number(
            phone_number.vapiPhoneNumberId,
            assistant.vapiAssistantId
        )
        await self.phone_numbers.update(phone_number.id, {"assistantId": assistant.id})

        logger.info(
            "phone_number_linked",
            assistant_id=assistant.id,
            phone_number_id=phone_number.id
        )

    async def delete_assistant(self, assistant_id: str) -> Dict[str, str]:
        assistant = await self.repository.get_by_id(assistant_id)
        if assistant is None:
            raise NotFoundError("Assistant not found")

        if assistant.vapiAssistantId:
            await self.vapi.delete_assistant(assistant.vapiAssistantId)

        await self.repository.delete(assistant.id)

        logger.info("assistant_deleted", assistant_id=assistant.id)
        return {"message": "Assistant deleted successfully"}
