import structlog
from typing import Any, Dict, List, Optional

from vapi_sync.core.exceptions import NotFoundError, ValidationError
from vapi_sync.models.domain.phone_number import PhoneNumber, PhoneNumberCreate, PhoneNumberUpdate
from vapi_sync.repositories import AssistantRepository, PhoneNumberRepository
from vapi_sync.services.vapi_client import DEFAULT_AREA_CODE, VapiClient

logger = structlog.get_logger(__name__)


class PhoneNumberService:
    def __init__(
        self,
        repository: PhoneNumberRepository,
        assistants: AssistantRepository,
        vapi: VapiClient
    ):
        self.repository = repository
        self.assistants = assistants
        self.vapi = vapi

    async def _resolve_vapi_assistant_id(self, assistant_id: str) -> str:
        """Vapi id of a local assistant, which must exist and be synced."""
        assistant = await self.assistants.get_by_id(assistant_id)
        if assistant is None or not assistant.vapiAssistantId:
            raise ValidationError("Assistant not found or not synced with Vapi")
        return assistant.vapiAssistantId

    async def list_phone_numbers(self) -> List[PhoneNumber]:
        return await self.repository.get_all()

    async def get_phone_number(self, phone_number_id: str) -> Dict[str, Any]:
        phone_number = await self.repository.get_by_id(phone_number_id)
        if phone_number is None:
            raise NotFoundError("Phone number not found")

        vapi_phone_number = None
        if phone_number.vapiPhoneNumberId:
            vapi_phone_number = await self.vapi.get_phone_number(phone_number.vapiPhoneNumberId)

        return {
            **phone_number.model_dump(exclude_none=True),
            "vapiPhoneNumber": vapi_phone_number,
        }

    async def create_phone_number(self, data: PhoneNumberCreate) -> PhoneNumber:
        vapi_assistant_id: Optional[str] = None
        if data.assistantId:
            vapi_assistant_id = await self._resolve_vapi_assistant_id(data.assistantId)

        vapi_phone_number = await self.vapi.create_phone_number(
            name=data.name,
            vapi_assistant_id=vapi_assistant_id
        )
        logger.info(
            "vapi_phone_number_created",
            vapi_phone_number_id=vapi_phone_number.get("id"),
            number=vapi_phone_number.get("number")
        )

        try:
            phone_number = await self.repository.create({
                "name": data.name,
                "number": vapi_phone_number.get("number"),
                "areaCode": DEFAULT_AREA_CODE,
                "assistantId": data.assistantId or None,
                "vapiPhoneNumberId": vapi_phone_number["id"],
            })
        except Exception:
            logger.error(
                "remote_resource_orphaned",
                resource="phone_number",
                vapi_phone_number_id=vapi_phone_number.get("id"),
                exc_info=True
            )
            raise

        return phone_number

    async def update_phone_number(self, data: PhoneNumberUpdate) -> PhoneNumber:
        phone_number = await self.repository.get_by_id(data.id)
        if phone_number is None:
            raise NotFoundError("Phone number not found")

        if not data.links_assistant:
            return phone_number

        assistant_id = data.assistantId or None
        vapi_assistant_id: Optional[str] = None
        if assistant_id:
            vapi_assistant_id = await self._resolve_vapi_assistant_id(assistant_id)

        if phone_number.vapiPhoneNumberId:
            await self.vapi.update_phone_number(phone_number.vapiPhoneNumberId, vapi_assistant_id)

        updated = await self.repository.update(phone_number.id, {"assistantId": assistant_id})
        if updated is None:
            raise NotFoundError("Phone number not found")

        logger.info(
            "phone_number_updated",
            phone_number_id=updated.id,
            assistant_id=assistant_id
        )
        return updated

    async def delete_phone_number(self, phone_number_id: str) -> Dict[str, Any]:
        phone_number = await self.repository.get_by_id(phone_number_id)
        if phone_number is None:
            raise NotFoundError("Phone number not found")

        if phone_number.vapiPhoneNumberId:
            await self.vapi.delete_phone_number(phone_number.vapiPhoneNumberId)

        await self.repository.delete(phone_number.id)

        logger.info("phone_number_deleted", phone_number_id=phone_number.id)
        return {"success": True, "message": "Phone number deleted"}
