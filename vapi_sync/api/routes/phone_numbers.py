from typing import Annotated, Any, Dict

from fastapi import APIRouter, Depends

from vapi_sync.core.deps import AssistantRepositoryDep, PhoneNumberRepositoryDep, VapiClientDep
from vapi_sync.models.domain.phone_number import (
    PhoneNumber,
    PhoneNumberCreate,
    PhoneNumberId,
    PhoneNumberList,
    PhoneNumberUpdate,
)
from vapi_sync.models.domain.response import DeleteResponse
from vapi_sync.services.phone_number_service import PhoneNumberService

router = APIRouter(prefix="/phone-numbers", tags=["phone-numbers"])


async def get_phone_number_service(
    repository: PhoneNumberRepositoryDep,
    assistants: AssistantRepositoryDep,
    vapi: VapiClientDep
) -> PhoneNumberService:
    return PhoneNumberService(repository, assistants, vapi)


PhoneNumberServiceDep = Annotated[PhoneNumberService, Depends(get_phone_number_service)]


@router.get("", response_model=PhoneNumberList, response_model_exclude_none=True)
async def list_phone_numbers(repository: PhoneNumberRepositoryDep):
    return PhoneNumberList(phoneNumbers=await repository.get_all())


@router.post("", response_model=PhoneNumber, response_model_exclude_none=True)
async def create_phone_number(data: PhoneNumberCreate, service: PhoneNumberServiceDep):
    return await service.create_phone_number(data)


@router.patch("", response_model=PhoneNumber, response_model_exclude_none=True)
async def update_phone_number(data: PhoneNumberUpdate, service: PhoneNumberServiceDep):
    return await service.update_phone_number(data)


@router.delete("", response_model=DeleteResponse, response_model_exclude_none=True)
async def delete_phone_number(data: PhoneNumberId, service: PhoneNumberServiceDep):
    return await service.delete_phone_number(data.id)


@router.get("/{phone_number_id}")
async def get_phone_number(phone_number_id: str, service: PhoneNumberServiceDep) -> Dict[str, Any]:
    return await service.get_phone_number(phone_number_id)
