from typing import Annotated, Any, Dict

from fastapi import APIRouter, Depends

from vapi_sync.core.deps import AssistantRepositoryDep, PhoneNumberRepositoryDep, VapiClientDep
from vapi_sync.models.domain.assistant import (
    Assistant,
    AssistantCreate,
    AssistantId,
    AssistantList,
    AssistantUpdate,
)
from vapi_sync.models.domain.response import DeleteResponse
from vapi_sync.services.assistant_service import AssistantService

router = APIRouter(prefix="/assistants", tags=["assistants"])


async def get_assistant_service(
    repository: AssistantRepositoryDep,
    phone_numbers: PhoneNumberRepositoryDep,
    vapi: VapiClientDep
) -> AssistantService:
    return AssistantService(repository, phone_numbers, vapi)


AssistantServiceDep = Annotated[AssistantService, Depends(get_assistant_service)]


@router.get("", response_model=AssistantList, response_model_exclude_none=True)
async def list_assistants(repository: AssistantRepositoryDep):
    # Local records only; may be stale relative to Vapi
    return AssistantList(assistants=await repository.get_all())


@router.post("", response_model=Assistant, response_model_exclude_none=True)
async def create_assistant(data: AssistantCreate, service: AssistantServiceDep):
    return await service.create_assistant(data)


@router.patch("", response_model=Assistant, response_model_exclude_none=True)
async def update_assistant(data: AssistantUpdate, service: AssistantServiceDep):
    return await service.update_assistant(data)


@router.delete("", response_model=DeleteResponse, response_model_exclude_none=True)
async def delete_assistant(data: AssistantId, service: AssistantServiceDep):
    return await service.delete_assistant(data.id)


@router.get("/{assistant_id}")
async def get_assistant(assistant_id: str, service: AssistantServiceDep) -> Dict[str, Any]:
    return await service.get_assistant(assistant_id)
