from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends

from src.application.use_cases.breeding import get_breeding_settings, update_breeding_settings
from src.interfaces.http.deps import get_farm_id, get_uow
from src.interfaces.http.schemas.breeding import BreedingSettingsResponse, BreedingSettingsUpdate

router = APIRouter(prefix="/breeding/settings", tags=["breeding-settings"])


@router.get("", response_model=BreedingSettingsResponse)
async def get_settings_endpoint(farm_id: UUID = Depends(get_farm_id), uow=Depends(get_uow)):
    return await get_breeding_settings.execute(uow, farm_id)


@router.put("", response_model=BreedingSettingsResponse)
async def update_settings_endpoint(
    payload: BreedingSettingsUpdate,
    farm_id: UUID = Depends(get_farm_id),
    uow=Depends(get_uow),
):
    input_data = update_breeding_settings.UpdateBreedingSettingsInput(
        **payload.model_dump(exclude_unset=True)
    )
    updated = await update_breeding_settings.execute(uow, farm_id, input_data)
    await uow.commit()
    return updated
