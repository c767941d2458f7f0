from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.application.use_cases.animals import create_animal, get_animal
from src.interfaces.http.deps import get_farm_id, get_uow
from src.interfaces.http.schemas.animals import AnimalCreate, AnimalResponse

router = APIRouter(prefix="/animals", tags=["animals"])


@router.post("", response_model=AnimalResponse, status_code=status.HTTP_201_CREATED)
async def create_animal_endpoint(
    payload: AnimalCreate,
    farm_id: UUID = Depends(get_farm_id),
    uow=Depends(get_uow),
):
    input_data = create_animal.CreateAnimalInput(**payload.model_dump())
    return await create_animal.execute(uow, farm_id, input_data)


@router.get("/{animal_id}", response_model=AnimalResponse)
async def get_animal_endpoint(
    animal_id: UUID,
    farm_id: UUID = Depends(get_farm_id),
    uow=Depends(get_uow),
):
    return await get_animal.execute(uow, farm_id, animal_id)
