from fastapi import APIRouter, Depends

from ..deps import get_storage, require_admin
from ..schemas.about import AboutOut, AboutUpdateIn
from ..services.storage import Storage

router = APIRouter(prefix="/api", tags=["about"])


@router.get("/about", response_model=AboutOut)
def get_about(storage: Storage = Depends(get_storage)):
    return storage.get_about_content()


@router.patch("/about", response_model=AboutOut, dependencies=[Depends(require_admin)])
def update_about(payload: AboutUpdateIn, storage: Storage = Depends(get_storage)):
    return storage.update_about_content(payload.model_dump(exclude_unset=True, exclude_none=True))
