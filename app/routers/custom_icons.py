from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import parse_id
from app.core.errors import NotFoundError
from app.crud.custom_icon import CustomIconCRUD
from app.db.session import get_db
from app.schemas.common import OkResponse
from app.schemas.custom_icon import CustomIconCreate, CustomIconResponse
from app.services.validation import require_text

router = APIRouter(prefix="/custom-icons", tags=["custom-icons"])


@router.get("", response_model=list[CustomIconResponse])
async def list_custom_icons(db: AsyncSession = Depends(get_db)):
    return await CustomIconCRUD.find_many(db)


@router.post("", response_model=CustomIconResponse, status_code=status.HTTP_201_CREATED)
async def save_custom_icon(payload: CustomIconCreate, db: AsyncSession = Depends(get_db)):
    keyword = require_text(payload.keyword, "keyword")
    fields = payload.model_dump(include={"brand_term", "custom_image_url"}, exclude_unset=True)
    return await CustomIconCRUD.upsert(db, keyword=keyword, **fields)


@router.delete("", response_model=OkResponse)
async def delete_custom_icon(
    id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    icon = await CustomIconCRUD.get_by_id(db, parse_id(id))
    if not icon:
        raise NotFoundError("custom icon not found")
    await CustomIconCRUD.delete(db, icon)
    return OkResponse()
