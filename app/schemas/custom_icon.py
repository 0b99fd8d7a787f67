from datetime import datetime

from app.schemas.common import CamelModel


class CustomIconCreate(CamelModel):
    keyword: str | None = None
    brand_term: str | None = None
    custom_image_url: str | None = None


class CustomIconResponse(CamelModel):
    id: int
    keyword: str
    brand_term: str | None = None
    custom_image_url: str | None = None
    created_at: datetime
    updated_at: datetime
