from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging_config import get_logger
from app.db.models import CustomIcon

logger = get_logger(__name__)


class CustomIconCRUD:
    @staticmethod
    async def get_by_id(db: AsyncSession, icon_id: int) -> CustomIcon | None:
        icon = await db.get(CustomIcon, icon_id)
        logger.debug(
            "Fetched custom icon by id",
            extra={"details": {"event": "icon_lookup_id", "extra": {"icon_id": icon_id, "found": bool(icon)}}},
        )
        return icon

    @staticmethod
    async def get_by_keyword(db: AsyncSession, keyword: str) -> CustomIcon | None:
        result = await db.execute(select(CustomIcon).where(CustomIcon.keyword == keyword))
        icon = result.scalar_one_or_none()
        logger.debug(
            "Fetched custom icon by keyword",
            extra={"details": {"event": "icon_lookup", "extra": {"keyword": keyword, "found": bool(icon)}}},
        )
        return icon

    @staticmethod
    async def find_many(db: AsyncSession) -> list[CustomIcon]:
        result = await db.execute(select(CustomIcon).order_by(CustomIcon.keyword))
        icons = list(result.scalars().all())
        logger.debug(
            "Listed custom icons",
            extra={"details": {"event": "icon_list", "extra": {"count": len(icons)}}},
        )
        return icons

    @staticmethod
    async def upsert(db: AsyncSession, *, keyword: str, **fields) -> CustomIcon:
        """Create the icon for ``keyword`` or overwrite only the given fields of the existing one."""
        icon = await CustomIconCRUD.get_by_keyword(db, keyword)
        created = icon is None
        if created:
            icon = CustomIcon(keyword=keyword)
            db.add(icon)
        for field, value in fields.items():
            setattr(icon, field, value)
        await db.commit()
        await db.refresh(icon)
        logger.info(
            "Custom icon saved",
            extra={
                "details": {
                    "event": "icon_upsert",
                    "extra": {
                        "icon_id": icon.id,
                        "keyword": keyword,
                        "created": created,
                        "updated_fields": sorted(fields),
                    },
                }
            },
        )
        return icon

    @staticmethod
    async def delete(db: AsyncSession, icon: CustomIcon) -> None:
        await db.delete(icon)
        await db.commit()
        logger.warning(
            "Custom icon deleted",
            extra={"details": {"event": "icon_delete", "extra": {"icon_id": icon.id, "keyword": icon.keyword}}},
        )
