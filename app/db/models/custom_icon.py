from sqlalchemy import Column, Integer, String, Text

from app.db.base import Base


class CustomIcon(Base):
    id = Column(Integer, primary_key=True, index=True)
    keyword = Column(String(100), unique=True, nullable=False, index=True)
    brand_term = Column(String(100), nullable=True)
    custom_image_url = Column(Text, nullable=True)
