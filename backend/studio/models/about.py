from sqlalchemy import Column, Integer, Text, DateTime, func
from ..database import Base

ABOUT_ROW_ID = 1


class AboutContent(Base):
    __tablename__ = "about_content"

    id = Column(Integer, primary_key=True, default=ABOUT_ROW_ID)
    story = Column(Text, nullable=False, default="")
    space = Column(Text, nullable=False, default="")
    philosophy = Column(Text, nullable=False, default="")
    # JSON-encoded list of {"title": ..., "description": ...}
    values = Column(Text, nullable=False, default="[]")
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
