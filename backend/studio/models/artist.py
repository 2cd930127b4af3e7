from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, JSON, func
from sqlalchemy.orm import relationship
from ..database import Base


class Artist(Base):
    __tablename__ = "artists"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    # public identifier used in URLs, never changed after creation
    slug = Column(String, unique=True, nullable=False, index=True)
    bio = Column(Text, nullable=False, default="")
    specialties = Column(JSON, nullable=False, default=list)
    profile_image = Column(String, nullable=True)

    instagram = Column(String, nullable=True)
    experience = Column(String, nullable=True)
    style = Column(String, nullable=True)

    portfolio_items = relationship(
        "PortfolioItem",
        back_populates="artist",
        cascade="all, delete-orphan",
        order_by="PortfolioItem.id",
    )


class PortfolioItem(Base):
    __tablename__ = "portfolio_items"

    id = Column(Integer, primary_key=True)
    artist_id = Column(Integer, ForeignKey("artists.id", ondelete="CASCADE"), nullable=False, index=True)
    image_url = Column(String, nullable=False)
    title = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    artist = relationship("Artist", back_populates="portfolio_items")
