from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Text, Integer, JSON, Index
from sqlalchemy.orm import relationship
from datetime import datetime
from template_builder.db import Base


class Template(Base):
    __tablename__ = "templates"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    author = Column(String(255), nullable=True)
    version = Column(String(50), default="1.0.0", nullable=False)
    tags = Column(JSON, default=list)  # list of strings for the theme header
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    pages = relationship(
        "Page",
        back_populates="template",
        cascade="all, delete-orphan",
        order_by="Page.id",
    )


class Page(Base):
    __tablename__ = "pages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    template_id = Column(Integer, ForeignKey("templates.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False)
    # Ordered list of {id, type, properties, style}; list order is render order
    components = Column(JSON, default=list)
    is_home_page = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    template = relationship("Template", back_populates="pages")

    __table_args__ = (
        Index("ix_pages_template_id", "template_id"),
    )
