import copy
import threading
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from template_builder.config import settings
from template_builder.db import get_db
from template_builder.models import Page, Template

TEMPLATE_FIELDS = ("name", "description", "author", "version", "tags")
PAGE_FIELDS = ("template_id", "name", "slug", "is_home_page", "components")


@dataclass
class TemplateRecord:
    id: int
    name: str
    description: Optional[str] = None
    author: Optional[str] = None
    version: str = "1.0.0"
    tags: List[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class PageRecord:
    id: int
    template_id: int
    name: str
    slug: str
    is_home_page: bool = False
    components: List[Dict[str, Any]] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)


class TemplateStore:
    """Persistence for templates and their pages. Methods return None/False for unknown ids."""

    def list_templates(self) -> List[TemplateRecord]:
        raise NotImplementedError

    def get_template(self, template_id: int) -> Optional[TemplateRecord]:
        raise NotImplementedError

    def create_template(self, data: Dict[str, Any]) -> TemplateRecord:
        raise NotImplementedError

    def update_template(self, template_id: int, changes: Dict[str, Any]) -> Optional[TemplateRecord]:
        raise NotImplementedError

    def delete_template(self, template_id: int) -> bool:
        raise NotImplementedError

    def list_pages(self, template_id: int) -> List[PageRecord]:
        raise NotImplementedError

    def get_page(self, page_id: int) -> Optional[PageRecord]:
        raise NotImplementedError

    def create_page(self, data: Dict[str, Any]) -> PageRecord:
        raise NotImplementedError

    def update_page(self, page_id: int, changes: Dict[str, Any]) -> Optional[PageRecord]:
        raise NotImplementedError

    def delete_page(self, page_id: int) -> bool:
        raise NotImplementedError


class InMemoryTemplateStore(TemplateStore):
    def __init__(self) -> None:
        self._templates: Dict[int, TemplateRecord] = {}
        self._pages: Dict[int, PageRecord] = {}
        self._next_template_id = 1
        self._next_page_id = 1
        self._lock = threading.Lock()

    def list_templates(self) -> List[TemplateRecord]:
        with self._lock:
            return [copy.deepcopy(t) for _, t in sorted(self._templates.items())]

    def get_template(self, template_id: int) -> Optional[TemplateRecord]:
        with self._lock:
            record = self._templates.get(template_id)
            return copy.deepcopy(record) if record else None

    def create_template(self, data: Dict[str, Any]) -> TemplateRecord:
        values = {k: copy.deepcopy(v) for k, v in data.items() if k in TEMPLATE_FIELDS and v is not None}
        with self._lock:
            now = datetime.utcnow()
            record = TemplateRecord(id=self._next_template_id, created_at=now, updated_at=now, **values)
            self._templates[record.id] = record
            self._next_template_id += 1
            return copy.deepcopy(record)

    def update_template(self, template_id: int, changes: Dict[str, Any]) -> Optional[TemplateRecord]:
        values = {k: copy.deepcopy(v) for k, v in changes.items() if k in TEMPLATE_FIELDS}
        with self._lock:
            record = self._templates.get(template_id)
            if not record:
                return None
            record = replace(record, updated_at=datetime.utcnow(), **values)
            self._templates[template_id] = record
            return copy.deepcopy(record)

    def delete_template(self, template_id: int) -> bool:
        with self._lock:
            if self._templates.pop(template_id, None) is None:
                return False
            for page_id in [pid for pid, p in self._pages.items() if p.template_id == template_id]:
                del self._pages[page_id]
            return True

    def list_pages(self, template_id: int) -> List[PageRecord]:
        with self._lock:
            return [
                copy.deepcopy(p)
                for _, p in sorted(self._pages.items())
                if p.template_id == template_id
            ]

    def get_page(self, page_id: int) -> Optional[PageRecord]:
        with self._lock:
            record = self._pages.get(page_id)
            return copy.deepcopy(record) if record else None

    def create_page(self, data: Dict[str, Any]) -> PageRecord:
        values = {k: copy.deepcopy(v) for k, v in data.items() if k in PAGE_FIELDS and v is not None}
        with self._lock:
            now = datetime.utcnow()
            record = PageRecord(id=self._next_page_id, created_at=now, updated_at=now, **values)
            self._pages[record.id] = record
            self._next_page_id += 1
            return copy.deepcopy(record)

    def update_page(self, page_id: int, changes: Dict[str, Any]) -> Optional[PageRecord]:
        values = {k: copy.deepcopy(v) for k, v in changes.items() if k in PAGE_FIELDS and k != "template_id"}
        with self._lock:
            record = self._pages.get(page_id)
            if not record:
                return None
            record = replace(record, updated_at=datetime.utcnow(), **values)
            self._pages[page_id] = record
            return copy.deepcopy(record)

    def delete_page(self, page_id: int) -> bool:
        with self._lock:
            return self._pages.pop(page_id, None) is not None


def _template_record(template: Template) -> TemplateRecord:
    return TemplateRecord(
        id=template.id,
        name=template.name,
        description=template.description,
        author=template.author,
        version=template.version,
        tags=list(template.tags or []),
        created_at=template.created_at,
        updated_at=template.updated_at,
    )


def _page_record(page: Page) -> PageRecord:
    return PageRecord(
        id=page.id,
        template_id=page.template_id,
        name=page.name,
        slug=page.slug,
        is_home_page=bool(page.is_home_page),
        components=copy.deepcopy(page.components or []),
        created_at=page.created_at,
        updated_at=page.updated_at,
    )


class SqlTemplateStore(TemplateStore):
    def __init__(self, db: Session) -> None:
        self.db = db

    def list_templates(self) -> List[TemplateRecord]:
        return [_template_record(t) for t in self.db.query(Template).order_by(Template.id).all()]

    def get_template(self, template_id: int) -> Optional[TemplateRecord]:
        template = self.db.query(Template).filter(Template.id == template_id).first()
        return _template_record(template) if template else None

    def create_template(self, data: Dict[str, Any]) -> TemplateRecord:
        values = {k: v for k, v in data.items() if k in TEMPLATE_FIELDS and v is not None}
        template = Template(**values)
        self.db.add(template)
        self.db.commit()
        self.db.refresh(template)
        return _template_record(template)

    def update_template(self, template_id: int, changes: Dict[str, Any]) -> Optional[TemplateRecord]:
        template = self.db.query(Template).filter(Template.id == template_id).first()
        if not template:
            return None
        for key, value in changes.items():
            if key in TEMPLATE_FIELDS:
                setattr(template, key, copy.deepcopy(value))
        template.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(template)
        return _template_record(template)

    def delete_template(self, template_id: int) -> bool:
        template = self.db.query(Template).filter(Template.id == template_id).first()
        if not template:
            return False
        self.db.delete(template)
        self.db.commit()
        return True

    def list_pages(self, template_id: int) -> List[PageRecord]:
        pages = self.db.query(Page).filter(Page.template_id == template_id).order_by(Page.id).all()
        return [_page_record(p) for p in pages]

    def get_page(self, page_id: int) -> Optional[PageRecord]:
        page = self.db.query(Page).filter(Page.id == page_id).first()
        return _page_record(page) if page else None

    def create_page(self, data: Dict[str, Any]) -> PageRecord:
        values = {k: copy.deepcopy(v) for k, v in data.items() if k in PAGE_FIELDS and v is not None}
        page = Page(**values)
        self.db.add(page)
        self.db.commit()
        self.db.refresh(page)
        return _page_record(page)

    def update_page(self, page_id: int, changes: Dict[str, Any]) -> Optional[PageRecord]:
        page = self.db.query(Page).filter(Page.id == page_id).first()
        if not page:
            return None
        for key, value in changes.items():
            if key in PAGE_FIELDS and key != "template_id":
                # assign a fresh object so SQLAlchemy sees the JSON column change
                setattr(page, key, copy.deepcopy(value))
        page.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(page)
        return _page_record(page)

    def delete_page(self, page_id: int) -> bool:
        page = self.db.query(Page).filter(Page.id == page_id).first()
        if not page:
            return False
        self.db.delete(page)
        self.db.commit()
        return True


_memory_store = InMemoryTemplateStore()


def get_template_store(db: Session = Depends(get_db)) -> TemplateStore:
    """FastAPI dependency: store backend selected by STORE_BACKEND."""
    backend = (settings.STORE_BACKEND or "sql").lower()
    if backend == "memory":
        return _memory_store
    return SqlTemplateStore(db)
