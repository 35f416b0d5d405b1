import logging
from typing import Dict, List, Optional

from template_builder.schemas import TemplateCreate, TemplateUpdate
from template_builder.services.template_store import TemplateRecord, TemplateStore
from template_builder.services.theme_generator import assemble_template

logger = logging.getLogger(__name__)

# Columns that cannot be cleared by sending null
_REQUIRED_FIELDS = ("name", "version", "tags")


def list_templates(store: TemplateStore) -> List[TemplateRecord]:
    return store.list_templates()


def get_template(store: TemplateStore, template_id: int) -> Optional[TemplateRecord]:
    return store.get_template(template_id)


def create_template(store: TemplateStore, data: TemplateCreate) -> TemplateRecord:
    template = store.create_template(data.model_dump())
    logger.info("Template created", extra={"template_id": template.id})
    return template


def update_template(store: TemplateStore, template_id: int, data: TemplateUpdate) -> Optional[TemplateRecord]:
    """Partial update; only fields present in the request are changed"""
    changes = data.model_dump(exclude_unset=True)
    for key in _REQUIRED_FIELDS:
        if key in changes and changes[key] is None:
            del changes[key]
    template = store.update_template(template_id, changes)
    if template:
        logger.info("Template updated", extra={"template_id": template_id})
    return template


def delete_template(store: TemplateStore, template_id: int) -> bool:
    deleted = store.delete_template(template_id)
    if deleted:
        logger.info("Template deleted", extra={"template_id": template_id})
    return deleted


def template_files(store: TemplateStore, template_id: int) -> Optional[Dict[str, str]]:
    """Generated theme files for a stored template, or None if it does not exist"""
    template = store.get_template(template_id)
    if not template:
        return None
    return assemble_template(template, store.list_pages(template_id))
