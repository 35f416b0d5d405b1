"""
Pages and the ordered component lists they hold.

Component operations (add, patch, move, delete) are read-modify-write on the
page's component list; the last write wins.
"""
import copy
import logging
import time
from typing import Any, Dict, Iterable, List, Optional, Tuple

from template_builder.exceptions import NotFoundError, ValidationError
from template_builder.schemas import ComponentAdd, ComponentIn, ComponentPatch, PageCreate, PageFields, PageUpdate
from template_builder.services.template_store import PageRecord, TemplateStore
from template_builder.templates.defaults import with_defaults
from template_builder.utils.escaping import slugify

logger = logging.getLogger(__name__)

DEFAULT_SLUG = "page"


def new_component_id(component_type: str, existing_ids: Iterable[str] = ()) -> str:
    """`<type>-<epoch millis>`, suffixed with a counter if that id is already taken on the page"""
    taken = set(existing_ids)
    base = f"{component_type}-{int(time.time() * 1000)}"
    candidate = base
    counter = 2
    while candidate in taken:
        candidate = f"{base}-{counter}"
        counter += 1
    return candidate


def build_component(
    component_type: Any,
    properties: Optional[Dict[str, Any]] = None,
    style: Optional[Dict[str, Any]] = None,
    existing_ids: Iterable[str] = (),
) -> Dict[str, Any]:
    """New component dict seeded with the type's default properties"""
    type_value = getattr(component_type, "value", component_type)
    return {
        "id": new_component_id(type_value, existing_ids),
        "type": type_value,
        "properties": with_defaults(type_value, properties),
        "style": copy.deepcopy(style) if style else None,
    }


def normalize_components(components: List[ComponentIn]) -> List[Dict[str, Any]]:
    """Stored form of a client-supplied component list; missing ids are assigned, duplicates rejected"""
    result: List[Dict[str, Any]] = []
    seen = set()
    for index, component in enumerate(components):
        data = component.model_dump(mode="json")
        if data["id"] is None:
            data["id"] = new_component_id(data["type"], seen | {c.id for c in components if c.id})
        elif data["id"] in seen:
            raise ValidationError(
                "Duplicate component id",
                details={"errors": [{"field": f"components.{index}.id", "message": "Component ids must be unique within a page", "type": "value_error"}]},
            )
        seen.add(data["id"])
        result.append(data)
    return result


def _slug(slug: Optional[str], name: str) -> str:
    return slugify(slug) or slugify(name) or DEFAULT_SLUG


def _require_template(store: TemplateStore, template_id: int) -> None:
    if not store.get_template(template_id):
        raise NotFoundError("Template", str(template_id))


def _clear_other_home_pages(store: TemplateStore, template_id: int, keep_page_id: int) -> None:
    for page in store.list_pages(template_id):
        if page.id != keep_page_id and page.is_home_page:
            store.update_page(page.id, {"is_home_page": False})


def list_pages(store: TemplateStore, template_id: int) -> List[PageRecord]:
    _require_template(store, template_id)
    return store.list_pages(template_id)


def get_page(store: TemplateStore, page_id: int) -> PageRecord:
    page = store.get_page(page_id)
    if not page:
        raise NotFoundError("Page", str(page_id))
    return page


def create_page(store: TemplateStore, template_id: int, data: PageFields) -> PageRecord:
    _require_template(store, template_id)
    page = store.create_page({
        "template_id": template_id,
        "name": data.name,
        "slug": _slug(data.slug, data.name),
        "is_home_page": data.is_home_page,
        "components": normalize_components(data.components),
    })
    if page.is_home_page:
        _clear_other_home_pages(store, template_id, page.id)
    logger.info(
        "Page created",
        extra={"template_id": template_id, "page_id": page.id, "component_count": len(page.components)},
    )
    return page


def create_page_from_request(store: TemplateStore, data: PageCreate) -> PageRecord:
    return create_page(store, data.template_id, data)


def update_page(store: TemplateStore, page_id: int, data: PageUpdate) -> PageRecord:
    existing = get_page(store, page_id)
    changes = data.model_dump(exclude_unset=True)
    if changes.get("name") is None:
        changes.pop("name", None)
    if "slug" in changes:
        changes["slug"] = _slug(changes.get("slug"), changes.get("name") or existing.name)
    if changes.get("is_home_page") is None:
        changes.pop("is_home_page", None)
    if "components" in changes:
        if data.components is None:
            changes.pop("components")
        else:
            changes["components"] = normalize_components(data.components)
    page = store.update_page(page_id, changes)
    if page.is_home_page and changes.get("is_home_page"):
        _clear_other_home_pages(store, page.template_id, page.id)
    logger.info("Page updated", extra={"page_id": page_id, "component_count": len(page.components)})
    return page


def delete_page(store: TemplateStore, page_id: int) -> None:
    if not store.delete_page(page_id):
        raise NotFoundError("Page", str(page_id))
    logger.info("Page deleted", extra={"page_id": page_id})


def _find_component(page: PageRecord, component_id: str) -> Tuple[int, Dict[str, Any]]:
    for index, component in enumerate(page.components):
        if component.get("id") == component_id:
            return index, component
    raise NotFoundError("Component", component_id)


def add_component(store: TemplateStore, page_id: int, data: ComponentAdd) -> Tuple[PageRecord, Dict[str, Any]]:
    page = get_page(store, page_id)
    components = list(page.components)
    style = data.style.model_dump() if data.style else None
    component = build_component(data.type, data.properties, style, existing_ids=[c.get("id") for c in components])
    position = len(components) if data.position is None else min(data.position, len(components))
    components.insert(position, component)
    page = store.update_page(page_id, {"components": components})
    logger.info(
        "Component added",
        extra={"page_id": page_id, "component_type": component["type"], "component_count": len(components)},
    )
    return page, component


def update_component(store: TemplateStore, page_id: int, component_id: str, data: ComponentPatch) -> PageRecord:
    """Merge properties into the component; keys not sent are left as they are"""
    page = get_page(store, page_id)
    components = copy.deepcopy(page.components)
    index, _ = _find_component(page, component_id)
    updated = components[index]
    if data.properties:
        properties = dict(updated.get("properties") or {})
        properties.update(data.properties)
        updated["properties"] = properties
    if data.style is not None:
        style = dict(updated.get("style") or {})
        style.update(data.style.model_dump(exclude_unset=True))
        updated["style"] = style
    return store.update_page(page_id, {"components": components})


def move_component(store: TemplateStore, page_id: int, component_id: str, to_index: int) -> PageRecord:
    page = get_page(store, page_id)
    components = list(page.components)
    from_index, component = _find_component(page, component_id)
    components.pop(from_index)
    components.insert(min(to_index, len(components)), component)
    return store.update_page(page_id, {"components": components})


def delete_component(store: TemplateStore, page_id: int, component_id: str) -> PageRecord:
    page = get_page(store, page_id)
    index, _ = _find_component(page, component_id)
    components = list(page.components)
    del components[index]
    logger.info("Component deleted", extra={"page_id": page_id, "component_count": len(components)})
    return store.update_page(page_id, {"components": components})
