from fastapi import APIRouter, Depends, status

from template_builder.exceptions import NotFoundError
from template_builder.schemas import (
    ComponentAdd,
    ComponentAddedResponse,
    ComponentMove,
    ComponentPatch,
    GeneratedFilesResponse,
    PageCreate,
    PageResponse,
    PageUpdate,
)
from template_builder.services import page_service
from template_builder.services.template_store import TemplateStore, get_template_store
from template_builder.services.theme_generator import assemble

router = APIRouter(prefix="/api/pages", tags=["pages"])


@router.post("", response_model=PageResponse, status_code=status.HTTP_201_CREATED)
def create_page(data: PageCreate, store: TemplateStore = Depends(get_template_store)):
    return page_service.create_page_from_request(store, data)


@router.get("/{page_id}", response_model=PageResponse)
def get_page(page_id: int, store: TemplateStore = Depends(get_template_store)):
    return page_service.get_page(store, page_id)


@router.put("/{page_id}", response_model=PageResponse)
def update_page(page_id: int, data: PageUpdate, store: TemplateStore = Depends(get_template_store)):
    """Update page fields; a components list replaces the stored one wholesale"""
    return page_service.update_page(store, page_id, data)


@router.delete("/{page_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_page(page_id: int, store: TemplateStore = Depends(get_template_store)):
    page_service.delete_page(store, page_id)
    return None


@router.get("/{page_id}/files", response_model=GeneratedFilesResponse)
def get_page_files(page_id: int, store: TemplateStore = Depends(get_template_store)):
    """Theme files generated from this page alone"""
    page = page_service.get_page(store, page_id)
    template = store.get_template(page.template_id)
    if not template:
        raise NotFoundError("Template", str(page.template_id))
    files = assemble(page.components, template)
    return {"files": files, "file_count": len(files)}


# ============= Component operations =============
@router.post("/{page_id}/components", response_model=ComponentAddedResponse, status_code=status.HTTP_201_CREATED)
def add_component(page_id: int, data: ComponentAdd, store: TemplateStore = Depends(get_template_store)):
    """Add a component seeded with its type's defaults (appended unless a position is given)"""
    page, component = page_service.add_component(store, page_id, data)
    return {"page": page, "component": component}


@router.patch("/{page_id}/components/{component_id}", response_model=PageResponse)
def update_component(
    page_id: int,
    component_id: str,
    data: ComponentPatch,
    store: TemplateStore = Depends(get_template_store),
):
    return page_service.update_component(store, page_id, component_id, data)


@router.post("/{page_id}/components/{component_id}/move", response_model=PageResponse)
def move_component(
    page_id: int,
    component_id: str,
    data: ComponentMove,
    store: TemplateStore = Depends(get_template_store),
):
    return page_service.move_component(store, page_id, component_id, data.to_index)


@router.delete("/{page_id}/components/{component_id}", response_model=PageResponse)
def delete_component(page_id: int, component_id: str, store: TemplateStore = Depends(get_template_store)):
    return page_service.delete_component(store, page_id, component_id)
