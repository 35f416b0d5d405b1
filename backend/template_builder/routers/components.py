from typing import Any, Dict, List

from fastapi import APIRouter

from template_builder.exceptions import NotFoundError
from template_builder.schemas import CatalogEntry
from template_builder.templates.component_types import parse_component_type
from template_builder.templates.defaults import component_catalog, defaults_for

router = APIRouter(prefix="/api/components", tags=["components"])


@router.get("", response_model=List[CatalogEntry])
def list_components():
    """Component palette grouped by category, with default properties"""
    return component_catalog()


@router.get("/{component_type}/defaults", response_model=Dict[str, Any])
def get_component_defaults(component_type: str):
    if parse_component_type(component_type) is None:
        raise NotFoundError("Component type", component_type)
    return defaults_for(component_type)
