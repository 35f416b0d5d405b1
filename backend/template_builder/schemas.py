from pydantic import BaseModel, Field, ConfigDict, AliasChoices, field_validator
from typing import Optional, List, Dict, Any
from datetime import datetime
from template_builder.templates.component_types import ComponentType


# ============= Component Schemas =============
class ComponentStyle(BaseModel):
    """Presentation flags shared by every component type."""
    model_config = ConfigDict(populate_by_name=True)

    class_name: Optional[str] = Field(None, max_length=500, validation_alias=AliasChoices("class_name", "className"))
    hide_on_mobile: bool = Field(False, validation_alias=AliasChoices("hide_on_mobile", "hideOnMobile"))
    hide_on_tablet: bool = Field(False, validation_alias=AliasChoices("hide_on_tablet", "hideOnTablet"))


class ComponentIn(BaseModel):
    id: Optional[str] = Field(None, min_length=1, max_length=100)
    type: ComponentType
    properties: Dict[str, Any] = Field(default_factory=dict)
    style: Optional[ComponentStyle] = None


class Component(BaseModel):
    id: str
    # stored components are read back as-is, so a retired type still loads
    type: str
    properties: Dict[str, Any] = Field(default_factory=dict)
    style: Optional[ComponentStyle] = None


class ComponentAdd(BaseModel):
    type: ComponentType
    properties: Optional[Dict[str, Any]] = None
    style: Optional[ComponentStyle] = None
    position: Optional[int] = Field(None, ge=0, description="Insert index; appended when omitted")


class ComponentPatch(BaseModel):
    """Partial update. The component type cannot be changed, so it is not accepted here."""
    model_config = ConfigDict(extra="forbid")

    properties: Optional[Dict[str, Any]] = None
    style: Optional[ComponentStyle] = None


class ComponentMove(BaseModel):
    to_index: int = Field(..., ge=0)


# ============= Template Schemas =============
class TemplateCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    author: Optional[str] = Field(None, max_length=255)
    version: str = Field("1.0.0", min_length=1, max_length=50)
    tags: List[str] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name cannot be empty or whitespace")
        return v.strip()


class TemplateUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    author: Optional[str] = Field(None, max_length=255)
    version: Optional[str] = Field(None, min_length=1, max_length=50)
    tags: Optional[List[str]] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Name cannot be empty or whitespace")
        return v.strip() if v else v


class TemplateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str]
    author: Optional[str]
    version: str
    tags: List[str]
    created_at: datetime
    updated_at: datetime


class TemplateMeta(BaseModel):
    """Metadata the generated theme is stamped with."""
    model_config = ConfigDict(from_attributes=True)

    name: str = "Custom Template"
    description: Optional[str] = "A custom WordPress theme generated with Template Builder"
    author: Optional[str] = None
    version: str = "1.0.0"
    tags: List[str] = Field(default_factory=list)


# ============= Page Schemas =============
class PageFields(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    slug: Optional[str] = Field(None, max_length=255, description="Derived from name when omitted")
    is_home_page: bool = False
    components: List[ComponentIn] = Field(default_factory=list)


class PageCreate(PageFields):
    template_id: int


class PageUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, max_length=255)
    is_home_page: Optional[bool] = None
    components: Optional[List[ComponentIn]] = None


class PageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    template_id: int
    name: str
    slug: str
    is_home_page: bool
    components: List[Component]
    created_at: datetime
    updated_at: datetime


class ComponentAddedResponse(BaseModel):
    page: PageResponse
    component: Component


# ============= Generation Schemas =============
class GenerateComponent(BaseModel):
    """Editor-state component; type is free text so unsupported kinds render a placeholder."""
    id: Optional[str] = None
    type: str = Field(..., min_length=1, max_length=100)
    properties: Dict[str, Any] = Field(default_factory=dict)
    style: Optional[ComponentStyle] = None


class GenerateRequest(BaseModel):
    components: List[GenerateComponent] = Field(default_factory=list)
    meta: Optional[TemplateMeta] = None


class GeneratedFilesResponse(BaseModel):
    files: Dict[str, str]
    file_count: int


class CatalogEntry(BaseModel):
    type: str
    name: str
    category: str
    description: str
    defaults: Dict[str, Any]


# ============= Import / Export Schemas =============
class PageManifest(PageFields):
    pass


class TemplateManifest(BaseModel):
    format_version: int = Field(1, ge=1, le=1)
    template: TemplateCreate
    pages: List[PageManifest] = Field(default_factory=list)

