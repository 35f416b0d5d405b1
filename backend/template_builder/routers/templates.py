import logging
import zipfile
from typing import List

from fastapi import APIRouter, Depends, File, Request, UploadFile, status
from fastapi.responses import StreamingResponse
from pydantic import ValidationError as ManifestValidationError

from template_builder.exceptions import NotFoundError, ValidationError, field_errors
from template_builder.rate_limit import limiter, EXPORT_RATE_LIMIT
from template_builder.schemas import (
    GeneratedFilesResponse,
    PageFields,
    PageResponse,
    TemplateCreate,
    TemplateManifest,
    TemplateResponse,
    TemplateUpdate,
)
from template_builder.services import export_service, page_service, template_service
from template_builder.services.template_store import TemplateStore, get_template_store

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/templates", tags=["templates"])


@router.get("", response_model=List[TemplateResponse])
def list_templates(store: TemplateStore = Depends(get_template_store)):
    """List all templates, oldest first"""
    return template_service.list_templates(store)


@router.post("", response_model=TemplateResponse, status_code=status.HTTP_201_CREATED)
def create_template(data: TemplateCreate, store: TemplateStore = Depends(get_template_store)):
    return template_service.create_template(store, data)


@router.get("/{template_id}", response_model=TemplateResponse)
def get_template(template_id: int, store: TemplateStore = Depends(get_template_store)):
    template = template_service.get_template(store, template_id)
    if not template:
        raise NotFoundError("Template", str(template_id))
    return template


@router.put("/{template_id}", response_model=TemplateResponse)
def update_template(template_id: int, data: TemplateUpdate, store: TemplateStore = Depends(get_template_store)):
    """Update template metadata; fields not sent are left unchanged"""
    template = template_service.update_template(store, template_id, data)
    if not template:
        raise NotFoundError("Template", str(template_id))
    return template


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_template(template_id: int, store: TemplateStore = Depends(get_template_store)):
    """Delete a template together with its pages"""
    if not template_service.delete_template(store, template_id):
        raise NotFoundError("Template", str(template_id))
    return None


@router.get("/{template_id}/pages", response_model=List[PageResponse])
def list_template_pages(template_id: int, store: TemplateStore = Depends(get_template_store)):
    return page_service.list_pages(store, template_id)


@router.post("/{template_id}/pages", response_model=PageResponse, status_code=status.HTTP_201_CREATED)
def create_template_page(template_id: int, data: PageFields, store: TemplateStore = Depends(get_template_store)):
    return page_service.create_page(store, template_id, data)


@router.get("/{template_id}/files", response_model=GeneratedFilesResponse)
def get_template_files(template_id: int, store: TemplateStore = Depends(get_template_store)):
    """Generated theme files for every page of the template (code view)"""
    files = template_service.template_files(store, template_id)
    if files is None:
        raise NotFoundError("Template", str(template_id))
    return {"files": files, "file_count": len(files)}


@router.post("/{template_id}/export")
@limiter.limit(EXPORT_RATE_LIMIT)
def export_template(template_id: int, request: Request, store: TemplateStore = Depends(get_template_store)):
    """Download the template as an installable WordPress theme ZIP"""
    bundle = export_service.export_template(store, template_id)
    return StreamingResponse(
        iter([bundle.content]),
        media_type="application/zip",
        headers={
            "Content-Disposition": f'attachment; filename="{bundle.filename}"',
            "Content-Length": str(bundle.size_bytes),
        },
    )


@router.post("/import", response_model=TemplateResponse, status_code=status.HTTP_201_CREATED)
def import_template(manifest: TemplateManifest, store: TemplateStore = Depends(get_template_store)):
    """Recreate a template from the template.json of an earlier export"""
    return export_service.import_template(store, manifest)


@router.post("/import/archive", response_model=TemplateResponse, status_code=status.HTTP_201_CREATED)
def import_template_archive(
    file: UploadFile = File(...),
    store: TemplateStore = Depends(get_template_store),
):
    """Recreate a template from a previously exported theme ZIP"""
    content = file.file.read()
    try:
        data = export_service.read_manifest(content)
    except (zipfile.BadZipFile, KeyError, ValueError) as e:
        logger.warning(f"Rejected theme archive {file.filename}: {e}")
        raise ValidationError(
            "Archive does not contain a valid template.json",
            details={"filename": file.filename},
        )

    try:
        manifest = TemplateManifest.model_validate(data)
    except ManifestValidationError as e:
        raise ValidationError("Invalid template manifest", details={"errors": field_errors(e.errors())})

    return export_service.import_template(store, manifest)
