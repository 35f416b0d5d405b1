import logging

from fastapi import APIRouter, Request

from template_builder.rate_limit import limiter, GENERATE_RATE_LIMIT
from template_builder.schemas import GeneratedFilesResponse, GenerateRequest
from template_builder.services.theme_generator import assemble

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["generate"])


@router.post("/generate", response_model=GeneratedFilesResponse)
@limiter.limit(GENERATE_RATE_LIMIT)
def generate_files(payload: GenerateRequest, request: Request):
    """Generate theme files from unsaved editor state"""
    files = assemble(payload.components, payload.meta)
    logger.info(
        "Theme files generated",
        extra={"component_count": len(payload.components), "file_count": len(files)},
    )
    return {"files": files, "file_count": len(files)}
