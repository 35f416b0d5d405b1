"""
Export a stored template as a WordPress theme ZIP, and re-import its manifest.

The archive is built entirely in memory and handed back only once complete, so
a failure never leaves the client with a partial download. Entry timestamps are
pinned so identical templates produce identical archive bytes.
"""
import io
import json
import logging
import re
import time
import zipfile
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

from template_builder.config import settings
from template_builder.exceptions import ExportError, NotFoundError, ValidationError
from template_builder.schemas import TemplateManifest
from template_builder.services import page_service
from template_builder.services.template_store import PageRecord, TemplateRecord, TemplateStore
from template_builder.services.theme_generator import assemble_template
from template_builder.utils.escaping import slugify

logger = logging.getLogger(__name__)

MANIFEST_FILE = "template.json"
MANIFEST_FORMAT_VERSION = 1
ZIP_DATE_TIME = (1980, 1, 1, 0, 0, 0)
DEFAULT_THEME_DIR = "custom-theme"

_UNSAFE_FILENAME = re.compile(r"[^A-Za-z0-9._ -]+")


@dataclass
class ExportBundle:
    filename: str
    content: bytes
    files: Dict[str, str]

    @property
    def size_bytes(self) -> int:
        return len(self.content)


def export_filename(name: Any) -> str:
    """Download name for the archive; only characters safe inside a quoted header value survive."""
    cleaned = _UNSAFE_FILENAME.sub("-", str(name or "")).strip(" .-")
    return f"{cleaned or settings.DEFAULT_EXPORT_NAME}.zip"


def theme_directory(name: Any) -> str:
    return slugify(name) or DEFAULT_THEME_DIR


def build_manifest(template: TemplateRecord, pages: Sequence[PageRecord]) -> Dict[str, Any]:
    """Everything needed to recreate the template, without ids or timestamps"""
    return {
        "format_version": MANIFEST_FORMAT_VERSION,
        "template": {
            "name": template.name,
            "description": template.description,
            "author": template.author,
            "version": template.version,
            "tags": list(template.tags or []),
        },
        "pages": [
            {
                "name": page.name,
                "slug": page.slug,
                "is_home_page": page.is_home_page,
                "components": page.components,
            }
            for page in pages
        ],
    }


def build_archive(files: Dict[str, str], root: str = "", compression_level: int = None) -> bytes:
    level = settings.EXPORT_COMPRESSION_LEVEL if compression_level is None else compression_level
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, mode="w", compression=zipfile.ZIP_DEFLATED, compresslevel=level) as archive:
        for path, content in files.items():
            info = zipfile.ZipInfo(f"{root}/{path}" if root else path, date_time=ZIP_DATE_TIME)
            info.compress_type = zipfile.ZIP_DEFLATED
            info.external_attr = 0o644 << 16
            archive.writestr(info, content.encode("utf-8"), compresslevel=level)
    return buffer.getvalue()


def export_template(store: TemplateStore, template_id: int) -> ExportBundle:
    template = store.get_template(template_id)
    if not template:
        raise NotFoundError("Template", str(template_id))

    start = time.time()
    try:
        pages = store.list_pages(template_id)
        files = assemble_template(template, pages)
        manifest = build_manifest(template, pages)
        files[MANIFEST_FILE] = json.dumps(manifest, indent=2, sort_keys=True, ensure_ascii=False) + "\n"
        content = build_archive(files, root=theme_directory(template.name))
    except Exception as exc:
        logger.exception("Template export failed", extra={"template_id": template_id})
        raise ExportError() from exc

    bundle = ExportBundle(filename=export_filename(template.name), content=content, files=files)
    logger.info(
        "Template exported",
        extra={
            "template_id": template_id,
            "file_count": len(files),
            "size_bytes": bundle.size_bytes,
            "duration_ms": int((time.time() - start) * 1000),
        },
    )
    return bundle


def _manifest_too_large(max_bytes: int) -> ValidationError:
    return ValidationError(
        "Archive template.json is too large",
        details={"max_bytes": max_bytes},
    )


def read_manifest(archive_bytes: bytes, max_bytes: int = None) -> Dict[str, Any]:
    """
    Pull template.json out of an exported archive.

    The unpacked manifest is capped at max_bytes (MAX_REQUEST_SIZE by default);
    the declared size is checked first and the read itself stops one byte past
    the cap, so a crafted archive cannot inflate beyond it.
    """
    limit = max_bytes or settings.MAX_REQUEST_SIZE
    with zipfile.ZipFile(io.BytesIO(archive_bytes)) as archive:
        for info in archive.infolist():
            name = info.filename
            if name == MANIFEST_FILE or name.endswith(f"/{MANIFEST_FILE}"):
                if info.file_size > limit:
                    raise _manifest_too_large(limit)
                with archive.open(info) as fh:
                    raw = fh.read(limit + 1)
                if len(raw) > limit:
                    raise _manifest_too_large(limit)
                return json.loads(raw.decode("utf-8"))
    raise KeyError(MANIFEST_FILE)


def import_template(store: TemplateStore, manifest: TemplateManifest) -> TemplateRecord:
    """
    Recreate a template and its pages from an exported manifest.

    All-or-nothing: page component lists are validated before anything is
    stored, and the template is removed again if a page fails to save.
    """
    for page in manifest.pages:
        page_service.normalize_components(page.components)

    template = store.create_template(manifest.template.model_dump())
    created: List[PageRecord] = []
    try:
        for page in manifest.pages:
            created.append(page_service.create_page(store, template.id, page))
    except Exception:
        logger.warning("Template import rolled back", extra={"template_id": template.id})
        store.delete_template(template.id)
        raise
    logger.info(
        "Template imported",
        extra={"template_id": template.id, "component_count": sum(len(p.components) for p in created)},
    )
    return template
