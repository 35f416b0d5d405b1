import json
import logging
import time

# LogRecord attributes passed through `extra=` that end up in the JSON line
LOG_FIELDS = (
    "request_id",
    "template_id",
    "page_id",
    "component_type",
    "component_count",
    "file_count",
    "size_bytes",
    "error_code",
    "path",
    "method",
    "status",
    "duration_ms",
)


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime(record.created)),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update({field: getattr(record, field) for field in LOG_FIELDS if hasattr(record, field)})
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(level=logging.INFO) -> None:
    """Send every log line to stderr as JSON. `level` may be a name ("DEBUG") or a number."""
    if isinstance(level, str):
        level = level.upper()
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [handler]
