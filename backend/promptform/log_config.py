from __future__ import annotations

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional


# Context variable to attach the current HTTP request id to every log record.
_REQUEST_ID: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

_RESERVED_ATTRS = {
	"msg", "args", "levelname", "levelno", "name", "pathname", "filename", "module",
	"exc_info", "exc_text", "stack_info", "lineno", "funcName", "created", "msecs",
	"relativeCreated", "thread", "threadName", "processName", "process", "taskName",
	"request_id", "message",
}


def set_request_id(request_id: Optional[str]) -> None:
	_REQUEST_ID.set(request_id)


def get_request_id() -> Optional[str]:
	return _REQUEST_ID.get()


class RequestIdFilter(logging.Filter):
	# Adds request_id to log records.
	def filter(self, record: logging.LogRecord) -> bool:
		record.request_id = get_request_id()
		return True


class JsonFormatter(logging.Formatter):
	# Structured JSON formatter for logs.
	def format(self, record: logging.LogRecord) -> str:
		payload: Dict[str, Any] = {
			"ts": datetime.now(timezone.utc).replace(microsecond=0).isoformat(),
			"level": record.levelname,
			"logger": record.name,
			"msg": record.getMessage(),
			"request_id": getattr(record, "request_id", None),
		}
		if record.exc_info:
			payload["exc_info"] = self.formatException(record.exc_info)

		# Extras passed through logger.info(..., extra={...})
		for key, value in record.__dict__.items():
			if key in _RESERVED_ATTRS:
				continue
			try:
				json.dumps(value, ensure_ascii=False)
				payload[key] = value
			except TypeError:
				payload[key] = str(value)

		return json.dumps(payload, ensure_ascii=False)


def setup_logging(level: str = "INFO", json_logs: bool = False) -> None:
	# Configure root logging once.
	root = logging.getLogger()
	root.handlers.clear()
	root.setLevel(level.upper())

	handler = logging.StreamHandler(sys.stdout)
	handler.addFilter(RequestIdFilter())

	if json_logs:
		handler.setFormatter(JsonFormatter())
	else:
		handler.setFormatter(logging.Formatter(
			fmt="%(asctime)s %(levelname)s %(name)s request_id=%(request_id)s %(message)s"
		))

	root.addHandler(handler)
