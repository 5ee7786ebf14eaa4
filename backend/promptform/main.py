import logging
import uuid

from fastapi import FastAPI, Request

from .log_config import set_request_id, setup_logging
from .settings import settings
from .routers import attachments, chat, export, health, script

setup_logging(settings.log_level, json_logs=settings.log_json)
logger = logging.getLogger(__name__)

app = FastAPI(title="PromptForm API")
app.include_router(health.router)
app.include_router(script.router)
app.include_router(export.router)
app.include_router(attachments.router)
app.include_router(chat.router)


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
	request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:12]
	set_request_id(request_id)
	try:
		response = await call_next(request)
	finally:
		set_request_id(None)
	response.headers["X-Request-ID"] = request_id
	return response


@app.on_event("startup")
async def startup_event():
	if not settings.gemini_api_key:
		logger.warning("GEMINI_API_KEY is not set; generation endpoints will return 503")
