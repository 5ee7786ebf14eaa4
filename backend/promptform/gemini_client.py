from __future__ import annotations
import logging
import httpx
from typing import Any, Dict, List, Optional, Sequence
from .errors import ConfigurationError, GenerationError
from .settings import settings

logger = logging.getLogger(__name__)

API_KEY_ERROR = "The API key is invalid or not configured correctly. Please check your environment variables."


def text_part(text: str) -> Dict[str, Any]:
	return {"text": text}


def inline_image_part(mime_type: str, data_b64: str) -> Dict[str, Any]:
	return {"inlineData": {"mimeType": mime_type, "data": data_b64}}


class GeminiClient:
	def __init__(
		self,
		api_key: Optional[str] = None,
		*,
		base_url: Optional[str] = None,
		model: Optional[str] = None,
		http_client: Optional[httpx.AsyncClient] = None,
		fallback_http_client: Optional[httpx.AsyncClient] = None,
	) -> None:
		self.api_key = api_key or settings.gemini_api_key
		if not self.api_key:
			raise ConfigurationError("GEMINI_API_KEY is not configured")
		self.model = model or settings.gemini_model
		self.provider = settings.gemini_provider
		if self.provider == "vertex":
			region = settings.vertex_region
			project = settings.vertex_project or "placeholder-project"
			# Vertex AI Generative REST endpoint (API key via header)
			self.base_url = base_url or (
				f"https://{region}-aiplatform.googleapis.com/v1/projects/{project}/locations/{region}/publishers/google/models/{self.model}:generateContent"
			)
			self._auth_in_query = False
		else:
			# Google AI Studio (Generative Language API)
			self.base_url = base_url or f"https://generativelanguage.googleapis.com/v1beta/models/{self.model}:generateContent"
			self._auth_in_query = True
		self._client = http_client or httpx.AsyncClient(timeout=settings.gemini_timeout_seconds)
		self._fallback_client: Optional[httpx.AsyncClient] = None
		self._fallback_enabled = bool(settings.openrouter_api_key)
		self._openrouter_api_key = settings.openrouter_api_key
		self._openrouter_model = settings.openrouter_model
		self._openrouter_base_url = settings.openrouter_base_url
		self._openrouter_headers = {
			"Authorization": f"Bearer {self._openrouter_api_key}" if self._openrouter_api_key else "",
			"Content-Type": "application/json",
			"HTTP-Referer": settings.openrouter_referer,
			"X-Title": settings.openrouter_title,
		}
		if self._fallback_enabled:
			self._fallback_client = fallback_http_client or httpx.AsyncClient(timeout=settings.gemini_timeout_seconds)

	async def generate(self, prompt: str) -> str:
		payload: Dict[str, Any] = {"contents": [{"parts": [text_part(prompt)]}]}
		return await self._post_payload(payload, fallback_messages=[{"role": "user", "content": prompt}])

	async def generate_multimodal(
		self,
		parts: List[Dict[str, Any]],
		*,
		role: str = "user",
		generation_config: Optional[Dict[str, Any]] = None,
		system_instruction: Optional[str] = None,
	) -> str:
		payload: Dict[str, Any] = {"contents": [{"role": role, "parts": parts}]}
		if generation_config:
			payload["generationConfig"] = generation_config
		if system_instruction:
			payload["systemInstruction"] = {"parts": [text_part(system_instruction)]}
		return await self._post_payload(payload)

	async def generate_json(
		self,
		parts: List[Dict[str, Any]],
		*,
		schema: Dict[str, Any],
		temperature: Optional[float] = None,
	) -> str:
		"""Structured output call: the model is constrained to ``schema`` and answers with JSON text."""
		config: Dict[str, Any] = {
			"responseMimeType": "application/json",
			"responseSchema": schema,
		}
		if temperature is not None:
			config["temperature"] = temperature
		return await self.generate_multimodal(parts, generation_config=config)

	async def chat(
		self,
		history: Sequence[Dict[str, str]],
		message: str,
		*,
		system_instruction: Optional[str] = None,
	) -> str:
		"""Multi-turn call. ``history`` holds prior ``{"role": "user"|"model", "text": ...}`` turns."""
		contents = [{"role": turn["role"], "parts": [text_part(turn["text"])]} for turn in history]
		contents.append({"role": "user", "parts": [text_part(message)]})
		payload: Dict[str, Any] = {"contents": contents}
		if system_instruction:
			payload["systemInstruction"] = {"parts": [text_part(system_instruction)]}
		return await self._post_payload(payload, fallback_messages=_openrouter_messages(history, message, system_instruction))

	async def _post_payload(
		self,
		payload: Dict[str, Any],
		*,
		fallback_messages: Optional[List[Dict[str, str]]] = None,
	) -> str:
		params: Dict[str, Any] = {}
		headers: Dict[str, str] = {}
		if self._auth_in_query:
			params["key"] = self.api_key
		else:
			headers["x-goog-api-key"] = self.api_key
		last_error: Optional[Exception] = None
		try:
			r = await self._client.post(self.base_url, params=params, headers=headers, json=payload)
			r.raise_for_status()
		except httpx.HTTPStatusError as http_err:
			last_error = _classify_status_error(http_err)
		except httpx.RequestError as net_err:
			last_error = GenerationError(f"Gemini request failed: {net_err}")
		if last_error is None:
			try:
				data = r.json()
				parts = data["candidates"][0]["content"]["parts"]
				return "".join(p.get("text", "") for p in parts)
			except (ValueError, KeyError, IndexError, TypeError):
				last_error = GenerationError(f"Unexpected Gemini response: {r.text[:500]}")
		logger.error("Gemini call failed: %s", last_error)
		if isinstance(last_error, ConfigurationError):
			raise last_error
		# Only text-only calls can be replayed against OpenRouter
		if not self._fallback_enabled or fallback_messages is None:
			raise last_error
		return await self._fallback_generate(fallback_messages, last_error)

	async def aclose(self) -> None:
		await self._client.aclose()
		if self._fallback_client is not None:
			await self._fallback_client.aclose()

	async def _fallback_generate(self, messages: List[Dict[str, str]], primary_error: Exception) -> str:
		if not self._fallback_client or not self._openrouter_api_key:
			raise primary_error
		headers = {k: v for k, v in self._openrouter_headers.items() if v}
		payload: Dict[str, Any] = {
			"model": self._openrouter_model,
			"messages": messages,
		}
		logger.warning("Falling back to OpenRouter model %s", self._openrouter_model)
		try:
			r = await self._fallback_client.post(
				self._openrouter_base_url,
				headers=headers,
				json=payload,
			)
			r.raise_for_status()
			data = r.json()
			return data["choices"][0]["message"]["content"]
		except (httpx.HTTPError, ValueError, KeyError, IndexError, TypeError) as fallback_err:
			raise GenerationError(
				f"Gemini primary call failed ({primary_error}); fallback via OpenRouter also failed"
			) from fallback_err


def _openrouter_messages(
	history: Sequence[Dict[str, str]],
	message: str,
	system_instruction: Optional[str],
) -> List[Dict[str, str]]:
	"""Translate Gemini-style turns into OpenAI-style chat messages for OpenRouter."""
	messages: List[Dict[str, str]] = []
	if system_instruction:
		messages.append({"role": "system", "content": system_instruction})
	for turn in history:
		role = "assistant" if turn["role"] == "model" else "user"
		messages.append({"role": role, "content": turn["text"]})
	messages.append({"role": "user", "content": message})
	return messages


def _classify_status_error(err: httpx.HTTPStatusError) -> Exception:
	status = err.response.status_code
	body = err.response.text or ""
	if status in (400, 401, 403) and ("API key" in body or "API_KEY" in body):
		return ConfigurationError(API_KEY_ERROR)
	return GenerationError(f"Gemini returned HTTP {status}")
