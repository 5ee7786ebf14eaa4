from .chat import ChatAssistant, ChatMessage, ChatSession
from .prompts import build_generation_prompt, build_refinement_prompt, response_schema
from .service import ScriptGenerator, parse_document

__all__ = [
	"ChatAssistant",
	"ChatMessage",
	"ChatSession",
	"ScriptGenerator",
	"build_generation_prompt",
	"build_refinement_prompt",
	"parse_document",
	"response_schema",
]
