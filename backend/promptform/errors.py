from __future__ import annotations


class PromptFormError(Exception):
	# Base class for domain errors surfaced to API callers.
	pass


class ConfigurationError(PromptFormError):
	# Raised when the model API key is missing or rejected by the provider.
	pass


class GenerationError(PromptFormError):
	# Raised when the model call fails (network, provider outage, unexpected payload).
	pass


class MalformedResponseError(GenerationError):
	# Raised when the model answered but the script is unusable (bad JSON, missing groups, duplicate ids).
	pass


class QuestionNotFoundError(PromptFormError, LookupError):
	# Raised when an edit targets a group, section or question id that does not exist.
	pass


class AttachmentError(PromptFormError):
	# Raised for unreadable, oversized or unsupported product images.
	pass
