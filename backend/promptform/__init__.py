"""PromptForm: AI-generated user-research interview scripts and questionnaires."""

__version__ = "0.1.0"
