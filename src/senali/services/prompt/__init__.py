"""Prompt construction for the Senali assistant."""

from senali.services.prompt.prompt_builder import BuiltPrompt, PromptBuilder

__all__ = ["BuiltPrompt", "PromptBuilder"]
