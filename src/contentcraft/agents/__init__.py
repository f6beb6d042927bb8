"""Prompt-driven agent components."""

from contentcraft.agents.completion import CompletionService
from contentcraft.agents.llm import create_chat_client

__all__ = ["CompletionService", "create_chat_client"]
