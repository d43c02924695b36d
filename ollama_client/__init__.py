"""Asynchronous client for the Ollama HTTP API, with an interactive chatbot."""

__version__ = "0.1.0"

__all__ = ["chat", "chatbot", "client", "completion", "errors", "images", "models", "options"]