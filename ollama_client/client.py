"""Asynchronous client for the Ollama HTTP API."""

from __future__ import annotations

import json
from collections.abc import AsyncIterator, Callable
from typing import Any, TypeVar

import httpx

from ollama_client.chat import ChatMessageRequest, ChatMessageResponse
from ollama_client.completion import (
    GenerateEmbeddingsResponse,
    GenerationRequest,
    GenerationResponse,
    _embeddings_request,
)
from ollama_client.errors import OllamaError
from ollama_client.models import (
    CreateModelRequest,
    CreateModelStatus,
    LocalModel,
    ModelInfo,
    PullModelStatus,
    PushModelStatus,
    _transfer_request,
)
from ollama_client.options import GenerationOptions

T = TypeVar("T")

DEFAULT_HOST = "http://127.0.0.1"
DEFAULT_PORT = 11434

_JSON_HEADERS = {"Content-Type": "application/json"}


def _decode(payload: bytes | str, parse: Callable[[Any], T]) -> T:
    """Parse a whole JSON response body, turning failures into OllamaError."""
    try:
        return parse(json.loads(payload))
    except (ValueError, TypeError) as exc:
        raise OllamaError(str(exc)) from exc


def _decode_stream_line(line: str, parse: Callable[[Any], T], server_errors: bool) -> T:
    """Parse one line of a streamed response."""
    try:
        data = json.loads(line)
    except ValueError as exc:
        raise OllamaError(f"Failed to deserialize response: {exc}") from exc
    try:
        return parse(data)
    except (ValueError, TypeError) as exc:
        if server_errors:
            try:
                error = OllamaError.from_dict(data)
            except ValueError:
                pass
            else:
                raise error from None
        raise OllamaError(f"Failed to deserialize response: {exc}") from exc


def _parse_local_models(data: Any) -> list[LocalModel]:
    if not isinstance(data, dict):
        raise ValueError("local models response must be a JSON object")
    try:
        models = data["models"]
    except KeyError:
        raise ValueError("missing field 'models'") from None
    if not isinstance(models, list):
        raise ValueError("field 'models' must be a list")
    return [LocalModel.from_dict(model) for model in models]


class Ollama:
    """A connection to an Ollama instance, by default at http://127.0.0.1:11434."""

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if isinstance(port, bool) or not isinstance(port, int) or not 0 <= port <= 65535:
            raise ValueError("port must be an integer between 0 and 65535")
        self.host = host
        self.port = port
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient(timeout=None)

    def __repr__(self) -> str:
        return f"Ollama(host={self.host!r}, port={self.port!r})"

    async def __aenter__(self) -> Ollama:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def uri(self) -> str:
        """Return the HTTP URI of the Ollama instance."""
        return f"{self.host}:{self.port}"

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        body: Any = None,
        *,
        stream: bool = False,
    ) -> httpx.Response:
        content = None if body is None else json.dumps(body)
        request = self._client.build_request(
            method,
            f"{self.uri()}{path}",
            content=content,
            headers=_JSON_HEADERS if content is not None else None,
        )
        try:
            response = await self._client.send(request, stream=stream)
        except httpx.HTTPError as exc:
            raise OllamaError(str(exc)) from exc
        if not response.is_success:
            try:
                await response.aread()
                text = response.text
            except httpx.HTTPError as exc:
                text = str(exc)
            finally:
                await response.aclose()
            raise OllamaError(text)
        return response

    async def _call(
        self, method: str, path: str, body: Any, parse: Callable[[Any], T]
    ) -> T:
        response = await self._request(method, path, body)
        return _decode(response.content, parse)

    async def _open_stream(
        self,
        path: str,
        body: Any,
        parse: Callable[[Any], T],
        *,
        server_errors: bool,
    ) -> AsyncIterator[T]:
        response = await self._request("POST", path, body, stream=True)
        return self._iter_stream(response, parse, server_errors)

    @staticmethod
    async def _iter_stream(
        response: httpx.Response, parse: Callable[[Any], T], server_errors: bool
    ) -> AsyncIterator[T]:
        try:
            async for line in response.aiter_lines():
                if not line.strip():
                    continue
                yield _decode_stream_line(line, parse, server_errors)
        except httpx.HTTPError as exc:
            raise OllamaError(f"Failed to read response: {exc}") from exc
        finally:
            await response.aclose()

    async def generate_embeddings(
        self,
        model_name: str,
        prompt: str,
        options: GenerationOptions | None = None,
    ) -> GenerateEmbeddingsResponse:
        """Generate embeddings for ``prompt`` with the model ``model_name``."""
        body = _embeddings_request(model_name, prompt, options)
        return await self._call(
            "POST", "/api/embeddings", body, GenerateEmbeddingsResponse.from_dict
        )

    async def copy_model(self, source: str, destination: str) -> None:
        """Create a model named ``destination`` from the existing model ``source``."""
        await self._request(
            "POST", "/api/copy", {"source": source, "destination": destination}
        )

    async def create_model(self, request: CreateModelRequest) -> CreateModelStatus:
        """Create a model; only the final status is returned."""
        return await self._call(
            "POST", "/api/create", request.to_dict(stream=False), CreateModelStatus.from_dict
        )

    async def create_model_stream(
        self, request: CreateModelRequest
    ) -> AsyncIterator[CreateModelStatus]:
        """Create a model, yielding each status as it arrives."""
        return await self._open_stream(
            "/api/create",
            request.to_dict(stream=True),
            CreateModelStatus.from_dict,
            server_errors=True,
        )

    async def delete_model(self, model_name: str) -> None:
        """Delete a model and its data."""
        await self._request("DELETE", "/api/delete", {"name": model_name})

    async def list_local_models(self) -> list[LocalModel]:
        """List the models available locally."""
        return await self._call("GET", "/api/tags", None, _parse_local_models)

    async def pull_model(
        self, model_name: str, allow_insecure: bool = False
    ) -> PullModelStatus:
        """Pull a model; only the final status is returned."""
        return await self._call(
            "POST",
            "/api/pull",
            _transfer_request(model_name, allow_insecure, False),
            PullModelStatus.from_dict,
        )

    async def pull_model_stream(
        self, model_name: str, allow_insecure: bool = False
    ) -> AsyncIterator[PullModelStatus]:
        """Pull a model, yielding each status as it arrives."""
        return await self._open_stream(
            "/api/pull",
            _transfer_request(model_name, allow_insecure, True),
            PullModelStatus.from_dict,
            server_errors=True,
        )

    async def push_model(
        self, model_name: str, allow_insecure: bool = False
    ) -> PushModelStatus:
        """Push a model named ``<namespace>/<model>:<tag>``; only the final status is returned."""
        return await self._call(
            "POST",
            "/api/push",
            _transfer_request(model_name, allow_insecure, False),
            PushModelStatus.from_dict,
        )

    async def push_model_stream(
        self, model_name: str, allow_insecure: bool = False
    ) -> AsyncIterator[PushModelStatus]:
        """Push a model, yielding each status as it arrives."""
        return await self._open_stream(
            "/api/push",
            _transfer_request(model_name, allow_insecure, True),
            PushModelStatus.from_dict,
            server_errors=True,
        )

    async def show_model_info(self, model_name: str) -> ModelInfo:
        """Show the license, modelfile, parameters and template of a model."""
        return await self._call(
            "POST", "/api/show", {"name": model_name}, ModelInfo.from_dict
        )

    async def send_chat_messages(self, request: ChatMessageRequest) -> ChatMessageResponse:
        """Send a chat conversation and return the whole reply."""
        return await self._call(
            "POST", "/api/chat", request.to_dict(stream=False), ChatMessageResponse.from_dict
        )

    async def send_chat_messages_stream(
        self, request: ChatMessageRequest
    ) -> AsyncIterator[ChatMessageResponse]:
        """Send a chat conversation, yielding the reply piece by piece."""
        return await self._open_stream(
            "/api/chat",
            request.to_dict(stream=True),
            ChatMessageResponse.from_dict,
            server_errors=False,
        )

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        """Generate a completion and return it whole."""
        return await self._call(
            "POST", "/api/generate", request.to_dict(stream=False), GenerationResponse.from_dict
        )

    async def generate_stream(
        self, request: GenerationRequest
    ) -> AsyncIterator[GenerationResponse]:
        """Generate a completion, yielding it token by token."""
        return await self._open_stream(
            "/api/generate",
            request.to_dict(stream=True),
            GenerationResponse.from_dict,
            server_errors=False,
        )


__all__ = ["DEFAULT_HOST", "DEFAULT_PORT", "Ollama"]