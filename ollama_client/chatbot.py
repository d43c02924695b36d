"""Interactive terminal chatbots on top of the completion and chat APIs."""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Sequence
from typing import TextIO

from ollama_client.chat import ChatMessage, ChatMessageRequest
from ollama_client.client import DEFAULT_HOST, DEFAULT_PORT, Ollama
from ollama_client.completion import GenerationContext, GenerationRequest
from ollama_client.errors import OllamaError

DEFAULT_MODEL = "llama2:latest"
PROMPT = "\n> "


def _prompt_lines(stdin: TextIO, stdout: TextIO):
    """Yield user inputs until end of input or an ``exit`` command."""
    while True:
        stdout.write(PROMPT)
        stdout.flush()
        line = stdin.readline()
        if not line:
            return
        text = line.rstrip()
        if text.isascii() and text.lower() == "exit":
            return
        yield text


async def run_completion_chat(
    ollama: Ollama, model: str, stdin: TextIO, stdout: TextIO
) -> None:
    """Chat through the completion API, carrying the context between turns."""
    context: GenerationContext | None = None
    for text in _prompt_lines(stdin, stdout):
        request = GenerationRequest(model, text, context=context)
        stream = await ollama.generate_stream(request)
        try:
            async for response in stream:
                stdout.write(response.response)
                stdout.flush()
                if response.final_data is not None:
                    context = response.final_data.context
        except OllamaError:
            pass


async def run_chat(ollama: Ollama, model: str, stdin: TextIO, stdout: TextIO) -> None:
    """Chat through the chat API, keeping the whole conversation."""
    messages: list[ChatMessage] = []
    for text in _prompt_lines(stdin, stdout):
        messages.append(ChatMessage.user(text))
        stream = await ollama.send_chat_messages_stream(
            ChatMessageRequest(model, list(messages))
        )
        parts: list[str] = []
        try:
            async for response in stream:
                if response.message is not None:
                    stdout.write(response.message.content)
                    stdout.flush()
                    parts.append(response.message.content)
        except OllamaError:
            pass
        messages.append(ChatMessage.assistant("".join(parts)))


def _port(value: str) -> int:
    try:
        port = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {value!r}") from None
    if not 0 <= port <= 65535:
        raise argparse.ArgumentTypeError(f"port out of range: {port}")
    return port


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ollama-chat", description="Chat with a model served by Ollama."
    )
    parser.add_argument("--host", default=DEFAULT_HOST, help="server host with scheme")
    parser.add_argument("--port", type=_port, default=DEFAULT_PORT, help="server port")
    parser.add_argument("--model", default=DEFAULT_MODEL, help="model to chat with")
    parser.add_argument(
        "--api",
        choices=("generate", "chat"),
        default="generate",
        help="use the completion API with context or the chat API",
    )
    return parser


async def _run(args: argparse.Namespace, stdin: TextIO, stdout: TextIO) -> None:
    async with Ollama(args.host, args.port) as ollama:
        if args.api == "chat":
            await run_chat(ollama, args.model, stdin, stdout)
        else:
            await run_completion_chat(ollama, args.model, stdin, stdout)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the chatbot from the command line; returns the exit status."""
    args = _parser().parse_args(argv)
    try:
        asyncio.run(_run(args, sys.stdin, sys.stdout))
    except OllamaError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


__all__ = ["DEFAULT_MODEL", "main", "run_chat", "run_completion_chat"]