# ollama-client

An asynchronous Python client for a running Ollama server. It covers text
completion, chat, embeddings and model management (list, show, copy, create,
delete, pull and push), with streaming variants where the server streams, and
a small interactive chatbot command.

## Installation

```
pip install .
```

`Ollama()` talks to `http://127.0.0.1:11434` by default; pass `host` (with
its scheme) and `port` to reach another server, or `client=` to supply your
own `httpx.AsyncClient`. `Ollama` is an async context manager; leaving the
`async with` block, or calling `aclose()`, closes the HTTP client it created.

## Completion

```python
import asyncio

from ollama_client.client import Ollama
from ollama_client.completion import GenerationRequest


async def main():
    async with Ollama() as ollama:
        request = GenerationRequest("llama2:latest", "Why is the sky blue?")
        response = await ollama.generate(request)
        print(response.response)


asyncio.run(main())
```

`generate_stream` is awaited to open the stream, which is then iterated:

```python
stream = await ollama.generate_stream(request)
async for piece in stream:
    print(piece.response, end="")
    if piece.final_data is not None:
        context = piece.final_data.context
```

The last piece has `done` set and carries `final_data`, whose `context`
(a `GenerationContext`) can be passed as `GenerationRequest(..., context=context)`
to keep a conversational memory. `GenerationRequest` also takes `images`,
`options`, `system`, `template` and `format`.

## Chat

```python
from ollama_client.chat import ChatMessage, ChatMessageRequest

messages = [ChatMessage.user("Why is the sky blue?")]
response = await ollama.send_chat_messages(
    ChatMessageRequest("llama2:latest", messages)
)
if response.message is not None:
    print(response.message.content)
```

`send_chat_messages_stream` yields `ChatMessageResponse` pieces the same way.
Messages are built with `ChatMessage.user`, `ChatMessage.assistant` and
`ChatMessage.system`; roles are `MessageRole` values.

Images are attached as base64 text with `Image.from_base64` (in
`ollama_client.images`) and `ChatMessage.add_image` / `ChatMessage.with_images`
or `GenerationRequest.add_image`; each returns a new object.

## Generation options

`GenerationOptions` (in `ollama_client.options`, keyword arguments only) holds
sampling settings such as `temperature`, `top_k`, `top_p`, `seed`, `num_ctx`,
`num_predict`, `repeat_penalty` and `stop`. Integer settings are checked
against their allowed range and raise `ValueError` or `TypeError` otherwise.
Settings left unset are sent as null so the model's own defaults apply.
`FormatType.JSON` asks for JSON output.

## Embeddings and models

```python
embeddings = await ollama.generate_embeddings("llama2:latest", "Why is the sky blue?")
print(embeddings.embeddings[:5])

models = await ollama.list_local_models()
info = await ollama.show_model_info("llama2:latest")
await ollama.copy_model("llama2:latest", "llama2-copy")
await ollama.delete_model("llama2-copy")
status = await ollama.pull_model("llama2:latest", allow_insecure=False)
```

`create_model`, `pull_model` and `push_model` return the server's final
status (`CreateModelStatus`, `PullModelStatus`, `PushModelStatus`, whose text
is in `message`); their `_stream` variants are awaited and then yield every
status as it arrives. A model is created from a Modelfile with
`CreateModelRequest.from_path(name, path)` or
`CreateModelRequest.from_modelfile(name, contents)`.

## Errors

Any failure — an unreachable server, an unsuccessful HTTP status or a response
that cannot be read — raises `ollama_client.errors.OllamaError`. Its `message`
attribute holds the server's error text where there is one. In the streams of
`create_model_stream`, `pull_model_stream` and `push_model_stream`, a line of
the form `{"error": "..."}` is raised as an `OllamaError` with that text.

## Interactive chatbot

```
ollama-chat
ollama-chat --api chat --model llama2:latest
```

Type a prompt after the `>` and the reply streams back. Type `exit` (or end
the input) to quit. Options:

- `--host` — server host with scheme (default `http://127.0.0.1`)
- `--port` — server port (default `11434`)
- `--model` — model to chat with (default `llama2:latest`)
- `--api` — `generate` (completion API, carrying the context between turns;
  the default) or `chat` (chat API, sending the whole conversation each turn)

The same loops are available as `run_completion_chat` and `run_chat` in
`ollama_client.chatbot`, taking an `Ollama`, a model name and the input and
output text streams.

## What this package does not do

It is only a client: it does not run models or serve the Ollama API itself,
and every call needs an Ollama server to be running and reachable.

## Tests

```
pip install ".[test]"
pytest
```