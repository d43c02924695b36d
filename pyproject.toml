[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ollama-client"
version = "0.1.0"
description = "Async client for the Ollama HTTP API: completions, chat, embeddings and model management."
requires-python = ">=3.10"
keywords = ["ollama", "llm", "chat", "completion", "embeddings", "async", "client"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Framework :: AsyncIO",
    "Environment :: Console",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]
dependencies = [
    "httpx",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
ollama-chat = "ollama_client.chatbot:main"

[tool.hatch.build.targets.wheel]
packages = ["ollama_client"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
