import pytest

from ollama_client.chat import (
    ChatMessage,
    ChatMessageFinalResponseData,
    ChatMessageRequest,
    ChatMessageResponse,
    MessageRole,
)
from ollama_client.images import Image
from ollama_client.options import FormatType, GenerationOptions

PROMPT = "Why is the sky blue?"

FINAL = {
    "total_duration": 5589157167,
    "prompt_eval_count": 46,
    "prompt_eval_duration": 1160282000,
    "eval_count": 113,
    "eval_duration": 4232710000,
}


@pytest.mark.parametrize(
    "factory, role, wire",
    [
        (ChatMessage.user, MessageRole.USER, "user"),
        (ChatMessage.assistant, MessageRole.ASSISTANT, "assistant"),
        (ChatMessage.system, MessageRole.SYSTEM, "system"),
    ],
)
def test_role_constructors(factory, role, wire):
    message = factory(PROMPT)
    assert message.role is role
    assert message.content == PROMPT
    assert message.images is None
    assert message.to_dict()["role"] == wire


def test_message_to_dict_without_images():
    assert ChatMessage.user(PROMPT).to_dict() == {
        "role": "user",
        "content": PROMPT,
        "images": None,
    }


def test_add_image_starts_list_and_keeps_original():
    original = ChatMessage.user("look")
    with_one = original.add_image(Image.from_base64("aGVsbG8="))
    assert original.images is None
    assert with_one.images == (Image("aGVsbG8="),)


def test_add_image_appends():
    message = ChatMessage.user("look").add_image(Image("YQ==")).add_image(Image("Yg=="))
    assert message.to_dict()["images"] == ["YQ==", "Yg=="]


def test_with_images_replaces():
    message = ChatMessage.user("look").add_image(Image("YQ==")).with_images([Image("Yw==")])
    assert message.images == (Image("Yw=="),)


def test_message_round_trip():
    message = ChatMessage.assistant("answer").with_images([Image("YQ=="), Image("Yg==")])
    assert ChatMessage.from_dict(message.to_dict()) == message


def test_message_from_dict_without_images_field():
    message = ChatMessage.from_dict({"role": "system", "content": "be brief"})
    assert message == ChatMessage.system("be brief")


def test_message_from_dict_unknown_role():
    with pytest.raises(ValueError):
        ChatMessage.from_dict({"role": "robot", "content": "x"})


def test_message_from_dict_missing_content():
    with pytest.raises(ValueError):
        ChatMessage.from_dict({"role": "user"})


def test_message_from_dict_bad_images():
    with pytest.raises(ValueError):
        ChatMessage.from_dict({"role": "user", "content": "x", "images": [1]})


def test_request_to_dict_defaults():
    request = ChatMessageRequest("llama2:latest", [ChatMessage.user(PROMPT)])
    body = request.to_dict()
    assert body == {
        "model": "llama2:latest",
        "messages": [{"role": "user", "content": PROMPT, "images": None}],
        "options": None,
        "template": None,
        "format": None,
        "stream": False,
    }


def test_request_to_dict_stream_and_extras():
    options = GenerationOptions(temperature=0.5, seed=7)
    request = ChatMessageRequest(
        "llama2:latest",
        [ChatMessage.user(PROMPT)],
        options=options,
        template="{{ .Prompt }}",
        format=FormatType.JSON,
    )
    body = request.to_dict(stream=True)
    assert body["stream"] is True
    assert body["format"] == "json"
    assert body["options"] == options.to_dict()
    assert body["template"] == "{{ .Prompt }}"


def test_response_streaming_piece_has_no_final_data():
    response = ChatMessageResponse.from_dict(
        {
            "model": "llama2",
            "created_at": "2023-08-04T08:52:19.385406455-07:00",
            "message": {"role": "assistant", "content": "The"},
            "done": False,
        }
    )
    assert response.done is False
    assert response.final_data is None
    assert response.message == ChatMessage.assistant("The")
    assert response.created_at == "2023-08-04T08:52:19.385406455-07:00"


def test_response_done_with_final_data():
    response = ChatMessageResponse.from_dict(
        {"model": "llama2", "created_at": "now", "done": True, **FINAL}
    )
    assert response.done is True
    assert response.message is None
    assert response.final_data == ChatMessageFinalResponseData(**FINAL)


def test_response_partial_final_data_is_dropped():
    partial = dict(FINAL)
    del partial["eval_duration"]
    response = ChatMessageResponse.from_dict(
        {"model": "llama2", "created_at": "now", "done": True, **partial}
    )
    assert response.final_data is None


def test_response_overflowing_count_drops_final_data():
    data = {"model": "m", "created_at": "now", "done": True, **FINAL, "eval_count": 70000}
    assert ChatMessageResponse.from_dict(data).final_data is None


def test_response_missing_done():
    with pytest.raises(ValueError):
        ChatMessageResponse.from_dict({"model": "m", "created_at": "now"})


def test_response_bad_message():
    with pytest.raises(ValueError):
        ChatMessageResponse.from_dict(
            {"model": "m", "created_at": "now", "done": False, "message": {"role": "x"}}
        )


@pytest.mark.parametrize("key, value", [("prompt_eval_count", 70000), ("total_duration", -1)])
def test_final_data_out_of_range(key, value):
    with pytest.raises(ValueError):
        ChatMessageFinalResponseData.from_dict({**FINAL, key: value})


def test_final_data_rejects_bool():
    with pytest.raises(ValueError):
        ChatMessageFinalResponseData.from_dict({**FINAL, "eval_count": True})