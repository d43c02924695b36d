import base64
import json

from ollama_client.images import Image


def test_from_base64_keeps_data():
    encoded = base64.b64encode(b"\x89PNG").decode()
    image = Image.from_base64(encoded)
    assert image.data == encoded


def test_to_json_is_plain_string():
    image = Image.from_base64("aGVsbG8=")
    assert image.to_json() == "aGVsbG8="
    assert json.dumps(image.to_json()) == '"aGVsbG8="'


def test_round_trip_through_bytes():
    raw = bytes(range(32))
    image = Image.from_base64(base64.b64encode(raw).decode())
    assert base64.b64decode(image.to_json()) == raw


def test_equal_images_compare_equal():
    assert Image.from_base64("abc=") == Image.from_base64("abc=")
    assert len({Image.from_base64("abc="), Image.from_base64("abc=")}) == 1