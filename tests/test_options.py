import json

import pytest

from ollama_client.options import FormatType, GenerationOptions

ALL_KEYS = [
    "mirostat",
    "mirostat_eta",
    "mirostat_tau",
    "num_ctx",
    "num_gqa",
    "num_gpu",
    "num_thread",
    "repeat_last_n",
    "repeat_penalty",
    "temperature",
    "seed",
    "stop",
    "tfs_z",
    "num_predict",
    "top_k",
    "top_p",
]


def test_format_type_json_value():
    fmt = FormatType("json")
    assert fmt.value == "json"
    assert json.dumps(fmt) == '"json"'


def test_format_type_from_value():
    assert FormatType("json") is FormatType.JSON


def test_default_options_are_all_null():
    result = GenerationOptions().to_dict()
    assert list(result) == ALL_KEYS
    assert all(value is None for value in result.values())


def test_set_values_appear_in_dict():
    options = GenerationOptions(temperature=0.5, seed=42, stop="END", num_predict=-1)
    result = options.to_dict()
    assert result["temperature"] == 0.5
    assert result["seed"] == 42
    assert result["stop"] == "END"
    assert result["num_predict"] == -1
    assert result["top_k"] is None


def test_integer_given_for_float_field_becomes_float():
    result = GenerationOptions(temperature=1).to_dict()
    assert isinstance(result["temperature"], float)
    assert result["temperature"] == 1.0


def test_json_round_trip():
    options = GenerationOptions(mirostat=2, top_p=0.9, top_k=40, repeat_last_n=64)
    decoded = json.loads(json.dumps(options.to_dict()))
    assert GenerationOptions(**decoded) == options


@pytest.mark.parametrize(
    "kwargs",
    [
        {"mirostat": 256},
        {"mirostat": -1},
        {"num_ctx": -1},
        {"top_k": 2**32},
        {"seed": 2**31},
        {"repeat_last_n": -(2**31) - 1},
    ],
)
def test_out_of_range_integers_rejected(kwargs):
    with pytest.raises(ValueError):
        GenerationOptions(**kwargs)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"num_ctx": 1.5},
        {"temperature": "hot"},
        {"stop": 3},
        {"seed": True},
    ],
)
def test_wrong_types_rejected(kwargs):
    with pytest.raises(TypeError):
        GenerationOptions(**kwargs)


def test_boundary_values_accepted():
    options = GenerationOptions(mirostat=255, num_ctx=2**32 - 1, seed=-(2**31))
    result = options.to_dict()
    assert result["mirostat"] == 255
    assert result["num_ctx"] == 2**32 - 1
    assert result["seed"] == -(2**31)