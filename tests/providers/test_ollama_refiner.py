"""Tests for the Ollama refiner with a mocked HTTP layer."""

import json
from urllib import error

import pytest

from coffee_dex.exceptions import ExternalServiceError
from coffee_dex.providers import OllamaRefiner
from coffee_dex.schema import Candidate

SHORTLIST = [
    Candidate(id=4, name="Charmander", categories=("fire",)),
    Candidate(id=6, name="Charizard", categories=("fire", "flying")),
]


def _response(mocker, body, status=200):
    resp = mocker.MagicMock()
    resp.__enter__.return_value = resp
    resp.status = status
    resp.read.return_value = body if isinstance(body, bytes) else json.dumps(body).encode("utf-8")
    return resp


def _envelope(inner):
    return {"model": "qwen3:4b", "response": json.dumps(inner), "done": True}


def test_generate_posts_json_request(mocker):
    """generate() posts a non-streaming JSON request to /api/generate."""
    urlopen = mocker.patch(
        "coffee_dex.providers.ollama.request.urlopen",
        return_value=_response(mocker, {"response": "{}"}),
    )
    refiner = OllamaRefiner(base_url="http://ollama:11434/", model="qwen3:4b", timeout_sec=12)

    assert refiner.generate("hello") == "{}"

    req = urlopen.call_args.args[0]
    assert req.full_url == "http://ollama:11434/api/generate"
    assert req.get_method() == "POST"
    assert json.loads(req.data) == {"model": "qwen3:4b", "prompt": "hello", "stream": False, "format": "json"}
    assert urlopen.call_args.kwargs["timeout"] == 12


def test_refine_returns_selection(mocker, roasty_record):
    """A valid answer naming a shortlisted candidate becomes a Selection."""
    inner = {"selected_identity": "charizard", "confidence": 0.77, "description": "Smoky wings.", "trait_mapping": []}
    mocker.patch(
        "coffee_dex.providers.ollama.request.urlopen",
        return_value=_response(mocker, _envelope(inner)),
    )

    selection = OllamaRefiner().refine(roasty_record(), SHORTLIST)

    assert selection.candidate.id == 6
    assert selection.confidence == 0.77
    assert selection.description == "Smoky wings."
    assert selection.source == "ollama"


def test_refine_rejects_candidate_outside_shortlist(mocker, roasty_record):
    """A candidate outside the shortlist is rejected."""
    inner = {"selected_identity": "Pikachu", "confidence": 0.9, "description": "Zap."}
    mocker.patch(
        "coffee_dex.providers.ollama.request.urlopen",
        return_value=_response(mocker, _envelope(inner)),
    )

    assert OllamaRefiner().refine(roasty_record(), SHORTLIST) is None


@pytest.mark.parametrize(
    "side_effect",
    [
        error.HTTPError("http://localhost:11434/api/generate", 500, "boom", hdrs=None, fp=None),
        error.URLError("connection refused"),
        TimeoutError("timed out"),
    ],
)
def test_refine_returns_none_on_transport_failure(mocker, roasty_record, side_effect):
    """Transport failures make refine() return None."""
    mocker.patch("coffee_dex.providers.ollama.request.urlopen", side_effect=side_effect)

    assert OllamaRefiner().refine(roasty_record(), SHORTLIST) is None


def test_generate_rejects_bad_envelopes(mocker):
    """Undecodable envelopes and non-200 statuses raise ExternalServiceError."""
    urlopen = mocker.patch("coffee_dex.providers.ollama.request.urlopen")
    refiner = OllamaRefiner()

    urlopen.return_value = _response(mocker, b"<html>")
    with pytest.raises(ExternalServiceError):
        refiner.generate("x")

    urlopen.return_value = _response(mocker, {"done": True})
    with pytest.raises(ExternalServiceError):
        refiner.generate("x")

    urlopen.return_value = _response(mocker, {"response": "{}"}, status=503)
    with pytest.raises(ExternalServiceError):
        refiner.generate("x")


def test_refine_returns_none_for_invalid_json_answer(mocker, roasty_record):
    """A non-JSON model answer makes refine() return None."""
    mocker.patch(
        "coffee_dex.providers.ollama.request.urlopen",
        return_value=_response(mocker, {"response": "I think Charmander!"}),
    )

    assert OllamaRefiner().refine(roasty_record(), SHORTLIST) is None


def test_check_connection(mocker):
    """check_connection() reports whether /api/tags answers."""
    urlopen = mocker.patch(
        "coffee_dex.providers.ollama.request.urlopen",
        return_value=_response(mocker, {"models": []}),
    )

    assert OllamaRefiner(base_url="http://ollama:11434").check_connection() is True
    assert urlopen.call_args.args[0].full_url == "http://ollama:11434/api/tags"

    urlopen.side_effect = error.URLError("down")
    assert OllamaRefiner().check_connection() is False
