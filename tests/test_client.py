import pytest

from careerpath.core import client as client_module
from careerpath.core.ai_core import generate_career_pathway
from careerpath.core.client import GeminiClient, get_ai_client
from careerpath.core.errors import ConfigurationError


class Spy:
    def __init__(self):
        self.calls = []

    def __call__(self, *args, **kwargs):
        self.calls.append((args, kwargs))
        return object()


@pytest.fixture
def sdk_spies(monkeypatch):
    configure, model = Spy(), Spy()
    monkeypatch.setattr(client_module.genai, "configure", configure)
    monkeypatch.setattr(client_module.genai, "GenerativeModel", model)
    return configure, model


@pytest.mark.parametrize("api_key", [None, "", "   "])
def test_missing_credential_fails_before_any_sdk_call(sdk_spies, api_key):
    configure, model = sdk_spies
    with pytest.raises(ConfigurationError) as excinfo:
        GeminiClient(api_key)
    assert "missing credential" in str(excinfo.value)
    assert excinfo.value.retryable is False
    assert configure.calls == [] and model.calls == []


def test_get_ai_client_reads_environment(monkeypatch, sdk_spies):
    with pytest.raises(ConfigurationError):
        get_ai_client()
    monkeypatch.setenv("GOOGLE_API_KEY", "google-key")
    assert get_ai_client().api_key == "google-key"
    monkeypatch.setenv("GEMINI_API_KEY", "gemini-key")
    assert get_ai_client().api_key == "gemini-key"


def test_generative_model_configures_held_key(sdk_spies):
    configure, model = sdk_spies
    client = GeminiClient("secret")
    assert configure.calls == []
    client.generative_model("gemini-2.5-flash", system_instruction="Be helpful.")
    assert configure.calls == [((), {"api_key": "secret"})]
    assert model.calls == [(("gemini-2.5-flash",), {"system_instruction": "Be helpful."})]


def test_operation_without_credential_makes_no_model_call(sdk_spies):
    configure, model = sdk_spies
    with pytest.raises(ConfigurationError):
        generate_career_pathway("Data Analyst", "Economics graduate")
    assert configure.calls == [] and model.calls == []
