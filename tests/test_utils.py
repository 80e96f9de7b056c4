import pytest
from pydantic import ValidationError

from config import Settings
from models import WeightVector
from schemas import RecommendationRequest, WeightsIn
from utils import coerce_number, format_inr, mean, parse_price, strip_code_fences


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("₹12,999", 12999.0),
        ("$19.99", 19.99),
        ("Rs. 1,499", 1499.0),
        ("INR 450", 450.0),
        ("free", None),
        ("", None),
    ],
)
def test_parse_price(raw, expected):
    assert parse_price(raw) == expected


def test_coerce_number():
    assert coerce_number(5) == 5.0
    assert coerce_number("4.3") == 4.3
    assert coerce_number(True) is None
    assert coerce_number(None) is None
    assert coerce_number([1]) is None


@pytest.mark.parametrize("raw", [float("nan"), float("inf"), float("-inf"), 10**400, "9" * 400])
def test_coerce_number_rejects_non_finite(raw):
    assert coerce_number(raw) is None


def test_format_inr():
    assert format_inr(18999.0) == "18,999"
    assert format_inr(119999) == "119,999"
    assert format_inr(1234.5) == "1,234.5"
    assert format_inr(0) == "0"


def test_strip_code_fences():
    assert strip_code_fences('```json\n[1, 2]\n```') == "[1, 2]"
    assert strip_code_fences("  [3]  ") == "[3]"


def test_mean():
    assert mean([]) == 0.0
    assert mean([10, 20, 30]) == 20.0


def test_weights_in_defaults_and_partial():
    assert RecommendationRequest(query="tv").weight_vector() == WeightVector()
    assert WeightsIn(delivery=0).to_weight_vector() == WeightVector(delivery=0.0)
    assert WeightsIn(price=1).to_weight_vector().price == 1.0


@pytest.mark.parametrize(
    "weights",
    [{"price": -1}, {"price": float("nan")}, {"reviews": float("inf")}, {"rating": True}, {"delivery": "0.2"}],
)
def test_weights_in_rejects_bad_values(weights):
    with pytest.raises(ValidationError):
        WeightsIn(**weights)


def test_request_rejects_blank_query():
    with pytest.raises(ValidationError):
        RecommendationRequest(query=" \t ")
    assert RecommendationRequest(query=" tv ").query == " tv "


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("OPENROUTER_API_KEY", "'sk-test'")
    monkeypatch.setenv("OPENROUTER_BASE_URL", "https://proxy.local/v1/")
    monkeypatch.setenv("REQUEST_TIMEOUT", "12.5")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    settings = Settings.from_env()
    assert settings.api_key == "sk-test"
    assert settings.base_url == "https://proxy.local/v1"
    assert settings.request_timeout == 12.5
    assert settings.port == 8080
    assert settings.log_level == "DEBUG"


def test_settings_without_key(monkeypatch):
    monkeypatch.setenv("OPENROUTER_API_KEY", "")
    assert Settings.from_env().api_key is None
