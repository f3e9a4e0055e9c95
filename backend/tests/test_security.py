"""
Tests for input validation, password rules and log redaction.
"""
import pytest

from vidhisahayak.core.security import InputValidator, PasswordValidator, SecureLogger


def test_query_is_normalized():
    result = InputValidator.validate_query("  rent\tagreement \n kaise banaye  ")
    assert result == {"is_valid": True, "sanitized_data": "rent agreement kaise banaye"}


def test_indic_joiners_are_kept():
    text = "\u0915\u094d\u200d\u0937"
    assert InputValidator.validate_query(text)["sanitized_data"] == text


def test_control_characters_are_dropped():
    assert InputValidator.validate_query("hello\x00world")["sanitized_data"] == "helloworld"


@pytest.mark.parametrize("query,error", [
    ("", "Message cannot be empty"),
    ("   ", "Message cannot be empty"),
    ("<script>alert(1)</script>", "Invalid content detected"),
    ("a" * 4001, "Query too long. Max length: 4000 characters"),
])
def test_invalid_queries(query, error):
    assert InputValidator.validate_query(query) == {"is_valid": False, "error": error}


def test_password_rules():
    assert PasswordValidator.validate_password("strong-pass-42")["is_valid"]

    result = PasswordValidator.validate_password("short")
    assert not result["is_valid"]
    assert "Password must be at least 8 characters" in result["errors"]
    assert "Password must contain at least one digit" in result["errors"]


def test_strength_score_is_bounded():
    assert 0 <= PasswordValidator.validate_password("Aa1!" * 20)["strength_score"] <= 100


@pytest.mark.parametrize("message,expected", [
    ("Aadhaar 1234 5678 9012", "Aadhaar [REDACTED]"),
    ("PAN ABCDE1234F", "PAN [REDACTED]"),
    ("call +91 9876543210", "call [REDACTED]"),
    ("mail asha@example.in", "mail [REDACTED]"),
])
def test_identifiers_are_redacted(message, expected):
    assert SecureLogger.sanitize_log_message(message) == expected
