"""
Security utilities for VidhiSahayak.

Password strength checks, chat input validation and log redaction of
personal identifiers (Aadhaar, PAN, phone numbers, email addresses).
"""

import re
import unicodedata
import logging
from typing import Any, Dict

from vidhisahayak.core.config import get_config

logger = logging.getLogger(__name__)


class PasswordValidator:
    """Validates password strength."""

    FORBIDDEN_PATTERNS = ['password', '123456', 'qwerty', 'admin']

    @staticmethod
    def validate_password(password: str) -> Dict[str, Any]:
        """
        Validate password strength.

        Args:
            password: Password to validate

        Returns:
            Dict with is_valid, errors and strength_score
        """
        settings = get_config().security
        errors = []

        if len(password) < settings.min_password_length:
            errors.append(f"Password must be at least {settings.min_password_length} characters")
        if len(password) > settings.max_password_length:
            errors.append(f"Password must be no more than {settings.max_password_length} characters")

        if not any(c.isalpha() for c in password):
            errors.append("Password must contain at least one letter")
        if not any(c.isdigit() for c in password):
            errors.append("Password must contain at least one digit")

        password_lower = password.lower()
        for pattern in PasswordValidator.FORBIDDEN_PATTERNS:
            if pattern in password_lower:
                errors.append(f"Password cannot contain '{pattern}'")

        return {
            'is_valid': len(errors) == 0,
            'errors': errors,
            'strength_score': PasswordValidator._calculate_strength_score(password)
        }

    @staticmethod
    def _calculate_strength_score(password: str) -> int:
        """Calculate password strength score (0-100)."""
        score = min(len(password) * 3, 45)

        if any(c.isupper() for c in password):
            score += 10
        if any(c.islower() for c in password):
            score += 10
        if any(c.isdigit() for c in password):
            score += 10
        if any(not c.isalnum() for c in password):
            score += 10

        score += min(len(set(password)), 15)
        return min(score, 100)


class SecureLogger:
    """Redacts personal identifiers before text reaches the logs."""

    PII_PATTERNS = [
        r'\b\d{4}\s?\d{4}\s?\d{4}\b',  # Aadhaar
        r'\b[A-Z]{5}\d{4}[A-Z]\b',  # PAN
        r'(?:\+91[\s-]?)?\b[6-9]\d{9}\b',  # Mobile
        r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b',  # Email
    ]

    @staticmethod
    def sanitize_log_message(message: str) -> str:
        sanitized = message
        for pattern in SecureLogger.PII_PATTERNS:
            sanitized = re.sub(pattern, '[REDACTED]', sanitized, flags=re.IGNORECASE)
        return sanitized


class InputValidator:
    """Validates and normalizes user input."""

    DANGEROUS_PATTERNS = [
        r'<script.*?>.*?</script>',
        r'javascript:',
        r'data:text/html',
        r'vbscript:',
    ]

    @staticmethod
    def validate_query(query: str) -> Dict[str, Any]:
        """
        Validate a chat or search query.

        Returns:
            Dict with is_valid and either error or sanitized_data
        """
        if not isinstance(query, str):
            return {'is_valid': False, 'error': 'Query must be a string'}

        if len(query.strip()) == 0:
            return {'is_valid': False, 'error': 'Message cannot be empty'}

        max_length = get_config().application.max_query_length
        if len(query) > max_length:
            return {'is_valid': False, 'error': f'Query too long. Max length: {max_length} characters'}

        for pattern in InputValidator.DANGEROUS_PATTERNS:
            if re.search(pattern, query, re.IGNORECASE | re.DOTALL):
                return {'is_valid': False, 'error': 'Invalid content detected'}

        return {'is_valid': True, 'sanitized_data': InputValidator._sanitize_text(query)}

    @staticmethod
    def _sanitize_text(text: str) -> str:
        """Drop control characters and collapse whitespace. Joiners used by Indic scripts are kept."""
        cleaned = "".join(c for c in text if c.isspace() or unicodedata.category(c) != "Cc")
        return ' '.join(cleaned.split())

