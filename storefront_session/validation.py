"""Field checks run by the caller before an auth request is sent.

An empty dict means the form is valid; otherwise it maps field name to
the message shown next to that field.
"""

from __future__ import annotations

import re
from typing import Dict, Tuple

from .models import Credentials, RegisterCandidate

EMAIL_RE = re.compile(r"\S+@\S+\.\S+")

MIN_USERNAME_LEN = 3
MIN_PASSWORD_LEN = 6


def validate_registration(candidate: RegisterCandidate) -> Dict[str, str]:
    errors: Dict[str, str] = {}

    if not candidate.username.strip():
        errors["username"] = "Username is required"
    elif len(candidate.username) < MIN_USERNAME_LEN:
        errors["username"] = "Username must be at least 3 characters"

    if not candidate.email.strip():
        errors["email"] = "Email is required"
    elif not EMAIL_RE.search(candidate.email):
        errors["email"] = "Please enter a valid email"

    if not candidate.password:
        errors["password"] = "Password is required"
    elif len(candidate.password) < MIN_PASSWORD_LEN:
        errors["password"] = "Password must be at least 6 characters"

    return errors


def validate_login(credentials: Credentials) -> Dict[str, str]:
    errors: Dict[str, str] = {}

    if not credentials.email.strip():
        errors["email"] = "Email is required"
    elif not EMAIL_RE.search(credentials.email):
        errors["email"] = "Enter a valid email"

    if not credentials.password:
        errors["password"] = "Password is required"

    return errors


def password_strength(password: str) -> Tuple[int, str]:
    score = 0
    if len(password) >= 8:
        score += 25
    if re.search(r"[A-Z]", password):
        score += 25
    if re.search(r"[a-z]", password):
        score += 25
    if re.search(r"\d", password):
        score += 25

    if score < 25:
        label = "Weak"
    elif score < 50:
        label = "Fair"
    elif score < 75:
        label = "Good"
    else:
        label = "Strong"
    return score, label
