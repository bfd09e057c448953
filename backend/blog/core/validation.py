# blog/core/validation.py
"""
Reusable value validators.

Any object with `validate(candidate) -> ValidationResult` can be plugged
into the request schemas through `run_validator`. `UsernameValidator`
implements the username policy.
"""
import string
from dataclasses import dataclass
from typing import Any, Optional, Protocol

from pydantic_core import PydanticCustomError


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    message: Optional[str] = None


class Validator(Protocol):
    def validate(self, candidate: Any) -> ValidationResult:
        ...


# Special characters accepted (and one of which is required) in usernames
USERNAME_SPECIAL_CHARS = frozenset("!@#$%^&*()_+-=[]{};':\"\\|,.<>/?")
USERNAME_ALLOWED_CHARS = frozenset(string.ascii_letters + string.digits) | USERNAME_SPECIAL_CHARS


class UsernameValidator:
    """
    Username policy.

    A username is valid when all of these hold:
      - 12 to 20 characters long (inclusive)
      - at least one ASCII uppercase letter
      - at least one ASCII lowercase letter
      - at least one character from USERNAME_SPECIAL_CHARS
      - nothing outside ASCII letters, digits and USERNAME_SPECIAL_CHARS
        (no whitespace, no non-ASCII characters)

    A failure always yields the same single message, whichever rule broke.
    """

    min_length = 12
    max_length = 20

    def is_valid(self, candidate: Any) -> bool:
        if not isinstance(candidate, str):
            return False
        if not self.min_length <= len(candidate) <= self.max_length:
            return False
        if not any(c in string.ascii_uppercase for c in candidate):
            return False
        if not any(c in string.ascii_lowercase for c in candidate):
            return False
        if not any(c in USERNAME_SPECIAL_CHARS for c in candidate):
            return False
        return all(c in USERNAME_ALLOWED_CHARS for c in candidate)

    def policy_message(self) -> str:
        return (
            f"Username must be {self.min_length}-{self.max_length} characters and include "
            "uppercase letters, lowercase letters and special characters."
        )

    def validate(self, candidate: Any) -> ValidationResult:
        if self.is_valid(candidate):
            return ValidationResult(ok=True)
        return ValidationResult(ok=False, message=self.policy_message())


def run_validator(validator: Validator, value: Any) -> Any:
    """
    Apply a validator inside a pydantic field validator.

    Raises PydanticCustomError so the message lands unchanged in the 422
    `errors` mapping under the field's name.
    """
    result = validator.validate(value)
    if not result.ok:
        raise PydanticCustomError("value_policy", result.message or "Invalid value.")
    return value
