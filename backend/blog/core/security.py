# blog/core/security.py
"""
Security module for authentication.
Handles password hashing, JWT token creation/validation, and cryptographic operations.
"""
import os
import uuid
import datetime as dt
import jwt  # PyJWT
from passlib.context import CryptContext
from dotenv import load_dotenv
from pathlib import Path

# Load environment variables from project root
ENV_PATH = Path(__file__).resolve().parents[2] / ".env"
load_dotenv(dotenv_path=ENV_PATH)

# Password hashing context
# Argon2 is a modern, salted, memory-hard password hashing algorithm
pwd_context = CryptContext(
    schemes=["argon2"],  # Use Argon2 for password hashing
    deprecated="auto",   # Automatically handle deprecated schemes
)

# JWT configuration
JWT_SECRET = os.getenv("JWT_SECRET", "dev-secret")  # Secret key for JWT signing (use strong secret in production)
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))  # Token expiration time in minutes
JWT_ALG = "HS256"  # JWT signing algorithm (HMAC SHA-256)


def hash_password(plain: str) -> str:
    """
    Hash a plain text password using Argon2.

    Args:
        plain: Plain text password to hash

    Returns:
        Hashed password string (safe to store in database)
    """
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """
    Verify a plain text password against a hashed password.

    Args:
        plain: Plain text password to verify
        hashed: Hashed password from database

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain, hashed)


def token_ttl_seconds() -> int:
    return ACCESS_TOKEN_EXPIRE_MINUTES * 60


def create_access_token(user_id: str) -> str:
    """
    Create a JWT access token for user authentication.

    Args:
        user_id: Unique user identifier (UUID string)

    Returns:
        Encoded JWT token string

    Token payload includes:
        - sub: Subject (user ID)
        - jti: Unique token ID, the key stored in the revocation set on logout
        - iat: Issued at timestamp
        - exp: Expiration timestamp
    """
    now = dt.datetime.now(dt.timezone.utc)
    payload = {
        "sub": user_id,
        "jti": uuid.uuid4().hex,
        "iat": now,
        "exp": now + dt.timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALG)


def decode_access_token(token: str) -> dict:
    """
    Decode and validate a JWT access token.

    Args:
        token: JWT token string to decode

    Returns:
        Decoded token payload dictionary containing sub, jti, iat, exp

    Raises:
        jwt.ExpiredSignatureError: If token has expired
        jwt.InvalidTokenError: If token is invalid or malformed
    """
    return jwt.decode(
        token,
        JWT_SECRET,
        algorithms=[JWT_ALG],
        options={"require": ["sub", "jti", "exp"]},
    )
