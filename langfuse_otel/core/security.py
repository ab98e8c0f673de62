from __future__ import annotations

import base64


def encode_basic_auth(public_key: str, secret_key: str) -> str:
    raw = f"{public_key}:{secret_key}".encode("utf-8")
    return base64.b64encode(raw).decode("ascii")


def basic_auth_header(public_key: str, secret_key: str) -> str:
    return f"Basic {encode_basic_auth(public_key, secret_key)}"


def mask_secret(secret: str) -> str:
    if len(secret) <= 8:
        return "*" * len(secret)
    return f"{secret[:4]}...{secret[-4:]}"
