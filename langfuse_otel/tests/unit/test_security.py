import base64

from langfuse_otel.core.security import basic_auth_header, encode_basic_auth, mask_secret


def test_encode_basic_auth_matches_standard_base64():
    assert encode_basic_auth("pk", "sk") == "cGs6c2s="
    encoded = encode_basic_auth("pk-lf-1234", "sk-lf-5678")
    assert base64.b64decode(encoded).decode("utf-8") == "pk-lf-1234:sk-lf-5678"


def test_encode_basic_auth_pads_every_length():
    for public_key in ("a", "ab", "abc"):
        encoded = encode_basic_auth(public_key, "s")
        assert len(encoded) % 4 == 0
        assert base64.b64decode(encoded).decode("utf-8") == f"{public_key}:s"


def test_basic_auth_header():
    assert basic_auth_header("pk", "sk") == "Basic cGs6c2s="


def test_mask_secret():
    assert mask_secret("pk-lf-1234567890") == "pk-l...7890"
    assert mask_secret("short") == "*****"
