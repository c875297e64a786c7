import secrets


def generate_session_token() -> str:
    """32 random bytes, hex encoded"""
    return secrets.token_hex(32)


def generate_otp_code() -> str:
    """Six digit code, never starting with 0"""
    return str(100000 + secrets.randbelow(900000))
