"""Fernet Secret Cipher Implementation"""

from typing import Optional, Union
from cryptography.fernet import Fernet
from src.app.services.secret_cipher import SecretCipher


class FernetSecretCipher(SecretCipher):
    """
    Symmetric encryption of stored secrets with Fernet (AES-128-CBC + HMAC)

    The key is a urlsafe base64 32-byte key (``Fernet.generate_key()``).
    Without a key every operation raises, so a misconfigured deployment
    fails the request instead of storing plaintext.
    """

    def __init__(self, key: Optional[Union[str, bytes]]):
        self._fernet = None
        if key:
            self._fernet = Fernet(key.encode() if isinstance(key, str) else key)

    def _require(self) -> Fernet:
        if self._fernet is None:
            raise RuntimeError("API_KEY_ENCRYPTION_KEY is not configured")
        return self._fernet

    def encrypt(self, plaintext: str) -> str:
        return self._require().encrypt(plaintext.encode("utf-8")).decode("ascii")

    def decrypt(self, token: str) -> str:
        return self._require().decrypt(token.encode("ascii")).decode("utf-8")
