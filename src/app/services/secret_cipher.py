"""Secret Cipher Interface"""

from abc import ABC, abstractmethod


class SecretCipher(ABC):
    """Reversible encryption for stored secrets (API keys, processor config)"""

    @abstractmethod
    def encrypt(self, plaintext: str) -> str:
        pass

    @abstractmethod
    def decrypt(self, token: str) -> str:
        pass
