# hospital_api/utils/crypto.py - field encryption for patient identity data

import hashlib
from cryptography.fernet import Fernet
from hospital_api.config.database import settings

fernet = Fernet(settings.encryption_key)


def encrypt_value(value: str) -> str:
    """Encrypt a sensitive value for storage"""
    return fernet.encrypt(value.encode()).decode()


def decrypt_value(encrypted: str) -> str:
    """Decrypt a stored value; raises InvalidToken when the key does not match"""
    return fernet.decrypt(encrypted.encode()).decode()


def hash_value(value: str) -> str:
    """Deterministic lookup key for an encrypted value"""
    return hashlib.sha256(value.strip().encode()).hexdigest()
