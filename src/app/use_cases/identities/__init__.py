"""
Identity Use Cases
"""

from .dtos import RegisterIdentityResponse
from .register_identity_use_case import RegisterIdentityUseCase

__all__ = [
    "RegisterIdentityUseCase",
    "RegisterIdentityResponse",
]
