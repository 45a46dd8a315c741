"""
Tokens Module - Black Box Interface

Purpose: Bearer token lifecycle
Interface: TokenStore.add/remove/list/contains, TokenGenerator.generate(),
           TokenConsole.generate/revoke/list
Hidden: Option key layout, entropy sources
"""

from .console import TokenConsole
from .generator import TOKEN_LENGTH, TokenGenerator
from .store import DEFAULT_OPTION_KEY, TokenStore, mask_token

__all__ = [
    "TokenStore",
    "TokenGenerator",
    "TokenConsole",
    "TOKEN_LENGTH",
    "DEFAULT_OPTION_KEY",
    "mask_token",
]
