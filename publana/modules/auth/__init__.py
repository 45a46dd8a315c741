"""
Authentication Module - Black Box Interface

Purpose: Validate bearer tokens and admin API keys
Interface: authenticate(), verify_admin_key(), extract_bearer_token()
Hidden: Header parsing, token lookup, key comparison

This module can be completely replaced with any other auth implementation
without affecting other modules.
"""

from .auth import AuthModule, extract_bearer_token
from .service import AuthResult, Authenticator

__all__ = ["AuthModule", "AuthResult", "Authenticator", "extract_bearer_token"]
