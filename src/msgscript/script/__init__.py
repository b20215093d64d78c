"""
Dialogue script codec.

``parse`` turns script text into a TokenStream, ``pack`` turns it back.
"""

from .codec import ScriptParseError, parse, pack, pack_token
from .tokens import Alias, Animation, Other, Token, TokenStream, Window

__all__ = [
    "parse",
    "pack",
    "pack_token",
    "ScriptParseError",
    "TokenStream",
    "Token",
    "Window",
    "Animation",
    "Alias",
    "Other",
]
