"""Account roles."""
from __future__ import annotations

from enum import Enum


class UserRole(str, Enum):
    BUYER = "buyer"
    MERCHANT = "merchant"
    ADMIN = "admin"
