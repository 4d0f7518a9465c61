"""
JSON document store.

Transaction handler plus the repositories that read and write through it.
"""

from .tx import JSONTxHandler, TxContext, TxOptions
from .phone_certify import PhoneCertifyRepository
from .parent_account import ParentAuthRepository

__all__ = [
    "JSONTxHandler",
    "TxContext",
    "TxOptions",
    "PhoneCertifyRepository",
    "ParentAuthRepository",
]
