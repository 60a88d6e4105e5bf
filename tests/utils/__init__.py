"""Test utilities for transaction namer tests."""

from .test_helpers import FailingAgent, IdentitySession, PlainSession

__all__ = [
    "FailingAgent",
    "IdentitySession",
    "PlainSession",
]
