"""Ports (interfaces) for the IAM bounded context."""

from iam.ports.repositories import IUserRepository

__all__ = [
    "IUserRepository",
]
