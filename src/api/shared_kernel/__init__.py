"""Shared Kernel module.

Building blocks that both the IAM and Dosing contexts depend on: the SSO
handshake primitives in ``shared_kernel.auth`` and the observation context
used by every domain probe. Nothing here imports a bounded context.
"""
