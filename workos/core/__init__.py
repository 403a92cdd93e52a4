"""Core SDK primitives.

Module Structure:
    - client.py       : requests-based transport with retry and error mapping
    - crypto.py       : HMAC-SHA256 provider
    - signature.py    : ``t=..., v1=...`` header signing and verification
    - pagination.py   : cursor-based AutoPaginatable
    - serializers.py  : list deserialization and camelCase helpers
    - exceptions.py   : typed exception hierarchy

These modules are not auto-imported; import them explicitly:
    from workos.core.signature import SignatureProvider
    from workos.core.pagination import AutoPaginatable
"""
