"""Framework adapters.

Submodules import their framework eagerly, so import them by full path:
``cehttp.integrations.fastapi`` or ``cehttp.integrations.http_client``.
"""
