"""Algorithm registry.

The OID table is fixed at import. Key variants add themselves to the
constructor table with ``@register(name)`` when ``spki.algorithms`` is
imported; nothing is registered after that, so lookups need no locking.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Dict, List, Optional, Type, TypeVar

from .keys import PublicKey

_NAME_TO_OID: Dict[str, str] = {
    "RSA": "1.2.840.113549.1.1.1",
    "DSA": "1.2.840.10040.4.1",
    "DH": "1.2.840.10046.2.1",
    "EC": "1.2.840.10045.2.1",
    "Ed25519": "1.3.101.112",
    "Ed448": "1.3.101.113",
    "X25519": "1.3.101.110",
    "X448": "1.3.101.111",
}

NAME_TO_OID = MappingProxyType(_NAME_TO_OID)
OID_TO_NAME = MappingProxyType({oid: name for name, oid in _NAME_TO_OID.items()})

K = TypeVar("K", bound=Type[PublicKey])


class _Registry:
    def __init__(self) -> None:
        self._items: Dict[str, Type[PublicKey]] = {}

    def register(self, name: str) -> Callable[[K], K]:
        if name not in NAME_TO_OID:
            raise ValueError(f"No OID known for algorithm: {name}")

        def _inner(cls: K) -> K:
            if name in self._items:
                raise ValueError(f"Algorithm already registered: {name}")
            self._items[name] = cls
            return cls
        return _inner

    def get(self, name: str) -> Optional[Type[PublicKey]]:
        return self._items.get(name)

    def list(self) -> List[str]:
        return sorted(self._items)


registry = _Registry()
register = registry.register


def oid_to_name(oid: str) -> Optional[str]:
    return OID_TO_NAME.get(oid)


def name_to_oid(name: str) -> Optional[str]:
    return NAME_TO_OID.get(name)


def name_to_constructor(name: str) -> Optional[Type[PublicKey]]:
    return registry.get(name)


def supported_algorithms() -> List[str]:
    return registry.list()
