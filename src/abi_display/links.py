"""Route building for address cross-reference links."""

from __future__ import annotations

DEFAULT_ADDRESS_BASE = "/address"


class AddressRouter:
    """Build the page path for an address under a configurable prefix.

    Instances are callables, so they can be passed wherever a plain
    ``address_path`` function is expected::

        renderer = Renderer(address_path=AddressRouter("/explorer/address"))
    """

    def __init__(self, base_path: str = DEFAULT_ADDRESS_BASE) -> None:
        self.base_path = base_path.rstrip("/")

    def __call__(self, address_hex: str) -> str:
        return f"{self.base_path}/{address_hex}"

    def __repr__(self) -> str:
        return f"AddressRouter({self.base_path!r})"


address_path = AddressRouter()
