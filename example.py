"""Example usage of the abi_display library."""

from abi_display import ERROR, DynamicValue, Renderer, copy_text, value_html
from abi_display.links import AddressRouter

# Decoded values as an ABI decoder would hand them over
owner = bytes.fromhex("5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed")
spender = bytes.fromhex("fB6916095ca1df60bB79Ce92cE3Ea74c37c5d359")

approvals = [
    (owner, 1_000_000, True),
    (spender, 0, False),
]

# Indented HTML for a <pre> block, addresses linked to their pages
print(value_html("(address,uint256,bool)[]", approvals))
print()

# The same value as a flat literal for the clipboard
print(copy_text("(address,uint256,bool)[]", approvals))
print()

# Links under a custom route, or no links at all
renderer = Renderer(address_path=AddressRouter("/explorer/address"))
print(renderer.value_html("address", owner))
print(value_html("address", owner, no_links=True))
print()

# A payload whose type could not be resolved is shown as raw hex
print(copy_text("uint256[]", DynamicValue(b"\x00\x01\x02")))

# Mismatched values never raise; they come back as ERROR
result = value_html("(address)", (owner, spender))
print("cannot render" if result is ERROR else result)
