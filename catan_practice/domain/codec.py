"""Copy/paste save strings for a hex layout.

A save string is ``catan1:`` followed by one code per slot, in slot order,
joined with dots. Each code is a terrain letter plus the number token, or a
bare ``D`` for the desert::

    catan1:M10.P2.F9.G12.H6.P4.H10.G9.F11.D.F3.M8...
"""

from __future__ import annotations

from typing import Dict, List, Sequence

from .board import HEX_COUNT, HexLayout, HexTile, Terrain, build_layout
from .validation import PIP_VALUES, is_valid_board, validate_standard_counts

FORMAT_PREFIX = "catan1:"
SLOT_SEPARATOR = "."

TERRAIN_CODES: Dict[Terrain, str] = {
    Terrain.FOREST: "F",
    Terrain.HILLS: "H",
    Terrain.PASTURE: "P",
    Terrain.FIELDS: "G",
    Terrain.MOUNTAINS: "M",
    Terrain.DESERT: "D",
}
CODE_TERRAINS: Dict[str, Terrain] = {code: terrain for terrain, code in TERRAIN_CODES.items()}


class DecodeError(ValueError):
    """Raised when a save string does not describe a standard layout."""


def encode_board(layout: Sequence[HexTile]) -> str:
    if len(layout) != HEX_COUNT:
        raise ValueError(f"Expected {HEX_COUNT} hexes, received {len(layout)}.")
    codes = []
    for tile in sorted(layout, key=lambda item: item.id):
        code = TERRAIN_CODES[tile.terrain]
        if tile.token_number is not None:
            code += str(tile.token_number)
        codes.append(code)
    return FORMAT_PREFIX + SLOT_SEPARATOR.join(codes)


def decode_board(text: str) -> HexLayout:
    payload = "".join(str(text).split()).upper()
    prefix = FORMAT_PREFIX.upper()
    if not payload.startswith(prefix):
        raise DecodeError(f"Save string must start with '{FORMAT_PREFIX}'.")

    codes = payload[len(prefix):].split(SLOT_SEPARATOR)
    if len(codes) != HEX_COUNT:
        raise DecodeError(f"Expected {HEX_COUNT} hex codes, found {len(codes)}.")

    terrains: List[Terrain] = []
    numbers: List[int] = []
    for slot, code in enumerate(codes):
        terrain = CODE_TERRAINS.get(code[:1])
        if terrain is None:
            raise DecodeError(f"Unknown terrain code {code[:1]!r} in slot {slot}.")
        number_text = code[1:]
        if terrain is Terrain.DESERT:
            if number_text:
                raise DecodeError(f"Desert in slot {slot} cannot carry a number token.")
        else:
            if not (number_text.isascii() and number_text.isdigit()) or int(number_text) not in PIP_VALUES:
                raise DecodeError(f"Slot {slot} needs a number token in 2-12 other than 7, got {code!r}.")
            numbers.append(int(number_text))
        terrains.append(terrain)

    layout = build_layout(terrain_order=terrains, token_order=numbers)
    if not validate_standard_counts(layout):
        raise DecodeError("Save string does not use the standard terrain and number token set.")
    if not is_valid_board(layout):
        raise DecodeError("Save string describes a board that breaks the number placement rules.")
    return layout
