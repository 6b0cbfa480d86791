"""

Wiegand 64-bit support for licence plates

A Wiegand64 frame is a 4-bit header (0110) followed by ten 6-bit characters,
leftmost character in the most significant group. Plates shorter than ten
characters are left-padded with spaces.

 space          -> 0b000000
 '0'..'9'       -> 0b010000..0b011001
 'A'..'Z'       -> 0b011010..0b110011
 anything else  -> 0b111111

Unlike Wiegand26 the conversion is reversible.

eg.
AZERTYUIOP -> 66B37ABB72BA2A29

"""

import logging
from types import MappingProxyType
from typing import Optional

from .sanitize import sanitize
from .schema import InputTooLong, MalformedInput
from .utils import hex_string_to_int

logger = logging.getLogger(__name__)

MAX_NUMBER_OF_CHARACTERS = 10
NUMBER_OF_BITS_PER_CHARACTER = 6
CHARACTER_MASK = 0b111111
HEADER = 0b0110 << 60
HEX_DIGITS = 16

CHARACTER_SET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
VALUE_OFFSET = 0b010000
EMPTY = 0b000000
UNKNOWN_CHARACTER = 0b111111
UNKNOWN_MARKER = '?'

CHARACTER_LOOKUP = MappingProxyType({
    ' ': EMPTY,
    **{character: VALUE_OFFSET + index
       for index, character in enumerate(CHARACTER_SET)}
})


def _build_reverse_lookup() -> tuple[str, ...]:
    # index = 6-bit code, value = character
    reverse_lookup: list[str] = [UNKNOWN_MARKER] * (CHARACTER_MASK + 1)
    for character, value in CHARACTER_LOOKUP.items():
        reverse_lookup[value] = character
    return tuple(reverse_lookup)


REVERSE_LOOKUP = _build_reverse_lookup()


def character_value(character: str) -> int:
    """6-bit code of a character; unknown characters map to 0b111111"""
    return CHARACTER_LOOKUP.get(character, UNKNOWN_CHARACTER)


def value_character(value: int) -> str:
    """character for a 6-bit code; unused codes map to '?'"""
    return REVERSE_LOOKUP[value & CHARACTER_MASK]


def encode(licence_plate: Optional[str]) -> Optional[str]:
    """Convert a licence plate to a hexadecimal Wiegand64 frame

    Args:
        licence_plate (Optional[str]): raw plate text, at most 10 characters
            once sanitized

    Raises:
        InputTooLong: sanitized plate is longer than 10 characters

    Returns:
        Optional[str]: 16 uppercase hex digits, or None when the plate is blank
    """
    sanitized = sanitize(licence_plate)
    if sanitized is None:
        return None

    if len(sanitized) > MAX_NUMBER_OF_CHARACTERS:
        raise InputTooLong('Wiegand64', sanitized, MAX_NUMBER_OF_CHARACTERS)

    frame = HEADER
    for position, character in enumerate(sanitized.rjust(MAX_NUMBER_OF_CHARACTERS)):
        frame |= character_value(character) << _shift_for(position)

    hexadecimal = f'{frame:0{HEX_DIGITS}X}'
    logger.debug("wiegand64 encoded '%s' -> %s", sanitized, hexadecimal)
    return hexadecimal


def decode(hexadecimal: Optional[str]) -> Optional[str]:
    """Convert a hexadecimal Wiegand64 frame back to a licence plate

    Any hex string decodes; groups that are not a known character come back
    as '?'. Only the low 60 bits are read, the header is not checked.

    Args:
        hexadecimal (Optional[str]): frame as hex digits

    Raises:
        MalformedInput: text is not hexadecimal

    Returns:
        Optional[str]: plate without padding, or None when hexadecimal is blank
    """
    if hexadecimal is None or not hexadecimal.strip():
        return None

    try:
        frame = hex_string_to_int(hexadecimal)
    except ValueError as e:
        raise MalformedInput(f"Wiegand64 is not hexadecimal: {e}") from e

    plate = ''.join(
        value_character(frame >> _shift_for(position))
        for position in range(MAX_NUMBER_OF_CHARACTERS)
    )
    return plate.strip(' ')


def _shift_for(position: int) -> int:
    return NUMBER_OF_BITS_PER_CHARACTER * (MAX_NUMBER_OF_CHARACTERS - position - 1)
