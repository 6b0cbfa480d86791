"""

Wiegand 26-bit support for licence plates

A Wiegand26 frame carries 24 bits of data between two parity bits:

 bit 0      even parity over bits 0..12
 bits 1-8   facility code
 bits 9-24  ID number
 bit 25     odd parity over bits 13..25

A licence plate does not fit in 24 bits, so the data bits are taken from the
last 3 bytes of the SHA-1 digest of the sanitized plate. The conversion is
one way; decoding only recovers the facility code and ID number.

eg.
1WFV385 -> 1A98B4B -> facility code 212, ID number 50597

"""

import logging
from typing import Optional

from .digest import sha1
from .sanitize import sanitize
from .schema import InputTooLong, MalformedInput, Wiegand26Result
from .utils import bit_count, bytes_to_int, hex_string_to_int

logger = logging.getLogger(__name__)

MAX_NUMBER_OF_CHARACTERS = 10
WIEGAND26_LENGTH = 26
HEX_DIGITS = 7

# bit 0 parity covers the upper 13 positions of the frame, including itself
EVEN_PARITY_FIELD = 0b11111111111110000000000000
EVEN_PARITY_MASK = 0b10000000000000000000000000

# bit 25 parity covers the lower 13 positions of the frame, including itself
ODD_PARITY_FIELD = 0b00000000000001111111111111
ODD_PARITY_MASK = 0b00000000000000000000000001

FACILITY_CODE_POSITION = 1
FACILITY_CODE_WIDTH = 8
ID_NUMBER_POSITION = 9
ID_NUMBER_WIDTH = 16
PAYLOAD_POSITION = 1
PAYLOAD_WIDTH = 24


def encode(licence_plate: Optional[str]) -> Optional[Wiegand26Result]:
    """Convert a licence plate to a Wiegand26 frame

    Args:
        licence_plate (Optional[str]): raw plate text, at most 10 characters
            once sanitized

    Raises:
        InputTooLong: sanitized plate is longer than 10 characters

    Returns:
        Optional[Wiegand26Result]: decoded fields of the frame, or None when
            the plate is blank
    """
    sanitized = sanitize(licence_plate)
    if sanitized is None:
        return None

    if len(sanitized) > MAX_NUMBER_OF_CHARACTERS:
        raise InputTooLong('Wiegand26', sanitized, MAX_NUMBER_OF_CHARACTERS)

    payload = bytes_to_int(sha1(sanitized)[-3:])

    # room for the odd parity bit at the bottom
    frame = add_parity_bits(payload << 1)

    hexadecimal = f'{frame:0{HEX_DIGITS}X}'
    logger.debug("wiegand26 encoded '%s' -> %s", sanitized, hexadecimal)

    return decode(hexadecimal)


def decode(hexadecimal: Optional[str]) -> Optional[Wiegand26Result]:
    """Read every field of a hexadecimal Wiegand26 frame

    Args:
        hexadecimal (Optional[str]): frame as hex digits, eg. '1A98B4B'

    Raises:
        MalformedInput: only whitespace, not hexadecimal or wider than 26 bits

    Returns:
        Optional[Wiegand26Result]: None when hexadecimal is None or empty
    """
    # whitespace-only text is not absent; _parse_frame rejects it
    if not hexadecimal:
        return None

    frame = _parse_frame(hexadecimal)
    facility_code = _read_field(frame, FACILITY_CODE_POSITION, FACILITY_CODE_WIDTH)
    id_number = _read_field(frame, ID_NUMBER_POSITION, ID_NUMBER_WIDTH)

    return Wiegand26Result(
        hexadecimal=f'{frame:0{HEX_DIGITS}X}',
        decimal_payload=_read_field(frame, PAYLOAD_POSITION, PAYLOAD_WIDTH),
        facility_code=facility_code,
        id_number=id_number,
        facility_code_and_id_number=concatenate_facility_code_and_id_number(
            facility_code, id_number)
    )


def read_facility_code_from(hexadecimal: str) -> int:
    """
    Reads the facility code from a hexadecimal Wiegand26 frame.

    :param hexadecimal: a well-formed Wiegand26 frame; cannot be None or blank
    :return: the facility code (8 bits at position 1)
    """
    return _read_field(_parse_frame(hexadecimal),
                       FACILITY_CODE_POSITION, FACILITY_CODE_WIDTH)


def read_id_number_from(hexadecimal: str) -> int:
    """
    Reads the ID number from a hexadecimal Wiegand26 frame.

    :param hexadecimal: a well-formed Wiegand26 frame; cannot be None or blank
    :return: the ID number (16 bits at position 9)
    """
    return _read_field(_parse_frame(hexadecimal),
                       ID_NUMBER_POSITION, ID_NUMBER_WIDTH)


def read_decimal_payload(hexadecimal: str) -> int:
    """
    Reads the 3 bytes between the parity bits of a hexadecimal Wiegand26 frame.

    :param hexadecimal: a well-formed Wiegand26 frame; cannot be None or blank
    :return: facility code and ID number as a single 24-bit value
    """
    return _read_field(_parse_frame(hexadecimal),
                       PAYLOAD_POSITION, PAYLOAD_WIDTH)


def has_valid_parity(hexadecimal: str) -> bool:
    """whether both parity bits of a hexadecimal Wiegand26 frame check out

    Frames read off a reader or typed in by hand can be damaged; encode()
    never produces one that fails this.
    """
    frame = _parse_frame(hexadecimal)
    even_ok = bit_count(frame & EVEN_PARITY_FIELD) % 2 == 0
    odd_ok = bit_count(frame & ODD_PARITY_FIELD) % 2 == 1
    return even_ok and odd_ok


def concatenate_facility_code_and_id_number(facility_code: int,
                                            id_number: int) -> int:
    # decimal concatenation as printed on badges, eg. 212 + 00042 -> 21200042
    return int(f'{facility_code}{id_number:05d}')


def set_even_parity_bit(frame: int) -> int:
    if bit_count(frame & EVEN_PARITY_FIELD) % 2 != 0:
        return frame | EVEN_PARITY_MASK
    return frame


def set_odd_parity_bit(frame: int) -> int:
    if bit_count(frame & ODD_PARITY_FIELD) % 2 == 0:
        return frame | ODD_PARITY_MASK
    return frame


def add_parity_bits(frame: int) -> int:
    return set_odd_parity_bit(set_even_parity_bit(frame))


def _parse_frame(hexadecimal: str) -> int:
    if hexadecimal is None or not hexadecimal.strip():
        raise MalformedInput("a Wiegand26 cannot be empty or blank")

    try:
        frame = hex_string_to_int(hexadecimal)
    except ValueError as e:
        raise MalformedInput(f"Wiegand26 is not hexadecimal: {e}") from e

    # measured on the value itself; leading zero digits are allowed
    if frame.bit_length() > WIEGAND26_LENGTH:
        raise MalformedInput("Wiegand26 is too long.")

    return frame


def _read_field(frame: int, position: int, width: int) -> int:
    # position counts from the most significant bit of the 26-bit frame
    shift = WIEGAND26_LENGTH - position - width
    return (frame >> shift) & ((1 << width) - 1)
