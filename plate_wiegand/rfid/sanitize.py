"""

Licence plate normalization shared by the Wiegand26 and Wiegand64 codecs.

Plates are typed by people and read by cameras, so the same plate shows up
as 'hk-55-evb', ' HK 55 EVB ' or 'HK55EVB'. Every codec works on the
canonical form: trimmed, uppercased and stripped of anything that is not
A-Z or 0-9.

"""

import re
from typing import Optional

ILLEGAL_PLATE_CHARACTERS = re.compile(r'[^A-Z0-9]')


def sanitize(licence_plate: Optional[str]) -> Optional[str]:
    """
    Normalizes a licence plate for encoding.

    :param licence_plate: raw plate text, may be None
    :return: uppercase plate of A-Z and 0-9 only, or None when nothing remains
    """
    if not licence_plate:
        return None

    sanitized = ILLEGAL_PLATE_CHARACTERS.sub('', licence_plate.strip().upper())

    return sanitized or None
