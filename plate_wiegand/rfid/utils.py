import re

HEX_DIGITS = re.compile(r'[0-9A-Fa-f]+')


def hex_string_to_int(hex_string: str) -> int:
    """
    Converts a string of hexadecimal digits into an unsigned integer.

    Unlike int(x, 16), prefixes ('0x'), signs and underscores are refused.

    :param hex_string: String containing ASCII hex digits (e.g., '1A98B4B').
    :return: unsigned integer value of the digits
    """
    hex_string = hex_string.strip()
    if not HEX_DIGITS.fullmatch(hex_string):
        raise ValueError(f"'{hex_string}' is not a hexadecimal string")

    return int(hex_string, 16)


def bytes_to_int(byte_list: bytes) -> int:
    """
    Converts a sequence of bytes into a single integer. Python 'int' type can
    support integers of arbitrary bit-size and thus, there may be no practical
    limit to this.

    :param byte_list: bytes representing a big-endian unsigned integer
    :return: unsigned integer representing value of data in bytes
    """
    value: int = 0
    for byte in byte_list:
        value = (value << 8) | byte  # Shift and add the next byte
    return value


def bit_count(value: int) -> int:
    """number of bits set in a non-negative integer"""
    return bin(value).count('1')


def int_to_binary_grouped(value: int, field_widths: list[int]) -> str:
    """convert integer (int) into binary text split along field boundaries

    Args:
        value (int): unsigned value, most significant field first
        field_widths (list[int]): width of each field, eg. [1, 8, 16, 1]

    Raises:
        ValueError: thrown if value does not fit in the fields

    Returns:
        str: grouped string of binary text eg: '0 11010100 1100010110100101 1'
    """
    total_width = sum(field_widths)
    if value < 0 or value.bit_length() > total_width:
        raise ValueError(f"{value} does not fit in {total_width} bits")

    binary_str = f'{value:0{total_width}b}'
    groups: list[str] = []
    position = 0
    for width in field_widths:
        groups.append(binary_str[position:position + width])
        position += width
    return ' '.join(groups)
