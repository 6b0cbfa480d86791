from dataclasses import dataclass


class WiegandException(ValueError):
    pass


class InputTooLong(WiegandException):

    value: str

    def __init__(self, format_name: str, value: str, max_length: int) -> None:
        self.value = value
        super().__init__(f"{format_name} does not support licence plate "
                         f"containing more than {max_length} characters: {value}")


class MalformedInput(WiegandException):
    pass


@dataclass(frozen=True)
class Wiegand26Result:
    # uppercase hexadecimal representation of the 26-bit frame (7 chars)
    hexadecimal: str

    # the 3 bytes between the parity bits
    decimal_payload: int

    # 8 bits at position 1
    facility_code: int

    # 16 bits at position 9
    id_number: int

    # decimal facility code followed by the zero-padded id number
    facility_code_and_id_number: int
