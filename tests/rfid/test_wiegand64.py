from unittest import TestCase

from plate_wiegand.rfid.schema import InputTooLong, MalformedInput
from plate_wiegand.rfid.wiegand64 import (
    character_value, decode, encode, value_character
)


class TestWiegand64(TestCase):

    def setUp(self) -> None:
        pass

    def test_encode_blank_is_none(self) -> None:
        for blank in [None, "", " ", "   "]:
            with self.subTest(plate=blank):
                self.assertIsNone(encode(blank))

    def test_encode_too_long(self) -> None:
        for plate in ["azertyuiop0987", "1234567899879825", "nnnnnnnnnnnnnnnn"]:
            with self.subTest(plate=plate):
                with self.assertRaises(InputTooLong):
                    encode(plate)

    def test_encode_known_plates(self) -> None:
        expectations: list[tuple[str, str]] = [
            ("AZERTYUIOP", "66B37ABB72BA2A29"),
            ("Z", "6000000000000033"),
            ("1WFV385", "6000011C1FBD3615"),
            ("1SDF534", "6000011B1D7D54D4"),
            ("ADF543", "600000069D7D5513"),
            ("DE56G", "600000001D7955A0"),
            ("FF23DDFDF5", "67DF49375D7DD7D5"),
            ("AZERTYUIOI", "66B37ABB72BA2A22"),
            ("1FRDEERE", "600045FADD79EADE"),
            ("2ZZD456", "6000012CF3754556"),
            ("1T1234", "600000046D4524D4"),
            # short plates
            ("A", "600000000000001A"),
            ("EE", "600000000000079E"),
            ("012", "6000000000010452"),
            ("789", "6000000000017619"),
            ("1337", "60000000004534D7"),
            ("ZIP", "60000000000338A9"),
            ("PL", "6000000000000A65"),
            # special characters
            ("HK 55 EVB", "600002191555EBDB"),
            ("VR46#T", "600000002FAD45AD"),
            (" VR46#T   ", "600000002FAD45AD"),
        ]
        for plate, expected_hex in expectations:
            with self.subTest(plate=plate):
                hexadecimal = encode(plate)
                self.assertEqual(hexadecimal, expected_hex)
                self.assertEqual(len(hexadecimal), 16)

    def test_decode_blank_is_none(self) -> None:
        for blank in [None, "", " ", "   "]:
            with self.subTest(hexadecimal=blank):
                self.assertIsNone(decode(blank))

    def test_decode_known_codes(self) -> None:
        expectations: list[tuple[str, str]] = [
            ("66B37ABB72BA2A29", "AZERTYUIOP"),
            ("6000000000000033", "Z"),
            ("6000011C1FBD3615", "1WFV385"),
            ("600002191555EBDB", "HK55EVB"),
            ("66b37abb72ba2a29", "AZERTYUIOP"),
            # header + ten groups of 111111
            ("6FFFFFFFFFFFFFFF", "??????????"),
            # header + nine spaces + one group of 111111
            ("600000000000003F", "?"),
        ]
        for hexadecimal, expected_plate in expectations:
            with self.subTest(hexadecimal=hexadecimal):
                self.assertEqual(decode(hexadecimal), expected_plate)

    def test_decode_any_length(self) -> None:
        # header missing; groups still read from the low 60 bits
        self.assertEqual(decode("1A"), "A")
        self.assertEqual(decode("0"), "")

        # unused codes 1..15 and 52..62 never encode a character
        self.assertEqual(decode(f"{(0b0110 << 60) | 0b000001:X}"), "?")
        self.assertEqual(decode(f"{(0b0110 << 60) | 52:X}"), "?")

        # anything above the header is ignored
        self.assertEqual(decode("FF66B37ABB72BA2A29"), "AZERTYUIOP")

    def test_decode_not_hexadecimal(self) -> None:
        with self.assertRaises(MalformedInput):
            decode("not a plate")

    def test_round_trip(self) -> None:
        for plate in ["A", "Z9", "1WFV385", "AZERTYUIOP", "0000000000", "hk 55 evb"]:
            with self.subTest(plate=plate):
                expected = plate.upper().replace(" ", "")
                self.assertEqual(decode(encode(plate)), expected)

    def test_alphabet(self) -> None:
        self.assertEqual(character_value(" "), 0)
        self.assertEqual(character_value("0"), 16)
        self.assertEqual(character_value("Z"), 51)
        self.assertEqual(character_value("#"), 63)
        self.assertEqual(character_value("a"), 63)

        self.assertEqual(value_character(0), " ")
        self.assertEqual(value_character(16), "0")
        self.assertEqual(value_character(51), "Z")
        self.assertEqual(value_character(63), "?")
        for unused in list(range(1, 16)) + list(range(52, 63)):
            self.assertEqual(value_character(unused), "?")
