from dataclasses import dataclass

from .rfid.schema import Wiegand26Result


@dataclass
class PlateRecord:
    plate: str
    label: str = ""


@dataclass
class PlateCard:
    plate: str
    label: str
    wiegand26: Wiegand26Result
    wiegand64: str


@dataclass
class ConversionSummary:
    num_converted: int = 0
    num_rejected: int = 0
    num_collisions: int = 0

    @property
    def num_records(self) -> int:
        records: int = 0
        records += self.num_converted
        records += self.num_rejected
        return records
