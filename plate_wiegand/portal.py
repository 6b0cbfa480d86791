import aiohttp
from aiohttp import ClientResponseError, ClientConnectorError
from asyncio import TimeoutError
import logging

from .rfid import wiegand26, wiegand64
from .rfid.sanitize import sanitize
from .rfid.schema import WiegandException
from .schema import ConversionSummary, PlateCard, PlateRecord
from .literals import DEFAULT_PORTAL_TIMEOUT_SECS

logger = logging.getLogger(__name__)


def process_plate_list(content: str) -> list[PlateRecord]:

    # plate list format, one plate per line:
    # plate[,label]\r\n

    records: list[PlateRecord] = []

    for line_number, record in enumerate(content.splitlines(), start=1):
        if not record.strip():
            continue

        parts = record.split(',', 1)
        plate = sanitize(parts[0])
        label = parts[1].strip() if len(parts) > 1 else ""

        # plates mangled in the source list ('', '---') carry nothing to encode
        if plate is None:
            logger.warning("warning! line %s has no usable plate: %s",
                           line_number, record)
            continue

        records.append(PlateRecord(plate=plate, label=label))

    return records


def convert_plates(records: list[PlateRecord]) -> tuple[list[PlateCard], ConversionSummary]:
    """encode each plate record in both Wiegand formats

    Records that cannot be encoded are logged and skipped. Distinct plates
    landing on the same Wiegand26 code are kept but logged, since a
    controller cannot tell them apart.

    Args:
        records (list[PlateRecord]): plates to convert

    Returns:
        tuple[list[PlateCard], ConversionSummary]: cards in record order and
            counts of what happened
    """
    summary = ConversionSummary()
    cards: list[PlateCard] = []
    seen: dict[str, str] = {}

    for record in records:
        try:
            w26 = wiegand26.encode(record.plate)
            w64 = wiegand64.encode(record.plate)
        except WiegandException as e:
            logger.error("unable to convert plate: %s [%s]", record, e)
            summary.num_rejected += 1
            continue

        if w26 is None or w64 is None:
            logger.warning("plate '%s' is blank after sanitizing", record.plate)
            summary.num_rejected += 1
            continue

        first_plate = seen.get(w26.hexadecimal)
        if first_plate is not None and first_plate != record.plate:
            logger.warning("plates '%s' and '%s' share wiegand26 code %s",
                           first_plate, record.plate, w26.hexadecimal)
            summary.num_collisions += 1
        else:
            seen[w26.hexadecimal] = record.plate

        cards.append(PlateCard(plate=record.plate, label=record.label,
                               wiegand26=w26, wiegand64=w64))
        summary.num_converted += 1

    logger.info("converted %s of %s plates (%s rejected, %s collisions)",
                summary.num_converted, summary.num_records,
                summary.num_rejected, summary.num_collisions)

    return cards, summary


class PlatesPortalClient:

    url_get_plates_list: str
    timeout_secs: float

    def __init__(self, url_get_plates_list: str,
                 timeout_secs: float = DEFAULT_PORTAL_TIMEOUT_SECS) -> None:

        self.url_get_plates_list = url_get_plates_list
        self.timeout_secs = timeout_secs

    async def get_plates_list(self) -> list[PlateRecord]:
        try:
            timeout = aiohttp.ClientTimeout(total=self.timeout_secs)
            async with aiohttp.ClientSession(timeout=timeout,
                                             raise_for_status=True) as session:
                async with session.get(self.url_get_plates_list) as response:
                    response_data = await response.read()
                    response_text = response_data.decode('utf-8')
                    return process_plate_list(response_text)

        except ClientResponseError as e:
            # server returned an error response (e.g., 404, 500, etc.)
            logger.error("HTTP Status Error: %s", e.status)
            raise
        except ClientConnectorError as e:
            # connection to server failed
            logger.error("Connection Error: %s", e)
            raise
        except TimeoutError:
            # The request timed out
            logger.error("The request timed out")
            raise
        except UnicodeDecodeError as e:
            # portal answered with something other than UTF-8 text
            logger.error("Plates list is not valid UTF-8: %s", e)
            raise
