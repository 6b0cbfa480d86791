from .configuration import Configuration, get_config
from .portal import PlatesPortalClient, convert_plates, process_plate_list
from .rfid import wiegand26, wiegand64
from .rfid.schema import WiegandException, Wiegand26Result
from .rfid.utils import int_to_binary_grouped, hex_string_to_int
from .schema import PlateCard, PlateRecord
from .literals import (
    DEFAULT_LOG_FILE_BACKUP_COUNT,
    DEFAULT_LOG_FILE_MAX_BYTES,
    DEFAULT_LOG_FILE_NAME,
    OUTPUT_FORMAT_WIEGAND64
)

import argparse
import asyncio
import logging
from logging.handlers import RotatingFileHandler
import os
import sys
from typing import Optional

# third party libs
from aiohttp import ClientError


logger = logging.getLogger(__name__)

# even parity, facility code, id number, odd parity
WIEGAND26_FIELD_WIDTHS = [1, 8, 16, 1]


def configure_logging(config: Configuration, verbose: bool = False) -> None:
    root_logger = logging.getLogger()

    logs_path = config.logging.path
    if not os.path.exists(logs_path):
        os.makedirs(logs_path)

    log_file = os.path.join(logs_path, DEFAULT_LOG_FILE_NAME)

    # 5 MB per file, keep 5 old copies
    file_handler = RotatingFileHandler(log_file,
                                       maxBytes=DEFAULT_LOG_FILE_MAX_BYTES,
                                       backupCount=DEFAULT_LOG_FILE_BACKUP_COUNT)

    console_handler = logging.StreamHandler()

    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    file_handler.setFormatter(formatter)
    console_handler.setFormatter(formatter)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    # set levels
    root_logger.setLevel(logging.DEBUG)
    console_handler.setLevel(logging.DEBUG if verbose else config.logging.console_level)
    file_handler.setLevel(logging.DEBUG)

    # squelch noisy module loggers
    logging.getLogger('asyncio').setLevel(logging.WARNING)


def format_wiegand26(result: Wiegand26Result) -> str:
    return (f"{result.hexadecimal} facility={result.facility_code} "
            f"id={result.id_number} payload={result.decimal_payload} "
            f"combined={result.facility_code_and_id_number}")


def format_card(card: PlateCard, output_format: str) -> str:
    if output_format == OUTPUT_FORMAT_WIEGAND64:
        return f"{card.plate},{card.label},{card.wiegand64}"
    return (f"{card.plate},{card.label},{card.wiegand26.hexadecimal},"
            f"{card.wiegand26.facility_code},{card.wiegand26.id_number}")


def cmd_encode26(args: argparse.Namespace, config: Configuration) -> None:
    for plate in args.values:
        result = wiegand26.encode(plate)
        print(f"{plate}: {format_wiegand26(result) if result else '-'}")


def cmd_decode26(args: argparse.Namespace, config: Configuration) -> None:
    for hexadecimal in args.values:
        result = wiegand26.decode(hexadecimal)
        print(f"{hexadecimal}: {format_wiegand26(result) if result else '-'}")


def cmd_encode64(args: argparse.Namespace, config: Configuration) -> None:
    for plate in args.values:
        print(f"{plate}: {wiegand64.encode(plate) or '-'}")


def cmd_decode64(args: argparse.Namespace, config: Configuration) -> None:
    for hexadecimal in args.values:
        plate = wiegand64.decode(hexadecimal)
        print(f"{hexadecimal}: {'-' if plate is None else plate}")


def cmd_bits(args: argparse.Namespace, config: Configuration) -> None:
    parity = 'ok' if wiegand26.has_valid_parity(args.value) else 'BAD'
    frame = hex_string_to_int(args.value)
    print(f"{int_to_binary_grouped(frame, WIEGAND26_FIELD_WIDTHS)} parity={parity}")


def cmd_convert(args: argparse.Namespace, config: Configuration) -> None:
    records: list[PlateRecord]
    if args.file is not None:
        with open(args.file, 'r', encoding='utf-8') as stream:
            records = process_plate_list(stream.read())
    elif config.portal.url_get_plates_list:
        portal = PlatesPortalClient(
            url_get_plates_list=config.portal.url_get_plates_list,
            timeout_secs=config.portal.timeout_secs)
        records = asyncio.run(portal.get_plates_list())
    else:
        raise FileNotFoundError("no plate list file given and "
                                "portal.url_get_plates_list is not configured")

    cards, summary = convert_plates(records)
    for card in cards:
        print(format_card(card, config.output.format))

    if summary.num_rejected:
        logger.warning("%s plates could not be converted", summary.num_rejected)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='plate-wiegand',
        description='convert licence plates to and from Wiegand card formats')
    parser.add_argument('--config', help='path to a config.yml')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='log debug output to the console')

    commands = parser.add_subparsers(dest='command', required=True)

    for name, handler, metavar, help_text in (
            ('encode26', cmd_encode26, 'PLATE', 'licence plate to Wiegand26'),
            ('decode26', cmd_decode26, 'HEX', 'Wiegand26 hex to its fields'),
            ('encode64', cmd_encode64, 'PLATE', 'licence plate to Wiegand64'),
            ('decode64', cmd_decode64, 'HEX', 'Wiegand64 hex to licence plate')):
        command = commands.add_parser(name, help=help_text)
        command.add_argument('values', nargs='+', metavar=metavar)
        command.set_defaults(handler=handler)

    bits = commands.add_parser('bits', help='show the bit fields of a Wiegand26 hex')
    bits.add_argument('value', metavar='HEX')
    bits.set_defaults(handler=cmd_bits)

    convert = commands.add_parser('convert', help='convert a plate list')
    convert.add_argument('file', nargs='?',
                         help='plate list file; the configured portal when omitted')
    convert.set_defaults(handler=cmd_convert)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # the log file location comes from the config, so failures here only
    # reach the last-resort stderr handler
    try:
        config = get_config(args.config)
    except FileNotFoundError:
        logger.error("cannot locate config file '%s'!", args.config)
        return 1
    except ValueError as e:
        logger.error("invalid configuration: %s", e)
        return 1

    configure_logging(config, args.verbose)

    try:
        args.handler(args, config)
    except WiegandException as e:
        logger.error("%s", e)
        return 1
    except FileNotFoundError as e:
        logger.error("file not found: %s", e)
        return 1
    except (ClientError, asyncio.TimeoutError) as e:
        logger.error("could not obtain plates list from portal: %s", e)
        return 1
    except UnicodeDecodeError as e:
        logger.error("plates list is not valid UTF-8: %s", e)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
