DEFAULT_LOGS_PATH = "./logs"
DEFAULT_LOG_FILE_NAME = "plate-wiegand.log"
DEFAULT_LOG_FILE_MAX_BYTES = 1024 * 1024 * 5
DEFAULT_LOG_FILE_BACKUP_COUNT = 5
DEFAULT_CONSOLE_LOG_LEVEL = "WARNING"

DEFAULT_PORTAL_TIMEOUT_SECS = 10

OUTPUT_FORMAT_WIEGAND26 = "wiegand26"
OUTPUT_FORMAT_WIEGAND64 = "wiegand64"
DEFAULT_OUTPUT_FORMAT = OUTPUT_FORMAT_WIEGAND26

CONFIG_SEARCH_PATHS = [
    './config.yml',
    './config/config.yml',
    '/config/config.yml'
]
