from enum import Enum

class ErrorKind(str, Enum):
    LAUNCH_FAILED = "launch_failed"
    COMMAND_FAILED = "command_failed"
    TIMEOUT = "timeout"
    OUTPUT_TOO_LARGE = "output_too_large"
    SIGNAL_FAILED = "signal_failed"


# Same ceiling the agent applies to system.run output
MAX_EXECUTE_OUTPUT_LEN_B = 512 * 1024

DEFAULT_TIMEOUT_SECONDS = 3


DEFAULTS = {
"max_output_bytes": str(MAX_EXECUTE_OUTPUT_LEN_B),
"timeout_seconds": str(DEFAULT_TIMEOUT_SECONDS),
}


# CLI exit codes per failure kind
EXIT_CODES = {
    ErrorKind.LAUNCH_FAILED: 127,
    ErrorKind.COMMAND_FAILED: 1,
    ErrorKind.TIMEOUT: 124,
    ErrorKind.OUTPUT_TOO_LARGE: 1,
}


APP_DIRNAME = ".shellrun"
APP_HOME_ENV = "SHELLRUN_HOME"
DB_FILENAME = "config.db"
