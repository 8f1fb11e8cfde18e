from enum import IntEnum

CLI_NAME = "stowage"

OUTPUT_FORMATS = ("table", "json", "yaml")


class ExitCode(IntEnum):
    SUCCESS = 0
    RESOLUTION_FAILED = 1  # refused, not found, or ambiguous
    USAGE = 2  # click's own usage errors
    UNAVAILABLE = 3  # server or deployment could not be reached
