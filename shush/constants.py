from enum import Enum, IntEnum

VERSION = "1.2.0"


class Suppress(str, Enum):
    """Which child streams are kept off the terminal."""
    BOTH = "both"
    STDOUT = "stdout"
    STDERR = "stderr"
    NONE = "none"

    def hides(self, stream: str) -> bool:
        return self is Suppress.BOTH or self.value == stream


class ExitCode(IntEnum):
    OK = 0
    FAILURE = 1
    LOG_WRITE = 74
    TIMEOUT = 124
    NOT_EXECUTABLE = 126
    NOT_FOUND = 127
    SIGNAL_BASE = 128
    INTERRUPTED = 130


ENV_PREFIX = "SHUSH_"

DEFAULTS = {
"log": "",
"append": "0",
"timestamps": "0",
"suppress": Suppress.BOTH.value,
"timeout": "",
"return_code": "0",
"verbose": "0",
"timestamp_format": "%Y-%m-%d %H:%M:%S",
}

