"""Console logging for the CHIP-8 interpreter.

A small levelled logger with optional timestamps, plus an interpreter
subclass for program loading, instruction traces and fatal errors.
"""

import time
import sys

LEVELS = ("DEBUG", "INFO", "ERROR")


class ConsoleLogger:
    """Levelled console logger."""

    def __init__(
        self,
        name: str = "chip8vm",
        log_level: str = "INFO",
        show_timestamps: bool = True,
        stream=None,
    ):
        self.name = name
        self.log_level = log_level.upper()
        if self.log_level not in LEVELS:
            raise ValueError(
                f"Unsupported log_level '{log_level}'. Supported levels: {list(LEVELS)}"
            )
        self.stream = stream if stream is not None else sys.stdout
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

    def _should_log(self, level: str) -> bool:
        return LEVELS.index(level) >= LEVELS.index(self.log_level)

    def _format_message(self, level: str, message: str) -> str:
        timestamp = (
            f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        )
        return f"{timestamp}[{level:>5s}][{self.name}] {message}"

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        if self._should_log(level):
            print(self._format_message(level, message), file=self.stream, flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def error(self, message: str):
        self.log("ERROR", message)


class EmulatorLogger(ConsoleLogger):
    """Logger for interpreter lifecycle events and instruction traces."""

    def log_program_loaded(self, size: int, source: str = None):
        origin = f" from {source}" if source else ""
        self.info(f"Loaded {size} byte program{origin}")

    def log_clocks(self, instruction_frequency: int, timer_frequency: int):
        self.info(
            f"Instruction clock: {instruction_frequency} Hz | "
            f"Timer clock: {timer_frequency} Hz"
        )

    def log_instruction(self, pc: int, instruction: int):
        """Trace a fetched instruction. Formatting is skipped unless DEBUG is on."""
        if self._should_log("DEBUG"):
            self.debug(f"Fetched: 0x{instruction:04X} at 0x{pc:03X}")

    def log_key_wait(self, register: int):
        if self._should_log("DEBUG"):
            self.debug(f"Waiting for key press into V{register:X}")

    def log_fatal(self, error: Exception, pc: int, instruction: int = None):
        """Report a fatal error with the program counter and instruction."""
        context = f"pc=0x{pc:03X}"
        if instruction is not None:
            context += f" instruction=0x{instruction:04X}"
        self.error(f"Halted: {error} ({context})")
