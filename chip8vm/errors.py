"""Fatal CHIP-8 execution errors."""


class Chip8Error(Exception):
    """Base class for errors that halt the interpreter."""


class OutOfBoundsError(Chip8Error):
    """Memory or program counter reference outside the address space."""

    def __init__(self, address: int, message: str = None):
        self.address = address
        super().__init__(message or f"Address out of bounds: 0x{address:04X}")


class InvalidInstructionError(Chip8Error):
    """Instruction matches no known opcode pattern."""

    def __init__(self, instruction: int):
        self.instruction = instruction
        super().__init__(f"Invalid instruction: 0x{instruction:04X}")


class StackOverflowError(Chip8Error):
    """Subroutine call with a full call stack. ``address`` is the return address."""

    def __init__(self, address: int):
        self.address = address
        super().__init__(f"Stack overflow pushing return address 0x{address:03X}")


class StackUnderflowError(Chip8Error):
    """Return with an empty call stack."""

    def __init__(self):
        super().__init__("Stack underflow on return")
