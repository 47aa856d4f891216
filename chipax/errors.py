"""Error kinds raised by the CHIP-8 machine.

Every runtime error is local to one machine: the interpreter catches it,
moves the machine to ``HALTED`` and keeps the error on ``state.error``.
ROM errors are raised before a machine is running and are left to the caller.
"""


class Chip8Error(Exception):
    """Base class for every CHIP-8 machine error."""


class RomError(Chip8Error):
    """A ROM could not be loaded."""


class RomTooLarge(RomError):
    """ROM does not fit between the entry point and the end of memory."""

    def __init__(self, size: int, limit: int):
        super().__init__(f"ROM is {size} bytes, at most {limit} bytes fit in memory")
        self.size = size
        self.limit = limit


class RomUnreadable(RomError):
    """ROM source could not be opened or read."""

    def __init__(self, path: str, reason: str = ""):
        message = f"Could not read ROM '{path}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.path = path


class StackOverflow(Chip8Error):
    """CALL with a full return stack."""

    def __init__(self, depth: int):
        super().__init__(f"Stack overflow: more than {depth} nested calls")
        self.depth = depth


class StackUnderflow(Chip8Error):
    """RET with an empty return stack."""

    def __init__(self):
        super().__init__("Stack underflow: return with no active call")


class FetchOutOfBounds(Chip8Error):
    """Program counter points past the last complete instruction in memory."""

    def __init__(self, pc: int):
        super().__init__(f"Fetch out of bounds at PC=0x{pc:04X}")
        self.pc = pc


class UnknownOpcode(Chip8Error):
    """Instruction word that is not part of the CHIP-8 instruction set."""

    def __init__(self, word: int):
        super().__init__(f"Unknown opcode 0x{word:04X}")
        self.word = word


class MemoryViolation(Chip8Error):
    """Write into the font table or past the end of memory (strict mode only)."""

    def __init__(self, address: int):
        super().__init__(f"Illegal memory write at 0x{address:04X}")
        self.address = address
