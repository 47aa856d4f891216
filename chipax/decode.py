"""CHIP-8 instruction decoding."""

import enum

from chex import dataclass

from chipax.errors import UnknownOpcode


class Op(enum.Enum):
    """Every documented CHIP-8 instruction."""
    SYS = "0NNN"
    CLS = "00E0"
    RET = "00EE"
    JP = "1NNN"
    CALL = "2NNN"
    SE_IMM = "3XNN"
    SNE_IMM = "4XNN"
    SE_REG = "5XY0"
    LD_IMM = "6XNN"
    ADD_IMM = "7XNN"
    LD_REG = "8XY0"
    OR = "8XY1"
    AND = "8XY2"
    XOR = "8XY3"
    ADD_REG = "8XY4"
    SUB = "8XY5"
    SHR = "8XY6"
    SUBN = "8XY7"
    SHL = "8XYE"
    SNE_REG = "9XY0"
    LD_I = "ANNN"
    JP_OFFSET = "BNNN"
    RND = "CXNN"
    DRW = "DXYN"
    SKP = "EX9E"
    SKNP = "EXA1"
    LD_VX_DT = "FX07"
    LD_KEY = "FX0A"
    LD_DT_VX = "FX15"
    LD_ST_VX = "FX18"
    ADD_I = "FX1E"
    LD_FONT = "FX29"
    LD_BCD = "FX33"
    STORE = "FX55"
    LOAD = "FX65"


_ALU_OPS = {
    0x0: Op.LD_REG, 0x1: Op.OR, 0x2: Op.AND, 0x3: Op.XOR, 0x4: Op.ADD_REG,
    0x5: Op.SUB, 0x6: Op.SHR, 0x7: Op.SUBN, 0xE: Op.SHL,
}

_KEY_OPS = {0x9E: Op.SKP, 0xA1: Op.SKNP}

_MISC_OPS = {
    0x07: Op.LD_VX_DT, 0x0A: Op.LD_KEY, 0x15: Op.LD_DT_VX, 0x18: Op.LD_ST_VX,
    0x1E: Op.ADD_I, 0x29: Op.LD_FONT, 0x33: Op.LD_BCD, 0x55: Op.STORE, 0x65: Op.LOAD,
}

# Families whose operation is fully determined by the first nibble
_FAMILY_OPS = {
    0x1: Op.JP, 0x2: Op.CALL, 0x3: Op.SE_IMM, 0x4: Op.SNE_IMM, 0x6: Op.LD_IMM,
    0x7: Op.ADD_IMM, 0xA: Op.LD_I, 0xB: Op.JP_OFFSET, 0xC: Op.RND, 0xD: Op.DRW,
}


@dataclass(frozen=True)
class DecodedInstruction:
    """Decoded CHIP-8 instruction with extracted operands."""
    op: Op
    raw: int
    opcode: int  # First nibble
    x: int       # Second nibble (VX register)
    y: int       # Third nibble (VY register)
    n: int       # Fourth nibble (4-bit immediate)
    nn: int      # Last byte (8-bit immediate)
    nnn: int     # Last 12 bits (12-bit address)


def _select_op(instruction: int, opcode: int, n: int, nn: int, nnn: int) -> Op:
    if opcode in _FAMILY_OPS:
        return _FAMILY_OPS[opcode]
    if opcode == 0x0:
        if instruction == 0x00E0:
            return Op.CLS
        if instruction == 0x00EE:
            return Op.RET
        # 0x0000 is what a program runs into when it falls off its own end
        if nnn != 0:
            return Op.SYS
    elif opcode == 0x5 and n == 0:
        return Op.SE_REG
    elif opcode == 0x9 and n == 0:
        return Op.SNE_REG
    elif opcode == 0x8 and n in _ALU_OPS:
        return _ALU_OPS[n]
    elif opcode == 0xE and nn in _KEY_OPS:
        return _KEY_OPS[nn]
    elif opcode == 0xF and nn in _MISC_OPS:
        return _MISC_OPS[nn]
    raise UnknownOpcode(instruction)


def decode(instruction: int) -> DecodedInstruction:
    """Decode 16-bit instruction into components."""
    instruction = int(instruction) & 0xFFFF
    opcode = (instruction & 0xF000) >> 12
    n = instruction & 0x000F
    nn = instruction & 0x00FF
    nnn = instruction & 0x0FFF
    return DecodedInstruction(
        op=_select_op(instruction, opcode, n, nn, nnn),
        raw=instruction,
        opcode=opcode,
        x=(instruction & 0x0F00) >> 8,
        y=(instruction & 0x00F0) >> 4,
        n=n,
        nn=nn,
        nnn=nnn,
    )
