"""Bit-field extraction and sign extension for 16-bit instruction words."""

WORD_MASK = 0xFFFF


def sign_extend(value: int, bit_count: int) -> int:
    """Extend the sign of a bit_count-wide field to a 16-bit word."""
    value &= (1 << bit_count) - 1
    if (value >> (bit_count - 1)) & 1:
        value |= WORD_MASK << bit_count
    return value & WORD_MASK


def to_signed(word: int) -> int:
    """Interpret a 16-bit word as a signed integer."""
    word &= WORD_MASK
    return word - 0x10000 if word & 0x8000 else word


def opcode(instruction: int) -> int:
    return (instruction >> 12) & 0xF


def dr(instruction: int) -> int:
    """Destination register (bits 11-9). Also the source register of stores."""
    return (instruction >> 9) & 0x7


def sr1(instruction: int) -> int:
    """First source register (bits 8-6). Also the base register."""
    return (instruction >> 6) & 0x7


def sr2(instruction: int) -> int:
    return instruction & 0x7


def imm_flag(instruction: int) -> bool:
    return bool((instruction >> 5) & 0x1)


def imm5(instruction: int) -> int:
    return sign_extend(instruction & 0x1F, 5)


def offset6(instruction: int) -> int:
    return sign_extend(instruction & 0x3F, 6)


def pc_offset9(instruction: int) -> int:
    return sign_extend(instruction & 0x1FF, 9)


def pc_offset11(instruction: int) -> int:
    return sign_extend(instruction & 0x7FF, 11)


def trap_vector(instruction: int) -> int:
    return instruction & 0xFF
