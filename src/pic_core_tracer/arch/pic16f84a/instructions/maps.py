# pic_core_tracer/arch/pic16f84a/instructions/maps.py
"""
命令語のビットパターンとニーモニック、およびニーモニックと命令実装のマッピング定義。
"""
from . import byte_ops
from . import bit_ops
from . import control
from . import literal

# @intent:map クラス0x0000: (opcode & 0xF00) からニーモニックへのマッピング。
# 0x000 (MOVWF/NOP/制御命令) と 0x100 (CLRF/CLRW) はビット7で更に判別する。
BYTE_ORIENTED_MAP = {
    0x200: "SUBWF",
    0x300: "DECF",
    0x400: "IORWF",
    0x500: "ANDWF",
    0x600: "XORWF",
    0x700: "ADDWF",
    0x800: "MOVF",
    0x900: "COMF",
    0xA00: "INCF",
    0xB00: "DECFSZ",
    0xC00: "RRF",
    0xD00: "RLF",
    0xE00: "SWAPF",
    0xF00: "INCFSZ",
}

# @intent:map 制御命令: (opcode & 0xFF) からニーモニックへのマッピング。
CONTROL_MAP = {
    0x08: "RETURN",
    0x09: "RETFIE",
    0x63: "SLEEP",
    0x64: "CLRWDT",
}

# @intent:map クラス0x1000: (opcode & 0x3C00) からニーモニックへのマッピング。
BIT_ORIENTED_MAP = {
    0x1000: "BCF",
    0x1400: "BSF",
    0x1800: "BTFSC",
    0x1C00: "BTFSS",
}

# @intent:map クラス0x3000: (マスク, 値, ニーモニック) を優先順に並べたもの。
# @intent:rationale ADDLW(11 111x)とSUBLW(11 110x)のようにマスク幅が異なるため、先に一致したものを採用する。
LITERAL_DECODE_ORDER = [
    (0xE00, 0xE00, "ADDLW"),
    (0xF00, 0x900, "ANDLW"),
    (0xF00, 0x800, "IORLW"),
    (0xF00, 0xA00, "XORLW"),
    (0xC00, 0x000, "MOVLW"),
    (0xC00, 0x400, "RETLW"),
    (0xC00, 0xC00, "SUBLW"),
]

# @intent:map ニーモニックから実行関数へのマッピングテーブル。
EXECUTE_MAP = {
    # Byte-oriented
    "ADDWF": byte_ops.execute_addwf,
    "ANDWF": byte_ops.execute_andwf,
    "CLRF": byte_ops.execute_clrf,
    "CLRW": byte_ops.execute_clrw,
    "COMF": byte_ops.execute_comf,
    "DECF": byte_ops.execute_decf,
    "DECFSZ": byte_ops.execute_decfsz,
    "INCF": byte_ops.execute_incf,
    "INCFSZ": byte_ops.execute_incfsz,
    "IORWF": byte_ops.execute_iorwf,
    "MOVF": byte_ops.execute_movf,
    "MOVWF": byte_ops.execute_movwf,
    "RLF": byte_ops.execute_rlf,
    "RRF": byte_ops.execute_rrf,
    "SUBWF": byte_ops.execute_subwf,
    "SWAPF": byte_ops.execute_swapf,
    "XORWF": byte_ops.execute_xorwf,

    # Bit-oriented
    "BCF": bit_ops.execute_bcf,
    "BSF": bit_ops.execute_bsf,
    "BTFSC": bit_ops.execute_btfsc,
    "BTFSS": bit_ops.execute_btfss,

    # Control
    "NOP": control.execute_nop,
    "CLRWDT": control.execute_clrwdt,
    "SLEEP": control.execute_sleep,
    "RETURN": control.execute_return,
    "RETFIE": control.execute_retfie,
    "RETLW": control.execute_retlw,
    "GOTO": control.execute_goto,
    "CALL": control.execute_call,

    # Literal
    "ADDLW": literal.execute_addlw,
    "ANDLW": literal.execute_andlw,
    "IORLW": literal.execute_iorlw,
    "XORLW": literal.execute_xorlw,
    "MOVLW": literal.execute_movlw,
    "SUBLW": literal.execute_sublw,
}
