# pic_core_tracer/arch/pic16f84a/instructions/base.py
"""
PIC16F84A命令実装用の共通ユーティリティ。
"""
from pic_core_tracer.core.snapshot import Operation, ExecutionResult
from pic_core_tracer.memory.register_file import register_name

# @intent:constant 命令語のフィールドマスク。
FILE_MASK = 0x7F
DEST_MASK = 0x80
BIT_MASK = 0x380
LITERAL_MASK = 0xFF
ADDRESS_MASK = 0x7FF

# GOTO/CALLで実行アドレスから引き継ぐページビット (PC<12:11>)
PAGE_MASK = 0x1800


# @intent:utility_function バイト指向命令 (f, d) のOperationを生成します。
def byte_operation(opcode: int, mnemonic: str) -> Operation:
    f = opcode & FILE_MASK
    d = (opcode & DEST_MASK) >> 7
    return Operation(opcode, mnemonic, [register_name(f), "F" if d else "W"], f=f, d=d)


# @intent:utility_function 格納先を持たないファイルレジスタ命令 (CLRF, MOVWF) のOperationを生成します。
def file_operation(opcode: int, mnemonic: str) -> Operation:
    f = opcode & FILE_MASK
    return Operation(opcode, mnemonic, [register_name(f)], f=f, d=1)


# @intent:utility_function ビット指向命令 (f, b) のOperationを生成します。
def bit_operation(opcode: int, mnemonic: str) -> Operation:
    f = opcode & FILE_MASK
    b = (opcode & BIT_MASK) >> 7
    return Operation(opcode, mnemonic, [register_name(f), str(b)], f=f, b=b)


# @intent:utility_function リテラル命令 (k) のOperationを生成します。
def literal_operation(opcode: int, mnemonic: str, cycle_count: int = 1) -> Operation:
    k = opcode & LITERAL_MASK
    return Operation(opcode, mnemonic, [f"0x{k:02X}"], k=k, cycle_count=cycle_count)


# @intent:utility_function GOTO/CALL (11ビットアドレス) のOperationを生成します。
def jump_operation(opcode: int, mnemonic: str) -> Operation:
    k = opcode & ADDRESS_MASK
    return Operation(opcode, mnemonic, [f"0x{k:03X}"], k=k, cycle_count=2)


def bare_operation(opcode: int, mnemonic: str, cycle_count: int = 1) -> Operation:
    return Operation(opcode, mnemonic, [], cycle_count=cycle_count)


# @intent:utility_function d ビットに従って結果の格納先（WまたはファイルレジスタF）を決めた結果レコードを生成します。
def store(op: Operation, value: int, next_pc: int, flags: int = 0, flag_mask: int = 0) -> ExecutionResult:
    """
    d=0ならW、d=1ならファイルレジスタへ格納する結果レコードを返します。
    もう一方の格納先は変更されません。
    """
    value &= 0xFF
    if op.d:
        return ExecutionResult(next_pc=next_pc, register_write=(op.f, value), flags=flags, flag_mask=flag_mask)
    return ExecutionResult(next_pc=next_pc, w=value, flags=flags, flag_mask=flag_mask)
