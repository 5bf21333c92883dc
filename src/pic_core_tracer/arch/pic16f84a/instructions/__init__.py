# pic_core_tracer/arch/pic16f84a/instructions/__init__.py
"""
PIC16F84A命令セット実装パッケージ。

デコード（命令語 -> Operation）、計算（Operation -> ExecutionResult）、
適用（ExecutionResult -> 状態）の3段階に分かれています。
デコードと計算は状態を変更しないため、失敗は常に破壊的な書き込みより前に検出されます。
"""
from dataclasses import replace
from typing import Optional

from pic_core_tracer.common.errors import UnsupportedOpcodeError, InvalidOpcodeWidthError
from pic_core_tracer.core.snapshot import Operation, ExecutionResult
from pic_core_tracer.arch.pic16f84a.state import Pic16f84aCpuState, PC_MASK
from pic_core_tracer.memory.register_file import PCL, PCLATH, STATUS, TO_FLAG, PD_FLAG
from .maps import BYTE_ORIENTED_MAP, CONTROL_MAP, BIT_ORIENTED_MAP, LITERAL_DECODE_ORDER, EXECUTE_MAP
from .base import (
    DEST_MASK, byte_operation, file_operation, bit_operation,
    literal_operation, jump_operation, bare_operation,
)

OPCODE_WIDTH_MASK = 0xC000
CLASS_MASK = 0x3000

# レジスタ書き込みでは変化しないSTATUSビット
STATUS_READ_ONLY = TO_FLAG | PD_FLAG


def _decode_byte_oriented(opcode: int, pc: Optional[int]) -> Operation:
    selector = opcode & 0xF00
    if selector == 0x000:
        if opcode & DEST_MASK:
            return file_operation(opcode, "MOVWF")
        if (opcode & 0x0F) == 0:
            return bare_operation(opcode, "NOP")
        mnemonic = CONTROL_MAP.get(opcode & 0xFF)
        if mnemonic is None:
            raise UnsupportedOpcodeError(opcode, pc)
        cycles = 2 if mnemonic in ("RETURN", "RETFIE") else 1
        return bare_operation(opcode, mnemonic, cycles)
    if selector == 0x100:
        if opcode & DEST_MASK:
            return file_operation(opcode, "CLRF")
        return bare_operation(opcode, "CLRW")
    return byte_operation(opcode, BYTE_ORIENTED_MAP[selector])


def _decode_literal(opcode: int, pc: Optional[int]) -> Operation:
    for mask, value, mnemonic in LITERAL_DECODE_ORDER:
        if (opcode & mask) == value:
            return literal_operation(opcode, mnemonic, 2 if mnemonic == "RETLW" else 1)
    raise UnsupportedOpcodeError(opcode, pc)


# @intent:responsibility 14ビットの命令語をPIC16F84Aの命令としてデコードします。
# @intent:pre-condition `pc`は診断メッセージ用であり、省略可能です。
def decode_opcode(opcode: int, pc: Optional[int] = None) -> Operation:
    """
    命令語を上位2ビットのクラスで分類し、Operationオブジェクトを返します。
    ビット14-15が立っている場合はInvalidOpcodeWidthError、
    予約済みのパターンの場合はUnsupportedOpcodeErrorを送出します。
    """
    if opcode & OPCODE_WIDTH_MASK:
        raise InvalidOpcodeWidthError(opcode, pc)

    opcode_class = opcode & CLASS_MASK
    if opcode_class == 0x0000:
        return _decode_byte_oriented(opcode, pc)
    if opcode_class == 0x1000:
        return bit_operation(opcode, BIT_ORIENTED_MAP[opcode & 0x3C00])
    if opcode_class == 0x2000:
        return jump_operation(opcode, "GOTO" if opcode & 0x800 else "CALL")
    return _decode_literal(opcode, pc)


# @intent:responsibility デコード済み命令の結果レコードを、状態を変更せずに計算します。
# @intent:rationale 逐次実行時の次アドレス(PC+1)を制御フローの判定より先に求め、CALLの戻りアドレスやスキップの基点とします。
def compute_result(operation: Operation, state: Pic16f84aCpuState, pc: int) -> ExecutionResult:
    next_pc = (pc + 1) & PC_MASK
    executor = EXECUTE_MAP[operation.mnemonic]
    result = executor(state, operation, pc, next_pc)

    if result.register_write is not None:
        address, value = result.register_write
        if state.registers.resolve(address) == PCL:
            # PCLへの書き込みは計算型ジャンプ: PC = PCLATH:PCL
            return replace(result, next_pc=((state.registers.get(PCLATH) << 8) | value) & PC_MASK)

    return replace(result, next_pc=result.next_pc & PC_MASK)


# @intent:responsibility 結果レコードを状態へ一括して適用します。STATUSの書き込みは1回だけ行われます。
def apply_result(result: ExecutionResult, state: Pic16f84aCpuState) -> None:
    if result.pop:
        state.stack.pop()
    if result.push is not None:
        state.stack.push(result.push)

    if result.register_write is not None:
        address, value = result.register_write
        if state.registers.resolve(address) == STATUS:
            # TO/PDは読み出し専用。変更できるのはSLEEP/CLRWDTのflag_maskのみ
            value = (value & ~STATUS_READ_ONLY & 0xFF) | (state.registers.get(STATUS) & STATUS_READ_ONLY)
        state.registers.set(address, value)

    if result.w is not None:
        state.w = result.w

    if result.flag_mask:
        # STATUSが格納先だった場合も、この命令が定義するフラグビットが優先される
        current = state.registers.get(STATUS)
        state.registers.set(STATUS, (current & ~result.flag_mask & 0xFF) | (result.flags & result.flag_mask))


# @intent:responsibility デコードされた命令を実行し、CPUの状態を変更します。
def execute_instruction(operation: Operation, state: Pic16f84aCpuState, pc: int) -> ExecutionResult:
    """
    結果を計算してから状態へ適用し、その結果レコードを返します。
    スタック違反は計算段階で送出されるため、その場合状態は変更されません。
    """
    result = compute_result(operation, state, pc)
    apply_result(result, state)
    return result
