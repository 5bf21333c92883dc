# pic_core_tracer/arch/pic16f84a/instructions/byte_ops.py
"""
バイト指向ファイルレジスタ命令の実装。

全ての実行関数は (state, op, pc, next_pc) を受け取り、状態を変更せずに
ExecutionResultを返します。
"""
from pic_core_tracer.core.snapshot import Operation, ExecutionResult
from pic_core_tracer.arch.pic16f84a.state import Pic16f84aCpuState
from pic_core_tracer.arch.pic16f84a import alu
from pic_core_tracer.memory.register_file import Z_FLAG
from .base import store


# --- ADDWF ---
# @intent:responsibility W + f を計算し、C/DC/Zを更新します。
def execute_addwf(state: Pic16f84aCpuState, op: Operation, pc: int, next_pc: int) -> ExecutionResult:
    result, flags = alu.add8(state.w, state.registers.get(op.f))
    return store(op, result, next_pc, flags, alu.ARITH_FLAGS)


# --- SUBWF ---
# @intent:responsibility f - W を計算し、C/DC/Zを更新します（ボロー極性）。
def execute_subwf(state: Pic16f84aCpuState, op: Operation, pc: int, next_pc: int) -> ExecutionResult:
    result, flags = alu.sub8(state.registers.get(op.f), state.w)
    return store(op, result, next_pc, flags, alu.ARITH_FLAGS)


# --- ANDWF / IORWF / XORWF ---
def execute_andwf(state: Pic16f84aCpuState, op: Operation, pc: int, next_pc: int) -> ExecutionResult:
    result = state.w & state.registers.get(op.f)
    return store(op, result, next_pc, alu.zero_flag(result), alu.ZERO_ONLY)


def execute_iorwf(state: Pic16f84aCpuState, op: Operation, pc: int, next_pc: int) -> ExecutionResult:
    result = state.w | state.registers.get(op.f)
    return store(op, result, next_pc, alu.zero_flag(result), alu.ZERO_ONLY)


def execute_xorwf(state: Pic16f84aCpuState, op: Operation, pc: int, next_pc: int) -> ExecutionResult:
    result = state.w ^ state.registers.get(op.f)
    return store(op, result, next_pc, alu.zero_flag(result), alu.ZERO_ONLY)


# --- CLRF / CLRW ---
# @intent:responsibility 格納先を0にクリアし、Zを無条件にセットします。
def execute_clrf(state: Pic16f84aCpuState, op: Operation, pc: int, next_pc: int) -> ExecutionResult:
    return ExecutionResult(next_pc=next_pc, register_write=(op.f, 0x00), flags=Z_FLAG, flag_mask=Z_FLAG)


def execute_clrw(state: Pic16f84aCpuState, op: Operation, pc: int, next_pc: int) -> ExecutionResult:
    return ExecutionResult(next_pc=next_pc, w=0x00, flags=Z_FLAG, flag_mask=Z_FLAG)


# --- COMF ---
def execute_comf(state: Pic16f84aCpuState, op: Operation, pc: int, next_pc: int) -> ExecutionResult:
    result = ~state.registers.get(op.f) & 0xFF
    return store(op, result, next_pc, alu.zero_flag(result), alu.ZERO_ONLY)


# --- DECF / INCF ---
def execute_decf(state: Pic16f84aCpuState, op: Operation, pc: int, next_pc: int) -> ExecutionResult:
    result = (state.registers.get(op.f) - 1) & 0xFF
    return store(op, result, next_pc, alu.zero_flag(result), alu.ZERO_ONLY)


def execute_incf(state: Pic16f84aCpuState, op: Operation, pc: int, next_pc: int) -> ExecutionResult:
    result = (state.registers.get(op.f) + 1) & 0xFF
    return store(op, result, next_pc, alu.zero_flag(result), alu.ZERO_ONLY)


# --- DECFSZ / INCFSZ ---
# @intent:responsibility 結果が0なら次の命令をスキップします。フラグは変化しません。
def execute_decfsz(state: Pic16f84aCpuState, op: Operation, pc: int, next_pc: int) -> ExecutionResult:
    result = (state.registers.get(op.f) - 1) & 0xFF
    if result == 0:
        next_pc += 1
    return store(op, result, next_pc)


def execute_incfsz(state: Pic16f84aCpuState, op: Operation, pc: int, next_pc: int) -> ExecutionResult:
    result = (state.registers.get(op.f) + 1) & 0xFF
    if result == 0:
        next_pc += 1
    return store(op, result, next_pc)


# --- MOVF / MOVWF ---
def execute_movf(state: Pic16f84aCpuState, op: Operation, pc: int, next_pc: int) -> ExecutionResult:
    result = state.registers.get(op.f)
    return store(op, result, next_pc, alu.zero_flag(result), alu.ZERO_ONLY)


def execute_movwf(state: Pic16f84aCpuState, op: Operation, pc: int, next_pc: int) -> ExecutionResult:
    return ExecutionResult(next_pc=next_pc, register_write=(op.f, state.w))


# --- RLF / RRF ---
# @intent:responsibility キャリーを通したローテート。シフトインするCは、この命令の実行前にコミット済みの値を使います。
def execute_rlf(state: Pic16f84aCpuState, op: Operation, pc: int, next_pc: int) -> ExecutionResult:
    result, carry = alu.rotate_left(state.registers.get(op.f), state.flag_c)
    return store(op, result, next_pc, carry, alu.CARRY_ONLY)


def execute_rrf(state: Pic16f84aCpuState, op: Operation, pc: int, next_pc: int) -> ExecutionResult:
    result, carry = alu.rotate_right(state.registers.get(op.f), state.flag_c)
    return store(op, result, next_pc, carry, alu.CARRY_ONLY)


# --- SWAPF ---
def execute_swapf(state: Pic16f84aCpuState, op: Operation, pc: int, next_pc: int) -> ExecutionResult:
    return store(op, alu.swap_nibbles(state.registers.get(op.f)), next_pc)
