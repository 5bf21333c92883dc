# pic_core_tracer/arch/pic16f84a/instructions/bit_ops.py
"""
ビット指向ファイルレジスタ命令の実装。
"""
from pic_core_tracer.core.snapshot import Operation, ExecutionResult
from pic_core_tracer.arch.pic16f84a.state import Pic16f84aCpuState


# --- BCF ---
# @intent:responsibility 指定ビットをクリアして書き戻します。フラグは変化しません。
def execute_bcf(state: Pic16f84aCpuState, op: Operation, pc: int, next_pc: int) -> ExecutionResult:
    value = state.registers.get(op.f) & ~(1 << op.b) & 0xFF
    return ExecutionResult(next_pc=next_pc, register_write=(op.f, value))


# --- BSF ---
def execute_bsf(state: Pic16f84aCpuState, op: Operation, pc: int, next_pc: int) -> ExecutionResult:
    value = state.registers.get(op.f) | (1 << op.b)
    return ExecutionResult(next_pc=next_pc, register_write=(op.f, value))


# --- BTFSC ---
# @intent:responsibility 指定ビットが0なら次の命令をスキップします。
def execute_btfsc(state: Pic16f84aCpuState, op: Operation, pc: int, next_pc: int) -> ExecutionResult:
    if (state.registers.get(op.f) & (1 << op.b)) == 0:
        next_pc += 1
    return ExecutionResult(next_pc=next_pc)


# --- BTFSS ---
# @intent:responsibility 指定ビットが1なら次の命令をスキップします。
def execute_btfss(state: Pic16f84aCpuState, op: Operation, pc: int, next_pc: int) -> ExecutionResult:
    if (state.registers.get(op.f) & (1 << op.b)) != 0:
        next_pc += 1
    return ExecutionResult(next_pc=next_pc)
