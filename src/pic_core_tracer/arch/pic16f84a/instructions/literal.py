# pic_core_tracer/arch/pic16f84a/instructions/literal.py
"""
リテラル命令の実装。オペランドは命令語の下位8ビットで、結果は常にWへ格納されます。
"""
from pic_core_tracer.core.snapshot import Operation, ExecutionResult
from pic_core_tracer.arch.pic16f84a.state import Pic16f84aCpuState
from pic_core_tracer.arch.pic16f84a import alu


def execute_movlw(state: Pic16f84aCpuState, op: Operation, pc: int, next_pc: int) -> ExecutionResult:
    return ExecutionResult(next_pc=next_pc, w=op.k)


# @intent:responsibility W + k。フラグの計算はADDWFと同一です。
def execute_addlw(state: Pic16f84aCpuState, op: Operation, pc: int, next_pc: int) -> ExecutionResult:
    result, flags = alu.add8(state.w, op.k)
    return ExecutionResult(next_pc=next_pc, w=result, flags=flags, flag_mask=alu.ARITH_FLAGS)


# @intent:responsibility k - W。フラグの計算はSUBWFと同一です。
def execute_sublw(state: Pic16f84aCpuState, op: Operation, pc: int, next_pc: int) -> ExecutionResult:
    result, flags = alu.sub8(op.k, state.w)
    return ExecutionResult(next_pc=next_pc, w=result, flags=flags, flag_mask=alu.ARITH_FLAGS)


def execute_andlw(state: Pic16f84aCpuState, op: Operation, pc: int, next_pc: int) -> ExecutionResult:
    result = state.w & op.k
    return ExecutionResult(next_pc=next_pc, w=result, flags=alu.zero_flag(result), flag_mask=alu.ZERO_ONLY)


def execute_iorlw(state: Pic16f84aCpuState, op: Operation, pc: int, next_pc: int) -> ExecutionResult:
    result = state.w | op.k
    return ExecutionResult(next_pc=next_pc, w=result, flags=alu.zero_flag(result), flag_mask=alu.ZERO_ONLY)


def execute_xorlw(state: Pic16f84aCpuState, op: Operation, pc: int, next_pc: int) -> ExecutionResult:
    result = state.w ^ op.k
    return ExecutionResult(next_pc=next_pc, w=result, flags=alu.zero_flag(result), flag_mask=alu.ZERO_ONLY)
