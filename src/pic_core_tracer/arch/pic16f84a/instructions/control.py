# pic_core_tracer/arch/pic16f84a/instructions/control.py
"""
制御命令（ジャンプ、サブルーチン、スリープ）の実装。
"""
from pic_core_tracer.core.snapshot import Operation, ExecutionResult
from pic_core_tracer.arch.pic16f84a.state import Pic16f84aCpuState
from pic_core_tracer.memory.register_file import TO_FLAG, PD_FLAG
from .base import PAGE_MASK


# --- NOP ---
def execute_nop(state: Pic16f84aCpuState, op: Operation, pc: int, next_pc: int) -> ExecutionResult:
    # Intentional: NOP (No Operation)
    return ExecutionResult(next_pc=next_pc)


# --- CLRWDT ---
# @intent:responsibility TOとPDをセットします。ウォッチドッグタイマのカウントダウンはモデル化しません。
def execute_clrwdt(state: Pic16f84aCpuState, op: Operation, pc: int, next_pc: int) -> ExecutionResult:
    return ExecutionResult(next_pc=next_pc, flags=TO_FLAG | PD_FLAG, flag_mask=TO_FLAG | PD_FLAG)


# --- SLEEP ---
# @intent:responsibility TOをセットしPDをクリアします。PDのクリアがドライバに対する停止シグナルになります。
def execute_sleep(state: Pic16f84aCpuState, op: Operation, pc: int, next_pc: int) -> ExecutionResult:
    return ExecutionResult(next_pc=next_pc, flags=TO_FLAG, flag_mask=TO_FLAG | PD_FLAG)


# --- RETURN / RETFIE ---
# @intent:responsibility スタックからPCを復帰します。
# @intent:rationale peekで先に値を得ることで、アンダーフロー時に状態を変更せずに失敗できます。
def execute_return(state: Pic16f84aCpuState, op: Operation, pc: int, next_pc: int) -> ExecutionResult:
    return ExecutionResult(next_pc=state.stack.peek(), pop=True)


# 割り込みはモデル化しないため、GIEの再有効化は行わない
def execute_retfie(state: Pic16f84aCpuState, op: Operation, pc: int, next_pc: int) -> ExecutionResult:
    return ExecutionResult(next_pc=state.stack.peek(), pop=True)


# --- RETLW ---
# @intent:responsibility スタックからPCを復帰し、同時にWへリテラルをロードします。
def execute_retlw(state: Pic16f84aCpuState, op: Operation, pc: int, next_pc: int) -> ExecutionResult:
    return ExecutionResult(next_pc=state.stack.peek(), w=op.k, pop=True)


# --- GOTO / CALL ---
# @intent:responsibility 11ビットのリテラルに、実行アドレスのPC<12:11>を組み合わせたアドレスへジャンプします。
def execute_goto(state: Pic16f84aCpuState, op: Operation, pc: int, next_pc: int) -> ExecutionResult:
    return ExecutionResult(next_pc=(pc & PAGE_MASK) | op.k)


# @intent:responsibility 戻りアドレス（PC+1）をスタックに積んでからジャンプします。
def execute_call(state: Pic16f84aCpuState, op: Operation, pc: int, next_pc: int) -> ExecutionResult:
    state.stack.check_push()
    return ExecutionResult(next_pc=(pc & PAGE_MASK) | op.k, push=next_pc)
