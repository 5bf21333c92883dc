# pic_core_tracer/arch/pic16f84a/cpu.py
"""
PIC16F84A CPUエミュレーションの中心モジュール。
"""
from typing import Dict, List

from pic_core_tracer.common.types import RegisterLayoutInfo, RegisterInfo
from pic_core_tracer.core.cpu import AbstractCpu
from pic_core_tracer.core.snapshot import Operation, ExecutionResult
from pic_core_tracer.core.state import StateView
from pic_core_tracer.memory.call_stack import CallStack, StackPolicy
from pic_core_tracer.memory.program_memory import ProgramMemory
from pic_core_tracer.memory.register_file import RegisterFile, FSR, PCL, PCLATH
from pic_core_tracer.arch.pic16f84a.state import Pic16f84aCpuState
from pic_core_tracer.arch.pic16f84a.instructions import decode_opcode, execute_instruction


# @intent:responsibility PIC16F84Aの具体的なエミュレーションロジック（フェッチ、デコード、実行）を提供します。
class Pic16f84aCpu(AbstractCpu):
    """
    PIC16F84A CPUをエミュレートするクラス。
    プログラムメモリはリセットを跨いで保持され、レジスタファイルとスタックはリセットで再生成されます。
    """
    # @intent:pre-condition `program_memory`はロード済みである必要があります（ロード失敗時はCPUを実行しないこと）。
    def __init__(self, program_memory: ProgramMemory, stack_depth: int = CallStack.DEFAULT_DEPTH,
                 stack_policy: StackPolicy = StackPolicy.ERROR, fill: int = 0x00):
        self._program = program_memory
        self._stack_depth = stack_depth
        self._stack_policy = stack_policy
        self._fill = fill
        super().__init__()

    @property
    def program_memory(self) -> ProgramMemory:
        return self._program

    # @intent:responsibility パワーオンリセット直後の状態を生成します。W と汎用レジスタはfill値で埋められます。
    def _create_initial_state(self) -> Pic16f84aCpuState:
        return Pic16f84aCpuState(
            registers=RegisterFile(self._fill),
            stack=CallStack(self._stack_depth, self._stack_policy),
            w=self._fill,
        )

    def _freeze_state(self) -> StateView:
        return self._state.freeze()

    # @intent:responsibility PCLATH:PCLからPCを再構成し、プログラムメモリのサイズでラップアラウンドさせます。
    def _current_pc(self) -> int:
        return self._state.pc & (self._program.size - 1)

    def _fetch(self, pc: int) -> int:
        return self._program.read(pc)

    def _decode(self, opcode: int, pc: int) -> Operation:
        return decode_opcode(opcode, pc)

    def _execute(self, operation: Operation, pc: int) -> ExecutionResult:
        return execute_instruction(operation, self._state, pc)

    # @intent:responsibility 新しいPCを下位バイト(PCL)と上位ビット(PCLATH)に分けて書き戻します。
    def _update_pc(self, next_pc: int) -> None:
        self._state.pc = next_pc

    # @intent:responsibility SLEEPによりPDがクリアされていれば停止とみなします。
    def _is_halted(self) -> bool:
        return not self._state.flag_pd

    # @intent:responsibility 現在のレジスタ値を辞書形式で提供します。
    def get_register_map(self) -> Dict[str, int]:
        s = self._state
        return {
            "W": s.w,
            "STATUS": s.status,
            "FSR": s.registers.peek(FSR),
            "PCL": s.registers.peek(PCL),
            "PCLATH": s.registers.peek(PCLATH),
            "PC": s.pc,
            "STKPTR": s.stack.depth,
        }

    # @intent:responsibility レジスタ表示レイアウト（グループ化）を定義します。
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("Core", [
                RegisterInfo("W", 8), RegisterInfo("STATUS", 8), RegisterInfo("FSR", 8)
            ]),
            RegisterLayoutInfo("Program Counter", [
                RegisterInfo("PCL", 8), RegisterInfo("PCLATH", 8), RegisterInfo("PC", 13)
            ])
        ]

    # @intent:responsibility 現在のフラグ状態を辞書形式で提供します。
    def get_flag_state(self) -> Dict[str, bool]:
        s = self._state
        return {
            "TO": s.flag_to, "PD": s.flag_pd, "Z": s.flag_z, "DC": s.flag_dc, "C": s.flag_c
        }
