# pic_core_tracer/core/cpu.py
"""
Core Layer (抽象CPU)

このモジュールは、CPUの状態管理と命令サイクル（フェッチ・デコード・実行・PC書き戻し）の
駆動に関する抽象化を提供します。
具体的な命令の振る舞いはInstruction Layerに移譲されます。
"""
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional

from pic_core_tracer.common.errors import CpuHaltedError
from pic_core_tracer.common.types import SymbolMap, RegisterLayoutInfo
from pic_core_tracer.core.snapshot import Operation, ExecutionResult, Metadata, Snapshot, TraceEvent
from pic_core_tracer.core.state import StateView

TraceObserver = Callable[[TraceEvent], None]


# @intent:responsibility 抽象CPUの基本機能とインターフェースを定義します。
class AbstractCpu(ABC):
    """
    CPUエミュレーションの基底となる抽象クラス。
    基本的な状態管理と、1命令をリタイアさせる命令サイクルを提供します。
    """
    def __init__(self):
        self._state = self._create_initial_state()
        self._cycle_count: int = 0
        self._symbol_map: SymbolMap = {}
        self._reverse_symbol_map: Dict[int, str] = {}
        self._trace_observer: Optional[TraceObserver] = None
        # @intent:rationale Stateオブジェクトの直接操作を避けるため、protectedな命名規則を採用。
        #                  外部からのアクセスは`get_state()`メソッドを介して行う。

    # @intent:responsibility シンボルマップを設定します。
    def set_symbol_map(self, symbol_map: SymbolMap) -> None:
        """
        シンボルマップ（名前とアドレスの対応表）を設定します。
        """
        self._symbol_map = symbol_map
        # 逆引きマップを作成して、アドレスからラベルを素早く引けるようにする
        self._reverse_symbol_map = {addr: name for name, addr in symbol_map.items()}

    def get_symbol_map(self) -> SymbolMap:
        return self._symbol_map

    # @intent:responsibility 命令ごとの変化を受け取るオブザーバを設定します。
    # @intent:rationale 診断出力をコアから切り離し、テストをヘッドレスで実行できるようにします。
    def set_trace_observer(self, observer: Optional[TraceObserver]) -> None:
        self._trace_observer = observer

    @property
    def cycle_count(self) -> int:
        return self._cycle_count

    @abstractmethod
    def _create_initial_state(self):
        """
        CPUの初期状態を生成して返します。
        """
        pass

    # @intent:responsibility CPUをリセットし、初期状態に戻します。
    def reset(self) -> None:
        self._state = self._create_initial_state()
        self._cycle_count = 0

    def get_state(self):
        return self._state

    @abstractmethod
    def _freeze_state(self) -> StateView:
        """現在の状態の不変コピーを返します。"""
        pass

    @abstractmethod
    def _current_pc(self) -> int:
        """レジスタから現在のPCを再構成します。"""
        pass

    @abstractmethod
    def _fetch(self, pc: int) -> int:
        """指定アドレスの命令語を読み出します。PCは変更しません。"""
        pass

    # @intent:responsibility 命令語を解析し、Operationオブジェクトに変換します。
    # @intent:post-condition 失敗時は例外を送出し、状態を一切変更しません。
    @abstractmethod
    def _decode(self, opcode: int, pc: int) -> Operation:
        pass

    # @intent:responsibility デコードされた命令を実行し、結果を状態へ一括適用します。
    @abstractmethod
    def _execute(self, operation: Operation, pc: int) -> ExecutionResult:
        pass

    @abstractmethod
    def _update_pc(self, next_pc: int) -> None:
        """新しいPCを状態へ書き戻します。"""
        pass

    # @intent:responsibility 実行後に停止状態へ入ったかを判定します。
    def _is_halted(self) -> bool:
        return False

    # @intent:responsibility CPUを1命令進め、その結果のスナップショットを返します。
    # @intent:rationale Template Methodパターンを採用し、共通の実行フロー（PC再構成→フェッチ→デコード→実行→停止判定→PC書き戻し）を定義します。
    def step(self) -> Snapshot:
        """
        1命令をリタイアさせます。
        デコード失敗・停止・スタック違反は例外として呼び出し元に伝播します。
        """
        # 1. PC再構成とフェッチ
        initial_pc = self._current_pc()
        opcode = self._fetch(initial_pc)

        # 2. デコード（ここで失敗しても状態は無変更）
        operation = self._decode(opcode, initial_pc)

        # 3. 実行と一括適用
        before = self._freeze_state() if self._trace_observer else None
        result = self._execute(operation, initial_pc)
        self._cycle_count += operation.cycle_count

        if self._trace_observer:
            self._trace_observer(TraceEvent(
                pc=initial_pc,
                operation=operation,
                result=result,
                before=before,
                after=self._freeze_state(),
            ))

        # 4. 停止判定 (Hook)
        if self._is_halted():
            raise CpuHaltedError(initial_pc)

        # 5. PC書き戻し
        self._update_pc(result.next_pc)

        return self._create_snapshot(initial_pc, operation, result)

    # @intent:responsibility 最大`max_steps`命令を連続して実行します。
    def run(self, max_steps: int) -> List[Snapshot]:
        """
        例外が発生した時点で実行を止め、呼び出し元へ伝播します。
        """
        snapshots = []
        for _ in range(max_steps):
            snapshots.append(self.step())
        return snapshots

    def _create_snapshot(self, initial_pc: int, operation: Operation, result: ExecutionResult) -> Snapshot:
        symbol_label = self._reverse_symbol_map.get(initial_pc, "")
        symbol_info = f"{symbol_label}: " if symbol_label else ""
        symbol_info += str(operation)

        return Snapshot(
            pc=initial_pc,
            state=self._freeze_state(),
            operation=operation,
            result=result,
            metadata=Metadata(cycle_count=self._cycle_count, symbol_info=symbol_info),
        )

    @abstractmethod
    def get_register_map(self) -> Dict[str, int]:
        """
        現在のレジスタ値を辞書形式で返す。
        """
        pass

    @abstractmethod
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        """
        レジスタをどのようにグループ化して表示すべきかの定義を返す。
        """
        pass

    @abstractmethod
    def get_flag_state(self) -> Dict[str, bool]:
        """
        現在のフラグ（ステータスレジスタ）の各ビットの状態を辞書形式で返す。
        """
        pass
