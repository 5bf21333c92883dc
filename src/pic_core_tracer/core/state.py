# pic_core_tracer/core/state.py
"""
Core Layer (CPU状態の不変ビュー)

このモジュールは、ある時点のCPU状態を凍結したデータ構造を定義します。
実行中の可変な状態はアーキテクチャ側（arch/）が保持し、スナップショットやトレースには
このビューのコピーを渡します。
"""
from dataclasses import dataclass
from typing import Tuple

# @intent:responsibility CPUのレジスタ状態を不変に保持します。
# @intent:rationale Snapshotが実行後に書き換わらないよう、生成時点で値をコピーします。
@dataclass(frozen=True)
class StateView:
    """
    W、STATUS、PC、レジスタファイル全体、スタック内容の不変コピー。
    """
    pc: int
    w: int
    status: int
    registers: Tuple[int, ...] = ()
    stack: Tuple[int, ...] = ()

    def register(self, index: int) -> int:
        return self.registers[index]
