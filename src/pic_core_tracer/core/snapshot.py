# pic_core_tracer/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、デコード済み命令、実行結果レコード、および1命令リタイア後の
CPU状態を記録した不変のデータ構造を定義します。
トレース出力とテストでの状態検証に用いる責務を負います。
"""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from pic_core_tracer.core.state import StateView


# @intent:responsibility デコードされた命令の詳細を記録します。
@dataclass(frozen=True)
class Operation:
    """
    デコード済みの命令。ニーモニックと、命令語から抽出したフィールドを保持します。
    """
    opcode: int  # 14ビット命令語
    mnemonic: str  # 例: "ADDWF"
    operands: List[str] = field(default_factory=list)  # 例: ["0x0C", "F"]
    f: int = 0  # ファイルレジスタアドレス (7bit)
    d: int = 0  # 格納先選択ビット (0=W, 1=f)
    b: int = 0  # ビット番号 (3bit)
    k: int = 0  # リテラル (8bit) またはジャンプ先 (11bit)
    cycle_count: int = 1  # 命令サイクル数

    @property
    def opcode_hex(self) -> str:
        return f"{self.opcode:04X}"

    def __str__(self) -> str:
        if self.operands:
            return f"{self.mnemonic} {', '.join(self.operands)}"
        return self.mnemonic


# @intent:responsibility 1命令の実行結果（状態への差分）を記録します。
# @intent:rationale 命令ごとの計算と状態への適用を分離し、適用を一括（アトミック）に行うためのレコードです。
@dataclass(frozen=True)
class ExecutionResult:
    """
    命令実行の結果レコード。Noneのフィールドは「変更なし」を意味します。
    """
    next_pc: int
    w: Optional[int] = None
    register_write: Optional[Tuple[int, int]] = None  # (アドレス, 値)
    flags: int = 0  # 新しいフラグ値
    flag_mask: int = 0  # この命令が定義するフラグビット
    push: Optional[int] = None  # スタックへ積む戻りアドレス
    pop: bool = False


# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True)
class Metadata:
    """
    実行に関するメタデータ（累計サイクル数、シンボル情報など）。
    """
    cycle_count: int
    symbol_info: Optional[str] = None  # 例: "main: MOVLW 0x10"


# @intent:responsibility 1命令リタイア後のCPU状態を不変に記録します。
@dataclass(frozen=True)
class Snapshot:
    """
    ある一時点における、CPUの完全な状態を記録した不変のデータ構造。
    """
    pc: int  # 実行した命令のアドレス
    state: StateView  # 実行後の状態
    operation: Operation
    result: ExecutionResult
    metadata: Metadata


# @intent:responsibility トレースオブザーバへ渡される、1命令分の変化の記録です。
@dataclass(frozen=True)
class TraceEvent:
    pc: int
    operation: Operation
    result: ExecutionResult
    before: StateView
    after: StateView
