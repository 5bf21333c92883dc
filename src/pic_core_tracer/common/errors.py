"""
エミュレータ全体の例外階層。

PicEmulatorError (base)
├── ExecutionError (Step単位で終端となるエラー)
│   ├── UnsupportedOpcodeError - 予約済み/未定義のビットパターン
│   │   └── InvalidOpcodeWidthError - 14ビットを超える命令語
│   ├── CpuHaltedError - SLEEPによる停止
│   ├── StackOverflowError - 容量を超えたPUSH
│   └── StackUnderflowError - 空スタックからのPOP
├── ProgramLoadError (ロード時のみ)
│   ├── ProgramTooLargeError
│   └── ProgramMisalignedError
└── ConfigError

呼び出し側は PicEmulatorError を一つ捕捉するだけで全てを扱えます。
"""
from typing import Optional


class PicEmulatorError(Exception):
    """全ての例外の基底クラス。"""
    pass


# @intent:responsibility 命令の実行中に発生し、そのStepを終端させるエラーの基底クラス。
# @intent:rationale アーキテクチャ側に例外/トラップ機構が存在しないため、回復は行わず呼び出し元へ伝播させます。
class ExecutionError(PicEmulatorError):
    """Step呼び出しを終端させるエラー。"""
    pass


class UnsupportedOpcodeError(ExecutionError):
    """
    命令クラスは認識できるが、予約済みまたは未定義のサブパターンであった場合に送出されます。
    デコード段階で検出されるため、レジスタ・フラグ・スタックは一切変更されていません。
    """
    def __init__(self, opcode: int, pc: Optional[int] = None, reason: str = "unsupported opcode"):
        self.opcode = opcode
        self.pc = pc
        location = f" at {pc:#06x}" if pc is not None else ""
        super().__init__(f"{reason} {opcode:#06x}{location}")


class InvalidOpcodeWidthError(UnsupportedOpcodeError):
    """命令語のビット14-15が立っている（メモリ破損や不正なロード）。"""
    def __init__(self, opcode: int, pc: Optional[int] = None):
        super().__init__(opcode, pc, reason="invalid high bits in opcode")


class CpuHaltedError(ExecutionError):
    """SLEEP命令によりPDビットがクリアされ、ウェイクアップ要因が存在しない状態。"""
    def __init__(self, pc: int):
        self.pc = pc
        super().__init__(f"CPU halted by SLEEP at {pc:#06x}")


class StackOverflowError(ExecutionError):
    def __init__(self, capacity: int):
        self.capacity = capacity
        super().__init__(f"call stack overflow (capacity {capacity})")


class StackUnderflowError(ExecutionError):
    def __init__(self):
        super().__init__("call stack underflow")


# @intent:responsibility プログラムイメージのロード時にのみ発生するエラー。
# @intent:post-condition これらが送出された場合、プログラムメモリは変更されていません。
class ProgramLoadError(PicEmulatorError):
    pass


class ProgramTooLargeError(ProgramLoadError):
    def __init__(self, size: int, capacity: int):
        self.size = size
        self.capacity = capacity
        super().__init__(f"Program is too large for the PIC: {size} bytes > {capacity} bytes")


class ProgramMisalignedError(ProgramLoadError):
    def __init__(self, size: int, word_size: int):
        self.size = size
        self.word_size = word_size
        super().__init__(f"Program size {size} is not a multiple of the {word_size}-byte instruction word")


class ConfigError(PicEmulatorError):
    pass
