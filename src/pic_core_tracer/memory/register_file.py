# pic_core_tracer/memory/register_file.py
"""
レジスタファイル (File Registers)

PIC16F84Aのアドレス可能な8ビットセル群を保持します。
STATUS、PCL/PCLATHなどの特殊機能レジスタも同じアドレス空間にエイリアスされます。
バンク切り替え（RP0）はモデル化せず、命令の7ビットフィールドがそのままインデックスになります。
"""
from typing import List, Tuple

# @intent:constant 特殊機能レジスタ(SFR)のアドレス。
INDF = 0x00
TMR0 = 0x01
PCL = 0x02
STATUS = 0x03
FSR = 0x04
PORTA = 0x05
PORTB = 0x06
EEDATA = 0x08
EEADR = 0x09
PCLATH = 0x0A
INTCON = 0x0B

# 汎用レジスタ (GPR) 領域
GPR_START = 0x0C
GPR_END = 0x4F

# @intent:constant STATUSレジスタ内の各フラグビット。
C_FLAG = 0b00000001    # Carry / Borrow
DC_FLAG = 0b00000010   # Digit Carry / Borrow
Z_FLAG = 0b00000100    # Zero
PD_FLAG = 0b00001000   # Power-down (0 = SLEEP実行後)
TO_FLAG = 0b00010000   # Time-out
RP0_FLAG = 0b00100000
RP1_FLAG = 0b01000000
IRP_FLAG = 0b10000000

# パワーオンリセット時の値 (TO=1, PD=1)
STATUS_POR = TO_FLAG | PD_FLAG

REGISTER_NAMES = {
    INDF: "INDF",
    TMR0: "TMR0",
    PCL: "PCL",
    STATUS: "STATUS",
    FSR: "FSR",
    PORTA: "PORTA",
    PORTB: "PORTB",
    EEDATA: "EEDATA",
    EEADR: "EEADR",
    PCLATH: "PCLATH",
    INTCON: "INTCON",
}

_STATUS_BITS = [
    ("IRP", IRP_FLAG), ("RP1", RP1_FLAG), ("RP0", RP0_FLAG), ("TO", TO_FLAG),
    ("PD", PD_FLAG), ("Z", Z_FLAG), ("DC", DC_FLAG), ("C", C_FLAG),
]


# @intent:responsibility 128個の8ビットセルを保持し、インデックスによる読み書きを提供します。
class RegisterFile:
    """
    PIC16F84Aのレジスタファイル。
    INDF(0x00)へのアクセスはFSRが指すレジスタへの間接アクセスとして解決されます。
    """
    SIZE = 0x80

    # @intent:responsibility セルを確保し、アーキテクチャで定められた初期値を設定します。
    # @intent:pre-condition `fill`は8ビット値である必要があります。
    def __init__(self, fill: int = 0x00):
        if not 0 <= fill <= 0xFF:
            raise ValueError(f"Fill value {fill} is not an 8-bit value.")
        self._fill = fill
        self._cells = bytearray(self.SIZE)
        self.initialize_all()

    # @intent:responsibility パワーオンリセット時の既定値のみを設定します。
    # @intent:rationale 汎用レジスタの内容は実機では不定のため、fill値で埋めるだけに留めます。
    def initialize_all(self) -> None:
        """
        汎用領域をfill値で埋め、STATUS/PCL/PCLATH/INTCONをPOR値に戻します。
        """
        for i in range(self.SIZE):
            self._cells[i] = self._fill
        self._cells[STATUS] = STATUS_POR
        self._cells[PCL] = 0x00
        self._cells[PCLATH] = 0x00
        self._cells[INTCON] = 0x00

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self.SIZE:
            raise IndexError(f"Register index {index} out of bounds for register file of size {self.SIZE}.")

    # @intent:responsibility INDFの間接アドレッシングを解決し、実際にアクセスされるアドレスを返します。
    def resolve(self, index: int) -> int:
        """
        INDFの場合はFSRの下位7ビットを、それ以外はそのままのインデックスを返します。
        """
        self._check_index(index)
        if index == INDF:
            return self._cells[FSR] & 0x7F
        return index

    def get(self, index: int) -> int:
        address = self.resolve(index)
        # INDF自身を間接的に読むと0が返る
        if address == INDF:
            return 0x00
        return self._cells[address]

    def set(self, index: int, value: int) -> None:
        if not 0 <= value <= 0xFF:
            raise ValueError(f"Data {value} is not an 8-bit value.")
        address = self.resolve(index)
        if address == INDF:
            return
        if address == PCLATH:
            # PCLATH<7:5>は未実装
            value &= 0x1F
        self._cells[address] = value

    # @intent:responsibility 間接アドレッシングを経由せずにセルの値を読み出します（UI/スナップショット用）。
    def peek(self, index: int) -> int:
        self._check_index(index)
        return self._cells[index]

    def dump(self) -> Tuple[int, ...]:
        return tuple(self._cells)

    # @intent:responsibility STATUS値を人間が読める文字列に整形します（診断用）。
    @staticmethod
    def format_status(value: int) -> str:
        """
        例: 0x1C -> "IRP:0 RP1:0 RP0:0 TO:1 PD:1 Z:1 DC:0 C:0"
        """
        parts: List[str] = []
        for name, mask in _STATUS_BITS:
            parts.append(f"{name}:{1 if value & mask else 0}")
        return " ".join(parts)


def register_name(index: int) -> str:
    """表示用のレジスタ名。SFRでなければ16進アドレスを返します。"""
    return REGISTER_NAMES.get(index, f"0x{index:02X}")
