"""
PIC16F84A ALU (算術論理演算ユニット) およびフラグ計算ユーティリティ。

各関数は8ビットに切り詰めた結果と、新しいフラグビット（STATUS上の位置）を返します。
状態の変更は行いません。適用は実行エンジンが一括で行います。
"""
from typing import Tuple

from pic_core_tracer.memory.register_file import C_FLAG, DC_FLAG, Z_FLAG

# @intent:constant 各演算が定義するフラグビットの組み合わせ。
ARITH_FLAGS = C_FLAG | DC_FLAG | Z_FLAG
ZERO_ONLY = Z_FLAG
CARRY_ONLY = C_FLAG


def zero_flag(result: int) -> int:
    return Z_FLAG if (result & 0xFF) == 0 else 0


# @intent:responsibility 8ビット加算を行い、C/DC/Zを計算します。
# @intent:rationale 下位ニブルのキャリー(DC)を上位ニブルの加算に伝播させてからCを決定します。
def add8(augend: int, addend: int) -> Tuple[int, int]:
    """ADDWF/ADDLW。(結果, フラグ) を返します。"""
    low = (augend & 0x0F) + (addend & 0x0F)
    digit_carry = (low & 0x10) != 0

    high = (augend >> 4) + (addend >> 4) + (1 if digit_carry else 0)
    carry = (high & 0x10) != 0

    # 格納値はニブル和からではなく、オペランド全体の和を切り詰めたもの
    result = (augend + addend) & 0xFF

    flags = zero_flag(result)
    if digit_carry:
        flags |= DC_FLAG
    if carry:
        flags |= C_FLAG
    return result, flags


# @intent:responsibility 8ビット減算 (minuend - subtrahend) を行い、C/DC/Zを計算します。
# @intent:rationale 減算ではC/DCの極性が反転します（ボローが無いときにセット）。
def sub8(minuend: int, subtrahend: int) -> Tuple[int, int]:
    """SUBWF (f - W) / SUBLW (k - W)。(結果, フラグ) を返します。"""
    low = (minuend & 0x0F) - (subtrahend & 0x0F)
    digit_carry = (low & 0x10) == 0

    # 下位ニブルでボローが発生していれば上位から1を借りる
    high = (minuend >> 4) - (subtrahend >> 4) - (0 if digit_carry else 1)
    carry = (high & 0x10) == 0

    result = (minuend - subtrahend) & 0xFF

    flags = zero_flag(result)
    if digit_carry:
        flags |= DC_FLAG
    if carry:
        flags |= C_FLAG
    return result, flags


# @intent:responsibility キャリーを含めた9ビット左ローテートを行います。
def rotate_left(value: int, carry_in: bool) -> Tuple[int, int]:
    """RLF。bit7 -> C, 旧C -> bit0。"""
    carry_out = C_FLAG if value & 0x80 else 0
    result = ((value << 1) | (1 if carry_in else 0)) & 0xFF
    return result, carry_out


# @intent:responsibility キャリーを含めた9ビット右ローテートを行います。
def rotate_right(value: int, carry_in: bool) -> Tuple[int, int]:
    """RRF。bit0 -> C, 旧C -> bit7。"""
    carry_out = C_FLAG if value & 0x01 else 0
    result = ((value >> 1) | (0x80 if carry_in else 0)) & 0xFF
    return result, carry_out


def swap_nibbles(value: int) -> int:
    return ((value << 4) & 0xF0) | ((value >> 4) & 0x0F)
