# pic_core_tracer/memory/program_memory.py
"""
プログラムメモリ (Flash)

14ビット命令語の固定長配列です。CPU生成時に一度だけ確保され、ロード時に一度だけ書き込まれます。
実行エンジンからは読み出し専用です。
"""
from typing import List

from pic_core_tracer.common.errors import ProgramTooLargeError, ProgramMisalignedError

# 消去済みFlashの読み出し値
ERASED_WORD = 0x3FFF


# @intent:responsibility 命令語を保持し、ワードアドレスでの読み出しとイメージのロードを提供します。
class ProgramMemory:
    """
    PIC16F84Aのプログラムメモリ（既定1Kワード）。
    イメージはリトルエンディアンの2バイト/ワードで格納されます。
    """
    WORD_SIZE = 2
    DEFAULT_WORDS = 1024

    # @intent:pre-condition `size_words`は2のべき乗である必要があります（PCのラップアラウンドをマスクで行うため）。
    def __init__(self, size_words: int = DEFAULT_WORDS):
        if not isinstance(size_words, int) or size_words <= 0 or size_words & (size_words - 1):
            raise ValueError("Program memory size must be a positive power of two.")
        self._size = size_words
        self._words: List[int] = [ERASED_WORD] * size_words

    @property
    def size(self) -> int:
        return self._size

    @property
    def capacity_bytes(self) -> int:
        return self._size * self.WORD_SIZE

    def __len__(self) -> int:
        return self._size

    # @intent:responsibility 指定されたワードアドレスの命令語を読み出します。
    # @intent:rationale 上位ビットのマスクは行いません。不正な命令語の検出はデコーダの責務です。
    def read(self, address: int) -> int:
        if not 0 <= address < self._size:
            raise IndexError(f"Address {address:#06x} out of bounds for program memory of {self._size} words.")
        return self._words[address]

    # @intent:responsibility バイトバッファを検証し、アドレス0から逐語的にコピーします。
    # @intent:post-condition 検証に失敗した場合、メモリの内容は変更されません。
    def load(self, buffer: bytes) -> None:
        """
        バイト列をプログラムメモリにロードします。
        長さが容量を超える場合、またはワードサイズの倍数でない場合は失敗します。
        """
        size = len(buffer)
        if size > self.capacity_bytes:
            raise ProgramTooLargeError(size, self.capacity_bytes)
        if size % self.WORD_SIZE != 0:
            raise ProgramMisalignedError(size, self.WORD_SIZE)

        for address in range(size // self.WORD_SIZE):
            low = buffer[address * 2]
            high = buffer[address * 2 + 1]
            self._words[address] = (high << 8) | low

    # @intent:responsibility Intel HEXなどバイト単位のレコードを1バイトずつ書き込むためのバックドアです。
    def load_byte(self, byte_address: int, data: int) -> None:
        if not 0 <= data <= 0xFF:
            raise ValueError(f"Data {data} is not an 8-bit value.")
        address = byte_address // self.WORD_SIZE
        word = self.read(address)
        if byte_address % self.WORD_SIZE == 0:
            word = (word & 0xFF00) | data
        else:
            word = (word & 0x00FF) | (data << 8)
        self._words[address] = word
