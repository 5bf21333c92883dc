# tests/memory/test_program_memory.py
"""
pic_core_tracer.memory.program_memoryモジュールの単体テスト。
"""
import pytest

from pic_core_tracer.common.errors import ProgramTooLargeError, ProgramMisalignedError
from pic_core_tracer.memory.program_memory import ProgramMemory, ERASED_WORD

# @intent:test_suite プログラムイメージのロードと読み出しを検証します。

class TestProgramMemory:
    @pytest.fixture
    def memory(self):
        return ProgramMemory()

    def test_default_size(self, memory):
        assert memory.size == 1024
        assert len(memory) == 1024
        assert memory.capacity_bytes == 2048

    def test_erased_contents(self, memory):
        assert memory.read(0x000) == ERASED_WORD
        assert memory.read(0x3FF) == ERASED_WORD

    def test_load_little_endian_words(self, memory):
        memory.load(bytes([0x05, 0x30, 0x63, 0x00]))
        assert memory.read(0) == 0x3005
        assert memory.read(1) == 0x0063
        assert memory.read(2) == ERASED_WORD

    def test_load_does_not_mask_high_bits(self, memory):
        memory.load(bytes([0x00, 0xC0]))
        assert memory.read(0) == 0xC000

    def test_load_exactly_full(self, memory):
        memory.load(bytes(2048))
        assert memory.read(0x3FF) == 0x0000

    def test_load_too_large(self, memory):
        with pytest.raises(ProgramTooLargeError):
            memory.load(bytes(2050))
        assert memory.read(0) == ERASED_WORD

    def test_load_misaligned_leaves_memory_unmodified(self, memory):
        memory.load(bytes([0x01, 0x00]))
        with pytest.raises(ProgramMisalignedError):
            memory.load(bytes([0x05, 0x30, 0x63]))
        assert memory.read(0) == 0x0001
        assert memory.read(1) == ERASED_WORD

    def test_read_out_of_range(self, memory):
        with pytest.raises(IndexError):
            memory.read(1024)

    def test_load_byte(self, memory):
        memory.load_byte(0, 0x05)
        memory.load_byte(1, 0x30)
        assert memory.read(0) == 0x3005

    def test_size_must_be_power_of_two(self):
        with pytest.raises(ValueError):
            ProgramMemory(1000)
