# tests/memory/test_register_file.py
"""
pic_core_tracer.memory.register_fileモジュールの単体テスト。
"""
import pytest

from pic_core_tracer.memory.register_file import (
    RegisterFile, register_name,
    INDF, PCL, STATUS, FSR, PCLATH, INTCON, STATUS_POR,
    C_FLAG, Z_FLAG, PD_FLAG, TO_FLAG,
)

# @intent:test_suite レジスタファイルの読み書き、POR値、間接アドレッシングを検証します。

class TestRegisterFile:
    @pytest.fixture
    def registers(self):
        return RegisterFile()

    def test_power_on_defaults(self, registers):
        assert registers.get(STATUS) == STATUS_POR
        assert registers.get(STATUS) & (TO_FLAG | PD_FLAG) == (TO_FLAG | PD_FLAG)
        assert registers.get(PCL) == 0x00
        assert registers.get(PCLATH) == 0x00
        assert registers.get(INTCON) == 0x00

    def test_fill_value_for_undefined_cells(self):
        registers = RegisterFile(fill=0xAA)
        assert registers.get(0x0C) == 0xAA
        assert registers.get(0x4F) == 0xAA
        # アーキテクチャで定められたレジスタはfillの影響を受けない
        assert registers.get(STATUS) == STATUS_POR

    def test_set_and_get(self, registers):
        registers.set(0x20, 0x5A)
        assert registers.get(0x20) == 0x5A

    def test_index_out_of_range(self, registers):
        with pytest.raises(IndexError):
            registers.get(0x80)
        with pytest.raises(IndexError):
            registers.set(-1, 0x00)

    def test_value_must_be_8bit(self, registers):
        with pytest.raises(ValueError):
            registers.set(0x20, 0x100)

    def test_pclath_upper_bits_unimplemented(self, registers):
        registers.set(PCLATH, 0xFF)
        assert registers.get(PCLATH) == 0x1F

    def test_indf_reads_through_fsr(self, registers):
        registers.set(0x30, 0x77)
        registers.set(FSR, 0x30)
        assert registers.get(INDF) == 0x77
        assert registers.resolve(INDF) == 0x30

    def test_indf_writes_through_fsr(self, registers):
        registers.set(FSR, 0x31)
        registers.set(INDF, 0x12)
        assert registers.get(0x31) == 0x12

    def test_indf_pointing_to_itself(self, registers):
        registers.set(FSR, 0x00)
        registers.set(INDF, 0x55)
        assert registers.get(INDF) == 0x00
        assert registers.peek(INDF) == 0x00

    def test_fsr_bank_bit_is_ignored(self, registers):
        registers.set(0x20, 0x99)
        registers.set(FSR, 0xA0)
        assert registers.get(INDF) == 0x99

    def test_initialize_all_restores_defaults(self, registers):
        registers.set(STATUS, 0x00)
        registers.set(0x20, 0x01)
        registers.initialize_all()
        assert registers.get(STATUS) == STATUS_POR
        assert registers.get(0x20) == 0x00

    def test_dump_is_a_copy(self, registers):
        dump = registers.dump()
        registers.set(0x20, 0x01)
        assert dump[0x20] == 0x00
        assert len(dump) == RegisterFile.SIZE

class TestFormatStatus:
    def test_power_on_status(self):
        assert RegisterFile.format_status(STATUS_POR) == "IRP:0 RP1:0 RP0:0 TO:1 PD:1 Z:0 DC:0 C:0"

    def test_zero_and_carry(self):
        text = RegisterFile.format_status(Z_FLAG | C_FLAG)
        assert "Z:1" in text
        assert "C:1" in text
        assert "PD:0" in text

def test_register_name():
    assert register_name(STATUS) == "STATUS"
    assert register_name(0x20) == "0x20"
