import io
import pytest
from pic_core_tracer.common.errors import CpuHaltedError
from pic_core_tracer.memory.program_memory import ProgramMemory
from pic_core_tracer.arch.pic16f84a.cpu import Pic16f84aCpu
from pic_core_tracer.arch.pic16f84a.trace import StatusTracer

# カウンタ付きループとサブルーチン呼び出しを行い、SLEEPで停止するプログラム
LOOP_PROGRAM = [
    0x3003,  # 000: MOVLW  0x03
    0x00A0,  # 001: MOVWF  0x20
    0x01A1,  # 002: CLRF   0x21
    0x0AA1,  # 003: INCF   0x21, F
    0x0BA0,  # 004: DECFSZ 0x20, F
    0x2803,  # 005: GOTO   0x003
    0x2009,  # 006: CALL   0x009
    0x00A2,  # 007: MOVWF  0x22
    0x0063,  # 008: SLEEP
    0x347E,  # 009: RETLW  0x7E
]

def load_words(words):
    memory = ProgramMemory()
    buffer = bytearray()
    for word in words:
        buffer += bytes([word & 0xFF, word >> 8])
    memory.load(bytes(buffer))
    return memory

def test_loop_call_and_sleep():
    cpu = Pic16f84aCpu(load_words(LOOP_PROGRAM))

    retired = 0
    with pytest.raises(CpuHaltedError) as excinfo:
        for _ in range(100):
            cpu.step()
            retired += 1

    state = cpu.get_state()
    assert retired == 14
    assert excinfo.value.pc == 0x008
    assert state.pc == 0x008
    assert state.registers.get(0x20) == 0x00
    assert state.registers.get(0x21) == 0x03
    assert state.registers.get(0x22) == 0x7E
    assert state.w == 0x7E
    assert state.stack.depth == 0
    assert not state.flag_pd

def test_trace_output(capsys):
    cpu = Pic16f84aCpu(load_words([0x30FF, 0x3E01, 0x0063]))  # MOVLW 0xFF; ADDLW 0x01; SLEEP
    cpu.set_trace_observer(StatusTracer())

    cpu.step()
    cpu.step()
    with pytest.raises(CpuHaltedError):
        cpu.step()

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "0000: 30FF  MOVLW 0xFF"
    assert lines[1] == "W: 0 -> 255"
    assert lines[2] == "0001: 3E01  ADDLW 0x01"
    assert lines[3] == (
        "STATUS:[IRP:0 RP1:0 RP0:0 TO:1 PD:1 Z:0 DC:0 C:0] -> "
        "[IRP:0 RP1:0 RP0:0 TO:1 PD:1 Z:1 DC:1 C:1]"
    )
    assert lines[4] == "W: 255 -> 0"
    assert lines[5] == "0002: 0063  SLEEP"
    assert "PD:0" in lines[6]

def test_trace_without_instructions():
    stream = io.StringIO()
    cpu = Pic16f84aCpu(load_words([0x0000, 0x3001]))
    cpu.set_trace_observer(StatusTracer(stream, show_instructions=False))
    cpu.step()
    cpu.step()
    assert stream.getvalue() == "W: 0 -> 1\n"
