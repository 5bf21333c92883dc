import unittest
from pic_core_tracer.memory.program_memory import ProgramMemory
from pic_core_tracer.arch.pic16f84a.cpu import Pic16f84aCpu
from pic_core_tracer.arch.pic16f84a.instructions import decode_opcode, execute_instruction

def bit_op(base, f, b):
    return base | (b << 7) | f

BCF, BSF, BTFSC, BTFSS = 0x1000, 0x1400, 0x1800, 0x1C00

class TestPicBitOrientedInstructions(unittest.TestCase):
    def setUp(self):
        self.cpu = Pic16f84aCpu(ProgramMemory())
        self.cpu.reset()
        self.state = self.cpu.get_state()

    def _execute(self, opcode, pc=0x020):
        op = decode_opcode(opcode, pc)
        return execute_instruction(op, self.state, pc)

    def test_bsf_bcf(self):
        self.state.registers.set(0x20, 0x00)
        status = self.state.status
        self._execute(bit_op(BSF, 0x20, 7))
        self.assertEqual(self.state.registers.get(0x20), 0x80)
        self._execute(bit_op(BSF, 0x20, 0))
        self.assertEqual(self.state.registers.get(0x20), 0x81)
        self._execute(bit_op(BCF, 0x20, 7))
        self.assertEqual(self.state.registers.get(0x20), 0x01)
        self.assertEqual(self.state.status, status) # No flags affected

    def test_bsf_on_status_sets_carry(self):
        self._execute(bit_op(BSF, 0x03, 0)) # BSF STATUS, C
        self.assertTrue(self.state.flag_c)
        self._execute(bit_op(BCF, 0x03, 0))
        self.assertFalse(self.state.flag_c)

    def test_btfsc_skips_when_clear(self):
        self.state.registers.set(0x20, 0xFB)
        result = self._execute(bit_op(BTFSC, 0x20, 2))
        self.assertEqual(result.next_pc, 0x022)

    def test_btfsc_no_skip_when_set(self):
        self.state.registers.set(0x20, 0x04)
        result = self._execute(bit_op(BTFSC, 0x20, 2))
        self.assertEqual(result.next_pc, 0x021)

    def test_btfss_skips_when_set(self):
        self.state.registers.set(0x20, 0x04)
        result = self._execute(bit_op(BTFSS, 0x20, 2))
        self.assertEqual(result.next_pc, 0x022)

    def test_btfss_no_skip_when_clear(self):
        self.state.registers.set(0x20, 0x00)
        result = self._execute(bit_op(BTFSS, 0x20, 2))
        self.assertEqual(result.next_pc, 0x021)

    def test_btfss_on_zero_flag(self):
        self.state.flag_z = True
        result = self._execute(bit_op(BTFSS, 0x03, 2)) # BTFSS STATUS, Z
        self.assertEqual(result.next_pc, 0x022)

    def test_bit_test_does_not_write(self):
        self.state.registers.set(0x20, 0x5A)
        result = self._execute(bit_op(BTFSC, 0x20, 0))
        self.assertIsNone(result.register_write)
        self.assertEqual(self.state.registers.get(0x20), 0x5A)

if __name__ == '__main__':
    unittest.main()
