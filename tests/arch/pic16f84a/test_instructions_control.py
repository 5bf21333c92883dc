import unittest
from pic_core_tracer.common.errors import StackOverflowError, StackUnderflowError
from pic_core_tracer.memory.call_stack import StackPolicy
from pic_core_tracer.memory.program_memory import ProgramMemory
from pic_core_tracer.arch.pic16f84a.cpu import Pic16f84aCpu
from pic_core_tracer.arch.pic16f84a.instructions import decode_opcode, execute_instruction

GOTO, CALL, RETLW = 0x2800, 0x2000, 0x3400
RETURN, RETFIE, SLEEP, CLRWDT, NOP = 0x0008, 0x0009, 0x0063, 0x0064, 0x0000

class TestPicControlInstructions(unittest.TestCase):
    def setUp(self):
        self.cpu = Pic16f84aCpu(ProgramMemory())
        self.cpu.reset()
        self.state = self.cpu.get_state()

    def _execute(self, opcode, pc=0x000):
        op = decode_opcode(opcode, pc)
        return execute_instruction(op, self.state, pc)

    def test_nop(self):
        status, w = self.state.status, self.state.w
        result = self._execute(NOP, pc=0x010)
        self.assertEqual(result.next_pc, 0x011)
        self.assertEqual(self.state.status, status)
        self.assertEqual(self.state.w, w)

    def test_goto_within_page(self):
        result = self._execute(GOTO | 0x123, pc=0x010)
        self.assertEqual(result.next_pc, 0x123)

    def test_goto_preserves_page_bits(self):
        # PC<12:11>は実行アドレスから引き継がれる
        result = self._execute(GOTO | 0x123, pc=0x1805)
        self.assertEqual(result.next_pc, 0x1923)

    def test_goto_ignores_pclath(self):
        self.state.registers.set(0x0A, 0x18)
        result = self._execute(GOTO | 0x010, pc=0x005)
        self.assertEqual(result.next_pc, 0x010)

    def test_call_and_return(self):
        result = self._execute(CALL | 0x100, pc=0x050)
        self.assertEqual(result.next_pc, 0x100)
        self.assertEqual(self.state.stack.depth, 1)
        self.assertEqual(self.state.stack.peek(), 0x051)

        result = self._execute(RETURN, pc=0x100)
        self.assertEqual(result.next_pc, 0x051)
        self.assertEqual(self.state.stack.depth, 0)

    def test_call_page_bits_and_return_address(self):
        result = self._execute(CALL | 0x010, pc=0x07FF)
        self.assertEqual(result.next_pc, 0x0010)
        self.assertEqual(self.state.stack.peek(), 0x0800)

        result = self._execute(CALL | 0x010, pc=0x0FFF)
        self.assertEqual(result.next_pc, 0x0810)
        self.assertEqual(self.state.stack.peek(), 0x1000)

    def test_retlw(self):
        self.state.stack.push(0x033)
        result = self._execute(RETLW | 0x7E, pc=0x200)
        self.assertEqual(result.next_pc, 0x033)
        self.assertEqual(self.state.w, 0x7E)
        self.assertEqual(self.state.stack.depth, 0)

    def test_retfie(self):
        self.state.stack.push(0x044)
        intcon = self.state.registers.get(0x0B)
        result = self._execute(RETFIE, pc=0x004)
        self.assertEqual(result.next_pc, 0x044)
        self.assertEqual(self.state.registers.get(0x0B), intcon) # GIE is not modeled

    def test_sleep(self):
        self.state.flag_to = False
        self._execute(SLEEP)
        self.assertTrue(self.state.flag_to)
        self.assertFalse(self.state.flag_pd)

    def test_clrwdt(self):
        self.state.flag_to = False
        self.state.flag_pd = False
        self._execute(CLRWDT)
        self.assertTrue(self.state.flag_to)
        self.assertTrue(self.state.flag_pd)

    def test_call_overflow_leaves_state_untouched(self):
        for i in range(8):
            self.state.stack.push(i)
        self.state.w = 0x12
        with self.assertRaises(StackOverflowError):
            self._execute(CALL | 0x100, pc=0x050)
        self.assertEqual(self.state.stack.entries(), tuple(range(8)))
        self.assertEqual(self.state.w, 0x12)

    def test_return_underflow(self):
        with self.assertRaises(StackUnderflowError):
            self._execute(RETURN)
        self.assertEqual(self.state.stack.depth, 0)

    def test_retlw_underflow_leaves_w(self):
        self.state.w = 0x55
        with self.assertRaises(StackUnderflowError):
            self._execute(RETLW | 0x01)
        self.assertEqual(self.state.w, 0x55)

class TestPicControlWrapPolicy(unittest.TestCase):
    def setUp(self):
        self.cpu = Pic16f84aCpu(ProgramMemory(), stack_policy=StackPolicy.WRAP)
        self.cpu.reset()
        self.state = self.cpu.get_state()

    def test_ninth_call_overwrites_oldest(self):
        for i in range(9):
            execute_instruction(decode_opcode(CALL | 0x100), self.state, i)
        self.assertEqual(self.state.stack.depth, 8)
        self.assertEqual(self.state.stack.entries()[0], 0x002)
        self.assertEqual(self.state.stack.entries()[-1], 0x009)

if __name__ == '__main__':
    unittest.main()
