# pic_core_tracer/arch/pic16f84a/state.py
"""
PIC16F84A CPU固有の状態定義。
"""
from dataclasses import dataclass, field

from pic_core_tracer.core.state import StateView
from pic_core_tracer.memory.call_stack import CallStack
from pic_core_tracer.memory.register_file import (
    RegisterFile, STATUS, PCL, PCLATH, FSR,
    C_FLAG, DC_FLAG, Z_FLAG, PD_FLAG, TO_FLAG,
)

# 13ビットのプログラムカウンタ
PC_MASK = 0x1FFF


# @intent:responsibility PIC16F84Aの作業レジスタ(W)、レジスタファイル、コールスタックを保持します。
# @intent:rationale STATUSとPCはレジスタファイル上に存在するため、ここではプロパティとして公開するのみです。
@dataclass
class Pic16f84aCpuState:
    """
    PIC16F84A CPUの状態を保持するデータクラス。
    """
    registers: RegisterFile = field(default_factory=RegisterFile)
    stack: CallStack = field(default_factory=CallStack)
    w: int = 0x00  # Working register

    @property
    def status(self) -> int:
        return self.registers.get(STATUS)

    @status.setter
    def status(self, value: int) -> None:
        self.registers.set(STATUS, value & 0xFF)

    # @intent:accessor PCL（下位8ビット）とPCLATH（上位5ビット）からPCを再構成します。
    @property
    def pc(self) -> int:
        return ((self.registers.get(PCLATH) << 8) | self.registers.get(PCL)) & PC_MASK

    @pc.setter
    def pc(self, value: int) -> None:
        value &= PC_MASK
        self.registers.set(PCL, value & 0xFF)
        self.registers.set(PCLATH, (value >> 8) & 0x1F)

    @property
    def fsr(self) -> int:
        return self.registers.get(FSR)

    # @intent:accessor STATUSレジスタの各フラグビットにアクセスするためのプロパティを提供します。

    def _get_flag(self, mask: int) -> bool:
        return (self.status & mask) != 0

    def _set_flag(self, mask: int, value: bool) -> None:
        if value: self.status = self.status | mask
        else: self.status = self.status & ~mask

    @property
    def flag_c(self) -> bool:
        return self._get_flag(C_FLAG)

    @flag_c.setter
    def flag_c(self, value: bool) -> None:
        self._set_flag(C_FLAG, value)

    @property
    def flag_dc(self) -> bool:
        return self._get_flag(DC_FLAG)

    @flag_dc.setter
    def flag_dc(self, value: bool) -> None:
        self._set_flag(DC_FLAG, value)

    @property
    def flag_z(self) -> bool:
        return self._get_flag(Z_FLAG)

    @flag_z.setter
    def flag_z(self, value: bool) -> None:
        self._set_flag(Z_FLAG, value)

    @property
    def flag_pd(self) -> bool:
        return self._get_flag(PD_FLAG)

    @flag_pd.setter
    def flag_pd(self, value: bool) -> None:
        self._set_flag(PD_FLAG, value)

    @property
    def flag_to(self) -> bool:
        return self._get_flag(TO_FLAG)

    @flag_to.setter
    def flag_to(self, value: bool) -> None:
        self._set_flag(TO_FLAG, value)

    # @intent:responsibility 現在の状態の不変コピーを生成します。
    def freeze(self) -> StateView:
        return StateView(
            pc=self.pc,
            w=self.w,
            status=self.status,
            registers=self.registers.dump(),
            stack=self.stack.entries(),
        )
