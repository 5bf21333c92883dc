from pic_core_tracer.common.errors import ConfigError
from pic_core_tracer.memory.call_stack import StackPolicy
from pic_core_tracer.memory.program_memory import ProgramMemory
from pic_core_tracer.arch.pic16f84a.cpu import Pic16f84aCpu
from pic_core_tracer.loader.loader import load_program
from .models import SystemConfig, CpuInitialState

# @intent:responsibility システム構成（Config）に基づいて、プログラムメモリとCPUを生成し、初期状態を適用します。
class SystemBuilder:
    def build_system(self, config: SystemConfig) -> Pic16f84aCpu:
        if config.architecture.upper() != "PIC16F84A":
            raise ConfigError(f"Unsupported architecture: {config.architecture}")

        try:
            memory = ProgramMemory(config.program_memory_words)
        except ValueError as e:
            raise ConfigError(str(e)) from e

        # ロードに失敗した場合はここで例外が伝播し、CPUは生成されない
        if config.program:
            load_program(config.program, memory)

        try:
            cpu = Pic16f84aCpu(
                memory,
                stack_depth=config.stack.depth,
                stack_policy=StackPolicy(config.stack.policy),
                fill=config.initial_state.fill,
            )
            self.apply_initial_state(cpu, config.initial_state)
        except (ValueError, IndexError) as e:
            # 範囲外のレジスタアドレス、8ビットを超える値、0以下のスタック深さ
            raise ConfigError(f"Invalid initial state: {e}") from e
        cpu.set_symbol_map(dict(config.symbols))
        return cpu

    # @intent:responsibility Configで定義された初期状態をCPUに適用します。
    def apply_initial_state(self, cpu: Pic16f84aCpu, config_state: CpuInitialState) -> None:
        """
        CPUをリセットし、Configから指定された初期値を適用します。
        """
        cpu.reset()
        state = cpu.get_state()

        state.pc = config_state.pc
        if config_state.w is not None:
            if not 0 <= config_state.w <= 0xFF:
                raise ValueError(f"W value {config_state.w} is not an 8-bit value.")
            state.w = config_state.w
        for address, value in config_state.registers.items():
            state.registers.set(address, value)
