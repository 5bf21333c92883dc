from dataclasses import dataclass, field
from typing import Dict, Optional

@dataclass
class StackConfig:
    depth: int = 8
    policy: str = "error"  # "error", "wrap"

@dataclass
class CpuInitialState:
    pc: int = 0x0000
    w: Optional[int] = None
    fill: int = 0x00  # 不定値のレジスタ/Wを埋める値
    registers: Dict[int, int] = field(default_factory=dict)

@dataclass
class SystemConfig:
    architecture: str = "PIC16F84A"
    program_memory_words: int = 1024
    program: Optional[str] = None
    stack: StackConfig = field(default_factory=StackConfig)
    initial_state: CpuInitialState = field(default_factory=CpuInitialState)
    symbols: Dict[str, int] = field(default_factory=dict)
