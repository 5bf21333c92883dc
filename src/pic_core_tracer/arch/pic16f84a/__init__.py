# pic_core_tracer/arch/pic16f84a/__init__.py
"""
PIC16F84A Architecture Package
"""
from .cpu import Pic16f84aCpu
from .state import Pic16f84aCpuState
