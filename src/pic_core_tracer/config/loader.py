import os
import yaml
from typing import Dict, Any

from pic_core_tracer.common.errors import ConfigError
from .models import SystemConfig, StackConfig, CpuInitialState

class ConfigLoader:
    def load_from_file(self, path: str) -> SystemConfig:
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}
        config = self._parse_config(data)
        # プログラムのパスは設定ファイルからの相対パスとして解決する
        if config.program and not os.path.isabs(config.program):
            config.program = os.path.join(os.path.dirname(os.path.abspath(path)), config.program)
        return config

    def load_from_string(self, text: str) -> SystemConfig:
        return self._parse_config(yaml.safe_load(text) or {})

    def _parse_config(self, data: Dict[str, Any]) -> SystemConfig:
        if not isinstance(data, dict):
            raise ConfigError("Configuration root must be a mapping")

        arch = data.get("architecture", "PIC16F84A")

        # Parse Stack
        stack_data = data.get("stack", {}) or {}
        policy = str(stack_data.get("policy", "error")).lower()
        if policy not in ("error", "wrap"):
            raise ConfigError(f"Unknown stack policy: {policy}")
        stack = StackConfig(
            depth=self._parse_int(stack_data.get("depth", 8)),
            policy=policy
        )

        # Parse Initial State
        initial_state_data = data.get("initial_state", {}) or {}
        w = initial_state_data.get("w")
        initial_state = CpuInitialState(
            pc=self._parse_int(initial_state_data.get("pc", 0)),
            w=self._parse_int(w) if w is not None else None,
            fill=self._parse_int(initial_state_data.get("fill", 0)),
            registers={
                self._parse_int(addr): self._parse_int(value)
                for addr, value in (initial_state_data.get("registers", {}) or {}).items()
            }
        )

        symbols = {
            str(name): self._parse_int(addr)
            for name, addr in (data.get("symbols", {}) or {}).items()
        }

        return SystemConfig(
            architecture=arch,
            program_memory_words=self._parse_int(data.get("program_memory_words", 1024)),
            program=data.get("program"),
            stack=stack,
            initial_state=initial_state,
            symbols=symbols
        )

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ConfigError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            try:
                if value.lower().startswith("0x"):
                    return int(value, 16)
                return int(value)
            except ValueError:
                pass
        raise ConfigError(f"Invalid integer format: {value}")
