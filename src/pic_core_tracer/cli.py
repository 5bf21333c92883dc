# pic_core_tracer/cli.py
"""
コマンドラインのエントリポイント。
プログラムをロードし、停止・フォルト・ステップ上限のいずれかまで実行します。
"""
import argparse
import sys
from typing import List, Optional

from pic_core_tracer.common.errors import CpuHaltedError, ExecutionError, PicEmulatorError
from pic_core_tracer.config.builder import SystemBuilder
from pic_core_tracer.config.loader import ConfigLoader
from pic_core_tracer.config.models import SystemConfig
from pic_core_tracer.arch.pic16f84a.trace import StatusTracer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pic-core-tracer", description="PIC16F84A instruction-set emulator")
    parser.add_argument("program", nargs="?", help="program image (.hex or raw little-endian binary)")
    parser.add_argument("--config", help="YAML system configuration")
    parser.add_argument("--steps", type=int, default=10000, help="maximum number of instructions to retire")
    parser.add_argument("--trace", action="store_true", help="print every instruction and STATUS/W change")
    return parser


# @intent:responsibility 引数を解釈してCPUを構築し、実行ループを回します。
# @intent:return 停止またはステップ上限で0、ロードエラー・未対応命令・スタック違反で1。
def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = ConfigLoader().load_from_file(args.config) if args.config else SystemConfig()
        if args.program:
            config.program = args.program
        if not config.program:
            print("Error: no program image given", file=sys.stderr)
            return 1
        cpu = SystemBuilder().build_system(config)
    except (PicEmulatorError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.trace:
        cpu.set_trace_observer(StatusTracer())

    exit_code = 0
    retired = 0
    try:
        for _ in range(args.steps):
            cpu.step()
            retired += 1
    except CpuHaltedError as e:
        print(str(e))
    except ExecutionError as e:
        print(f"Fault: {e}", file=sys.stderr)
        exit_code = 1

    print(f"Retired {retired} instructions ({cpu.cycle_count} cycles)")
    for name, value in cpu.get_register_map().items():
        print(f"  {name:<7}{value:#06x}")
    return exit_code


if __name__ == '__main__':
    sys.exit(main())
