# pic_core_tracer/arch/pic16f84a/trace.py
"""
命令ごとの診断出力。

コアは何も出力しません。このモジュールのトレーサをオブザーバとして登録した場合のみ、
実行した命令とSTATUS/Wの変化が表示されます。
"""
import sys
from typing import Optional, TextIO

from pic_core_tracer.core.snapshot import TraceEvent
from pic_core_tracer.memory.register_file import RegisterFile


# @intent:responsibility TraceEventを受け取り、変化したSTATUSとWを表示します。
class StatusTracer:
    def __init__(self, stream: Optional[TextIO] = None, show_instructions: bool = True):
        self._stream = stream if stream is not None else sys.stdout
        self._show_instructions = show_instructions

    def __call__(self, event: TraceEvent) -> None:
        if self._show_instructions:
            print(f"{event.pc:04X}: {event.operation.opcode_hex}  {event.operation}", file=self._stream)

        before, after = event.before, event.after
        if before.status != after.status:
            print(
                f"STATUS:[{RegisterFile.format_status(before.status)}] -> "
                f"[{RegisterFile.format_status(after.status)}]",
                file=self._stream,
            )
        if before.w != after.w:
            print(f"W: {before.w} -> {after.w}", file=self._stream)
