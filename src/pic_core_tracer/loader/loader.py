# pic_core_tracer/loader/loader.py
"""
プログラムローダーモジュール。
生のバイナリイメージ、および Intel HEX (INHX8M / INHX32) 形式のロードをサポートします。
"""
import warnings
from typing import List, Tuple

from pic_core_tracer.common.errors import ProgramLoadError
from pic_core_tracer.memory.program_memory import ProgramMemory


class BinaryImageLoader:
    """
    リトルエンディアン2バイト/ワードの生イメージをロードするローダー。
    """
    def load_binary(self, file_path: str, memory: ProgramMemory) -> None:
        with open(file_path, 'rb') as f:
            buffer = f.read()
        memory.load(buffer)


class IntelHexLoader:
    """
    Intel HEX形式のファイルを解析し、データをプログラムメモリにロードするローダー。
    HEXのアドレスはバイト単位のため、ワードアドレスはその1/2になります。
    """
    # @intent:responsibility ファイル全体を検証してからメモリへ書き込みます。
    # @intent:rationale 途中の行で失敗した場合に、部分的にロードされた状態でCPUが実行されることを防ぎます。
    def load_intel_hex(self, file_path: str, memory: ProgramMemory) -> None:
        with open(file_path, 'r') as f:
            records = self._parse(f.readlines())

        capacity = memory.capacity_bytes
        skipped = 0
        for byte_address, data in records:
            if byte_address >= capacity:
                # コンフィグワード(0x400E)やEEPROM(0x4200)の領域
                skipped += 1
                continue
            memory.load_byte(byte_address, data)

        if skipped:
            warnings.warn(f"Skipped {skipped} bytes outside program memory ({capacity} bytes)")

    def _parse(self, lines: List[str]) -> List[Tuple[int, int]]:
        current_extended_address = 0x0000
        records: List[Tuple[int, int]] = []

        for line_num, line in enumerate(lines, 1):
            line = line.strip()
            comment_start = line.find(';')
            if comment_start != -1:
                line = line[:comment_start].strip()
            if not line or not line.startswith(':'):
                continue

            if len(line) < 11:
                raise ProgramLoadError(f"Invalid Intel HEX record format on line {line_num}: Too short - {line}")

            try:
                data_length = int(line[1:3], 16)
                address_field = int(line[3:7], 16)
                record_type = int(line[7:9], 16)
                data_part_str = line[9:-2]
                checksum_field = int(line[-2:], 16)
            except ValueError as e:
                raise ProgramLoadError(f"Error parsing Intel HEX line {line_num}: {line} - {e}") from e

            if len(data_part_str) != data_length * 2:
                raise ProgramLoadError(f"Data length mismatch on line {line_num}")

            try:
                data = [int(data_part_str[i*2:(i*2)+2], 16) for i in range(data_length)]
            except ValueError as e:
                raise ProgramLoadError(f"Error parsing Intel HEX line {line_num}: {line} - {e}") from e

            checksum_sum = data_length + (address_field >> 8) + (address_field & 0xFF) + record_type + sum(data)
            calculated_checksum = (~checksum_sum + 1) & 0xFF
            if calculated_checksum != checksum_field:
                raise ProgramLoadError(
                    f"Checksum mismatch on line {line_num}: Calculated {calculated_checksum:02X}, Expected {checksum_field:02X}"
                )

            if record_type == 0x00:
                base = current_extended_address + address_field
                for i, byte_data in enumerate(data):
                    records.append((base + i, byte_data))
            elif record_type == 0x01:
                break
            elif record_type in (0x02, 0x04):
                if data_length != 2:
                    raise ProgramLoadError(f"Invalid extended address record on line {line_num}: {line}")
                segment = (data[0] << 8) | data[1]
                current_extended_address = segment << (16 if record_type == 0x04 else 4)
            elif record_type == 0x03 or record_type == 0x05:
                pass
            else:
                raise ProgramLoadError(f"Unknown Intel HEX record type {record_type:02X} on line {line_num}")

        return records


# @intent:responsibility ファイル拡張子からローダーを選択してロードします。
def load_program(file_path: str, memory: ProgramMemory) -> None:
    if file_path.lower().endswith(('.hex', '.ihx')):
        IntelHexLoader().load_intel_hex(file_path, memory)
    else:
        BinaryImageLoader().load_binary(file_path, memory)
