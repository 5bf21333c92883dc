# pic_core_tracer/memory/call_stack.py
"""
ハードウェアコールスタック。

CALLで積まれ、RETURN/RETLW/RETFIEで取り出される戻りアドレスの有界LIFOです。
容量超過時の振る舞いはStackPolicyで選択します。
"""
from enum import Enum
from typing import List, Tuple

from pic_core_tracer.common.errors import StackOverflowError, StackUnderflowError

PC_MASK = 0x1FFF


# @intent:responsibility スタックの境界違反時の振る舞いを定義します。
class StackPolicy(Enum):
    ERROR = "error"  # 容量超過のPUSH、空からのPOPを例外として拒否
    WRAP = "wrap"    # 実機同様の循環バッファ（古いエントリを黙って上書き）


# @intent:responsibility 13ビットの戻りアドレスを保持する有界スタック。
class CallStack:
    """
    PIC16F84Aの8レベルハードウェアスタック。
    スタックポインタはプログラムから読み書きできません。
    """
    DEFAULT_DEPTH = 8

    # @intent:pre-condition `capacity`は正の整数である必要があります。
    def __init__(self, capacity: int = DEFAULT_DEPTH, policy: StackPolicy = StackPolicy.ERROR):
        if not isinstance(capacity, int) or capacity <= 0:
            raise ValueError("Stack capacity must be a positive integer.")
        self._capacity = capacity
        self._policy = policy
        self._slots: List[int] = []
        self._pointer = 0
        self._count = 0
        self.initialize()

    def initialize(self) -> None:
        self._slots = [0x0000] * self._capacity
        self._pointer = 0
        self._count = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def policy(self) -> StackPolicy:
        return self._policy

    @property
    def depth(self) -> int:
        """現在積まれているエントリ数。"""
        return self._count

    @property
    def is_full(self) -> bool:
        return self._count == self._capacity

    # @intent:responsibility PUSHが可能かどうかを、状態を変更せずに検査します。
    # @intent:rationale 実行エンジンが副作用を適用する前に境界違反を検出できるようにします。
    def check_push(self) -> None:
        if self._policy is StackPolicy.ERROR and self.is_full:
            raise StackOverflowError(self._capacity)

    def push(self, address: int) -> None:
        self.check_push()
        self._slots[self._pointer] = address & PC_MASK
        self._pointer = (self._pointer + 1) % self._capacity
        self._count = min(self._count + 1, self._capacity)

    # @intent:responsibility 次にPOPされる値を、状態を変更せずに返します。
    def peek(self) -> int:
        if self._count == 0 and self._policy is StackPolicy.ERROR:
            raise StackUnderflowError()
        return self._slots[(self._pointer - 1) % self._capacity]

    def pop(self) -> int:
        address = self.peek()
        self._pointer = (self._pointer - 1) % self._capacity
        if self._count > 0:
            self._count -= 1
        return address

    def entries(self) -> Tuple[int, ...]:
        """古い順に並べた有効なエントリ。"""
        start = self._pointer - self._count
        return tuple(self._slots[(start + i) % self._capacity] for i in range(self._count))
