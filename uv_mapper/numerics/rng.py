# ==============================================================================
# Файл: uv_mapper/numerics/rng.py
# Назначение: Детерминированный ГПСЧ (LCG), хеш строки, сид из токена, тасовка.
# ==============================================================================
from __future__ import annotations
from typing import Any, List, Tuple, Union

U32_MASK = 0xFFFFFFFF
LCG_MUL = 1103515245
LCG_INC = 12345
LCG_OUT_MASK = 0x7FFFFFFF

# Длиннее 10 байт десятичное число в u32 не помещается
MAX_NUMERIC_SEED_LEN = 10


def u32(n: int) -> int: return n & U32_MASK


def prng_next(state: int) -> Tuple[int, int]:
    """Один шаг LCG. Возвращает (новое состояние, выход в 31 бит)."""
    state = u32(u32(state) * LCG_MUL + LCG_INC)
    return state, state & LCG_OUT_MASK


class LcgRandom:
    __slots__ = ("state",)

    def __init__(self, seed: int):
        self.state = u32(seed)

    def next_int(self) -> int:
        self.state, value = prng_next(self.state)
        return value


def hashcode(data: bytes) -> int:
    """Классический полиномиальный хеш строки: h = h*31 + b (mod 2^32)."""
    h = 0
    for b in data:
        h = u32(h * 31 + b)
    return h


def string_to_seed(token: Union[str, bytes]) -> int:
    """
    Превращает пользовательский токен в 32-битный сид.

    Короткие десятичные строки (до 10 цифр, значение <= 0xFFFFFFFF) берутся
    как число, всё остальное (буквы, переполнение, длинные строки)
    хешируется через hashcode(). Пустая строка даёт 0.
    """
    if isinstance(token, str):
        token = token.encode("utf-8")
    elif not isinstance(token, (bytes, bytearray)):
        raise TypeError(f"Seed token must be str or bytes, got {type(token).__name__}")

    data = bytes(token)
    if len(data) > MAX_NUMERIC_SEED_LEN:
        return hashcode(data)

    value = 0
    for b in data:
        # только ASCII '0'..'9'; str.isdigit() пропустил бы юникодные цифры
        if 0x30 <= b <= 0x39:
            value = value * 10 + (b - 0x30)
        else:
            return hashcode(data)
    if value > U32_MASK:
        return hashcode(data)
    return value


def shuffle(seq: List[Any], seed: int) -> None:
    """Тасовка Фишера-Йетса на LCG, на месте."""
    rng = LcgRandom(seed)
    n = len(seq)
    for i in range(n):
        r = rng.next_int()
        # на последнем шаге n - i == 1: обмен с самим собой, но сид всё равно
        # расходуется, чтобы последовательность совпадала с уже выпущенными картами
        j = i + r % (n - i)
        seq[i], seq[j] = seq[j], seq[i]
