"""
Config — Лимиты арифметики и константы по умолчанию

Модуль содержит:
- Final-константы значений по умолчанию
- ArithmeticLimits: immutable Pydantic модель лимитов
- DEFAULT_LIMITS: общий экземпляр по умолчанию

Переменные окружения не используются. Для переопределения лимитов
вызывающий код передаёт собственный экземпляр ArithmeticLimits.
"""

from typing import Final

from pydantic import BaseModel, Field

from xenmath.core.errors import Overflow


# =============================================================================
# КОНСТАНТЫ ПО УМОЛЧАНИЮ
# =============================================================================

# Максимальная разрядность (в битах) числителя/знаменателя результата
# возведения в степень и реконструкции из монзо
MAX_BIT_LENGTH_DEFAULT: Final[int] = 65536

# Октава в центах: период эквивалентности по умолчанию
EQUAVE_CENTS_DEFAULT: Final[float] = 1200.0

# Количество простых чисел, предзаполняемых в кэше базиса
PRIME_BASIS_SEED_SIZE: Final[int] = 25


# =============================================================================
# ARITHMETIC LIMITS
# =============================================================================


class ArithmeticLimits(BaseModel):
    """
    Лимиты точной арифметики.

    Immutable модель (frozen=True): экземпляр можно безопасно
    разделять между вызовами и потоками.
    """

    max_bit_length: int = Field(
        MAX_BIT_LENGTH_DEFAULT,
        gt=0,
        description="Максимальная разрядность числителя/знаменателя в битах",
    )
    default_equave_cents: float = Field(
        EQUAVE_CENTS_DEFAULT,
        gt=0,
        description="Период эквивалентности по умолчанию (центы)",
    )

    model_config = {"frozen": True}

    def check_bit_length(self, bits: int, what: str) -> None:
        """
        Проверка оценки разрядности против лимита.

        Args:
            bits: Оценка разрядности результата
            what: Описание операции (для сообщения об ошибке)

        Raises:
            Overflow: Если bits > max_bit_length
        """
        if bits > self.max_bit_length:
            raise Overflow(
                f"{what} needs about {bits} bits, "
                f"limit is max_bit_length={self.max_bit_length}"
            )


DEFAULT_LIMITS: Final[ArithmeticLimits] = ArithmeticLimits()
