"""
Fraction — Точное рациональное число

Immutable Pydantic модель дроби numerator / denominator.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. gcd(|numerator|, denominator) == 1
2. denominator > 0, знак хранится только в numerator
3. Ноль представлен как 0/1
4. Любая арифметическая операция возвращает новый нормализованный экземпляр
5. Равенство структурное после нормализации (без epsilon)

Конструирование:
    Fraction(6, 8)          → 3/4
    Fraction(5)             → 5
    Fraction(0.75)          → 3/4   (точное двоичное значение float)
    Fraction("3/2")         → 3/2
    Fraction("1.25")        → 5/4
    Fraction("12.5%")       → 1/8
    Fraction("1.5", "2")    → 3/4   (оба аргумента могут быть дробями)

Также модуль содержит FractionSet — множество дробей с ключом по
канонической паре (numerator, denominator).
"""

import math
import numbers
import re
import sys
from collections.abc import Iterable, Iterator, MutableSet
from typing import TYPE_CHECKING, Any, Final, Union

from pydantic import BaseModel, Field, model_validator

from xenmath.core.config import DEFAULT_LIMITS, ArithmeticLimits
from xenmath.core.errors import DivisionByZero, InvalidInput, Overflow, XenMathError
from xenmath.core.math.number_theory import gcd, lcm
from xenmath.core.math.numerical_safeguards import is_valid_float, require_integer

if TYPE_CHECKING:
    from xenmath.core.math.primes import PrimeBasis

FractionLike = Union["Fraction", int, float, str, numbers.Rational]

# Параметры числового хэша Python (совместимость hash(Fraction(3, 2)) == hash(1.5))
_HASH_MODULUS: Final[int] = sys.hash_info.modulus
_HASH_INF: Final[int] = sys.hash_info.inf

# log2(10): оценка разрядности для десятичного порядка
_BITS_PER_DECIMAL_DIGIT: Final[float] = math.log2(10)

_NUMBER_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"""
    \A\s*
    (?P<sign>[-+]?)
    (?=\d|\.\d)                     # хотя бы одна цифра
    (?P<integer>\d*)
    (?:\.(?P<fraction>\d*))?
    (?:[eE](?P<exponent>[-+]?\d+))?
    \s*(?P<percent>%?)
    \s*\Z
    """,
    re.VERBOSE,
)


# =============================================================================
# НОРМАЛИЗАЦИЯ И ПРИВЕДЕНИЕ ТИПОВ
# =============================================================================


def _reduce(numerator: int, denominator: int) -> tuple[int, int]:
    """
    Приведение пары к каноническому виду.

    Raises:
        DivisionByZero: Если denominator == 0
    """
    if denominator == 0:
        raise DivisionByZero(f"Fraction {numerator}/0 has zero denominator")

    divisor = gcd(numerator, denominator)
    if denominator < 0:
        divisor = -divisor

    return numerator // divisor, denominator // divisor


def _parse_number(text: str) -> tuple[int, int]:
    """Разбор десятичной/процентной записи в (numerator, denominator)."""
    match = _NUMBER_PATTERN.match(text)
    if match is None:
        raise InvalidInput(f"Cannot parse {text!r} as a fraction")

    fraction_digits = match["fraction"] or ""
    numerator = int((match["integer"] or "") + fraction_digits or "0")
    denominator = 10 ** len(fraction_digits)

    if match["exponent"]:
        exponent = int(match["exponent"])
        DEFAULT_LIMITS.check_bit_length(
            int(abs(exponent) * _BITS_PER_DECIMAL_DIGIT), f"Parsing {text!r}"
        )
        if exponent >= 0:
            numerator *= 10**exponent
        else:
            denominator *= 10**-exponent

    if match["percent"]:
        denominator *= 100

    if match["sign"] == "-":
        numerator = -numerator

    return numerator, denominator


def _parse_string(text: str) -> tuple[int, int]:
    """Разбор строки: число или отношение 'a/b' (a и b — числа)."""
    parts = text.split("/")
    if len(parts) == 1:
        return _parse_number(parts[0])

    if len(parts) != 2:
        raise InvalidInput(f"Cannot parse {text!r} as a fraction")

    num_n, num_d = _parse_number(parts[0])
    den_n, den_d = _parse_number(parts[1])
    return num_n * den_d, num_d * den_n


def _to_pair(value: Any) -> tuple[int, int]:
    """
    Приведение fraction-like значения к (не обязательно сокращённой) паре.

    Raises:
        InvalidInput: Если значение нечисловое, NaN/Inf или некорректная строка
    """
    if isinstance(value, Fraction):
        return value.numerator, value.denominator

    if isinstance(value, bool):
        raise InvalidInput(f"Cannot convert {value!r} to a fraction")

    if isinstance(value, numbers.Rational):
        return int(value.numerator), int(value.denominator)

    if isinstance(value, float):
        if not is_valid_float(value):
            raise InvalidInput(f"Cannot convert non-finite float {value} to a fraction")
        return value.as_integer_ratio()

    if isinstance(value, str):
        return _parse_string(value)

    raise InvalidInput(f"Cannot convert {type(value).__name__} {value!r} to a fraction")


def _operand_pair(value: Any) -> tuple[int, int] | None:
    """Пара для бинарного оператора; None если тип не поддерживается."""
    if isinstance(value, Fraction):
        return value.numerator, value.denominator

    if isinstance(value, numbers.Rational):
        return int(value.numerator), int(value.denominator)

    if isinstance(value, float):
        if not is_valid_float(value):
            raise InvalidInput(f"Cannot combine a fraction with non-finite float {value}")
        return value.as_integer_ratio()

    return None


# =============================================================================
# FRACTION MODEL
# =============================================================================


class Fraction(BaseModel):
    """
    Точное рациональное число в каноническом виде.

    Immutable модель (frozen=True): все операции создают новый экземпляр.
    """

    numerator: int = Field(0, description="Числитель (несёт знак)")
    denominator: int = Field(1, gt=0, description="Знаменатель (всегда положительный)")

    model_config = {"frozen": True}

    def __init__(
        self,
        numerator: FractionLike = 0,
        denominator: FractionLike | None = None,
        **data: Any,
    ) -> None:
        num_n, num_d = _to_pair(numerator)

        if denominator is None:
            n, d = num_n, num_d
        else:
            den_n, den_d = _to_pair(denominator)
            n, d = num_n * den_d, num_d * den_n

        super().__init__(numerator=n, denominator=d, **data)

    @model_validator(mode="before")
    @classmethod
    def _normalize(cls, data: Any) -> Any:
        """Сокращение пары через gcd и перенос знака в числитель."""
        if not isinstance(data, dict):
            return data

        numerator = data.get("numerator", 0)
        denominator = data.get("denominator", 1)

        if type(numerator) is int and type(denominator) is int:
            numerator, denominator = _reduce(numerator, denominator)
            return {**data, "numerator": numerator, "denominator": denominator}

        return data

    @model_validator(mode="after")
    def _check_canonical(self) -> "Fraction":
        if gcd(self.numerator, self.denominator) != 1:
            raise ValueError(
                f"Fraction {self.numerator}/{self.denominator} is not in lowest terms"
            )
        return self

    @classmethod
    def _from_pair(cls, numerator: int, denominator: int) -> "Fraction":
        """Быстрый путь без валидации Pydantic: пара сокращается здесь."""
        n, d = _reduce(numerator, denominator)
        return cls.model_construct(numerator=n, denominator=d)

    @classmethod
    def from_string(cls, text: str) -> "Fraction":
        """Разбор '3/2', '1.25', '-.5', '3e2', '12.5%'."""
        return cls._from_pair(*_parse_string(text))

    # -------------------------------------------------------------------------
    # Представление
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        if self.denominator == 1:
            return str(self.numerator)
        return f"{self.numerator}/{self.denominator}"

    def __repr__(self) -> str:
        return f"Fraction({self.numerator}, {self.denominator})"

    def __hash__(self) -> int:
        # Тот же алгоритм, что у numbers в CPython
        try:
            dinv = pow(self.denominator, -1, _HASH_MODULUS)
        except ValueError:
            hash_ = _HASH_INF
        else:
            hash_ = hash(hash(abs(self.numerator)) * dinv)
        result = hash_ if self.numerator >= 0 else -hash_
        return -2 if result == -1 else result

    def __bool__(self) -> bool:
        return self.numerator != 0

    # -------------------------------------------------------------------------
    # Сравнение
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if isinstance(other, float) and not is_valid_float(other):
            return False
        pair = _operand_pair(other)
        if pair is None:
            return NotImplemented
        return self.numerator * pair[1] == pair[0] * self.denominator

    def _cross(self, other: object) -> tuple[int, int] | None:
        """(self * d_other, n_other * self.d) для упорядочивания."""
        if isinstance(other, float) and not is_valid_float(other):
            raise InvalidInput(f"Cannot order a fraction against non-finite float {other}")
        pair = _operand_pair(other)
        if pair is None:
            return None
        return self.numerator * pair[1], pair[0] * self.denominator

    def __lt__(self, other: object) -> bool:
        cross = self._cross(other)
        return NotImplemented if cross is None else cross[0] < cross[1]

    def __le__(self, other: object) -> bool:
        cross = self._cross(other)
        return NotImplemented if cross is None else cross[0] <= cross[1]

    def __gt__(self, other: object) -> bool:
        cross = self._cross(other)
        return NotImplemented if cross is None else cross[0] > cross[1]

    def __ge__(self, other: object) -> bool:
        cross = self._cross(other)
        return NotImplemented if cross is None else cross[0] >= cross[1]

    def compare(self, other: FractionLike) -> int:
        """
        Сравнение с fraction-like значением.

        Returns:
            -1 если self < other, 0 если равны, +1 если self > other
        """
        other_fraction = _coerce(other)
        left = self.numerator * other_fraction.denominator
        right = other_fraction.numerator * self.denominator
        return (left > right) - (left < right)

    def equals(self, other: FractionLike) -> bool:
        """Точное равенство с fraction-like значением (включая строки)."""
        return self.compare(other) == 0

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def __add__(self, other: Any) -> "Fraction":
        pair = _operand_pair(other)
        if pair is None:
            return NotImplemented
        n, d = pair
        return Fraction._from_pair(
            self.numerator * d + n * self.denominator, self.denominator * d
        )

    def __radd__(self, other: Any) -> "Fraction":
        return self.__add__(other)

    def __sub__(self, other: Any) -> "Fraction":
        pair = _operand_pair(other)
        if pair is None:
            return NotImplemented
        n, d = pair
        return Fraction._from_pair(
            self.numerator * d - n * self.denominator, self.denominator * d
        )

    def __rsub__(self, other: Any) -> "Fraction":
        pair = _operand_pair(other)
        if pair is None:
            return NotImplemented
        n, d = pair
        return Fraction._from_pair(
            n * self.denominator - self.numerator * d, self.denominator * d
        )

    def __mul__(self, other: Any) -> "Fraction":
        pair = _operand_pair(other)
        if pair is None:
            return NotImplemented
        n, d = pair
        return Fraction._from_pair(self.numerator * n, self.denominator * d)

    def __rmul__(self, other: Any) -> "Fraction":
        return self.__mul__(other)

    def __truediv__(self, other: Any) -> "Fraction":
        pair = _operand_pair(other)
        if pair is None:
            return NotImplemented
        n, d = pair
        if n == 0:
            raise DivisionByZero(f"Division of {self} by zero")
        return Fraction._from_pair(self.numerator * d, self.denominator * n)

    def __rtruediv__(self, other: Any) -> "Fraction":
        pair = _operand_pair(other)
        if pair is None:
            return NotImplemented
        return Fraction._from_pair(*pair) / self

    def __floordiv__(self, other: Any) -> int:
        quotient = self.__truediv__(other)
        return NotImplemented if quotient is NotImplemented else quotient.floor()

    def __rfloordiv__(self, other: Any) -> int:
        pair = _operand_pair(other)
        if pair is None:
            return NotImplemented
        return (Fraction._from_pair(*pair) / self).floor()

    def __mod__(self, other: Any) -> "Fraction":
        pair = _operand_pair(other)
        if pair is None:
            return NotImplemented
        return self.mmod(Fraction._from_pair(*pair))

    def __rmod__(self, other: Any) -> "Fraction":
        pair = _operand_pair(other)
        if pair is None:
            return NotImplemented
        return Fraction._from_pair(*pair).mmod(self)

    def __neg__(self) -> "Fraction":
        return Fraction.model_construct(numerator=-self.numerator, denominator=self.denominator)

    def __pos__(self) -> "Fraction":
        return self

    def __abs__(self) -> "Fraction":
        return Fraction.model_construct(numerator=abs(self.numerator), denominator=self.denominator)

    def __pow__(self, exponent: Any) -> "Fraction":
        return self.pow(exponent)

    def __rpow__(self, base: Any) -> "Fraction":
        pair = _operand_pair(base)
        if pair is None:
            return NotImplemented
        return Fraction._from_pair(*pair).pow(self)

    def inverse(self) -> "Fraction":
        """
        Обратное значение 1 / self.

        Raises:
            DivisionByZero: Если self == 0
        """
        if self.numerator == 0:
            raise DivisionByZero("Zero has no inverse")
        return Fraction._from_pair(self.denominator, self.numerator)

    def pow(self, exponent: FractionLike, limits: ArithmeticLimits | None = None) -> "Fraction":
        """
        Возведение в целую степень.

        Args:
            exponent: Целый показатель (int, integer-valued float или Fraction с d == 1)
            limits: Лимиты разрядности (default: DEFAULT_LIMITS)

        Returns:
            self ** exponent

        Raises:
            InvalidInput: Если показатель дробный
            DivisionByZero: Если 0 возводится в отрицательную степень
            Overflow: Если разрядность результата превышает max_bit_length

        Examples:
            >>> Fraction(3, 2) ** 2
            Fraction(9, 4)
            >>> Fraction(3, 2) ** -1
            Fraction(2, 3)
        """
        if isinstance(exponent, (Fraction, numbers.Rational)) and not isinstance(exponent, int):
            if exponent.denominator != 1:
                raise InvalidInput(f"Exponent must be an integer, got {exponent}")
            exponent = int(exponent.numerator)
        exponent = require_integer(exponent, "exponent")

        if exponent < 0 and self.numerator == 0:
            raise DivisionByZero(f"Zero raised to negative power {exponent}")

        limits = limits or DEFAULT_LIMITS
        magnitude = max(abs(self.numerator), self.denominator)
        bits = 0 if magnitude == 1 else magnitude.bit_length()
        limits.check_bit_length(bits * abs(exponent), f"Fraction({self}) ** {exponent}")

        if exponent >= 0:
            return Fraction.model_construct(
                numerator=self.numerator**exponent, denominator=self.denominator**exponent
            )
        return Fraction._from_pair(self.denominator**-exponent, self.numerator**-exponent)

    def mod(self, other: FractionLike) -> "Fraction":
        """
        Остаток с truncation: self - other * trunc(self / other).

        Знак результата совпадает со знаком self.
        """
        divisor = _coerce(other)
        if divisor.numerator == 0:
            raise DivisionByZero(f"Modulo of {self} by zero")
        return self - divisor * math.trunc(self / divisor)

    def mmod(self, other: FractionLike) -> "Fraction":
        """
        Математический остаток: self - other * floor(self / other).

        Знак результата совпадает со знаком other.

        Examples:
            >>> Fraction(-1, 2).mmod(1)
            Fraction(1, 2)
        """
        divisor = _coerce(other)
        if divisor.numerator == 0:
            raise DivisionByZero(f"Modulo of {self} by zero")
        return self - divisor * (self / divisor).floor()

    def gcd(self, other: FractionLike) -> "Fraction":
        """Наибольший общий делитель двух рациональных: gcd(n) / lcm(d)."""
        other_fraction = _coerce(other)
        return Fraction._from_pair(
            gcd(self.numerator, other_fraction.numerator),
            lcm(self.denominator, other_fraction.denominator),
        )

    def lcm(self, other: FractionLike) -> "Fraction":
        """Наименьшее общее кратное двух рациональных: lcm(n) / gcd(d)."""
        other_fraction = _coerce(other)
        return Fraction._from_pair(
            lcm(self.numerator, other_fraction.numerator),
            gcd(self.denominator, other_fraction.denominator),
        )

    # -------------------------------------------------------------------------
    # Округление и свойства
    # -------------------------------------------------------------------------

    def floor(self) -> int:
        return self.numerator // self.denominator

    def ceil(self) -> int:
        return -(-self.numerator // self.denominator)

    def round(self) -> int:
        """Округление к ближайшему целому, половины — от нуля."""
        doubled = 2 * abs(self.numerator) + self.denominator
        magnitude = doubled // (2 * self.denominator)
        return magnitude if self.numerator >= 0 else -magnitude

    def __floor__(self) -> int:
        return self.floor()

    def __ceil__(self) -> int:
        return self.ceil()

    def __round__(self, ndigits: int | None = None) -> Union[int, "Fraction"]:
        if ndigits is None:
            return self.round()
        scale = Fraction._from_pair(10, 1) ** ndigits
        return Fraction._from_pair((self * scale).round(), 1) / scale

    def __trunc__(self) -> int:
        return self.floor() if self.numerator >= 0 else self.ceil()

    def __int__(self) -> int:
        return self.__trunc__()

    def sign(self) -> int:
        """Знак: -1, 0 или 1."""
        return (self.numerator > 0) - (self.numerator < 0)

    def is_integer(self) -> bool:
        return self.denominator == 1

    def is_unity(self) -> bool:
        return self.numerator == 1 and self.denominator == 1

    # -------------------------------------------------------------------------
    # Конверсии
    # -------------------------------------------------------------------------

    def to_float(self) -> float:
        """
        Приближение float (корректно округлённое).

        Raises:
            Overflow: Если значение вне диапазона float
        """
        try:
            return self.numerator / self.denominator
        except OverflowError as e:
            raise Overflow(f"Fraction {self} is out of float range") from e

    def __float__(self) -> float:
        return self.to_float()

    def to_cents(self) -> float:
        """Размер интервала в центах: 1200 * log2(self)."""
        from xenmath.core.math.conversion import fraction_to_cents

        return fraction_to_cents(self)

    def to_monzo(
        self, basis_limit: int | None = None, basis: "PrimeBasis | None" = None
    ) -> list[int]:
        """Вектор показателей по базису простых (см. monzo.to_monzo)."""
        from xenmath.core.math.monzo import to_monzo

        return to_monzo(self, basis_limit, basis=basis)

    @classmethod
    def from_monzo(
        cls,
        vector: Iterable[int],
        basis: "PrimeBasis | None" = None,
        limits: ArithmeticLimits | None = None,
    ) -> "Fraction":
        """Реконструкция дроби из монзо (см. monzo.from_monzo)."""
        from xenmath.core.math.monzo import from_monzo

        return from_monzo(vector, basis=basis, limits=limits)


def _coerce(value: FractionLike) -> Fraction:
    """fraction-like значение → Fraction."""
    if isinstance(value, Fraction):
        return value
    return Fraction._from_pair(*_to_pair(value))


# =============================================================================
# FRACTION SET
# =============================================================================


class FractionSet(MutableSet):
    """
    Множество уникальных дробей.

    Ключ — каноническая пара (numerator, denominator), поэтому
    Fraction(1, 2), "2/4" и 0.5 считаются одним элементом.
    Порядок итерации — порядок добавления.
    """

    def __init__(self, values: Iterable[FractionLike] = ()):
        self._items: dict[tuple[int, int], Fraction] = {}
        for value in values:
            self.add(value)

    @staticmethod
    def _key(value: FractionLike) -> tuple[int, int]:
        fraction = _coerce(value)
        return fraction.numerator, fraction.denominator

    def __contains__(self, value: object) -> bool:
        try:
            key = self._key(value)  # type: ignore[arg-type]
        except XenMathError:
            return False
        return key in self._items

    def __iter__(self) -> Iterator[Fraction]:
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"FractionSet([{', '.join(str(f) for f in self)}])"

    def add(self, value: FractionLike) -> None:
        """Добавление значения (повторное добавление игнорируется)."""
        fraction = _coerce(value)
        self._items.setdefault((fraction.numerator, fraction.denominator), fraction)

    def discard(self, value: FractionLike) -> None:
        """Удаление значения, если оно присутствует."""
        if value in self:
            del self._items[self._key(value)]
