"""
Errors — Иерархия исключений xenmath

Все ошибки детерминированных вычислений выбрасываются немедленно, без
повторных попыток и без fallback-значений. Каждое исключение наследует
соответствующий встроенный тип, поэтому вызывающий код может ловить как
XenMathError, так и привычные ZeroDivisionError / ValueError / OverflowError.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Деление на ноль → DivisionByZero (никогда не inf/NaN)
2. Вырожденный вход Евклида (0, 0) → DegenerateEuclidInput (никогда не gcd = 0 молча)
3. Не-smooth значение для базиса → UnrepresentableValue (никогда не молчаливое усечение)
4. Превышение лимита разрядности → Overflow
"""


class XenMathError(Exception):
    """Базовое исключение для всех ошибок xenmath."""


class DivisionByZero(XenMathError, ZeroDivisionError):
    """Нулевой знаменатель или делитель."""


class InvalidInput(XenMathError, ValueError):
    """
    Аргумент вне области определения.

    Примеры: NaN/Inf, дробное значение там, где требуется целое,
    факторизация n ≤ 0, некорректная строка дроби.
    """


class DegenerateEuclidInput(InvalidInput):
    """
    Расширенный алгоритм Евклида вызван на входе, где все операнды равны нулю.

    gcd(0, 0) формально равен 0, но коэффициенты Безу не определены.
    Вызывающий код обязан обработать этот случай явно.
    """


class UnrepresentableValue(XenMathError, ValueError):
    """
    Простые множители значения выходят за пределы запрошенного базиса монзо.

    Молчаливое усечение испортило бы последующую интервальную арифметику,
    поэтому остаток всегда сообщается через исключение.
    """


class Overflow(XenMathError, OverflowError):
    """Результат превышает допустимую разрядность (ArithmeticLimits.max_bit_length)."""


class NoApproximationFound(XenMathError, LookupError):
    """Ограничения на числитель/знаменатель не допускают ни одного кандидата."""
