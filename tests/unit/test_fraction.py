"""
Тесты для Fraction и FractionSet

Проверяет:
1. Нормализацию (gcd == 1, denominator > 0, ноль как 0/1)
2. Конструирование из int/float/str/Fraction и ошибки разбора
3. Сравнение, хэш и совместимость с числами Python
4. Арифметику, степени и лимит разрядности
5. Округление и конверсии
6. FractionSet
"""

import fractions
import math

import pytest
from pydantic import ValidationError

from xenmath.core.config import ArithmeticLimits
from xenmath.core.domain.fraction import Fraction, FractionSet
from xenmath.core.errors import DivisionByZero, InvalidInput, Overflow

# =============================================================================
# НОРМАЛИЗАЦИЯ
# =============================================================================


class TestNormalization:
    """Тесты канонической формы"""

    def test_reduces_by_gcd(self) -> None:
        """6/8 → 3/4"""
        f = Fraction(6, 8)
        assert f.numerator == 3
        assert f.denominator == 4

    def test_sign_moves_to_numerator(self) -> None:
        """Знак хранится только в числителе"""
        assert (Fraction(6, -8).numerator, Fraction(6, -8).denominator) == (-3, 4)
        assert (Fraction(-6, -8).numerator, Fraction(-6, -8).denominator) == (3, 4)

    def test_zero_is_canonical(self) -> None:
        """Ноль представлен как 0/1"""
        for denominator in (5, -5, 1):
            f = Fraction(0, denominator)
            assert (f.numerator, f.denominator) == (0, 1)

    def test_invariant_over_grid(self) -> None:
        """gcd(|n|, d) == 1, d > 0 и значение сохраняется"""
        for n in range(-10, 11):
            for d in range(-10, 11):
                if d == 0:
                    continue
                f = Fraction(n, d)
                assert f.denominator > 0
                assert math.gcd(f.numerator, f.denominator) == 1
                assert f * d == n

    def test_zero_denominator_rejected(self) -> None:
        """Нулевой знаменатель → DivisionByZero"""
        with pytest.raises(DivisionByZero):
            Fraction(1, 0)

    def test_zero_denominator_is_zero_division_error(self) -> None:
        """DivisionByZero совместим с ZeroDivisionError"""
        with pytest.raises(ZeroDivisionError):
            Fraction("1/0")

    def test_model_validate_normalizes(self) -> None:
        """Валидация из словаря тоже нормализует пару"""
        f = Fraction.model_validate({"numerator": 6, "denominator": -8})
        assert f == Fraction(-3, 4)

    def test_model_dump(self) -> None:
        """Сериализация в словарь канонической пары"""
        assert Fraction(6, 8).model_dump() == {"numerator": 3, "denominator": 4}

    def test_frozen(self) -> None:
        """Immutable: присваивание поля запрещено"""
        f = Fraction(1, 2)
        with pytest.raises(ValidationError):
            f.numerator = 5  # type: ignore[misc]


# =============================================================================
# КОНСТРУИРОВАНИЕ
# =============================================================================


class TestConstruction:
    """Тесты для конструирования из разных типов"""

    def test_from_integer(self) -> None:
        """Fraction(5) → 5/1"""
        f = Fraction(5)
        assert (f.numerator, f.denominator) == (5, 1)
        assert Fraction() == 0

    def test_from_float_is_exact(self) -> None:
        """float используется по точному двоичному значению"""
        assert Fraction(0.75) == Fraction(3, 4)
        assert Fraction(0.1) != Fraction(1, 10)
        assert Fraction(0.1).to_float() == 0.1

    def test_from_non_finite_float_rejected(self) -> None:
        """NaN/Inf → InvalidInput"""
        with pytest.raises(InvalidInput, match="non-finite"):
            Fraction(float("nan"))
        with pytest.raises(InvalidInput, match="non-finite"):
            Fraction(float("inf"))

    def test_from_stdlib_fraction(self) -> None:
        """numbers.Rational принимается"""
        assert Fraction(fractions.Fraction(6, 4)) == Fraction(3, 2)

    def test_from_fraction(self) -> None:
        """Копия Fraction"""
        assert Fraction(Fraction(3, 2)) == Fraction(3, 2)

    def test_fractional_components(self) -> None:
        """Оба аргумента могут быть дробями"""
        assert Fraction("1.5", "2") == Fraction(3, 4)
        assert Fraction(Fraction(1, 2), Fraction(1, 3)) == Fraction(3, 2)

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("3/2", (3, 2)),
            ("-3/2", (-3, 2)),
            ("1.25", (5, 4)),
            ("-.5", (-1, 2)),
            ("3.", (3, 1)),
            ("3e2", (300, 1)),
            ("25e-2", (1, 4)),
            ("12.5%", (1, 8)),
            (" 7 ", (7, 1)),
            ("1.5/2.5", (3, 5)),
        ],
    )
    def test_from_string(self, text: str, expected: tuple[int, int]) -> None:
        """Разбор строковых форм"""
        f = Fraction(text)
        assert (f.numerator, f.denominator) == expected
        assert Fraction.from_string(text) == f

    @pytest.mark.parametrize("text", ["", "abc", "1/2/3", "1.2.3", "--1", "/2", "e5"])
    def test_invalid_strings_rejected(self, text: str) -> None:
        """Некорректные строки → InvalidInput"""
        with pytest.raises(InvalidInput, match="Cannot parse"):
            Fraction(text)

    def test_huge_exponent_rejected(self) -> None:
        """Экспонента, превышающая лимит разрядности → Overflow"""
        with pytest.raises(Overflow):
            Fraction("1e100000")

    def test_bool_rejected(self) -> None:
        """bool не считается числом"""
        with pytest.raises(InvalidInput):
            Fraction(True)

    def test_unsupported_type_rejected(self) -> None:
        """Нечисловые типы → InvalidInput"""
        with pytest.raises(InvalidInput, match="Cannot convert"):
            Fraction([1, 2])  # type: ignore[arg-type]
        with pytest.raises(InvalidInput, match="Cannot convert"):
            Fraction(None)  # type: ignore[arg-type]


# =============================================================================
# ПРЕДСТАВЛЕНИЕ И ХЭШ
# =============================================================================


class TestRepresentation:
    """Тесты для str, repr и hash"""

    def test_str(self) -> None:
        """'n/d' или 'n' для целых"""
        assert str(Fraction(3, 2)) == "3/2"
        assert str(Fraction(-1, 2)) == "-1/2"
        assert str(Fraction(4, 2)) == "2"

    def test_repr(self) -> None:
        """repr содержит каноническую пару"""
        assert repr(Fraction(6, 4)) == "Fraction(3, 2)"

    def test_hash_matches_python_numbers(self) -> None:
        """Равные числа имеют одинаковый хэш"""
        assert hash(Fraction(3, 2)) == hash(1.5)
        assert hash(Fraction(5)) == hash(5)
        assert hash(Fraction(-1)) == hash(-1)
        assert hash(Fraction(1, 3)) == hash(fractions.Fraction(1, 3))
        assert hash(Fraction(-2, 7)) == hash(fractions.Fraction(-2, 7))

    def test_usable_in_builtin_set(self) -> None:
        """Fraction и равный float — один элемент множества"""
        assert len({Fraction(1, 2), Fraction(2, 4), 0.5}) == 1

    def test_bool(self) -> None:
        """Ноль ложен"""
        assert not Fraction(0)
        assert Fraction(1, 100)


# =============================================================================
# СРАВНЕНИЕ
# =============================================================================


class TestComparison:
    """Тесты для сравнения"""

    def test_equality_with_numbers(self) -> None:
        """Равенство с int, float и fractions.Fraction"""
        assert Fraction(2) == 2
        assert Fraction(1, 2) == 0.5
        assert Fraction(1, 2) == fractions.Fraction(1, 2)
        assert Fraction(1, 3) != 0.3333333333333333

    def test_equality_with_nan(self) -> None:
        """NaN не равен ничему"""
        assert Fraction(1, 2) != float("nan")

    def test_equality_with_string_is_false(self) -> None:
        """Строки сравниваются через equals, а не =="""
        assert Fraction(1, 2) != "1/2"
        assert Fraction(1, 2).equals("1/2")
        assert Fraction(1, 2).equals("2/4")

    def test_ordering(self) -> None:
        """Операторы упорядочивания"""
        assert Fraction(1, 3) < Fraction(1, 2)
        assert Fraction(1, 2) <= 0.5
        assert Fraction(3, 2) > 1
        assert Fraction(-1, 2) >= Fraction(-2, 3)

    def test_sorting(self) -> None:
        """Сортировка смешанного списка"""
        values = [Fraction(3, 2), Fraction(-1, 2), Fraction(1, 3), Fraction(5, 4)]
        assert [str(v) for v in sorted(values)] == ["-1/2", "1/3", "5/4", "3/2"]

    def test_ordering_with_string_raises_type_error(self) -> None:
        """Строки не упорядочиваются операторами"""
        with pytest.raises(TypeError):
            Fraction(1, 2) < "1"  # noqa: B015

    def test_compare(self) -> None:
        """compare возвращает -1, 0, 1"""
        assert Fraction(1, 3).compare("1/2") == -1
        assert Fraction(2, 6).compare(Fraction(1, 3)) == 0
        assert Fraction(1, 2).compare(0.25) == 1


# =============================================================================
# АРИФМЕТИКА
# =============================================================================


class TestArithmetic:
    """Тесты для арифметических операторов"""

    def test_add_sub(self) -> None:
        """Сложение и вычитание"""
        assert Fraction(1, 2) + Fraction(1, 3) == Fraction(5, 6)
        assert Fraction(1, 2) - Fraction(1, 3) == Fraction(1, 6)
        assert 1 - Fraction(1, 3) == Fraction(2, 3)
        assert 2 + Fraction(1, 2) == Fraction(5, 2)
        assert Fraction(1, 2) + 0.25 == Fraction(3, 4)

    def test_mul_div(self) -> None:
        """Умножение и деление"""
        assert Fraction(2, 3) * Fraction(3, 4) == Fraction(1, 2)
        assert 3 * Fraction(1, 6) == Fraction(1, 2)
        assert Fraction(1, 2) / Fraction(1, 4) == 2
        assert 1 / Fraction(1, 4) == 4

    def test_results_are_normalized(self) -> None:
        """Результат операции всегда в канонической форме"""
        result = Fraction(1, 6) + Fraction(1, 3)
        assert (result.numerator, result.denominator) == (1, 2)

    def test_division_by_zero(self) -> None:
        """Деление на ноль → DivisionByZero"""
        with pytest.raises(DivisionByZero):
            Fraction(1, 2) / 0
        with pytest.raises(DivisionByZero):
            1 / Fraction(0)

    def test_floordiv_and_mod(self) -> None:
        """// и % с floor-семантикой"""
        assert Fraction(7, 2) // 1 == 3
        assert Fraction(-7, 2) // 1 == -4
        assert Fraction(-1, 2) % 1 == Fraction(1, 2)
        assert 7 // Fraction(2) == 3
        assert -1 // Fraction(2, 3) == -2
        assert 1 % Fraction(2, 3) == Fraction(1, 3)
        assert 0.5 % Fraction(1, 3) == Fraction(1, 6)

    def test_reflected_mod_by_zero(self) -> None:
        """int % Fraction(0) → DivisionByZero"""
        with pytest.raises(DivisionByZero):
            1 % Fraction(0)
        with pytest.raises(DivisionByZero):
            1 // Fraction(0)

    def test_unary(self) -> None:
        """Унарные операторы"""
        assert -Fraction(1, 2) == Fraction(-1, 2)
        assert +Fraction(1, 2) == Fraction(1, 2)
        assert abs(Fraction(-3, 4)) == Fraction(3, 4)

    def test_unsupported_operand(self) -> None:
        """Сложение со строкой → TypeError"""
        with pytest.raises(TypeError):
            Fraction(1, 2) + "1/2"  # type: ignore[operator]

    def test_non_finite_float_operand(self) -> None:
        """Арифметика с Inf → InvalidInput"""
        with pytest.raises(InvalidInput):
            Fraction(1, 2) + float("inf")

    def test_inverse(self) -> None:
        """inverse переносит знак в числитель"""
        assert Fraction(-2, 3).inverse() == Fraction(-3, 2)
        assert Fraction(-2, 3).inverse().denominator == 2

    def test_inverse_of_zero(self) -> None:
        """inverse(0) → DivisionByZero"""
        with pytest.raises(DivisionByZero):
            Fraction(0).inverse()

    def test_mod_truncates(self) -> None:
        """mod: знак делимого"""
        assert Fraction(-7, 2).mod(2) == Fraction(-3, 2)
        assert Fraction(7, 2).mod(2) == Fraction(3, 2)

    def test_mmod_floors(self) -> None:
        """mmod: знак делителя"""
        assert Fraction(-7, 2).mmod(2) == Fraction(1, 2)
        assert Fraction(7, 2).mmod(-2) == Fraction(-1, 2)

    def test_mod_by_zero(self) -> None:
        """Остаток по нулю → DivisionByZero"""
        with pytest.raises(DivisionByZero):
            Fraction(1, 2).mod(0)
        with pytest.raises(DivisionByZero):
            Fraction(1, 2).mmod("0/5")

    def test_rational_gcd_lcm(self) -> None:
        """gcd/lcm рациональных"""
        assert Fraction(1, 2).gcd(Fraction(1, 3)) == Fraction(1, 6)
        assert Fraction(1, 2).lcm(Fraction(1, 3)) == 1
        assert Fraction(3, 4).gcd("9/10") == Fraction(3, 20)


class TestPower:
    """Тесты для pow"""

    def test_integer_powers(self) -> None:
        """Положительные, отрицательные и нулевая степени"""
        assert Fraction(3, 2) ** 2 == Fraction(9, 4)
        assert Fraction(3, 2) ** -1 == Fraction(2, 3)
        assert Fraction(-2, 3) ** -3 == Fraction(-27, 8)
        assert Fraction(5, 7) ** 0 == 1

    def test_integer_valued_exponents(self) -> None:
        """Показатель может быть integer-valued float или Fraction"""
        assert Fraction(3, 2) ** 2.0 == Fraction(9, 4)
        assert Fraction(3, 2) ** Fraction(2) == Fraction(9, 4)
        assert 2 ** Fraction(3) == 8

    def test_fractional_exponent_rejected(self) -> None:
        """Дробный показатель → InvalidInput"""
        with pytest.raises(InvalidInput, match="integer"):
            Fraction(2) ** Fraction(1, 2)
        with pytest.raises(InvalidInput, match="integer"):
            Fraction(2) ** 0.5

    def test_zero_to_negative_power(self) -> None:
        """0 ** -1 → DivisionByZero"""
        with pytest.raises(DivisionByZero):
            Fraction(0) ** -1

    def test_overflow(self) -> None:
        """Разрядность результата выше лимита → Overflow"""
        with pytest.raises(Overflow, match="max_bit_length"):
            Fraction(3, 2) ** 100_000

    def test_custom_limits(self) -> None:
        """Лимит передаётся явно"""
        limits = ArithmeticLimits(max_bit_length=8)
        assert Fraction(3, 2).pow(2, limits) == Fraction(9, 4)
        with pytest.raises(Overflow):
            Fraction(3, 2).pow(10, limits)

    def test_unity_never_overflows(self) -> None:
        """±1 в любой степени не превышает лимит"""
        assert Fraction(1) ** 10**9 == 1
        assert Fraction(-1) ** (10**9 + 1) == -1


# =============================================================================
# ОКРУГЛЕНИЕ И СВОЙСТВА
# =============================================================================


class TestRounding:
    """Тесты для floor/ceil/round"""

    def test_floor_ceil(self) -> None:
        """floor и ceil"""
        assert Fraction(7, 2).floor() == 3
        assert Fraction(7, 2).ceil() == 4
        assert Fraction(-7, 2).floor() == -4
        assert Fraction(-7, 2).ceil() == -3
        assert Fraction(4).ceil() == 4

    def test_round_half_away_from_zero(self) -> None:
        """Половины округляются от нуля"""
        assert Fraction(5, 2).round() == 3
        assert Fraction(-5, 2).round() == -3
        assert Fraction(7, 3).round() == 2
        assert round(Fraction(1, 2)) == 1

    def test_math_module_protocols(self) -> None:
        """math.floor/ceil/trunc и int()"""
        assert math.floor(Fraction(-1, 2)) == -1
        assert math.ceil(Fraction(-1, 2)) == 0
        assert math.trunc(Fraction(-7, 2)) == -3
        assert int(Fraction(7, 2)) == 3

    def test_round_ndigits(self) -> None:
        """round(f, ndigits) возвращает Fraction"""
        assert round(Fraction(1234, 1000), 2) == Fraction(123, 100)
        assert round(Fraction(1250), -2) == 1300

    def test_properties(self) -> None:
        """sign, is_integer, is_unity"""
        assert Fraction(-3, 4).sign() == -1
        assert Fraction(0).sign() == 0
        assert Fraction(3, 4).sign() == 1
        assert Fraction(4, 2).is_integer()
        assert not Fraction(3, 2).is_integer()
        assert Fraction(5, 5).is_unity()
        assert not Fraction(-1).is_unity()


# =============================================================================
# КОНВЕРСИИ
# =============================================================================


class TestConversions:
    """Тесты для to_float, to_cents и монзо"""

    def test_to_float(self) -> None:
        """Корректно округлённый float"""
        assert Fraction(1, 3).to_float() == 1 / 3
        assert float(Fraction(3, 2)) == 1.5

    def test_to_float_overflow(self) -> None:
        """Значение вне диапазона float → Overflow"""
        with pytest.raises(Overflow, match="float range"):
            Fraction(10**400).to_float()

    def test_to_cents(self) -> None:
        """Размер в центах"""
        assert Fraction(2).to_cents() == pytest.approx(1200.0)
        assert Fraction(3, 2).to_cents() == pytest.approx(701.955, abs=1e-3)

    def test_monzo_round_trip(self) -> None:
        """to_monzo / from_monzo"""
        assert Fraction(81, 80).to_monzo() == [-4, 4, -1]
        assert Fraction.from_monzo([-1, 1]) == Fraction(3, 2)


# =============================================================================
# FRACTION SET
# =============================================================================


class TestFractionSet:
    """Тесты для FractionSet"""

    def test_deduplicates_by_value(self) -> None:
        """Равные значения разных типов — один элемент"""
        s = FractionSet([Fraction(1, 2), "2/4", 0.5, 3])
        assert len(s) == 2

    def test_insertion_order(self) -> None:
        """Итерация в порядке добавления"""
        s = FractionSet(["5/4", "1/2", "3/2", "2/4"])
        assert [str(f) for f in s] == ["5/4", "1/2", "3/2"]

    def test_contains(self) -> None:
        """Проверка вхождения"""
        s = FractionSet(["3/2"])
        assert "6/4" in s
        assert 1.5 in s
        assert 0.25 not in s

    def test_contains_invalid_value(self) -> None:
        """Некорректное значение просто отсутствует"""
        s = FractionSet(["3/2"])
        assert "garbage" not in s
        assert None not in s

    def test_discard_and_remove(self) -> None:
        """discard и remove"""
        s = FractionSet(["3/2", "5/4"])
        s.discard(1.5)
        s.discard("7/4")
        assert [str(f) for f in s] == ["5/4"]

        s.remove("5/4")
        assert len(s) == 0
        with pytest.raises(KeyError):
            s.remove("5/4")

    def test_set_operations(self) -> None:
        """Операции MutableSet"""
        a = FractionSet(["1/2", "3/2"])
        b = FractionSet(["3/2", "5/4"])
        assert len(a | b) == 3
        assert [str(f) for f in a & b] == ["3/2"]

    def test_repr(self) -> None:
        """repr перечисляет элементы"""
        assert repr(FractionSet(["1/2", 3])) == "FractionSet([1/2, 3])"
