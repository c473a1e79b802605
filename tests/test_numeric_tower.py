from __future__ import annotations

import importlib.util
import math
import sys
import unittest


JAX_AVAILABLE = importlib.util.find_spec("jax") is not None


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for numeric tower tests")
class NumericTowerTests(unittest.TestCase):
    def test_fixnum_bounds_reserve_eight_tag_bits(self) -> None:
        from lisp_tower.errors import ConversionError
        from lisp_tower.numeric import Int
        from lisp_tower.values import MAX_FIXNUM, MIN_FIXNUM

        self.assertEqual(MAX_FIXNUM, 36028797018963967)
        self.assertEqual(MIN_FIXNUM, -36028797018963968)
        self.assertEqual(Int(MAX_FIXNUM).value, MAX_FIXNUM)
        with self.assertRaises(ConversionError):
            Int(MAX_FIXNUM + 1)

    def test_value_of_extracts_each_tag(self) -> None:
        from lisp_tower.errors import WrongTypeArgument
        from lisp_tower.numeric import Big, Float, Int, value_of
        from lisp_tower.values import MAX_FIXNUM, LispBignum, LispFloat

        self.assertEqual(value_of(7), Int(7))
        self.assertEqual(value_of(LispFloat(2.5)), Float(2.5))
        self.assertEqual(value_of(LispBignum(2**70)), Big(2**70))
        self.assertEqual(value_of(MAX_FIXNUM + 1), Big(MAX_FIXNUM + 1))
        for bad in (True, "1", None):
            with self.subTest(bad=bad):
                with self.assertRaises(WrongTypeArgument):
                    value_of(bad)

    def test_coerce_integer_round_trips(self) -> None:
        from lisp_tower.numeric import Big, Float, Int, coerce_integer
        from lisp_tower.values import MAX_FIXNUM

        self.assertEqual(coerce_integer(Float(5.0)), Int(5))
        self.assertEqual(coerce_integer(Float(-5.9)), Int(-5))
        self.assertEqual(coerce_integer(Big(42)), Int(42))
        self.assertEqual(coerce_integer(Big(2**70)), Big(2**70))
        self.assertEqual(coerce_integer(Float(2.0**70)), Big(2**70))
        self.assertEqual(coerce_integer(Int(MAX_FIXNUM)), Int(MAX_FIXNUM))

    def test_coerce_integer_rejects_non_finite(self) -> None:
        from lisp_tower.errors import ConversionError
        from lisp_tower.numeric import Float, coerce_integer

        for x in (math.inf, -math.inf, math.nan):
            with self.subTest(x=x):
                with self.assertRaises(ConversionError):
                    coerce_integer(Float(x))

    def test_combine_follows_promotion_matrix(self) -> None:
        from lisp_tower.numeric import Big, Float, Int, combine

        def int_op(x, y):
            return x + y

        def float_op(x, y):
            return x + y

        def big_op(x, y):
            return x + y

        big = Big(2**70)
        cases = [
            (Int(1), Int(2), Int),
            (Int(1), Float(2.0), Float),
            (Int(1), big, Big),
            (Float(1.0), Int(2), Float),
            (Float(1.0), Float(2.0), Float),
            (Float(1.0), big, Float),
            (big, Int(2), Big),
            (big, Float(2.0), Float),
            (big, big, Big),
        ]
        for a, b, variant in cases:
            with self.subTest(a=a, b=b):
                self.assertIsInstance(combine(a, b, int_op, float_op, big_op), variant)

    def test_combine_promotes_fixnum_overflow(self) -> None:
        from lisp_tower.numeric import Big, Int, number_add, number_mul
        from lisp_tower.values import MAX_FIXNUM, MIN_FIXNUM

        self.assertEqual(number_add(Int(MAX_FIXNUM), Int(1)), Big(MAX_FIXNUM + 1))
        self.assertEqual(number_mul(Int(MIN_FIXNUM), Int(2)), Big(MIN_FIXNUM * 2))

    def test_big_to_float_saturates_in_mixed_arithmetic(self) -> None:
        from lisp_tower.numeric import Big, Float, number_add

        out = number_add(Float(1.0), Big(10**400))
        self.assertIsInstance(out, Float)
        self.assertEqual(out.value, math.inf)
        out = number_add(Big(-(10**400)), Float(1.0))
        self.assertEqual(out.value, -math.inf)

    def test_negate_and_is_zero_stay_in_variant(self) -> None:
        from lisp_tower.numeric import Big, Float, Int, is_zero, negate
        from lisp_tower.values import MIN_FIXNUM

        self.assertEqual(negate(Int(3)), Int(-3))
        self.assertEqual(negate(Float(1.5)), Float(-1.5))
        self.assertEqual(negate(Big(2**70)), Big(-(2**70)))
        self.assertEqual(negate(Int(MIN_FIXNUM)), Big(-MIN_FIXNUM))
        self.assertTrue(is_zero(Int(0)))
        self.assertTrue(is_zero(Float(-0.0)))
        self.assertTrue(is_zero(Big(0)))
        self.assertFalse(is_zero(Float(1e-300)))

    def test_integer_division_truncates_and_rejects_zero(self) -> None:
        from lisp_tower.errors import ArithmeticFailure
        from lisp_tower.numeric import Big, Float, Int, number_div

        self.assertEqual(number_div(Int(7), Int(2)), Int(3))
        self.assertEqual(number_div(Int(-7), Int(2)), Int(-3))
        self.assertEqual(number_div(Int(7), Int(-2)), Int(-3))
        self.assertEqual(number_div(Float(1.0), Int(0)), Float(math.inf))
        for dividend in (Int(1), Int(0), Int(-5), Big(2**70)):
            with self.subTest(dividend=dividend):
                with self.assertRaises(ArithmeticFailure):
                    number_div(dividend, Int(0))

    def test_modulo_is_floored(self) -> None:
        from lisp_tower.errors import ArithmeticFailure
        from lisp_tower.numeric import Big, Float, Int, number_mod

        self.assertEqual(number_mod(Int(7), Int(3)), Int(1))
        self.assertEqual(number_mod(Int(-7), Int(3)), Int(2))
        self.assertEqual(number_mod(Int(7), Int(-3)), Int(-2))
        self.assertAlmostEqual(number_mod(Float(-7.5), Int(2)).value, 0.5)
        for a, b in ((Int(7), Int(0)), (Int(7), Float(0.0)), (Float(7.0), Int(0)), (Big(2**70), Float(-0.0))):
            with self.subTest(a=a, b=b):
                with self.assertRaises(ArithmeticFailure):
                    number_mod(a, b)

    def test_float_equality_uses_two_ulp_tolerance(self) -> None:
        from lisp_tower.numeric import float_approx_eq

        self.assertTrue(float_approx_eq(0.1 + 0.2, 0.3))
        base = 1.0e10
        two_up = math.nextafter(math.nextafter(base, math.inf), math.inf)
        three_up = math.nextafter(two_up, math.inf)
        self.assertTrue(float_approx_eq(base, two_up))
        self.assertFalse(float_approx_eq(base, three_up))
        self.assertFalse(float_approx_eq(math.nan, math.nan))
        self.assertFalse(float_approx_eq(math.inf, sys.float_info.max))
        self.assertFalse(float_approx_eq(-math.inf, -sys.float_info.max))
        self.assertTrue(float_approx_eq(math.inf, math.inf))

    def test_numbers_equal_across_variants(self) -> None:
        from lisp_tower.numeric import Big, Float, Int, numbers_equal

        self.assertTrue(numbers_equal(Int(1), Float(1.0)))
        self.assertTrue(numbers_equal(Big(2**70), Float(2.0**70)))
        self.assertTrue(numbers_equal(Big(2**70), Big(2**70)))
        self.assertFalse(numbers_equal(Int(1), Big(2**70)))
        self.assertFalse(numbers_equal(Float(math.inf), Big(10**400)))

    def test_compare_reports_incomparable_pairs(self) -> None:
        from lisp_tower.numeric import Big, Float, Int, compare

        self.assertEqual(compare(Int(1), Int(2)), -1)
        self.assertEqual(compare(Float(2.0), Int(2)), 0)
        self.assertEqual(compare(Big(2**70), Int(2)), 1)
        self.assertIsNone(compare(Float(1.0), Big(10**400)))
        self.assertIsNone(compare(Big(10**400), Float(1.0)))
        self.assertIsNone(compare(Float(math.nan), Int(0)))


if __name__ == "__main__":
    unittest.main()
