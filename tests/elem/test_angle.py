"""Tests for the Angle value class."""

import math

import pytest

from hebrides.core.errors import InvariantError
from hebrides.elem import Angle, AngleUnit, Number, Real


class TestAngleConstruction:
    """Test building angles and reading their unit."""

    def test_from_radians(self):
        """Test a radian angle keeps its measure."""
        a = Angle.from_radians(1.5)
        assert a.unit is AngleUnit.RADIANS
        assert a.measure == 1.5

    def test_from_degrees(self):
        """Test a degree angle keeps its measure."""
        a = Angle.from_degrees(90)
        assert a.unit is AngleUnit.DEGREES
        assert a.to_degrees().value == 90

    def test_from_real(self):
        """Test a Real measure is unwrapped."""
        a = Angle.from_radians(Real(Number.f32(0.5)))
        assert a.measure == Number.f32(0.5)

    def test_unit_by_name(self):
        """Test the unit can be given by name."""
        assert Angle(45, "degrees").unit is AngleUnit.DEGREES

    def test_display(self):
        """Test str and repr."""
        assert str(Angle.from_degrees(90)) == "90 deg"
        assert str(Angle.from_radians(1.5)) == "1.5 rad"
        assert repr(Angle.from_degrees(90)) == "Angle(Number.i64(90), degrees)"


class TestAngleConversion:
    """Test unit conversion."""

    def test_degrees_to_radians(self, approx):
        """Test d * pi / 180."""
        result = Angle.from_degrees(180).to_radians()
        assert isinstance(result, Real)
        approx(result, math.pi)

    def test_radians_to_degrees(self, approx):
        """Test r * 180 / pi."""
        approx(Angle.from_radians(math.pi / 2).to_degrees(), 90.0)

    def test_defining_unit_is_exact(self):
        """Test the defining unit comes back unchanged."""
        assert Angle.from_radians(0.25).to_radians().value == 0.25
        assert Angle.from_degrees(33).to_degrees().value == 33

    @pytest.mark.parametrize("degrees", [-720.0, -45.0, 0.0, 30.0, 123.456, 359.9])
    def test_round_trip(self, degrees, approx):
        """Test degrees -> radians -> degrees."""
        radians = Angle.from_degrees(degrees).to_radians()
        approx(Angle.from_radians(radians).to_degrees(), degrees, tol=1e-9)

    def test_to_python_is_radians(self, approx):
        """Test to_python returns the radian float."""
        approx(Angle.from_degrees(90).to_python(), math.pi / 2)

    def test_missing_unit_is_an_invariant_violation(self):
        """Test an angle with no valid unit raises InvariantError."""
        broken = Angle.model_construct(measure=Number.f64(1.0), unit="gradians")
        with pytest.raises(InvariantError):
            broken.to_radians()
        with pytest.raises(InvariantError):
            broken.to_degrees()


class TestAngleOperations:
    """Test trigonometry, arithmetic, equality and normalization."""

    def test_trig(self, approx):
        """Test sin/cos/tan of the radian form."""
        approx(Angle.from_degrees(30).sin(), 0.5)
        approx(Angle.from_degrees(60).cos(), 0.5)
        approx(Angle.from_radians(math.pi / 4).tan(), 1.0)

    def test_addition_keeps_left_unit(self, approx):
        """Test the sum is expressed in the left operand's unit."""
        total = Angle.from_degrees(90) + Angle.from_radians(math.pi / 2)
        assert total.unit is AngleUnit.DEGREES
        approx(total.measure, 180.0)

    def test_subtraction(self, approx):
        """Test the difference is expressed in the left operand's unit."""
        diff = Angle.from_radians(math.pi) - Angle.from_degrees(90)
        assert diff.unit is AngleUnit.RADIANS
        approx(diff.measure, math.pi / 2)

    def test_negation(self):
        """Test unary minus."""
        a = -Angle.from_degrees(45)
        assert a.measure == -45
        assert a.unit is AngleUnit.DEGREES

    def test_arithmetic_with_numbers_is_rejected(self):
        """Test angles do not mix with plain numbers."""
        with pytest.raises(TypeError):
            Angle.from_degrees(45) + 1
        with pytest.raises(TypeError):
            1 + Angle.from_degrees(45)

    def test_equality_same_unit(self):
        """Test equality of measures in the same unit."""
        assert Angle.from_degrees(90) == Angle.from_degrees(90.0)
        assert Angle.from_degrees(90) != Angle.from_degrees(91)

    def test_equality_across_units(self):
        """Test equality through the radian form."""
        assert Angle.from_degrees(0) == Angle.from_radians(0)
        assert Angle.from_degrees(180).compare(Angle.from_radians(math.pi))
        assert not Angle.from_degrees(180).compare(Angle.from_radians(3.0))

    def test_not_equal_to_number(self):
        """Test an angle never equals a plain number."""
        assert Angle.from_radians(1.0) != Number.f64(1.0)
        assert not Angle.from_radians(1.0).compare(1.0)

    def test_unhashable(self):
        """Test angles cannot be hashed."""
        with pytest.raises(TypeError):
            hash(Angle.from_radians(1.0))

    @pytest.mark.parametrize("degrees,expected", [
        (370, 10),
        (-30, 330),
        (720, 0),
        (45, 45),
    ])
    def test_normalized_degrees(self, degrees, expected):
        """Test degree angles fold into [0, 360)."""
        result = Angle.from_degrees(degrees).normalized()
        assert result.unit is AngleUnit.DEGREES
        assert result.measure.value == expected

    def test_normalized_radians(self, approx):
        """Test radian angles fold into [0, 2pi)."""
        result = Angle.from_radians(-math.pi / 2).normalized()
        assert result.unit is AngleUnit.RADIANS
        approx(result.measure, 3 * math.pi / 2)
        assert 0 <= result.measure.value < math.tau


class TestAngleNormalizedEdges:
    """Test normalization when floating-point remainder rounds up."""

    def test_tiny_negative_radians(self):
        """Test a tiny negative measure folds to 0, not 2pi."""
        result = Angle.from_radians(-1e-17).normalized()
        assert result.measure.value == 0.0
        assert result.measure.value < math.tau

    def test_tiny_negative_degrees(self):
        """Test a tiny negative degree measure folds to 0, not 360."""
        result = Angle.from_degrees(-1e-14).normalized()
        assert result.measure.value == 0.0
