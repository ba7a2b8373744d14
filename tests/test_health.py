"""
Health Tests

Damage floors at zero, healing caps at the maximum, and negative amounts are
rejected. Health compares against both Health and int.
"""

import pytest

from packages.escape.state.health import Health


class TestConstruction:
    """Test building Health values."""

    def test_from_int(self):
        assert Health(7).value == 7

    def test_from_health(self):
        assert Health(Health(3)).value == 3

    def test_zero_allowed(self):
        assert Health(0).is_zero

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            Health(-1)


class TestDamage:
    """damage(d) == max(0, h - d)."""

    @pytest.mark.parametrize("h,d,expected", [
        (10, 3, 7),
        (5, 5, 0),
        (5, 9, 0),
        (4, 0, 4),
        (0, 2, 0),
    ])
    def test_damage_floors_at_zero(self, h, d, expected):
        assert Health(h).damage(d) == expected

    def test_damage_stays_in_range(self):
        for h in range(0, 12):
            for d in range(0, 15):
                result = Health(h).damage(d)
                assert 0 <= result <= h

    def test_overkill_is_not_an_error(self):
        assert Health(1).damage(100).is_zero

    def test_negative_damage_rejected(self):
        with pytest.raises(ValueError):
            Health(5).damage(-1)

    def test_damage_returns_new_value(self):
        h = Health(5)
        h.damage(2)
        assert h == 5


class TestHealToMax:
    """heal_to_max(a, m) lies in [h, m]."""

    def test_heal_below_cap(self):
        assert Health(3).heal_to_max(4, 10) == 7

    def test_heal_capped(self):
        assert Health(8).heal_to_max(5, 10) == 10

    def test_heal_at_max(self):
        assert Health(10).heal_to_max(3, 10) == 10

    def test_heal_accepts_health_max(self):
        assert Health(2).heal_to_max(3, Health(4)) == 4

    def test_heal_stays_in_range(self):
        for h in range(0, 11):
            for a in range(0, 15):
                result = Health(h).heal_to_max(a, 10)
                assert h <= result <= 10

    def test_negative_heal_rejected(self):
        with pytest.raises(ValueError):
            Health(5).heal_to_max(-2, 10)


class TestArithmeticAndComparison:
    """Subtraction gives a plain int; comparisons work against ints."""

    def test_difference_is_int(self):
        healed = Health(7) - Health(3)
        assert healed == 4
        assert isinstance(healed, int)

    def test_difference_with_int(self):
        assert Health(7) - 2 == 5
        assert 10 - Health(7) == 3

    def test_ordering(self):
        assert Health(3) < Health(4)
        assert Health(4) > 3
        assert Health(4) <= 4
        assert max(Health(2), Health(9)) == 9

    def test_equality_and_hash(self):
        assert Health(5) == Health(5)
        assert Health(5) == 5
        assert Health(5) != 6
        assert len({Health(5), Health(5)}) == 1

    def test_display(self):
        assert str(Health(6)) == "6"
        assert repr(Health(6)) == "Health(6)"
        assert f"{Health(6)}/{Health(10)}" == "6/10"
