"""
Tests for weapon profiles and multi-profile totals.
"""

import pytest

from mathhammer import (
    AutoWoundPolicy,
    HitProfile,
    RerollPolicy,
    UnknownPolicyError,
    WeaponProfile,
    expected_damage_total,
)


def approx_sweep(values, abs=0.01):
    return pytest.approx(tuple(values), abs=abs)


def bolter(**overrides) -> WeaponProfile:
    defaults = dict(name="Bolter", attacks=6, skill=3, strength=4, damage="1", target_save=3)
    defaults.update(overrides)
    return WeaponProfile(**defaults)


class TestWeaponProfile:
    """Test wiring of the three stages from one weapon line."""

    def test_hit_profile(self):
        hits = bolter(hit_mod=1, reroll_hit=RerollPolicy.ONES, hit_trigger_on=6, bonus_hits_on_hit_trigger=1).hit_profile()
        assert hits == HitProfile(attacks=6, required_roll=3, reroll=RerollPolicy.ONES, hit_modifier=1,
                                  trigger_threshold=6, bonus_hits_on_trigger=1)

    def test_wound_profile_is_fed_by_total_hits(self):
        weapon = bolter(reroll_hit=RerollPolicy.ONES)
        assert weapon.wound_profile().hits == pytest.approx(weapon.hit_profile().total_hits())
        assert weapon.wound_profile(hits=2).hits == 2

    def test_wound_profile_fields(self):
        wounds = bolter(
            auto_wound=AutoWoundPolicy.ALWAYS, auto_wound_on=5, wound_trigger_on=6,
            mortals_on_wound_trigger=1, ap_on_wound_trigger=-2, damage_on_wound_trigger="D3",
        ).wound_profile()
        assert wounds.auto_wound == AutoWoundPolicy.ALWAYS
        assert wounds.auto_wound_on == 5
        assert wounds.trigger_threshold == 6
        assert wounds.extra_mortals_on_trigger == 1
        assert wounds.armor_penetration_on_trigger == -2
        assert wounds.alternate_damage_on_trigger == 2.0

    @pytest.mark.parametrize("trigger_damage", [None, ""])
    def test_trigger_damage_defaults_to_weapon_damage(self, trigger_damage):
        wounds = bolter(damage="D3", wound_trigger_on=6, ap_on_wound_trigger=-1,
                        damage_on_wound_trigger=trigger_damage).wound_profile()
        assert wounds.alternate_damage_on_trigger == 2.0

    def test_ap_only_trigger_never_lowers_damage(self):
        baseline = bolter(attacks=12, skill=1).expected_damage()
        rending = bolter(attacks=12, skill=1, wound_trigger_on=6, ap_on_wound_trigger=-3).expected_damage()
        assert baseline == approx_sweep([2.67, 2.0, 1.33, 1.33, 1.33, 0.67])
        # one wound in six is saved on a 6+ instead of a 3+
        assert rending == approx_sweep([3.67, 3.0, 2.33, 2.33, 2.33, 1.67])
        for plain, improved in zip(baseline, rending):
            assert improved >= plain

    def test_damage_profile_uses_average_damage(self):
        damage = bolter(damage="D6", ap=-1).damage_profile()
        assert damage.damage_per_wound == 3.5
        assert damage.base_armor_penetration == -1
        assert damage.defender_save == 3

    def test_expected_damage(self):
        weapon = bolter(wound_trigger_on=6, mortals_on_wound_trigger=1)
        assert weapon.expected_damage() == approx_sweep([1.55, 1.33, 1.11, 1.11, 1.11, 0.89])

    def test_dice_damage_scales_linearly(self):
        flat = bolter(damage="1").expected_damage()
        d3 = bolter(damage="D3").expected_damage()
        for a, b in zip(flat, d3):
            assert b == pytest.approx(2 * a)

    def test_bad_damage_expression_raises(self):
        with pytest.raises(ValueError):
            bolter(damage="D8").expected_damage()

    def test_policy_strings_from_forms(self):
        weapon = bolter(reroll_hit="ones")
        assert weapon.hit_profile().total_hits() == pytest.approx(14 / 3)

    def test_unknown_policy_propagates(self):
        with pytest.raises(UnknownPolicyError):
            bolter(reroll_wound="sometimes").expected_damage()


class TestExpectedDamageTotal:
    """Test summing several weapon profiles."""

    def test_empty(self):
        assert expected_damage_total([]) == (0, 0, 0, 0, 0, 0)

    def test_sums_elementwise(self):
        a = bolter()
        b = bolter(name="Plasma", attacks=2, strength=8, damage="2", ap=-3)
        total = expected_damage_total([a, b])
        for t, x, y in zip(total, a.expected_damage(), b.expected_damage()):
            assert t == pytest.approx(x + y)
