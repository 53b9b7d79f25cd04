import logging

import streamlit as st
from mathhammer import (
    AUTO_SUCCESS, TOUGHNESS_SWEEP, AutoWoundPolicy, RerollPolicy,
    WeaponProfile, expected_damage_total,
)

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("mathhammer.app")

st.set_page_config(page_title="Mathhammer Expected Damage", page_icon="🎲", layout="wide")
st.title("Mathhammer — Expected Damage by Toughness")
st.caption("Hit → Wound (T3–T8) → Save (AP) → Damage | Re-rolls, triggers, mortal wounds")

REROLLS = [p.value for p in RerollPolicy]
AUTO_WOUNDS = [p.value for p in AutoWoundPolicy]

with st.sidebar:
    st.header("Defender")
    target_save = st.number_input("Save (e.g., 3 for 3+, 7 for none)", min_value=2, max_value=7, value=3, step=1)

st.subheader("Weapon Profiles")
default_rows = st.number_input("How many profiles?", min_value=1, max_value=20, value=1, step=1)

profiles = []
for i in range(default_rows):
    with st.expander(f"Profile {i+1}", expanded=(i < 2)):
        name = st.text_input("Name", value=f"Weapon {i+1}", key=f"name{i}")
        attacks = st.number_input("Attacks", min_value=0, max_value=200, value=6, step=1, key=f"att{i}")
        c1, c2, c3 = st.columns(3)
        with c1:
            skill = st.number_input(f"To Hit (+), {AUTO_SUCCESS} = auto-hit", min_value=1, max_value=7, value=3, step=1, key=f"ws{i}")
            hit_mod = st.number_input("Hit mod (±)", min_value=-3, max_value=3, value=0, step=1, key=f"hmod{i}")
            reroll_hit = st.selectbox("Re-roll hit", options=REROLLS, index=0, key=f"rrh{i}")
        with c2:
            strength = st.number_input("Strength", min_value=1, max_value=20, value=4, step=1, key=f"s{i}")
            wound_mod = st.number_input("Wound mod (±)", min_value=-3, max_value=3, value=0, step=1, key=f"wmod{i}")
            reroll_wound = st.selectbox("Re-roll wound", options=REROLLS, index=0, key=f"rrw{i}")
        with c3:
            ap = st.number_input("AP (e.g., -2)", min_value=-6, max_value=0, value=0, step=1, key=f"ap{i}")
            damage = st.text_input("Damage (2, D3, D6, 2D3+1)", value="1", key=f"dam{i}")

        st.markdown("**Hit trigger** (0 = none)")
        h1, h2, h3, h4 = st.columns(4)
        with h1:
            hit_trigger_on = st.number_input("Trigger on (+)", min_value=0, max_value=6, value=0, step=1, key=f"htr{i}")
        with h2:
            bonus_attacks = st.number_input("Extra attacks", min_value=0, max_value=5, value=0, step=1, key=f"hba{i}")
        with h3:
            bonus_hits = st.number_input("Extra hits", min_value=0, max_value=5, value=0, step=1, key=f"hbh{i}")
        with h4:
            mortals_instead = st.number_input("Mortals instead", min_value=0, max_value=6, value=0, step=1, key=f"hmw{i}")

        st.markdown("**Wound trigger** (0 = none)")
        w1, w2, w3, w4 = st.columns(4)
        with w1:
            wound_trigger_on = st.number_input("Trigger on (+)", min_value=0, max_value=6, value=0, step=1, key=f"wtr{i}")
        with w2:
            mortals_on_wound = st.number_input("Extra mortals", min_value=0, max_value=6, value=0, step=1, key=f"wmw{i}")
        with w3:
            ap_on_wound = st.number_input("AP on trigger", min_value=-6, max_value=0, value=0, step=1, key=f"wap{i}")
        with w4:
            damage_on_wound = st.text_input("Damage on trigger (blank = weapon damage)", value="", key=f"wdm{i}")

        a1, a2 = st.columns(2)
        with a1:
            auto_wound = st.selectbox("Auto-wound", options=AUTO_WOUNDS, index=0, key=f"aw{i}")
        with a2:
            auto_wound_on = st.number_input("Auto-wound on (+)", min_value=1, max_value=6, value=6, step=1, key=f"awo{i}")

        profiles.append(
            WeaponProfile(
                name=name, attacks=attacks, skill=skill, strength=strength, damage=damage, ap=ap,
                hit_mod=hit_mod, wound_mod=wound_mod, reroll_hit=reroll_hit, reroll_wound=reroll_wound,
                hit_trigger_on=hit_trigger_on, bonus_attacks_on_hit_trigger=bonus_attacks,
                bonus_hits_on_hit_trigger=bonus_hits, mortals_instead_on_hit_trigger=mortals_instead,
                auto_wound=auto_wound, auto_wound_on=auto_wound_on,
                wound_trigger_on=wound_trigger_on, mortals_on_wound_trigger=mortals_on_wound,
                ap_on_wound_trigger=ap_on_wound, damage_on_wound_trigger=damage_on_wound,
                target_save=target_save,
            )
        )

st.divider()

try:
    rows = []
    for p in profiles:
        row = {"Profile": p.name, "Attacks": p.attacks, "Hit+": p.skill, "S": p.strength, "AP": p.ap, "Damage": p.damage}
        row.update({f"T{t}": round(d, 3) for t, d in zip(TOUGHNESS_SWEEP, p.expected_damage())})
        rows.append(row)
    total = expected_damage_total(profiles)
except ValueError as exc:  # MathhammerError or a bad damage expression
    logger.warning("Calculation failed: %s", exc)
    st.error(f"Cannot calculate: {exc}")
    st.stop()

rows.append({"Profile": "Total", **{f"T{t}": round(d, 3) for t, d in zip(TOUGHNESS_SWEEP, total)}})

st.subheader("Results")
st.dataframe(rows, use_container_width=True)
st.bar_chart(
    [{"Toughness": f"T{t}", "Expected damage": d} for t, d in zip(TOUGHNESS_SWEEP, total)],
    x="Toughness", y="Expected damage",
)
st.info(
    "Assumptions: expectations are closed-form, no dice are simulated; "
    "bonus attacks from a hit trigger cannot trigger further attacks; "
    "mortal wounds skip the save; 1 = auto-hit and is never modified."
)
