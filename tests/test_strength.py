"""Strength score, label and entropy tests."""

import math

import pytest

from shared.config import PolicyConfig
from passguard.analyzers.strength import (
    build_suggestions,
    class_points,
    entropy_bits,
    label_for,
    length_points,
    penalty_points,
    pool_size,
    strength_score,
    variety_points,
)
from passguard.core.models import StrengthLabel


# Every character distinct, no run, no dictionary word: each prefix is
# strictly stronger than the previous one.
DISTINCT_CHAIN = "Tz7#Kp2&Wd5%Hb8"


class TestScoreOrdering:
    def test_weak_password(self, engine):
        value = engine.score("weak")
        assert value < 30
        assert engine.label(value) == "Muy débil"

    def test_fair_password(self, engine):
        value = engine.score("MySecure1!")
        assert 50 <= value < 70
        assert engine.label(value) == "Aceptable"

    def test_strong_password(self, engine):
        value = engine.score("MyVerySecureP@ssw0rd2024")
        assert value >= 70
        assert engine.label(value) in ("Fuerte", "Muy fuerte")

    def test_dictionary_hit_scores_lower(self, engine):
        assert engine.score("Password123!") < engine.score("Fixia2024Secure!")

    def test_known_values(self, engine):
        assert engine.score("weak") == 20
        assert engine.score("MySecure1!") == 61
        assert engine.score("Password123!") == 37
        assert engine.score("Fixia2024Secure!") == 70
        assert engine.score("MyVerySecureP@ssw0rd2024") == 76


class TestScoreBounds:
    @pytest.mark.parametrize("candidate", ["", None])
    def test_empty_scores_zero(self, engine, candidate):
        assert engine.score(candidate) == 0

    def test_penalties_clamp_at_zero(self, engine):
        assert engine.score("aaaa") == 0

    def test_long_password_clamps_at_hundred(self, engine):
        assert engine.score("Xk9!" * 50) == 100

    @pytest.mark.parametrize(
        "candidate",
        ["a", "weak", "Password123!", "MyPass123456!", "Xk9!" * 50, "ñandú"],
    )
    def test_always_in_range(self, engine, candidate):
        assert 0 <= engine.score(candidate) <= 100

    def test_score_ignores_compliance(self, engine):
        # Rejected by the policy, still gets a positive score.
        assert not engine.is_compliant("MySecure1!")
        assert engine.score("MySecure1!") > 0


class TestMonotonicity:
    @pytest.mark.parametrize("n", range(1, len(DISTINCT_CHAIN)))
    def test_appending_a_new_character_never_lowers_the_score(self, engine, n):
        assert engine.score(DISTINCT_CHAIN[: n + 1]) > engine.score(DISTINCT_CHAIN[:n])

    def test_appending_past_the_knee_still_counts(self, engine):
        assert engine.score("Fixia2024Secure!Q") > engine.score("Fixia2024Secure!")

    def test_length_points_strictly_increase(self):
        values = [length_points(n) for n in range(0, 40)]
        assert all(b > a for a, b in zip(values, values[1:]))


class TestComponents:
    def test_length_points(self):
        assert length_points(4) == 8
        assert length_points(12) == 24
        assert length_points(16) == 28

    def test_class_points(self):
        assert class_points(0) == 0
        assert class_points(4) == 32

    def test_variety_points(self):
        assert variety_points("") == 0
        assert variety_points("abcd") == 4
        assert variety_points("aaaa") == 1
        assert variety_points("Fixia2024Secure!") == 10

    def test_penalty_points(self, policy):
        assert penalty_points("Fixia2024Secure!", policy) == 0
        assert penalty_points("Password123!", policy) == 30
        assert penalty_points("MyPass123456!", policy) == 50
        assert penalty_points("MyPassaaaa123!", policy) == 50

    def test_custom_penalties(self):
        lenient = PolicyConfig(dictionary_penalty=0)
        assert strength_score("Password123!", lenient) == 67


class TestLabels:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (0, StrengthLabel.VERY_WEAK),
            (29, StrengthLabel.VERY_WEAK),
            (30, StrengthLabel.WEAK),
            (49, StrengthLabel.WEAK),
            (50, StrengthLabel.FAIR),
            (69, StrengthLabel.FAIR),
            (70, StrengthLabel.STRONG),
            (89, StrengthLabel.STRONG),
            (90, StrengthLabel.VERY_STRONG),
            (100, StrengthLabel.VERY_STRONG),
        ],
    )
    def test_thresholds(self, engine, value, expected):
        assert label_for(value) is expected
        assert engine.label(value) == expected.value

    def test_label_values(self):
        assert [label.value for label in StrengthLabel] == [
            "Muy débil", "Débil", "Aceptable", "Fuerte", "Muy fuerte",
        ]


class TestEntropy:
    def test_pool_size(self):
        assert pool_size("") == 0
        assert pool_size("abc") == 26
        assert pool_size("aA1!") == 95
        assert pool_size("ñ") == 100

    def test_entropy_bits(self):
        assert entropy_bits("") == 0.0
        assert entropy_bits("aA1!") == pytest.approx(4 * math.log2(95))

    def test_report_rounds_entropy(self, engine):
        report = engine.assess("Password123!")
        assert report.entropy_bits == pytest.approx(12 * math.log2(95), abs=0.01)


class TestSuggestions:
    def test_missing_classes_are_listed(self, policy):
        hints = build_suggestions("abc", ["lowercase"], ["min_length"], policy)
        assert "Combina mayúsculas, números, símbolos." in hints

    def test_violations_add_hints(self, policy):
        hints = build_suggestions(
            "MyPass123456!",
            ["uppercase", "lowercase", "digit", "special"],
            ["common_password", "sequence"],
            policy,
        )
        assert any("1234" in h for h in hints)
        assert any("conocidas" in h for h in hints)

    def test_never_empty(self, policy):
        hints = build_suggestions(
            "Fixia2024Secure!",
            ["uppercase", "lowercase", "digit", "special"],
            [],
            policy,
        )
        assert len(hints) == 1
        assert hints[0].startswith("Buena contraseña")
