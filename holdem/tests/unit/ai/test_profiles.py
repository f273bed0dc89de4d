"""
AI角色预设单元测试
"""

import random

import pytest

from holdem.ai.profiles import (
    ACADEMIC, DIFFICULTY_NAMES, PROFILE_PRESETS, get_profile, pick_opponents, profiles_for_difficulty,
)
from holdem.core.player import AIProfile


@pytest.mark.unit
class TestProfiles:

    def test_presets_are_valid_profiles(self):
        assert len(PROFILE_PRESETS) == 11
        for profile_id, profile in PROFILE_PRESETS.items():
            assert isinstance(profile, AIProfile)
            assert profile.profile_id == profile_id
            assert profile.difficulty in DIFFICULTY_NAMES

    def test_only_academic_prefers_balanced_play(self):
        assert [p.profile_id for p in PROFILE_PRESETS.values() if p.use_gto_strategy] == ["academic"]
        assert ACADEMIC.difficulty == 4

    def test_get_profile(self):
        assert get_profile("shark").name == "鲨鱼汤姆"
        with pytest.raises(KeyError):
            get_profile("nobody")

    @pytest.mark.parametrize("difficulty, ids", [
        (1, ["calling_station", "newbie_bob", "rock", "tight_mary"]),
        (2, ["bluff_jack", "maniac", "nit_steve", "tilt_david"]),
        (3, ["fox"]),
        (4, ["academic", "shark"]),
    ])
    def test_profiles_for_difficulty(self, difficulty, ids):
        assert [p.profile_id for p in profiles_for_difficulty(difficulty)] == ids

    def test_unknown_difficulty(self):
        with pytest.raises(ValueError):
            profiles_for_difficulty(5)


@pytest.mark.unit
class TestPickOpponents:

    def test_prefers_requested_level_then_lower(self):
        chosen = pick_opponents(3, 4, random.Random(1))
        assert {p.profile_id for p in chosen} == {"shark", "academic", "fox"}

    def test_repeats_when_pool_is_exhausted(self):
        chosen = pick_opponents(12, 3, random.Random(2))
        assert len(chosen) == 12
        assert len({p.profile_id for p in chosen}) == 9
        assert chosen[0].profile_id == "fox"
        assert all(p.difficulty <= 3 for p in chosen)

    def test_invalid_arguments(self):
        assert pick_opponents(0, 1) == []
        with pytest.raises(ValueError):
            pick_opponents(-1, 1)
        with pytest.raises(ValueError):
            pick_opponents(2, 0)
