"""
AI角色预设

每个预设是一份只读的 ``AIProfile``，并按难度分档，便于按难度随机抽取对手。
"""

import random
from typing import Dict, List, Optional

from ..core.player.profile import AIProfile

__all__ = [
    'ROCK', 'MANIAC', 'CALLING_STATION', 'FOX', 'SHARK', 'ACADEMIC', 'TILT_DAVID',
    'NEWBIE_BOB', 'TIGHT_MARY', 'NIT_STEVE', 'BLUFF_JACK',
    'PROFILE_PRESETS', 'DIFFICULTY_NAMES', 'get_profile', 'profiles_for_difficulty', 'pick_opponents',
]


def _profile(profile_id, name, tightness, aggression, bluff_freq, fold_to_3bet, cbet_freq,
             cbet_turn_freq, position_awareness, tilt_sensitivity, call_down_tendency,
             risk_tolerance, bluff_detection, deep_stack_threshold, difficulty,
             use_gto_strategy=False) -> AIProfile:
    return AIProfile(
        profile_id=profile_id, name=name, tightness=tightness, aggression=aggression,
        bluff_freq=bluff_freq, fold_to_3bet=fold_to_3bet, cbet_freq=cbet_freq,
        cbet_turn_freq=cbet_turn_freq, position_awareness=position_awareness,
        tilt_sensitivity=tilt_sensitivity, call_down_tendency=call_down_tendency,
        risk_tolerance=risk_tolerance, bluff_detection=bluff_detection,
        deep_stack_threshold=deep_stack_threshold, use_gto_strategy=use_gto_strategy,
        difficulty=difficulty,
    )


# 超紧玩家，只玩顶级牌
ROCK = _profile("rock", "石头", .90, .80, .01, .08, .80, .60, .10, .05, .05, .15, .20, 300, 1)
# 松凶型玩家，什么都敢加注
MANIAC = _profile("maniac", "疯子麦克", .25, .95, .60, .20, .90, .75, .40, .30, .15, .90, .25, 100, 2)
# 跟注站
CALLING_STATION = _profile("calling_station", "安娜", .35, .15, .05, .08, .25, .15, .20, .20, .95,
                           .30, .10, 200, 1)
# 平衡型高手
FOX = _profile("fox", "老狐狸", .55, .68, .22, .52, .65, .45, .80, .15, .30, .6, .7, 180, 3)
# 位置意识极强，后位杀手
SHARK = _profile("shark", "鲨鱼汤姆", .48, .78, .28, .50, .75, .55, .95, .1, .25, .7, .85, 150, 4)
# 偏向平衡策略，数学驱动
ACADEMIC = _profile("academic", "艾米", .52, .62, .25, .48, .60, .42, .85, .02, .35, .6, .9, 200, 4,
                    use_gto_strategy=True)
# 输钱后情绪化
TILT_DAVID = _profile("tilt_david", "大卫", .55, .55, .18, .50, .58, .40, .5, .85, .30, .5, .4, 180, 2)
NEWBIE_BOB = _profile("newbie_bob", "新手鲍勃", .25, .08, .02, .10, .05, .03, .05, .4, .90, .2, .1, 250, 1)
TIGHT_MARY = _profile("tight_mary", "玛丽", .88, .15, .01, .45, .10, .05, .25, .15, .40, .3, .25, 250, 1)
NIT_STEVE = _profile("nit_steve", "史蒂夫", .95, .95, .01, .05, .85, .70, .15, .05, .05, .2, .4, 300, 2)
BLUFF_JACK = _profile("bluff_jack", "杰克", .40, .92, .55, .35, .82, .68, .70, .25, .20, .85, .35, 150, 2)

PROFILE_PRESETS: Dict[str, AIProfile] = {
    profile.profile_id: profile
    for profile in (ROCK, MANIAC, CALLING_STATION, FOX, SHARK, ACADEMIC, TILT_DAVID,
                    NEWBIE_BOB, TIGHT_MARY, NIT_STEVE, BLUFF_JACK)
}

DIFFICULTY_NAMES: Dict[int, str] = {1: "简单", 2: "普通", 3: "困难", 4: "专家"}


def get_profile(profile_id: str) -> AIProfile:
    """
    按ID获取预设

    Raises:
        KeyError: 未知的预设ID
    """
    try:
        return PROFILE_PRESETS[profile_id]
    except KeyError:
        raise KeyError(f"未知的AI预设: {profile_id}") from None


def profiles_for_difficulty(difficulty: int) -> List[AIProfile]:
    """某一难度档的全部预设（按ID排序）"""
    if difficulty not in DIFFICULTY_NAMES:
        raise ValueError(f"difficulty必须在1-4之间，实际: {difficulty}")
    return sorted((p for p in PROFILE_PRESETS.values() if p.difficulty == difficulty),
                  key=lambda p: p.profile_id)


def pick_opponents(count: int, difficulty: int, rng: Optional[random.Random] = None) -> List[AIProfile]:
    """
    按难度挑选对手

    优先从该难度档抽取，不够时依次从相邻较低的难度档补充；仍不够时允许重复。

    Args:
        count: 需要的对手数
        difficulty: 难度1-4
        rng: 随机数生成器
    """
    if count < 0:
        raise ValueError("count不能为负数")
    if difficulty not in DIFFICULTY_NAMES:
        raise ValueError(f"difficulty必须在1-4之间，实际: {difficulty}")
    rng = rng or random.Random()
    pool: List[AIProfile] = []
    for level in range(difficulty, 0, -1):
        candidates = profiles_for_difficulty(level)
        rng.shuffle(candidates)
        pool.extend(candidates)
    chosen = pool[:count]
    while len(chosen) < count:
        chosen.append(rng.choice(pool))
    return chosen
