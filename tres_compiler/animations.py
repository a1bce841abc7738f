"""Animation clip collection."""

from __future__ import annotations

from typing import Iterable

from tres_compiler.naming import sanitize
from tres_compiler.scene import AnimationClip

ANIMATION_HELPER = "useAnimations"


def collect_animations(clips: Iterable[AnimationClip]) -> tuple[tuple[int, str], ...]:
    """
    One (list index, sanitized identifier) pair per distinct clip, in
    clip-list order.

    Distinct means distinct object: the same clip listed twice is collected
    once, at its first position, while two clips that merely share a name
    are both kept. Unnamed clips fall back to "Animation_<index>". The index
    is the clip's position in the model's list, which is how the generated
    component addresses it at runtime.
    """
    seen: set[int] = set()
    collected: list[tuple[int, str]] = []
    for index, clip in enumerate(clips):
        if id(clip) in seen:
            continue
        seen.add(id(clip))
        collected.append((index, sanitize(clip.name, "Animation", index)))
    return tuple(collected)


def collect_animation_names(clips: Iterable[AnimationClip]) -> tuple[str, ...]:
    return tuple(name for _, name in collect_animations(clips))
