"""
Fun-fact prompts.

The audience is Indonesian, so the prompt is written in Indonesian.
"""

from __future__ import annotations


class FunFactPrompts:

    @staticmethod
    def fun_fact_prompt(category: str) -> str:
        return (
            f"berikan 10 funfact tentang sampah {category} di indonesia, "
            f"dibungkus menjadi deskripsi"
        )
