"""Generative-text collaborator for current-turn actions."""

from __future__ import annotations

from party_optimizer.ai.tactician import (
    OpenRouterTactician,
    build_turn_prompt,
    get_tactician,
    parse_actions,
)


__all__ = [
    "OpenRouterTactician",
    "build_turn_prompt",
    "get_tactician",
    "parse_actions",
]
