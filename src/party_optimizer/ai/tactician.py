"""Generative tactician for current-turn actions.

Asks a chat model, acting as a Dungeon Master, for three short
class-flavoured actions for the character whose turn it is. The model is
reached through the OpenAI SDK, either via OpenRouter or directly.

A single call is made with an explicit timeout and no retries; every
failure is raised as an AIControlError subclass so the recommendation
composer can fall back to its deterministic actions.
"""

from __future__ import annotations

import json
import re
from typing import TYPE_CHECKING, Any

from party_optimizer.core.config import get_settings
from party_optimizer.core.exceptions import (
    AIConnectionError,
    AIControlError,
    AIResponseError,
    AITimeoutError,
)
from party_optimizer.core.logging import get_logger


if TYPE_CHECKING:
    from party_optimizer.core.config import Settings
    from party_optimizer.models.party import Character

logger = get_logger(__name__)

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"


# =============================================================================
# Prompt
# =============================================================================


TURN_PROMPT = """You are an expert Dungeon Master providing creative, class-specific tactical advice for a player's turn in a Dungeons & Dragons encounter.

Player Character:
- Name: {name}
- Class: {character_class}
- Stats: Strength({strength}), Agility({agility}), Health({health}), Mana({mana}), Dexterity({dexterity}), Wisdom({wisdom})

Current Encounter: "{event_type}"

Task:
Provide a JSON array of 3 strategic actions. The actions MUST be creative and strongly reflect the character's class abilities and playstyle. For example, a Mage should get spell-based actions, a Barbarian should get rage/strength actions, and a Rogue should get stealth or skill-based actions. The first action should be the primary recommendation. Actions must be concise (under 15 words).

Example for a Mage:
["Primary: Cast 'Magic Missile' on the weakest target.", "Alternative: Conjure a 'Fog Cloud' for cover.", "Defensive: Prepare a 'Shield' spell."]

Example for a Rogue:
["Primary: Use 'Sneak Attack' on the distracted guard.", "Alternative: Disengage and hide in the shadows.", "Defensive: Use 'Uncanny Dodge' to halve damage."]

Your Response (JSON array only):"""


def build_turn_prompt(character: "Character", event_type: str) -> str:
    """Fill the Dungeon Master prompt for one character's turn.

    Args:
        character: The acting character.
        event_type: Encounter type string.

    Returns:
        Prompt text.
    """
    return TURN_PROMPT.format(
        name=character.name,
        character_class=character.type,
        strength=character.strength,
        agility=character.agility,
        health=character.health,
        mana=character.mana,
        dexterity=character.dexterity,
        wisdom=character.wisdom,
        event_type=event_type,
    )


_CODE_FENCE = re.compile(r"```json|```")


def parse_actions(text: str) -> list[Any]:
    """Parse the model's reply into a list.

    Markdown code fences are stripped before parsing.

    Args:
        text: Raw reply text.

    Returns:
        The decoded JSON array.

    Raises:
        AIResponseError: If the reply is not valid JSON or not an array.
    """
    cleaned = _CODE_FENCE.sub("", text or "").strip()
    try:
        actions = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise AIResponseError(
            f"Reply is not valid JSON: {exc.msg}",
            details={"reply_preview": cleaned[:100]},
        ) from exc
    if not isinstance(actions, list):
        raise AIResponseError(
            "Reply is not a JSON array",
            details={"received_type": type(actions).__name__},
        )
    return actions


# =============================================================================
# Tactician
# =============================================================================


class OpenRouterTactician:
    """TacticalActionGenerator backed by a chat completion model.

    Attributes:
        model: Model identifier.
        temperature: Sampling temperature.
        timeout_seconds: Timeout applied to the single outbound call.
        provider: 'openrouter' or 'openai'.
    """

    def __init__(
        self,
        *,
        api_key: str | None,
        model: str = "google/gemini-2.0-flash-001",
        temperature: float = 0.7,
        timeout_seconds: float = 15.0,
        provider: str = "openrouter",
        client: Any = None,
    ) -> None:
        """Initialize the tactician.

        Args:
            api_key: Provider API key.
            model: Model identifier.
            temperature: Sampling temperature.
            timeout_seconds: Call timeout in seconds.
            provider: 'openrouter' or 'openai'.
            client: Pre-built OpenAI-compatible client (mainly for tests).
        """
        self.model = model
        self.temperature = temperature
        self.timeout_seconds = timeout_seconds
        self.provider = provider
        self._api_key = api_key
        self._client = client

    def _get_client(self) -> Any:
        """Get or create the OpenAI client."""
        if self._client is None:
            from openai import OpenAI

            if self.provider == "openrouter":
                self._client = OpenAI(
                    api_key=self._api_key,
                    base_url=OPENROUTER_BASE_URL,
                    timeout=self.timeout_seconds,
                    max_retries=0,
                    default_headers={"X-Title": "Party Optimizer"},
                )
            else:
                self._client = OpenAI(
                    api_key=self._api_key,
                    timeout=self.timeout_seconds,
                    max_retries=0,
                )
        return self._client

    def generate_tactical_actions(self, character: "Character", event_type: str) -> list[Any]:
        """Ask the model for turn actions.

        Args:
            character: The acting character.
            event_type: Encounter type string.

        Returns:
            The parsed JSON array from the reply.

        Raises:
            AITimeoutError: If the call times out.
            AIConnectionError: If the provider cannot be reached.
            AIResponseError: If the reply is not a JSON array.
            AIControlError: For any other provider failure.
        """
        from openai import APIConnectionError, APIStatusError, APITimeoutError

        logger.debug(
            "Requesting tactical actions",
            character=character.name,
            event_type=event_type,
            model=self.model,
        )

        try:
            response = self._get_client().chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": build_turn_prompt(character, event_type)}],
                temperature=self.temperature,
                max_tokens=256,
            )
        # APITimeoutError subclasses APIConnectionError, so it goes first.
        except APITimeoutError as exc:
            raise AITimeoutError(
                f"AI request timed out after {self.timeout_seconds}s",
                provider=self.provider,
                model=self.model,
            ) from exc
        except APIConnectionError as exc:
            raise AIConnectionError(
                f"Failed to connect to AI provider: {exc}",
                provider=self.provider,
                model=self.model,
            ) from exc
        except APIStatusError as exc:
            raise AIControlError(
                f"AI provider returned status {exc.status_code}",
                provider=self.provider,
                model=self.model,
            ) from exc
        except Exception as exc:
            raise AIControlError(
                f"AI request failed: {exc}",
                provider=self.provider,
                model=self.model,
            ) from exc

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError) as exc:
            raise AIResponseError(
                "AI response had no message",
                provider=self.provider,
                model=self.model,
            ) from exc

        actions = parse_actions(content or "")
        logger.info("Tactical actions received", character=character.name, count=len(actions))
        return actions


def get_tactician(settings: "Settings | None" = None) -> OpenRouterTactician | None:
    """Build the configured tactician.

    Args:
        settings: Application settings; the global settings by default.

    Returns:
        A tactician, or None when generation is disabled or no API key is
        configured (turn actions then always use the fallback).
    """
    settings = settings or get_settings()
    ai = settings.ai
    if not ai.enabled:
        logger.info("Tactical generation disabled")
        return None
    api_key = ai.active_api_key
    if not api_key:
        logger.warning("No AI API key configured, turn actions will use fallback", provider=ai.default_provider)
        return None
    return OpenRouterTactician(
        api_key=api_key,
        model=ai.tactician_model,
        temperature=ai.temperature,
        timeout_seconds=ai.timeout_seconds,
        provider=ai.default_provider,
    )


__all__ = [
    "OPENROUTER_BASE_URL",
    "TURN_PROMPT",
    "build_turn_prompt",
    "parse_actions",
    "OpenRouterTactician",
    "get_tactician",
]
