"""
Purpose: Central configuration for the ferry-catch decision.
What it does:

Stores the thresholds (all in minutes) that split travellers into verdicts:

HURRY_MARGIN = 5        on time, but margin below this -> Hurry
GREEN_WAIT = 5          short waits up to this are highlighted green
SHORT_WAIT = 15         missed, next ferry within this -> MissedShortWait (missed_by hidden)
MEDIUM_WAIT = 20        missed, next ferry within this -> MissedMediumWait
SAFETY_MARGIN = 5       suggested start aims to arrive this early

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DecisionPolicy:
    """
    Central configuration for the decision engine.
    """

    # --- Catching the departure ---
    hurry_margin_minutes: int = 5

    # --- Missing it: wait at the terminal for the next one ---
    green_wait_minutes: int = 5
    short_wait_minutes: int = 15
    medium_wait_minutes: int = 20

    # --- Suggested start time (long waits only) ---
    safety_margin_minutes: int = 5

    # Drop suggestions that would have the traveller leave sooner than this.
    # 0 only drops suggestions at or before "now".
    min_suggestion_lead_minutes: int = 0

    def validate(self) -> None:
        """
        Basic sanity checks.
        """
        if self.hurry_margin_minutes < 0:
            raise ValueError("hurry_margin_minutes must be >= 0")

        if not 0 <= self.green_wait_minutes <= self.short_wait_minutes <= self.medium_wait_minutes:
            raise ValueError("wait thresholds must satisfy 0 <= green <= short <= medium")

        if self.safety_margin_minutes < 0:
            raise ValueError("safety_margin_minutes must be >= 0")

        if self.min_suggestion_lead_minutes < 0:
            raise ValueError("min_suggestion_lead_minutes must be >= 0")


def default_decision_policy() -> DecisionPolicy:
    """
    Convenience factory for the default policy.
    """
    p = DecisionPolicy()
    p.validate()
    return p
