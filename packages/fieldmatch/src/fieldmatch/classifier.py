"""Decision tiers for a ranked match list."""

from __future__ import annotations

from collections.abc import Sequence

from fieldmatch.config import Thresholds
from fieldmatch.types import Decision, FieldMatch, Tier


def classify(matches: Sequence[FieldMatch], thresholds: Thresholds | None = None) -> Decision:
    """Assign a decision tier to an already-ranked match list.

    Tiers, checked in order against the top match:
      AUTO_ACCEPT        >= auto_accept and the value matched a name exactly
      AUTO_CORRECTED     >= auto_corrected (includes alias/pattern hits at 95)
      SMART_AUTO_ACCEPT  >= smart_accept and a clear lead over the runner-up
      BEST_GUESS         >= best_guess
      REJECT             otherwise, or no matches at all
    """
    t = thresholds or Thresholds()

    if not matches:
        return Decision(tier="REJECT", reasons=("no_matches",))

    top = matches[0]
    runner_up = matches[1].similarity if len(matches) > 1 else None
    margin = top.similarity - runner_up if runner_up is not None else None

    def decide(tier: Tier, *reasons: str) -> Decision:
        return Decision(
            tier=tier,
            match=top if tier != "REJECT" else None,
            runner_up_similarity=runner_up,
            margin=margin,
            reasons=reasons,
        )

    if top.similarity >= t.auto_accept:
        if top.match_type == "exact":
            return decide("AUTO_ACCEPT", "exact_match")
        return decide("AUTO_CORRECTED", f"{top.match_type}_match")

    if top.similarity >= t.auto_corrected:
        return decide("AUTO_CORRECTED", "high_similarity")

    if top.similarity >= t.smart_accept:
        if margin is None:
            return decide("SMART_AUTO_ACCEPT", "single_candidate")
        if margin > t.margin:
            return decide("SMART_AUTO_ACCEPT", "clear_winner")

    if top.similarity >= t.best_guess:
        if top.similarity >= t.smart_accept:
            return decide("BEST_GUESS", "ambiguous_runner_up")
        return decide("BEST_GUESS", "moderate_similarity")

    return decide("REJECT", "low_similarity")
