"""Item accumulation rule for the "what to bring" memory game.

Each turn the player must repeat every item said so far and add exactly one
new item. `accumulate` compares the words already stored in the game context
with the words of the current utterance and returns a Decision:

    CONTINUE: store `words` in the context, re-arm it, and list the items.
    RESET:    re-arm the context without touching `words` and ask for one item.
    REJECT:   leave the context cleared and explain what went wrong.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .utils import contains_all, indefinite_article

logger = logging.getLogger("whattobring.accumulator")

CONTINUE = "continue"
RESET = "reset"
REJECT = "reject"

MISSING_PREVIOUS_REASON = "You didn't say all the previous items"
SAME_ITEMS_REASON = "You've only said the same items and forgot to add a new one"
TOO_MANY_REASON = "You've mentioned {count} too many items"
WRONG_COUNT_REASON = "You've said the wrong number of items"

RESET_LINES = [
    "I can't remember more than one item at a time",
    "Let's just start over",
    "What item should I bring with me?",
]
CLOSING_LINE = "And what else?"


@dataclass(frozen=True)
class Decision:
    """Outcome of one turn; `words` is only set for CONTINUE."""
    outcome: str
    lines: List[str] = field(default_factory=list)
    words: Optional[List[str]] = None


def accumulate(prior_words: Sequence[str], new_words: Sequence[str], query: str) -> Decision:
    """Purpose: Apply the accumulate-or-reset rule for a single turn.
    Inputs/Outputs: Inputs are the stored words, the parsed words of this turn, and the
        normalized query (echoed in rejections); output is a Decision.
    Side Effects / State: None; the caller applies the Decision to the context.
    Failure Modes: None raised. A length mismatch that no explicit reason covers falls
        back to a generic reason and is logged.
    Testing Notes: An empty prior list accepts one item and resets on several.
    """
    prior = list(prior_words)
    new = list(new_words)
    words = prior

    if new:
        if not contains_all(prior, new):
            return _reject(MISSING_PREVIOUS_REASON, query, new)

        required_length = len(prior) + 1
        if not prior and len(new) > 1:
            return Decision(outcome=RESET, lines=list(RESET_LINES))
        if not prior or len(new) == required_length:
            words = new
        else:
            if len(new) == len(prior):
                reason = SAME_ITEMS_REASON
            elif len(new) > required_length:
                reason = TOO_MANY_REASON.format(count=len(new) - required_length)
            else:
                # contains_all already rules out len(new) < len(prior)
                logger.warning("unexpected word count prior=%s new=%s", len(prior), len(new))
                reason = WRONG_COUNT_REASON
            return _reject(reason, query, new)

    return Decision(outcome=CONTINUE, lines=build_summary(new), words=words)


def build_summary(new_words: Sequence[str]) -> List[str]:
    """List the items of this turn, e.g. ["So all that you want to bring is:", "an apple,", "And what else?"]."""
    verb = "is" if len(new_words) == 1 else "are"
    lines = [f"So all that you want to bring {verb}:"]
    lines.extend(f"{indefinite_article(word)} {word}," for word in new_words)
    lines.append(CLOSING_LINE)
    return lines


def _reject(reason: str, query: str, new_words: List[str]) -> Decision:
    return Decision(outcome=REJECT, lines=[reason, query, *new_words])
