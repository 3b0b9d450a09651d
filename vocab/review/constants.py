"""
Review Constants

Review modes, session states and the review interval table.
"""

from enum import Enum


# ---- Review Modes ----

class ReviewMode(str, Enum):
    """How the word set for a session is chosen."""
    REVIEW_ALL = "review_all"                  # Every word in scope
    CONTINUE_LAST = "continue_last"            # Unlearned words plus forgotten ones
    RECOMMENDED_REVIEW = "recommended_review"  # Words due under the interval table


# ---- Session States ----

class SessionState(str, Enum):
    """Where a review session is in its lifecycle."""
    MODE_SELECTION = "mode_selection"
    PRESENTING = "presenting"
    ROUND_COMPLETE = "round_complete"


class CompletionKind(str, Enum):
    """Which completion screen a finished round should show."""
    NOTHING_TO_REVIEW = "nothing_to_review"
    ALL_REVIEWED = "all_reviewed"
    RECOMMENDED_DONE = "recommended_done"
    ROUND_WITH_FORGOTTEN = "round_with_forgotten"


# ---- Review Intervals ----
# Days that must pass after the last review, indexed by review_count.
# Loosely follows the Ebbinghaus forgetting curve: 0, 1, 3, 7, 15, 30 days,
# then one review every 30 days indefinitely.

INTERVAL_DAYS = (0, 1, 3, 7, 15, 30)
MAX_INTERVAL_DAYS = INTERVAL_DAYS[-1]
