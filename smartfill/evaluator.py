"""
smartfill.evaluator

Rule-based password strength scorer:
- evaluate(password): returns dict with score (0-5), feedback (unmet rules,
  in fixed order) and label
- strength_label / strength_color / strength_percent: presentation bands
"""

import re
from typing import Callable, Dict, List, Tuple

SPECIAL_CHARS = '!@#$%^&*(),.?":{}|<>'
MIN_LENGTH = 8
MAX_SCORE = 5

_SPECIAL_RE = re.compile("[" + re.escape(SPECIAL_CHARS) + "]")

# (check, feedback when unmet); order is the feedback order
RULES: List[Tuple[Callable[[str], bool], str]] = [
    (lambda pw: len(pw) >= MIN_LENGTH, "Use at least 8 characters"),
    (lambda pw: re.search(r"[A-Z]", pw) is not None, "Add uppercase letters"),
    (lambda pw: re.search(r"[a-z]", pw) is not None, "Add lowercase letters"),
    (lambda pw: re.search(r"\d", pw) is not None, "Add numbers"),
    (lambda pw: _SPECIAL_RE.search(pw) is not None, "Add special characters (!@#$%)"),
]


def strength_label(score: int) -> str:
    if score <= 0:
        return ""
    if score <= 2:
        return "Weak"
    if score == 3:
        return "Fair"
    if score == 4:
        return "Good"
    return "Strong"


def strength_color(score: int) -> str:
    """Bar colour for the meter; grey while nothing has been typed."""
    if score <= 0:
        return "gray"
    if score <= 2:
        return "red"
    if score == 3:
        return "yellow"
    if score == 4:
        return "blue"
    return "green"


def strength_percent(score: int) -> int:
    return int(round(score / MAX_SCORE * 100))


def evaluate(password: str) -> Dict:
    """
    Score a password against the fixed rule set.

    Returns a dict:
    {
        "score": int,       # 0..5, one point per satisfied rule
        "feedback": [str],  # messages for unmet rules
        "label": str        # "" for empty input
    }

    An empty password is the "no input yet" state: score 0 and no feedback.
    """
    if not password:
        return {"score": 0, "feedback": [], "label": ""}

    score = 0
    feedback: List[str] = []
    for check, message in RULES:
        if check(password):
            score += 1
        else:
            feedback.append(message)

    return {
        "score": score,
        "feedback": feedback,
        "label": strength_label(score),
    }
