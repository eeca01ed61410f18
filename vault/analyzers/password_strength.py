"""
Password Strength Estimator
============================

Coarse heuristic password classifier. Signals are accumulated in any
order, then the total is clamped to ``[0, 8]``:

==========================  =====  ==============================================
Signal                      Score  Feedback
==========================  =====  ==============================================
length < 8                  +1     Password is too short
length 8-11                 +2     Increase length (16+ characters recommended)
length 12-15                +3
length >= 16                +4
uppercase / lowercase /     +1     Add uppercase letters / Add lowercase letters
digit / symbol present      each   / Add numbers / Add symbols (when missing)
char repeated 3+ in a row   -1     Avoid repeated characters
abc..xyz or 012..789 run    -1     Avoid sequential patterns
==========================  =====  ==============================================

The score maps to a tier and a fixed crack-time label (see
:class:`~vault.core.models.StrengthTier`). The labels are illustrative
UI copy, not a computed time-to-crack.

Length is counted in UTF-16 code units, so an emoji counts as two.
Anything outside ``A-Z``, ``a-z`` and ``0-9`` counts as a symbol,
including non-ASCII letters.
"""

from __future__ import annotations

import re

from vault.core.models import StrengthAssessment, StrengthTier

EMPTY_FEEDBACK = "Enter a password to check its strength"

_UPPER = re.compile(r"[A-Z]")
_LOWER = re.compile(r"[a-z]")
_DIGIT = re.compile(r"[0-9]")
_SYMBOL = re.compile(r"[^A-Za-z0-9]")
# Line terminators and astral characters (surrogate pairs in UTF-16) never
# count as a repeated character
_REPEATED = re.compile(r"([^\n\r\u2028\u2029\U00010000-\U0010FFFF])\1{2,}")


def _ascending_triples(alphabet: str) -> list[str]:
    return [alphabet[i:i + 3] for i in range(len(alphabet) - 2)]


_SEQUENCES: tuple[str, ...] = tuple(
    _ascending_triples("abcdefghijklmnopqrstuvwxyz") + _ascending_triples("0123456789")
)
_SEQUENTIAL = re.compile("|".join(_SEQUENCES), re.IGNORECASE)

_CLASS_CHECKS: tuple[tuple[re.Pattern[str], str], ...] = (
    (_UPPER, "Add uppercase letters"),
    (_LOWER, "Add lowercase letters"),
    (_DIGIT, "Add numbers"),
    (_SYMBOL, "Add symbols"),
)

MIN_SCORE = 0
MAX_SCORE = 8


def utf16_length(text: str) -> int:
    """Length of *text* in UTF-16 code units."""
    return len(text.encode("utf-16-le", "surrogatepass")) // 2


class PasswordStrengthEstimator:
    """Scores passwords with a fixed, composable heuristic policy.

    Total: every input string produces an assessment; nothing raises.

    Usage::

        estimator = PasswordStrengthEstimator()
        result = estimator.assess("abcdefgH1!")
        print(result.tier.value, result.crack_time)
    """

    def assess(self, password: str) -> StrengthAssessment:
        """Classify *password*.

        Args:
            password: Candidate password; may be empty or non-ASCII.

        Returns:
            StrengthAssessment with score, tier, feedback and crack time.
        """
        if not password:
            return StrengthAssessment(
                score=0,
                tier=StrengthTier.WEAK,
                feedback=[EMPTY_FEEDBACK],
                crack_time=StrengthTier.WEAK.crack_time,
            )

        feedback: list[str] = []
        score = self._length_score(utf16_length(password), feedback)
        score += self._class_score(password, feedback)
        score -= self._penalties(password, feedback)

        score = max(MIN_SCORE, min(MAX_SCORE, score))
        tier = StrengthTier.from_score(score)

        return StrengthAssessment(
            score=score,
            tier=tier,
            feedback=feedback,
            crack_time=tier.crack_time,
        )

    # ------------------------------------------------------------------ #
    #  Signals
    # ------------------------------------------------------------------ #

    @staticmethod
    def _length_score(length: int, feedback: list[str]) -> int:
        if length < 8:
            feedback.append("Password is too short")
            return 1
        if length < 12:
            feedback.append("Increase length (16+ characters recommended)")
            return 2
        if length < 16:
            return 3
        return 4

    @staticmethod
    def _class_score(password: str, feedback: list[str]) -> int:
        score = 0
        for pattern, advice in _CLASS_CHECKS:
            if pattern.search(password):
                score += 1
            else:
                feedback.append(advice)
        return score

    @staticmethod
    def _penalties(password: str, feedback: list[str]) -> int:
        penalty = 0
        if _REPEATED.search(password):
            penalty += 1
            feedback.append("Avoid repeated characters")
        if _SEQUENTIAL.search(password):
            penalty += 1
            feedback.append("Avoid sequential patterns")
        return penalty


# ========================= Module-level convenience ========================

_ESTIMATOR = PasswordStrengthEstimator()


def assess_password(password: str) -> StrengthAssessment:
    """Assess *password* with the default estimator."""
    return _ESTIMATOR.assess(password)
