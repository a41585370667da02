"""Override pattern mining, improvement suggestions and retraining readiness."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

from ...schemas.application import ApplicationRecord
from ...schemas.feedback import AGREEMENT_TYPES, FeedbackRecord
from ..labels import Transition, agrees_with_reviewer, classify_override
from ..rates import percentage, round_half_up


@dataclass
class OverridesConfig:
    """Thresholds for override heuristics and retraining readiness."""

    false_positive_threshold: int = 5
    false_negative_threshold: int = 3
    review_override_threshold: int = 10
    high_confidence: int = 80
    high_confidence_min_accuracy: float = 85.0
    retraining_min_samples: int = 50
    retraining_target_samples: int = 100


class OverrideMiner:
    """Compare AI labels to reviewer decisions and derive model-improvement signals."""

    name = "overrides"

    def __init__(self, *, config: OverridesConfig | None = None) -> None:
        self._config = config or OverridesConfig()

    def aggregate(
        self,
        applications: Sequence[ApplicationRecord],
        context: dict[str, Any],
    ) -> dict[str, Any]:
        reviewed = [app for app in applications if app.is_reviewed]
        counts, total, unclassified = self._tally(reviewed)
        feedback: Iterable[FeedbackRecord] = context.get("feedback") or ()

        return {
            "aggregator": self.name,
            "sections": {
                "override_patterns": {
                    "total": total,
                    "unclassified": unclassified,
                    "patterns": [
                        {"pattern": transition.value, "count": counts[transition]}
                        for transition in Transition
                        if counts[transition] > 0
                    ],
                },
                "improvement_suggestions": self._suggestions(counts, reviewed),
                "training_progress": self._training_progress(len(reviewed)),
                "feedback_analysis": self._feedback_analysis(list(feedback)),
            },
        }

    @staticmethod
    def _tally(reviewed: Iterable[ApplicationRecord]) -> tuple[Counter, int, int]:
        counts: Counter = Counter({transition: 0 for transition in Transition})
        total = 0
        unclassified = 0
        for app in reviewed:
            if agrees_with_reviewer(app):
                continue
            total += 1
            transition = classify_override(app)
            if transition is None:
                unclassified += 1
            else:
                counts[transition] += 1
        return counts, total, unclassified

    def _suggestions(
        self,
        counts: Counter,
        reviewed: Sequence[ApplicationRecord],
    ) -> list[dict[str, str]]:
        config = self._config
        suggestions: list[dict[str, str]] = []

        false_positives = counts[Transition.QUALIFIED_TO_NOT_QUALIFIED]
        if false_positives > config.false_positive_threshold:
            suggestions.append(
                {
                    "type": "critical",
                    "message": (
                        f"High false positive rate ({false_positives} cases). Consider "
                        "tightening qualification criteria or improving MQ detection."
                    ),
                }
            )

        false_negatives = counts[Transition.NOT_QUALIFIED_TO_QUALIFIED]
        if false_negatives > config.false_negative_threshold:
            suggestions.append(
                {
                    "type": "warning",
                    "message": (
                        f"AI is rejecting qualified candidates ({false_negatives} cases). "
                        "Review for potential bias in experience/education requirements."
                    ),
                }
            )

        review_overrides = (
            counts[Transition.REVIEW_TO_QUALIFIED] + counts[Transition.REVIEW_TO_NOT_QUALIFIED]
        )
        if review_overrides > config.review_override_threshold:
            suggestions.append(
                {
                    "type": "info",
                    "message": (
                        f'{review_overrides} "Needs Review" cases were overridden. AI could '
                        "be more decisive with additional training data."
                    ),
                }
            )

        confident = [
            app
            for app in reviewed
            if app.confidence is not None and app.confidence >= config.high_confidence
        ]
        if confident:
            confident_accuracy = (
                sum(1 for app in confident if agrees_with_reviewer(app)) * 100 / len(confident)
            )
        else:
            confident_accuracy = 100.0
        if confident_accuracy < config.high_confidence_min_accuracy:
            suggestions.append(
                {
                    "type": "warning",
                    "message": (
                        f"High confidence predictions only {round_half_up(confident_accuracy):.0f}% accurate. "
                        "Model may be overconfident and needs recalibration."
                    ),
                }
            )

        if not suggestions:
            suggestions.append(
                {
                    "type": "success",
                    "message": "AI model is performing well. Continue monitoring for edge cases.",
                }
            )
        return suggestions

    def _training_progress(self, total_reviewed: int) -> dict[str, Any]:
        target = self._config.retraining_target_samples
        needs_training = max(0, target - total_reviewed)
        ready = total_reviewed >= target
        if ready:
            message = "Sufficient training data collected. Ready for model retraining."
        else:
            message = f"Collect {needs_training} more reviews before retraining for optimal results."
        return {
            "total_reviewed": total_reviewed,
            "needs_training": needs_training,
            "progress": percentage(total_reviewed, target),
            "eligible": total_reviewed >= self._config.retraining_min_samples,
            "ready": ready,
            "message": message,
        }

    @staticmethod
    def _feedback_analysis(feedback: Sequence[FeedbackRecord]) -> dict[str, Any]:
        total = len(feedback)
        categories = Counter(record.category() for record in feedback)
        agreements = Counter(record.agreement for record in feedback if record.agreement)

        by_category = [
            {
                "category": category,
                "label": category.replace("_", " ").title(),
                "count": count,
            }
            for category, count in sorted(categories.items(), key=lambda item: (-item[1], item[0]))
        ]
        by_agreement = [
            {
                "type": agreement,
                "count": agreements[agreement],
                "percentage": percentage(agreements[agreement], total),
            }
            for agreement in AGREEMENT_TYPES
        ]
        return {"total": total, "by_category": by_category, "by_agreement": by_agreement}
