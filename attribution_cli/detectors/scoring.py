from typing import Iterable, Tuple

from attribution_cli.models import AI, HUMAN, AttributionTotals


class AttributionAggregator:
    """
    Volume-weighted AI share
    ────────────────────────
    Each commit contributes its change volume to exactly one bucket (AI or
    Human). No other weighting is applied; an empty range yields 0%.
    """

    def compute(self, labelled_volumes: Iterable[Tuple[str, int]]) -> AttributionTotals:
        ai_volume = 0
        human_volume = 0
        for label, volume in labelled_volumes:
            if volume < 0:
                raise ValueError(f"Change volume must be non-negative, got {volume}")
            if label == AI:
                ai_volume += volume
            elif label == HUMAN:
                human_volume += volume
            else:
                raise ValueError(f"Unknown label {label!r}")
        return AttributionTotals(ai_volume=ai_volume, human_volume=human_volume)
