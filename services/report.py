"""Plain-text rendering of a skin analysis result"""

from typing import List

from services.skin_analysis_service import SkinAnalysisResult

BAR_WIDTH = 30

METRIC_LABELS = (
    ("brightness", "Brightness"),
    ("redness", "Redness"),
    ("oiliness", "Oiliness"),
)


def metric_bar(percent: int, width: int = BAR_WIDTH) -> str:
    """Proportional bar; values past 100% fill the bar"""
    filled = min(max(percent, 0), 100) * width // 100
    return "[" + "#" * filled + "-" * (width - filled) + "]"


def render_report(result: SkinAnalysisResult) -> str:
    percents = result.metrics.to_percent()

    lines: List[str] = [f"Your Skin Type: {result.skin_type.value}", "", "Skin Metrics:"]
    for key, label in METRIC_LABELS:
        lines.append(f"  {label:<11}{percents[key]:>4}% {metric_bar(percents[key])}")

    lines += ["", "Recommendations:"]
    lines += [f"  - {rec}" for rec in result.recommendations]
    return "\n".join(lines)
