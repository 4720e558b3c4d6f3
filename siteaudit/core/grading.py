"""Letter grades for audit scores."""

GRADE_THRESHOLDS = (
    (90, "A"),
    (80, "B"),
    (70, "C"),
    (60, "D"),
)


def grade_for(score: int) -> str:
    """Map a 0-100 score to a letter grade (thresholds are inclusive)."""
    for threshold, grade in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return "F"
