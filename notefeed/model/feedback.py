import typing as t

import annotated_types as ant

from .base import ValueModel, WithTimestamps
from .id import AssignmentID, FeedbackID, GradeID, UserID


class Grade(ValueModel):
    """A grade issued by the host LMS for one user's submission."""

    grade_id: GradeID
    assignment_id: AssignmentID
    user_id: UserID
    grade: float | None = None

    @property
    def is_graded(self) -> bool:
        return self.grade is not None and self.grade >= 0


class FeedbackRecord(WithTimestamps):
    feedback_id: FeedbackID
    grade_id: GradeID
    assignment_id: AssignmentID
    file_count: t.Annotated[int, ant.Ge(0)] = 0


class SummaryView(ValueModel):
    """Inputs the presentation layer needs to render a feedback summary.

    When `over_limit` is set, consumers render a link to the full file list
    instead of enumerating files.
    """

    file_count: t.Annotated[int, ant.Ge(0)]
    over_limit: bool
    show_login_prompt: bool
    show_open_action: bool = False
