import typing as t

import annotated_types as ant

from .base import BaseSettings


class FeedbackSettings(BaseSettings):
    name: str = "OneNote"
    component: str = "assignfeedback_onenote"
    area: str = "feedback"
    # summaries list at most this many files before linking to the full list
    max_summary_files: t.Annotated[int, ant.Ge(0)] = 5
    archive_prefix: str = "OneNote"
