from .base import WithTimestamps
from .id import AssignmentID, LinkID, UserID


class ExternalDocumentLink(WithTimestamps):
    link_id: LinkID
    assignment_id: AssignmentID
    user_id: UserID
    feedback_page_id: str | None = None
    submission_page_id: str | None = None
