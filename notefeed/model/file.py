import datetime
import typing as t

import annotated_types as ant

from .base import ValueModel
from .id import AssignmentID, GradeID


class FileArea(ValueModel):
    component: str
    area: str
    context_id: AssignmentID
    item_id: GradeID

    @property
    def key(self) -> str:
        return f"{self.component}/{self.context_id}/{self.area}/{self.item_id}"


class StoredFile(ValueModel):
    area: FileArea
    filename: str
    size: t.Annotated[int, ant.Ge(0)]
    modified_time: datetime.datetime
