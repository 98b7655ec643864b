import datetime

from sqlalchemy import BigInteger, func, Index, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, MappedAsDataclass
from sqlalchemy.types import DateTime

from notefeed.model import FeedbackID, LinkID

from .type import ShortUUIDKeyType


class base(MappedAsDataclass, DeclarativeBase):
    type_annotation_map = {
        FeedbackID: ShortUUIDKeyType(FeedbackID),
        LinkID: ShortUUIDKeyType(LinkID),
        datetime.datetime: DateTime(timezone=True),
    }


class feedback_records(base):
    __tablename__ = "feedback_records"
    __table_args__ = (Index("ix_feedback_records_assignment_id", "assignment_id"),)

    feedback_id: Mapped[FeedbackID] = mapped_column(primary_key=True)
    # grade and assignment ids are issued by the host LMS
    grade_id: Mapped[int] = mapped_column(BigInteger, unique=True)
    assignment_id: Mapped[int] = mapped_column(BigInteger)
    file_count: Mapped[int] = mapped_column(default=0)
    create_time: Mapped[datetime.datetime] = mapped_column(default=None, server_default=func.now())
    update_time: Mapped[datetime.datetime] = mapped_column(default=None, server_default=func.now(), onupdate=func.now())


class document_links(base):
    __tablename__ = "document_links"
    __table_args__ = (UniqueConstraint("assignment_id", "user_id", name="uq_document_links_assignment_user"),)

    link_id: Mapped[LinkID] = mapped_column(primary_key=True)
    assignment_id: Mapped[int] = mapped_column(BigInteger)
    user_id: Mapped[int] = mapped_column(BigInteger)
    feedback_page_id: Mapped[str | None] = mapped_column(default=None)
    submission_page_id: Mapped[str | None] = mapped_column(default=None)
    create_time: Mapped[datetime.datetime] = mapped_column(default=None, server_default=func.now())
    update_time: Mapped[datetime.datetime] = mapped_column(default=None, server_default=func.now(), onupdate=func.now())
