from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from sweatbot.database.base import Base


class MemberReport(Base):
    __tablename__ = "member_reports"
    __table_args__ = (
        CheckConstraint("streak >= 1", name="ck_member_reports_streak_positive"),
        CheckConstraint("activity_count >= streak", name="ck_member_reports_count_ge_streak"),
    )

    member_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    display_name: Mapped[str] = mapped_column(String(256), default="")

    streak: Mapped[int] = mapped_column(Integer, default=1)
    activity_count: Mapped[int] = mapped_column(Integer, default=0, server_default="0")

    # stored as UTC; SQLite hands it back naive
    last_report_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        server_default=func.now(),
        onupdate=func.now(),
    )
