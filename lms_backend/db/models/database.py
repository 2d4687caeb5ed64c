from typing import Optional
import datetime
import decimal

from sqlalchemy import Boolean, DateTime, Index, Integer, Numeric, PrimaryKeyConstraint, String, Text, UniqueConstraint, text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class AuditMixin:
    """Create/update/soft-delete metadata shared by every persisted entity.

    `deleted_at` is the single source of truth for logical deletion; reads
    filter `deleted_at IS NULL`.
    """

    created_at: Mapped[datetime.datetime] = mapped_column(DateTime, nullable=False)
    created_by: Mapped[Optional[str]] = mapped_column(String)
    updated_at: Mapped[Optional[datetime.datetime]] = mapped_column(DateTime)
    updated_by: Mapped[Optional[str]] = mapped_column(String)
    deleted_at: Mapped[Optional[datetime.datetime]] = mapped_column(DateTime)
    deleted_by: Mapped[Optional[str]] = mapped_column(String)


class User(AuditMixin, Base):
    __tablename__ = 'users'
    __table_args__ = (
        PrimaryKeyConstraint('id', name='users_pkey'),
        UniqueConstraint('email', name='users_email_key'),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    email: Mapped[str] = mapped_column(String, nullable=False)
    password: Mapped[str] = mapped_column(String, nullable=False)
    full_name: Mapped[str] = mapped_column(String, nullable=False)
    role_code: Mapped[str] = mapped_column(String, nullable=False, server_default=text("'User'"))
    verified_at: Mapped[Optional[datetime.datetime]] = mapped_column(DateTime)


class UserOtp(Base):
    __tablename__ = 'user_otps'
    __table_args__ = (
        PrimaryKeyConstraint('email', name='user_otps_pkey'),
    )

    email: Mapped[str] = mapped_column(String, primary_key=True)
    otp_code: Mapped[str] = mapped_column(String(12), nullable=False)
    expired_at: Mapped[datetime.datetime] = mapped_column(DateTime, nullable=False)
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime, nullable=False)


class Courses(AuditMixin, Base):
    __tablename__ = 'courses'
    __table_args__ = (
        PrimaryKeyConstraint('id', name='courses_pkey'),
        Index('idx_courses_instructor', 'instructor_id'),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False, server_default=text("''"))
    image_file_name: Mapped[str] = mapped_column(String, nullable=False)
    slug: Mapped[Optional[str]] = mapped_column(String)
    instructor_id: Mapped[Optional[str]] = mapped_column(String(36))
    category_id: Mapped[Optional[str]] = mapped_column(String(36))
    course_type: Mapped[Optional[str]] = mapped_column(String)
    seo_description: Mapped[Optional[str]] = mapped_column(Text)
    duration: Mapped[Optional[str]] = mapped_column(String)
    timezone: Mapped[Optional[str]] = mapped_column(String)
    thumbnail: Mapped[Optional[str]] = mapped_column(String)
    demo_video_storage: Mapped[Optional[str]] = mapped_column(String)
    demo_video_source: Mapped[Optional[str]] = mapped_column(String)
    description: Mapped[Optional[str]] = mapped_column(Text)
    capacity: Mapped[Optional[int]] = mapped_column(Integer)
    price: Mapped[Optional[decimal.Decimal]] = mapped_column(Numeric(12, 2))
    discount: Mapped[Optional[decimal.Decimal]] = mapped_column(Numeric(12, 2))
    certificate: Mapped[Optional[str]] = mapped_column(String)
    gna: Mapped[Optional[str]] = mapped_column(String)
    message_for_reviewer: Mapped[Optional[str]] = mapped_column(Text)
    is_approved: Mapped[Optional[str]] = mapped_column(String)
    status: Mapped[Optional[str]] = mapped_column(String)
    course_level_id: Mapped[Optional[str]] = mapped_column(String(36))
    course_language_id: Mapped[Optional[str]] = mapped_column(String(36))


class Stores(AuditMixin, Base):
    __tablename__ = 'stores'
    __table_args__ = (
        PrimaryKeyConstraint('id', name='stores_pkey'),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    image_file_name: Mapped[str] = mapped_column(String, nullable=False)


class CourseChapters(AuditMixin, Base):
    __tablename__ = 'course_chapters'
    __table_args__ = (
        PrimaryKeyConstraint('id', name='course_chapters_pkey'),
        Index('idx_course_chapters_course_order', 'course_id', 'order_chapter'),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    instructor_id: Mapped[str] = mapped_column(String(36), nullable=False)
    course_id: Mapped[str] = mapped_column(String(36), nullable=False)
    title: Mapped[str] = mapped_column(String, nullable=False)
    order_chapter: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text('0'))
    status: Mapped[str] = mapped_column(String, nullable=False, server_default=text("'draft'"))


class ChapterLessons(AuditMixin, Base):
    __tablename__ = 'course_chapter_lessons'
    __table_args__ = (
        PrimaryKeyConstraint('id', name='course_chapter_lessons_pkey'),
        Index('idx_course_chapter_lessons_chapter_order', 'chapter_id', 'order_lesson'),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    instructor_id: Mapped[Optional[str]] = mapped_column(String(36))
    course_id: Mapped[Optional[str]] = mapped_column(String(36))
    chapter_id: Mapped[Optional[str]] = mapped_column(String(36))
    title: Mapped[str] = mapped_column(String, nullable=False)
    order_lesson: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text('0'))
    slug: Mapped[Optional[str]] = mapped_column(String)
    description: Mapped[Optional[str]] = mapped_column(Text)
    file_path: Mapped[Optional[str]] = mapped_column(String)
    storage_lesson: Mapped[Optional[str]] = mapped_column(String)
    lesson_type: Mapped[Optional[str]] = mapped_column(String)
    volume: Mapped[Optional[str]] = mapped_column(String)
    duration: Mapped[Optional[str]] = mapped_column(String)
    file_type: Mapped[Optional[str]] = mapped_column(String)
    downloadable: Mapped[Optional[bool]] = mapped_column(Boolean)
    is_preview: Mapped[Optional[bool]] = mapped_column(Boolean)
    status: Mapped[Optional[str]] = mapped_column(String)
