from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from careersync.db import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    hashed_password = Column(String(255), nullable=False)
    skills = Column(JSON, nullable=False, default=list)
    experience_level = Column(String(32), nullable=True)  # entry/mid/senior
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    analyses = relationship("ResumeAnalysis", back_populates="user", cascade="all, delete-orphan")
    applications = relationship("Application", back_populates="user", cascade="all, delete-orphan")
    wishlist = relationship("WishlistItem", back_populates="user", cascade="all, delete-orphan")


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    company_name = Column(String(255), nullable=True)
    description = Column(Text, nullable=False, default="")
    requirements = Column(Text, nullable=False, default="")
    skills = Column(JSON, nullable=False, default=list)
    location = Column(String(255), nullable=True)
    category = Column(String(64), nullable=True)
    experience_level = Column(String(32), nullable=True)
    salary_display = Column(String(128), nullable=True)
    status = Column(String(32), nullable=False, default="active")  # active/closed
    posted_date = Column(DateTime, default=datetime.utcnow, nullable=False)


class ResumeAnalysis(Base):
    __tablename__ = "resume_analyses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id"), nullable=False, index=True)
    match_score = Column(Integer, nullable=False)
    matching_skills = Column(JSON, nullable=False, default=list)
    missing_skills = Column(JSON, nullable=False, default=list)
    strengths = Column(JSON, nullable=False, default=list)
    suggestions = Column(JSON, nullable=False, default=list)
    degraded = Column(Boolean, nullable=False, default=False)
    analysis_data = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="analyses")
    job = relationship("Job")

    __table_args__ = (
        UniqueConstraint("user_id", "job_id", name="uq_resume_analyses_user_job"),
    )


class Application(Base):
    __tablename__ = "applications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id"), nullable=False, index=True)
    job_title = Column(String(255), nullable=False)
    company_name = Column(String(255), nullable=True)
    cover_letter = Column(Text, nullable=True)
    resume_url = Column(String(1024), nullable=True)
    status = Column(String(64), nullable=False, default="applied")  # applied/interview/offer/rejected
    applied_date = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="applications")
    job = relationship("Job")

    __table_args__ = (
        UniqueConstraint("user_id", "job_id", name="uq_applications_user_job"),
    )


class WishlistItem(Base):
    __tablename__ = "wishlist"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="wishlist")
    job = relationship("Job")

    __table_args__ = (
        UniqueConstraint("user_id", "job_id", name="uq_wishlist_user_job"),
    )


class AIConversation(Base):
    __tablename__ = "ai_conversations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    session_id = Column(String(128), nullable=False, index=True)
    role = Column(String(16), nullable=False)  # user/assistant
    content = Column(Text, nullable=False)
    context = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
