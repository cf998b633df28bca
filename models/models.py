import enum

from sqlalchemy.orm import declarative_base
from sqlalchemy import *


Base = declarative_base()


class PRStatus(str, enum.Enum):
    OPEN = "OPEN"
    MERGED = "MERGED"


class Team(Base):
    __tablename__ = 'teams'

    team_name = Column(String(50), primary_key=True)


class User(Base):
    __tablename__ = 'users'

    user_id = Column(String(50), primary_key=True)
    name = Column(String(50), nullable=False)
    team_name = Column(String(50), ForeignKey('teams.team_name'), nullable=False, index=True)
    isActive = Column(Boolean(), nullable=False, default=True)


class PullRequest(Base):
    __tablename__ = 'pullrequests'

    pull_request_id = Column(String(50), primary_key=True)
    name = Column(String(255), nullable=False)
    author_id = Column(String(50), ForeignKey('users.user_id'), nullable=False, index=True)
    status = Column(String(16), nullable=False, default=PRStatus.OPEN.value)
    createdAt = Column(DateTime(timezone=True), nullable=False, index=True)
    mergedAt = Column(DateTime(timezone=True), nullable=True)


class Reviewers(Base):
    __tablename__ = 'reviewers'

    pr_id = Column(String(50), ForeignKey('pullrequests.pull_request_id'), nullable=False, index=True)
    reviewer_id = Column(String(50), ForeignKey('users.user_id'), nullable=False, index=True)
    # position in assigned_reviewers, kept across reassignment
    slot = Column(SmallInteger(), nullable=False)
    assignedAt = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        PrimaryKeyConstraint('pr_id', 'reviewer_id'),
        UniqueConstraint('pr_id', 'slot'),
    )
