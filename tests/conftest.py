import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from groupswipe.database import Base, get_db
from groupswipe.main import app
from groupswipe.models import Group, GroupMember, Match, MatchMember, Profile, Swipe, Title
from groupswipe.utils.security import create_access_token

SQLALCHEMY_DATABASE_URL = "sqlite://"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """Provide a clean database session for each test."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_session):
    """FastAPI test client with the database dependency overridden."""

    def override_get_db():
        test_db = TestingSessionLocal()
        try:
            yield test_db
        finally:
            test_db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.pop(get_db, None)


# ============================================
# Data helpers
# ============================================

def create_profile(session, display_name="Test User"):
    profile = Profile(display_name=display_name)
    session.add(profile)
    session.commit()
    session.refresh(profile)
    return profile


def create_group(session, members, threshold="majority", name="Movie Night"):
    group = Group(name=name, owner_id=members[0].id if members else None, match_threshold=threshold)
    session.add(group)
    session.commit()
    for i, member in enumerate(members):
        session.add(GroupMember(group_id=group.id, user_id=member.id, role="owner" if i == 0 else "member"))
    session.commit()
    session.refresh(group)
    return group


def create_title(session, title_id, popularity=0.0, genres=None, vibes=None, runtime_min=100, name=None):
    title = Title(
        id=title_id,
        kind="movie",
        name=name or f"Title {title_id}",
        runtime_min=runtime_min,
        overview="",
        genres=genres or [],
        vibes=vibes or [],
        popularity=popularity,
        rating=7.0,
        adult=False
    )
    session.add(title)
    session.commit()
    return title


def create_swipe(session, user, title_id, decision="yes", group=None):
    swipe = Swipe(
        user_id=user.id,
        group_id=group.id if group is not None else None,
        title_id=title_id,
        decision=decision
    )
    session.add(swipe)
    session.commit()
    return swipe


def create_match(session, group, title_id, voters, rule="majority"):
    match = Match(group_id=group.id, title_id=title_id, rule=rule)
    match.match_members = [MatchMember(user_id=voter.id) for voter in voters]
    session.add(match)
    session.commit()
    session.refresh(match)
    return match


def auth_headers(user):
    token = create_access_token({"user_id": user.id})
    return {"Authorization": f"Bearer {token}"}
