"""
Shared fixtures: a throwaway SQLite database, the Flask test client and a full
64-artist catalog.
"""

import os
import tempfile

# Point the application at a temporary database before any module reads config.
_DB_DIR = tempfile.mkdtemp(prefix="jazz-bracket-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["ADMIN_PASSWORD"] = "blue-in-green"
os.environ["SECRET_KEY"] = "test-secret-key"

import pytest

import db
from bracket import Entrant, get_matchup_entrants, matchup_key, matchups_in_round
from constants import REGIONS, SEEDS_PER_REGION, NUM_ROUNDS

ADMIN_PASSWORD = "blue-in-green"


def make_catalog():
    """64 entrants with ids like 'vocalists-1'."""
    return [
        Entrant(id=f"{region}-{seed}", name=f"{region.title()} Artist {seed}", seed=seed, region=region)
        for region in REGIONS
        for seed in range(1, SEEDS_PER_REGION + 1)
    ]


def fill_bracket(entrants, choose):
    """
    Builds a complete pick set round by round, letting choose(a, b) pick each winner.
    """
    picks = {}
    for round_num in range(1, NUM_ROUNDS + 1):
        for index in range(matchups_in_round(round_num)):
            entrant_a, entrant_b = get_matchup_entrants(round_num, index, picks, entrants)
            picks[matchup_key(round_num, index)] = {"winnerId": choose(entrant_a, entrant_b).id,
                                                    "commentary": None}
    return picks


def favorites(entrant_a, entrant_b):
    return entrant_a if entrant_a.seed <= entrant_b.seed else entrant_b


def underdogs(entrant_a, entrant_b):
    return entrant_b if entrant_a.seed <= entrant_b.seed else entrant_a


@pytest.fixture
def catalog():
    return make_catalog()


@pytest.fixture
def chalk_picks(catalog):
    """Every matchup won by the better seed (side A on equal seeds)."""
    return fill_bracket(catalog, favorites)


@pytest.fixture
def upset_picks(catalog):
    """Every matchup won by the worse seed (side B on equal seeds)."""
    return fill_bracket(catalog, underdogs)


@pytest.fixture
def database():
    db.init_db()
    yield
    db.Base.metadata.drop_all(db.engine)


@pytest.fixture
def db_session(database):
    session = db.SessionLocal()
    yield session
    session.close()


@pytest.fixture
def stored_artists(db_session, catalog):
    """The catalog written to the artists table, ids preserved."""
    for entrant in catalog:
        db_session.add(db.Artist(id=entrant.id, name=entrant.name, seed=entrant.seed, region=entrant.region))
    db_session.commit()
    return catalog


@pytest.fixture
def open_tournament(db_session):
    tournament = db.Tournament(name="Tournament of Jazz", status="open")
    db_session.add(tournament)
    db_session.commit()
    return tournament


@pytest.fixture
def app(database):
    from main import app as flask_app
    flask_app.config.update(TESTING=True, ADMIN_PASSWORD=ADMIN_PASSWORD)
    yield flask_app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(app):
    admin = app.test_client()
    response = admin.post('/api/admin/auth', json={"password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return admin
