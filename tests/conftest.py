import pytest
from autotag.app import create_app
from autotag.extensions import db
from autotag.models.rule import ProductRule
from autotag.models.shop import Shop

@pytest.fixture(scope='session')
def app():
    """Session-wide test `Flask` application."""
    app = create_app("testing")

    with app.app_context():
        db.create_all()
        yield app
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """A test client for the app."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app, clean_db):
    """Yields a database session for a test, wrapped in an app context."""
    with app.app_context():
        yield db.session


@pytest.fixture(scope='function')
def clean_db(app):
    """Ensures the database is clean before each test runs."""
    with app.app_context():
        # A fast way to clear all data from all tables
        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()


@pytest.fixture(scope='function')
def shop(db_session):
    s = Shop(shop_domain="demo.myshopify.com", access_token="shpat_test")
    db_session.add(s)
    db_session.commit()
    return s


@pytest.fixture(scope='function')
def other_shop(db_session):
    s = Shop(shop_domain="other.myshopify.com", access_token="shpat_other")
    db_session.add(s)
    db_session.commit()
    return s


def make_rule(field, operator, value, tag, enabled=True):
    """An unsaved rule, for tests of the pure engine."""
    return ProductRule(field=field, operator=operator, value=value, tag=tag, enabled=enabled)


@pytest.fixture
def rule():
    return make_rule
