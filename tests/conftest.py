from datetime import date, timedelta

import pytest

from hisab import create_app
from hisab.config import Config
from hisab.extensions import db


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    HISAB_CURRENCY = "PKR"
    HISAB_COMPANY = "HisabWeb"
    LOG_LEVEL = "WARNING"
    LOG_FILE = ""


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def ctx(app):
    with app.app_context():
        yield


@pytest.fixture
def this_month():
    return date.today().replace(day=1)


@pytest.fixture
def last_month(this_month):
    return (this_month - timedelta(days=1)).replace(day=1)
