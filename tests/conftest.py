import pytest
from app import create_app
from models import db, Usuario


@pytest.fixture
def app(tmp_path):

    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
        "SETTINGS_PATH": str(tmp_path / "settings.json"),
    })

    with app.app_context():

        db.drop_all()
        db.create_all()

        usuario = Usuario(
            nombre="Usuario Test",
            email="test@example.com",
        )
        usuario.set_password("1234")
        db.session.add(usuario)
        db.session.commit()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):

    return app.test_client()


@pytest.fixture
def logged_client(client):

    with client.session_transaction() as sess:
        sess["user_id"] = 1

    return client
