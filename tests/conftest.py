import pytest

from scrypt_kdf.webapp import create_app


class MemoryStore:
    def __init__(self):
        self.rows = []
        self.initialised = False

    def init_db(self):
        self.initialised = True

    def save_user(self, username, password_hash):
        self.rows.append((len(self.rows) + 1, username, password_hash))

    def get_user(self, username):
        for row in self.rows:
            if row[1] == username:
                return row
        return None

    def list_users(self):
        return [(row[0], row[1]) for row in self.rows]


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def app(store):
    app = create_app({
        'TESTING': True,
        'SECRET_KEY': 'test',
        'SCRYPT_LOG_N': 4,
        'SCRYPT_R': 1,
        'SCRYPT_P': 1,
    }, store=store)
    return app


@pytest.fixture
def client(app):
    return app.test_client()
