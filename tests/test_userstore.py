import pytest

pytest.importorskip('pyodbc')

from scrypt_kdf.userstore import UserStore  # noqa: E402


class FakeCursor:
    def __init__(self, conn):
        self.conn = conn

    def execute(self, sql, params=()):
        if self.conn.fail:
            raise RuntimeError('db down')
        self.conn.executed.append((' '.join(sql.split()), params))

    def fetchone(self):
        return self.conn.rows[0] if self.conn.rows else None

    def fetchall(self):
        return list(self.conn.rows)


class FakeConnection:
    def __init__(self, rows=(), fail=False):
        self.rows = list(rows)
        self.fail = fail
        self.executed = []
        self.committed = False
        self.closed = False

    def cursor(self):
        return FakeCursor(self)

    def commit(self):
        self.committed = True

    def close(self):
        self.closed = True


def make_store(conn):
    seen = []

    def connect(conn_str):
        seen.append(conn_str)
        return conn

    return UserStore('DSN=test', connect=connect), seen


def test_save_user():
    conn = FakeConnection()
    store, seen = make_store(conn)
    store.save_user('erza', '$rscrypt$...')
    assert seen == ['DSN=test']
    assert conn.executed == [('INSERT INTO Users (Username, PasswordHash) VALUES (?, ?)',
                              ('erza', '$rscrypt$...'))]
    assert conn.committed and conn.closed


def test_get_user():
    conn = FakeConnection(rows=[(1, 'erza', '$rscrypt$...')])
    store, _ = make_store(conn)
    assert store.get_user('erza') == (1, 'erza', '$rscrypt$...')
    assert conn.executed[0][1] == ('erza',)
    assert conn.closed


def test_list_users():
    conn = FakeConnection(rows=[(1, 'erza'), (2, 'arta')])
    store, _ = make_store(conn)
    assert store.list_users() == [(1, 'erza'), (2, 'arta')]


def test_init_db_creates_table():
    conn = FakeConnection()
    store, _ = make_store(conn)
    store.init_db()
    assert 'CREATE TABLE Users' in conn.executed[0][0]
    assert conn.committed


def test_connection_closed_on_error():
    conn = FakeConnection(fail=True)
    store, _ = make_store(conn)
    with pytest.raises(RuntimeError):
        store.get_user('erza')
    assert conn.closed
