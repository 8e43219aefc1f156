import logging

import pyodbc

logger = logging.getLogger(__name__)


class UserStore:
    """Users table in SQL Server, one connection per call."""

    def __init__(self, conn_str: str, connect=pyodbc.connect):
        self.conn_str = conn_str
        self._connect = connect

    def init_db(self):
        conn = self._connect(self.conn_str)
        try:
            cursor = conn.cursor()
            cursor.execute('''
                IF NOT EXISTS (SELECT * FROM sysobjects WHERE name='Users' AND xtype='U')
                CREATE TABLE Users (
                    Id INT IDENTITY(1,1) PRIMARY KEY,
                    Username NVARCHAR(100) UNIQUE NOT NULL,
                    PasswordHash NVARCHAR(MAX) NOT NULL
                )
            ''')
            conn.commit()
        finally:
            conn.close()
        logger.info('Users table ready')

    def save_user(self, username: str, password_hash: str):
        conn = self._connect(self.conn_str)
        try:
            cursor = conn.cursor()
            cursor.execute('INSERT INTO Users (Username, PasswordHash) VALUES (?, ?)', (username, password_hash))
            conn.commit()
        finally:
            conn.close()

    def get_user(self, username: str):
        conn = self._connect(self.conn_str)
        try:
            cursor = conn.cursor()
            cursor.execute('SELECT Id, Username, PasswordHash FROM Users WHERE Username = ?', (username,))
            return cursor.fetchone()
        finally:
            conn.close()

    def list_users(self):
        conn = self._connect(self.conn_str)
        try:
            cursor = conn.cursor()
            cursor.execute('SELECT Id, Username FROM Users ORDER BY Id')
            return cursor.fetchall()
        finally:
            conn.close()
