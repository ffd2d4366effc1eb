import pytest
from dataclasses import dataclass
from typing import Optional
from sqlconn import DbCon
from sqlquery import Table

SCHEMA = '''
    CREATE TABLE users (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT,
        email TEXT,
        age INTEGER
    )
'''


@dataclass
class User(Table):
    __table__ = 'users'
    name: str = ''
    email: Optional[str] = None
    age: Optional[int] = None

    def get_display(self):
        return f'{self.name} <{self.email}>'

    def set_email(self, value):
        self.email = value.lower() if value else value


@pytest.fixture()
def db():
    con = DbCon.sqlite(':memory:')
    con.query(SCHEMA)
    yield con
    con.close()


@pytest.fixture()
def user_model(db):
    User.bind(db)
    yield User
    User.bind(None)


@pytest.fixture()
def people(user_model):
    rows = [
        user_model(name='Ann', email='ann@example.com', age=31),
        user_model(name='Bob', email=None, age=25),
        user_model(name='Cid', email='cid@example.com', age=40),
    ]
    for r in rows:
        r.insert()
    return rows
