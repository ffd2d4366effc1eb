import pytest
from app import create_app


@pytest.fixture()
def client(db, people):
    app = create_app(db)
    app.config['TESTING'] = True
    return app.test_client()


def test_select_returns_sql_and_params(client):
    resp = client.post('/query/select', json={
        'table': 'users',
        'fields': ['name'],
        'where': [
            {'column': 'age', 'operator': 'Greater', 'value': 30},
            {'column': 'email', 'operator': 'NotNull', 'connector': 'or'},
        ],
        'order_by': [{'field': 'name', 'direction': 'desc'}],
        'limit': 2,
    })
    assert resp.status_code == 200
    assert resp.get_json() == {
        'sql': 'SELECT name FROM users WHERE age > ? OR email IS NOT NULL ORDER BY name DESC LIMIT 2',
        'params': [30],
    }


def test_select_executes(client):
    resp = client.post('/query/select', json={
        'table': 'users',
        'fields': ['name', 'age'],
        'where': [{'column': 'name', 'operator': 'in', 'value': ['Ann', 'Bob']}],
        'order_by': [{'field': 'age'}],
        'execute': True,
    })
    assert resp.status_code == 200
    assert resp.get_json() == {'result': [{'name': 'Bob', 'age': 25}, {'name': 'Ann', 'age': 31}]}


def test_query_log_endpoint(client, db):
    client.post('/query/select', json={'table': 'users', 'execute': True})
    log = client.get('/queries').get_json()
    assert log[-1]['sql'] == 'SELECT * FROM users'


@pytest.mark.parametrize('payload', [
    {},
    {'table': 'users; DROP TABLE users'},
    {'table': 'users', 'fields': ['name', 'age) FROM x --']},
    {'table': 'users', 'where': [{'column': 'age', 'operator': 'Greter', 'value': 1}]},
    {'table': 'users', 'where': [{'column': 'age', 'operator': 'in', 'value': []}]},
    {'table': 'users', 'order_by': [{'field': 'age', 'direction': 'sideways'}]},
    {'table': 'users', 'offset': 3},
    {'table': 'users', 'order_by': [{'field': 'age', 'direction': 1}]},
    {'table': 'users', 'order_by': {'field': 'age'}},
    {'table': 'users', 'where': None},
    {'table': 'users', 'where': [{'column': 'a', 'value': 1}, {'column': 'b', 'value': 2, 'connector': ['or']}]},
    {'table': 'users', 'fields': 7},
])
def test_invalid_payloads_are_400(client, payload):
    resp = client.post('/query/select', json=payload)
    assert resp.status_code == 400
    assert 'error' in resp.get_json()


def test_failed_statement_is_400(client):
    resp = client.post('/query/select', json={'table': 'missing', 'execute': True})
    assert resp.status_code == 400


def test_non_object_body_is_400(client):
    resp = client.post('/query/select', data='nope', content_type='text/plain')
    assert resp.status_code == 400


def test_unknown_route_is_404(client):
    assert client.get('/nope').status_code == 404
