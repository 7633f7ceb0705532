import pytest


@pytest.fixture
def nested():
    return {
        "user": {
            "name": "Ada",
            "roles": ["admin", "editor"],
            "address": {"city": "London", "zip": None},
        },
        "active": True,
    }


@pytest.fixture
def people():
    return [
        {"name": "Ann", "age": 30},
        {"name": "Bob", "age": 25},
        {"name": "Cid", "age": 30},
        {"name": "Dee", "age": 22},
        {"name": "Eve", "age": 25},
    ]


@pytest.fixture
def typed_records():
    return [
        {"type": "a", "v": 1},
        {"type": "b", "v": 2},
        {"type": "a", "v": 3},
    ]
