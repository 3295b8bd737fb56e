from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId

from app.config import settings


@pytest.fixture
def api_key():
    return settings.API_KEY


@pytest.fixture
def catalog_items():
    return [
        {
            "_id": ObjectId(),
            "name": "Small Aid Kit",
            "gym_reward_chance_player": 0.8,
            "gym_reward_chance_owner": 0.0,
            "min_reward_quantity": 1,
            "max_reward_quantity": 5,
        },
        {
            "_id": ObjectId(),
            "name": "Big Aid Kit",
            "gym_reward_chance_player": 0.4,
            "gym_reward_chance_owner": 0.5,
            "min_reward_quantity": 2,
            "max_reward_quantity": 3,
        },
        {
            "_id": ObjectId(),
            "name": "Defense Booster",
            "gym_reward_chance_player": 0.3,
            "gym_reward_chance_owner": 0.4,
            "min_reward_quantity": 1,
            "max_reward_quantity": 1,
        },
    ]


@pytest.fixture
def catalog_loom_balls():
    return [
        {
            "_id": ObjectId(),
            "name": "Normal Loomball",
            "gym_reward_chance_player": 0.9,
            "gym_reward_chance_owner": 0.7,
            "min_reward_quantity": 3,
            "max_reward_quantity": 8,
        },
        {
            "_id": ObjectId(),
            "name": "Super Loomball",
            "gym_reward_chance_player": 0.35,
            "gym_reward_chance_owner": 0.5,
            "min_reward_quantity": 1,
            "max_reward_quantity": 4,
        },
        {
            "_id": ObjectId(),
            "name": "Ultra Loomball",
            "gym_reward_chance_player": 0.05,
            "gym_reward_chance_owner": 0.2,
            "min_reward_quantity": 1,
            "max_reward_quantity": 2,
        },
    ]


def make_cursor(docs):
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=docs)
    return cursor


def make_collection(find_results=None, find_one_result=None):
    """A mock Motor collection. insert_* hand out fresh ObjectIds."""
    collection = MagicMock()
    collection.find = MagicMock(return_value=make_cursor(find_results or []))
    collection.find_one = AsyncMock(return_value=find_one_result)
    collection.insert_one = AsyncMock(
        side_effect=lambda doc: MagicMock(inserted_id=ObjectId())
    )
    collection.insert_many = AsyncMock(
        side_effect=lambda docs: MagicMock(inserted_ids=[ObjectId() for _ in docs])
    )
    collection.update_one = AsyncMock(return_value=MagicMock(modified_count=1))
    collection.update_many = AsyncMock(return_value=MagicMock(modified_count=0))
    collection.delete_many = AsyncMock(return_value=MagicMock(deleted_count=0))
    collection.create_index = AsyncMock()
    collection.count_documents = AsyncMock(return_value=0)
    return collection


@pytest.fixture
def mock_db():
    """A mock database whose collections are created on first access."""
    collections: dict = {}

    class _Db:
        def __getattr__(self, name):
            if name not in collections:
                collections[name] = make_collection()
            return collections[name]

        def __getitem__(self, name):
            return getattr(self, name)

        def set(self, name, collection):
            collections[name] = collection
            return collection

    return _Db()


@pytest.fixture
def collection_factory():
    return make_collection
