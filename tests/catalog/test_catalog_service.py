import logging
from unittest.mock import patch

import pytest

from app.catalog.models import (
    ItemRecord,
    LoomBallRecord,
    LoomieRarityRecord,
    LoomieRecord,
    LoomieTypeRecord,
)
from app.catalog.service import (
    build_lookup,
    insert_base_loomies,
    insert_items,
    insert_loom_balls,
    insert_loomie_rarities,
    insert_loomie_types,
    resolve_names,
)

pytestmark = pytest.mark.asyncio


@pytest.fixture
def db(mock_db):
    with patch("app.catalog.service.get_database", return_value=mock_db):
        yield mock_db


async def test_lookup_keeps_first_duplicate(caplog):
    with caplog.at_level(logging.WARNING):
        lookup = build_lookup(["Fire", "Water", "Fire"], [1, 2, 3], "loomie type")

    assert lookup == {"Fire": 1, "Water": 2}
    assert "Duplicate loomie type name 'Fire'" in caplog.text


async def test_resolve_names_skips_unknown(caplog):
    with caplog.at_level(logging.WARNING):
        ids = resolve_names(["Fire", "Shadow", "Water"], {"Fire": 1, "Water": 2}, "Loomie type", "Cheesy")

    assert ids == [1, 2]
    assert "Loomie type was not found: Cheesy --> Shadow" in caplog.text


async def test_types_are_inserted_then_linked(db, caplog):
    types = [
        LoomieTypeRecord(name="Fire", strong_against=["Plant"]),
        LoomieTypeRecord(name="Plant", strong_against=["Water", "Shadow"]),
        LoomieTypeRecord(name="Water", strong_against=["Fire"]),
    ]

    with caplog.at_level(logging.WARNING):
        lookup = await insert_loomie_types(types)

    inserted = db.loomie_types.insert_many.call_args.args[0]
    assert [doc["name"] for doc in inserted] == ["Fire", "Plant", "Water"]
    assert all(doc["strong_against"] == [] for doc in inserted)

    updates = {
        c.args[0]["_id"]: c.args[1]["$set"]["strong_against"]
        for c in db.loomie_types.update_one.call_args_list
    }
    assert updates[lookup["Fire"]] == [lookup["Plant"]]
    assert updates[lookup["Plant"]] == [lookup["Water"]]
    assert updates[lookup["Water"]] == [lookup["Fire"]]
    assert "Strong against type was not found: Plant --> Shadow" in caplog.text


async def test_duplicate_type_is_linked_once(db):
    types = [
        LoomieTypeRecord(name="Fire", strong_against=["Fire"]),
        LoomieTypeRecord(name="Fire", strong_against=[]),
    ]
    await insert_loomie_types(types)
    assert db.loomie_types.update_one.await_count == 1


async def test_no_types_no_writes(db):
    assert await insert_loomie_types([]) == {}
    db.loomie_types.insert_many.assert_not_awaited()


async def test_rarities_map_names_to_ids(db):
    lookup = await insert_loomie_rarities(
        [LoomieRarityRecord(name="Common", spawn_chance=0.7), LoomieRarityRecord(name="Rare", spawn_chance=0.3)]
    )
    inserted = db.loomie_rarities.insert_many.call_args.args[0]
    assert inserted == [{"name": "Common", "spawn_chance": 0.7}, {"name": "Rare", "spawn_chance": 0.3}]
    assert set(lookup) == {"Common", "Rare"}


async def test_base_loomies_resolve_refs_and_return_commons(db, caplog):
    type_ids = {"Fire": "t-fire", "Water": "t-water"}
    rarity_ids = {"Common": "r-common", "Rare": "r-rare"}
    loomies = [
        LoomieRecord(serial=1, name="Cheesy", types=["Fire", "Shadow"], rarity="Common",
                     extra_hp=5, extra_def=2, extra_atk=4),
        LoomieRecord(serial=2, name="Shelly", types=["Water"], rarity="Rare"),
        LoomieRecord(serial=3, name="Ghost", types=["Water"], rarity="Mythic"),
    ]

    with caplog.at_level(logging.WARNING):
        common = await insert_base_loomies(loomies, type_ids, rarity_ids)

    inserted = db.base_loomies.insert_many.call_args.args[0]
    assert [doc["name"] for doc in inserted] == ["Cheesy", "Shelly"]
    cheesy = inserted[0]
    assert cheesy["types"] == ["t-fire"]
    assert cheesy["rarity"] == "r-common"
    assert (cheesy["base_hp"], cheesy["base_attack"], cheesy["base_defense"]) == (105, 24, 12)

    assert [doc["name"] for doc in common] == ["Cheesy"]
    assert "_id" in common[0]
    assert "Loomie rarity was not found: Ghost --> Mythic" in caplog.text
    assert "Loomie type was not found: Cheesy --> Shadow" in caplog.text


async def test_items_and_loom_balls_inserted_as_is(db):
    item = ItemRecord(
        name="Small Aid Kit",
        serial=1,
        description="Restores 20 HP",
        is_combat_item=True,
        gym_reward_chance_player=0.8,
        gym_reward_chance_owner=0.6,
        min_reward_quantity=1,
        max_reward_quantity=5,
    )
    ball = LoomBallRecord(
        name="Normal Loomball",
        serial=1,
        effective_until=25,
        decay_until=50,
        minimum_probability=0.3,
        gym_reward_chance_player=0.9,
        gym_reward_chance_owner=0.7,
        min_reward_quantity=3,
        max_reward_quantity=8,
    )

    assert await insert_items([item]) == 1
    assert await insert_loom_balls([ball]) == 1

    stored_item = db.items.insert_many.call_args.args[0][0]
    assert stored_item["target"] == "Loomie"
    assert stored_item["gym_reward_chance_owner"] == 0.6
    stored_ball = db.loom_balls.insert_many.call_args.args[0][0]
    assert stored_ball["max_reward_quantity"] == 8
